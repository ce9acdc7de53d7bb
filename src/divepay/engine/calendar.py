"""Holiday calendar resolver.

The calendar is static configuration: loaded once, never mutated by the
engine. At most one active holiday is expected per month; when several match,
the first in declaration order wins.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from divepay.core.config import CalendarConfig
from divepay.core.exceptions import CalendarError
from divepay.core.logging import get_logger
from divepay.models.employee import Religion
from divepay.models.holiday import HolidayEntry, HolidayType
from divepay.models.period import PayPeriod, as_period

logger = get_logger(__name__)

ALL_RELIGIONS = frozenset(Religion)

DEFAULT_HOLIDAYS: tuple[HolidayEntry, ...] = (
    HolidayEntry(
        id="idul_fitri_2024",
        name="Idul Fitri 2024",
        date=date(2024, 4, 10),
        type=HolidayType.IDUL_FITRI,
        description="Hari Raya Idul Fitri 1445 H",
        allowance_multiplier=Decimal("1.0"),
        eligible_religions=frozenset({Religion.ISLAM}),
    ),
    HolidayEntry(
        id="natal_2024",
        name="Natal 2024",
        date=date(2024, 12, 25),
        type=HolidayType.NATAL,
        description="Hari Raya Natal",
        allowance_multiplier=Decimal("0.5"),
        eligible_religions=frozenset({Religion.KRISTEN, Religion.KATOLIK}),
    ),
    HolidayEntry(
        id="nyepi_2024",
        name="Nyepi 2024",
        date=date(2024, 3, 11),
        type=HolidayType.NYEPI,
        description="Hari Raya Nyepi (Tahun Baru Saka)",
        allowance_multiplier=Decimal("0.5"),
        eligible_religions=frozenset({Religion.HINDU}),
    ),
    HolidayEntry(
        id="waisak_2024",
        name="Waisak 2024",
        date=date(2024, 5, 23),
        type=HolidayType.WAISAK,
        description="Hari Raya Waisak",
        allowance_multiplier=Decimal("0.3"),
        eligible_religions=frozenset({Religion.BUDHA}),
    ),
    HolidayEntry(
        id="anniversary_2024",
        name="Bonus Tahunan September 2024",
        date=date(2024, 9, 15),
        type=HolidayType.ANNIVERSARY,
        description="Bonus Tahunan Enjoy Dive",
        allowance_multiplier=Decimal("0.5"),
        eligible_religions=ALL_RELIGIONS,
    ),
    HolidayEntry(
        id="idul_fitri_2025",
        name="Idul Fitri 2025",
        date=date(2025, 3, 30),
        type=HolidayType.IDUL_FITRI,
        description="Hari Raya Idul Fitri 1446 H",
        allowance_multiplier=Decimal("1.0"),
        eligible_religions=frozenset({Religion.ISLAM}),
    ),
    HolidayEntry(
        id="anniversary_2025",
        name="Bonus Tahunan September 2025",
        date=date(2025, 9, 15),
        type=HolidayType.ANNIVERSARY,
        description="Bonus Tahunan Enjoy Dive",
        allowance_multiplier=Decimal("0.5"),
        eligible_religions=ALL_RELIGIONS,
    ),
)


class HolidayCalendar:
    """IHolidayCalendar over an ordered, immutable tuple of entries."""

    def __init__(self, entries: Iterable[HolidayEntry] = DEFAULT_HOLIDAYS) -> None:
        self._entries = tuple(entries)

    @property
    def entries(self) -> tuple[HolidayEntry, ...]:
        return self._entries

    def resolve(self, period: PayPeriod | str) -> HolidayEntry | None:
        """Return the first active holiday falling in the period's month, if any."""
        p = as_period(period)
        for entry in self._entries:
            if entry.is_active and entry.date.year == p.year and entry.date.month == p.month:
                return entry
        return None

    @classmethod
    def from_json(cls, path: str | Path) -> HolidayCalendar:
        """Load entries from a JSON list (camelCase or snake_case keys).

        Anniversary entries may give ``"all"`` for their eligible religions.
        """
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CalendarError(f"Cannot read holiday calendar {str(path)!r}: {exc}") from exc
        if not isinstance(raw, list):
            raise CalendarError(f"Holiday calendar {str(path)!r} must be a JSON list")

        entries = []
        for index, item in enumerate(raw):
            try:
                entries.append(HolidayEntry.model_validate(_expand_religions(item)))
            except (PydanticValidationError, TypeError) as exc:
                raise CalendarError(f"Invalid holiday entry #{index} in {str(path)!r}: {exc}") from exc

        logger.info("Loaded holiday calendar", extra={"path": str(path), "entries": len(entries)})
        return cls(entries)

    @classmethod
    def from_config(cls, config: CalendarConfig | None = None) -> HolidayCalendar:
        """Configured calendar file, or the built-in table when no path is set."""
        config = config or CalendarConfig()
        if config.path:
            return cls.from_json(config.path)
        return cls()


def _expand_religions(item: Any) -> Any:
    if not isinstance(item, dict):
        raise TypeError(f"expected an object, got {type(item).__name__}")
    for key in ("eligibleReligions", "eligible_religions"):
        if item.get(key) == "all":
            return {**item, key: sorted(ALL_RELIGIONS)}
    return item
