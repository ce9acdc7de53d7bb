"""Protocol interfaces for the payroll engine's collaborators.

Structural typing, no inheritance required, easy to swap in tests.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from divepay.models.holiday import HolidayEntry
    from divepay.models.period import PayPeriod


# ---------------------------------------------------------------------------
# Holiday calendar
# ---------------------------------------------------------------------------

@runtime_checkable
class IHolidayCalendar(Protocol):
    """Static table of holiday entries resolvable by pay period."""

    def resolve(self, period: PayPeriod | str) -> HolidayEntry | None: ...


# ---------------------------------------------------------------------------
# Gratuity pool
# ---------------------------------------------------------------------------

@runtime_checkable
class ITipPool(Protocol):
    """Company-wide tip pool split among eligible staff."""

    def distribute(self, period: PayPeriod | str) -> Decimal: ...
