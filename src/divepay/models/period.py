"""Pay period: the month/year pair payroll is computed for."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from divepay.core.exceptions import ValidationError

_PERIOD_RE = re.compile(r"^\s*(\d{1,2})/(\d{4})\s*$")


class PayPeriod(BaseModel):
    """A calendar month, written ``"M/YYYY"`` (month is 1-based)."""

    month: int = Field(ge=1, le=12)
    year: int = Field(gt=0)

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, value: str) -> PayPeriod:
        """Parse ``"M/YYYY"`` (month may be zero-padded)."""
        match = _PERIOD_RE.match(value) if isinstance(value, str) else None
        if match is None:
            raise ValidationError(f"Invalid pay period {value!r}: expected 'M/YYYY'")
        month, year = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid pay period {value!r}: month must be 1-12")
        if year <= 0:
            raise ValidationError(f"Invalid pay period {value!r}: year must be positive")
        return cls(month=month, year=year)

    @property
    def compact(self) -> str:
        """Period with the separator removed, as used in pay-slip ids."""
        return f"{self.month}{self.year}"

    def shift(self, months: int) -> PayPeriod:
        """Return the period ``months`` months away (negative goes back)."""
        index = self.year * 12 + (self.month - 1) + months
        year, month0 = divmod(index, 12)
        if year <= 0:
            raise ValidationError(f"Shifting {self} by {months} months leaves the calendar")
        return PayPeriod(month=month0 + 1, year=year)

    def __str__(self) -> str:
        return f"{self.month}/{self.year}"


def as_period(value: PayPeriod | str) -> PayPeriod:
    """Coerce a period argument, raising ValidationError on anything unparseable."""
    if isinstance(value, PayPeriod):
        return value
    if isinstance(value, str):
        return PayPeriod.parse(value)
    raise ValidationError(f"Invalid pay period {value!r}: expected 'M/YYYY' string")
