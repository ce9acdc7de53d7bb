"""Holiday calendar entries that trigger the religious holiday allowance (THR)."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from divepay.models.employee import Religion


class HolidayType(StrEnum):
    IDUL_FITRI = "idul_fitri"
    NATAL = "natal"
    NYEPI = "nyepi"
    WAISAK = "waisak"
    ANNIVERSARY = "anniversary"


class HolidayEntry(BaseModel):
    """A dated holiday with its allowance multiplier and eligible religions."""

    id: str
    name: str
    date: dt.date
    type: HolidayType
    description: str = ""
    allowance_multiplier: Decimal = Field(ge=0, allow_inf_nan=False)  # fraction of base salary
    is_active: bool = True
    eligible_religions: frozenset[Religion] = Field(default_factory=frozenset)

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    def is_eligible(self, religion: Religion) -> bool:
        return religion in self.eligible_religions
