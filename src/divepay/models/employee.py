"""Employee record: the immutable input of every payroll calculation.

Records are created by data entry (or loaded from the dashboard's JSON) in
camelCase or snake_case. Computed components are never stored: the overtime
allowance and the PPN deduction are derived per pay slip, so any stored
``overtime``/``ppn`` keys in incoming data are ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel, to_snake

from divepay.core.exceptions import DataIntegrityError

Amount = Annotated[Decimal, Field(allow_inf_nan=False)]

# Frontline positions that share the gratuity pool (matched as substrings).
TIP_ELIGIBLE_POSITIONS: tuple[str, ...] = (
    "dive master",
    "senior dive master",
    "driver",
    "senior driver",
    "diving instructor",
    "senior diving instructor",
)

_RELIGION_ALIASES = {
    "christian": "kristen",
    "catholic": "katolik",
    "buddhist": "budha",
    "buddha": "budha",
}


class Religion(StrEnum):
    ISLAM = "islam"
    KRISTEN = "kristen"
    KATOLIK = "katolik"
    HINDU = "hindu"
    BUDHA = "budha"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> Religion | None:
        if isinstance(value, str):
            key = value.strip().lower()
            key = _RELIGION_ALIASES.get(key, key)
            for member in cls:
                if member.value == key:
                    return member
        return None


class EmploymentStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


def position_is_tip_eligible(position: str) -> bool:
    """Case-insensitive substring match against the frontline position list."""
    text = position.lower()
    return any(pos in text for pos in TIP_ELIGIBLE_POSITIONS)


class _Record(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "str_strip_whitespace": True,
        "frozen": True,
    }


class Allowances(_Record):
    """Stored allowance base amounts."""

    transport: Amount
    meal: Amount
    bonus: Amount
    tips: Amount
    holiday_allowance: Amount  # baseline paid every period


class Deductions(_Record):
    """Stored deduction base amounts."""

    tax: Amount  # income-tax withholding, entered per employee
    insurance: Amount
    other: Amount
    cooperative_fund: Amount
    health_insurance: Amount
    loan_deduction: Amount


class Employee(_Record):
    """A worker record as maintained by the employee administration screens."""

    # --- Identity ---
    id: str
    name: str

    # --- Employment ---
    position: str = ""
    department: str = ""
    email: str = ""
    phone: str = ""
    bank_account: str = ""
    join_date: Optional[date] = None
    status: EmploymentStatus = EmploymentStatus.ACTIVE

    # --- Compensation ---
    base_salary: Amount
    overtime_rate: Optional[Amount] = None  # per hour
    allowances: Allowances
    deductions: Deductions

    # --- Eligibility ---
    religion: Religion
    is_management: bool = False
    # Only what data entry set; None means "follow the position".
    entered_tip_eligible: Optional[bool] = Field(
        default=None,
        validation_alias=AliasChoices("tipEligible", "tip_eligible", "enteredTipEligible"),
        serialization_alias="tipEligible",
    )

    @field_validator("religion", mode="before")
    @classmethod
    def _normalise_religion(cls, value: Any) -> Any:
        return Religion(value) if isinstance(value, str) else value

    @property
    def tip_eligible(self) -> bool:
        """Entered flag when set, otherwise the position rule for the current position."""
        if self.entered_tip_eligible is not None:
            return self.entered_tip_eligible
        return position_is_tip_eligible(self.position)

    @property
    def is_active(self) -> bool:
        return self.status == EmploymentStatus.ACTIVE

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Employee:
        """Build an employee from raw data, surfacing bad fields as DataIntegrityError."""
        try:
            return cls.model_validate(record)
        except PydanticValidationError as exc:
            err = exc.errors()[0]
            field = ".".join(to_snake(str(part)) for part in err["loc"])
            employee_id = str(record.get("id", "")) if isinstance(record, Mapping) else ""
            raise DataIntegrityError(employee_id, field, f"is invalid ({err['msg']})") from exc
