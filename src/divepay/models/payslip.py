"""Pay slip: the itemized compensation record for one employee in one period."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from divepay.models.employee import Employee
from divepay.models.holiday import HolidayType

_CAMEL = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "frozen": True,
}


class AllowanceBreakdown(BaseModel):
    """Allowances paid on a slip, computed components included."""

    transport: Decimal = Decimal("0")
    meal: Decimal = Decimal("0")
    bonus: Decimal = Decimal("0")
    overtime: Decimal = Decimal("0")
    tips: Decimal = Decimal("0")
    holiday_allowance: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    model_config = _CAMEL

    @property
    def computed_total(self) -> Decimal:
        return (
            self.transport + self.meal + self.bonus
            + self.overtime + self.tips + self.holiday_allowance
        )


class DeductionBreakdown(BaseModel):
    """Deductions withheld on a slip, PPN included."""

    tax: Decimal = Decimal("0")
    insurance: Decimal = Decimal("0")
    other: Decimal = Decimal("0")
    cooperative_fund: Decimal = Decimal("0")
    health_insurance: Decimal = Decimal("0")
    loan_deduction: Decimal = Decimal("0")
    ppn: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    model_config = _CAMEL

    @property
    def computed_total(self) -> Decimal:
        return (
            self.tax + self.insurance + self.other + self.cooperative_fund
            + self.health_insurance + self.loan_deduction + self.ppn
        )


class PaySlip(BaseModel):
    """Computed on demand from (employee, period, overtime hours); never persisted."""

    id: str  # PS-{employee id}-{period without "/"}
    employee_id: str
    employee: Employee
    period: str  # "M/YYYY"
    base_salary: Decimal
    allowances: AllowanceBreakdown
    deductions: DeductionBreakdown
    gross_salary: Decimal
    net_salary: Decimal
    generated_at: datetime
    overtime_hours: Decimal = Decimal("0")
    holiday_type: Optional[HolidayType] = None

    model_config = _CAMEL
