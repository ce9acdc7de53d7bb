"""Shared test doubles and record builders."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from divepay.models.employee import Employee
from divepay.models.period import PayPeriod, as_period

FIXED_NOW = datetime(2024, 4, 25, 9, 0, tzinfo=UTC)

ZERO_ALLOWANCES = {"transport": 0, "meal": 0, "bonus": 0, "tips": 0, "holiday_allowance": 0}
ZERO_DEDUCTIONS = {
    "tax": 0,
    "insurance": 0,
    "other": 0,
    "cooperative_fund": 0,
    "health_insurance": 0,
    "loan_deduction": 0,
}


class FixedTipPool:
    """ITipPool returning a constant share and recording the periods asked for."""

    def __init__(self, share: Decimal = Decimal("750000")) -> None:
        self.share = share
        self.calls: list[PayPeriod] = []

    def distribute(self, period: PayPeriod | str) -> Decimal:
        self.calls.append(as_period(period))
        return self.share


def employee_record(**overrides: Any) -> dict[str, Any]:
    """Raw snake_case employee data with zeroed allowances and deductions."""
    record: dict[str, Any] = {
        "id": "EMP001",
        "name": "Made Wirawan",
        "position": "Dive Master",
        "department": "Diving",
        "email": "made@enjoydive.example",
        "phone": "+62 812-3456-7890",
        "base_salary": Decimal("10000000"),
        "overtime_rate": Decimal("50000"),
        "religion": "islam",
        "is_management": False,
    }
    allowances = {**ZERO_ALLOWANCES, **overrides.pop("allowances", {})}
    deductions = {**ZERO_DEDUCTIONS, **overrides.pop("deductions", {})}
    record.update(overrides)
    record["allowances"] = allowances
    record["deductions"] = deductions
    return record


def make_employee(**overrides: Any) -> Employee:
    return Employee.model_validate(employee_record(**overrides))


__all__ = ["FIXED_NOW", "FixedTipPool", "employee_record", "make_employee"]
