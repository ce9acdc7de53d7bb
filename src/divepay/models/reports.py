"""Aggregates built from computed pay slips: payroll runs, dashboard, reports."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from divepay.models.payslip import PaySlip

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class PayrollFailure(BaseModel):
    """An employee skipped by a payroll run and why."""

    employee_id: str
    error_type: str
    message: str

    model_config = _CAMEL


class PayrollRunResult(BaseModel):
    """Slips computed for one period across many employees."""

    period: str
    run_id: str = ""  # correlates the run's log lines
    slips: list[PaySlip] = Field(default_factory=list)
    failures: list[PayrollFailure] = Field(default_factory=list)
    total_gross: Decimal = Decimal("0")
    total_net: Decimal = Decimal("0")
    total_ppn: Decimal = Decimal("0")

    model_config = _CAMEL

    @property
    def employee_count(self) -> int:
        return len(self.slips)


class TrendPoint(BaseModel):
    """Monthly net payroll for the dashboard chart."""

    period: str
    month: str  # display label, e.g. "Apr 24"
    amount: Decimal = Decimal("0")
    employees: int = 0

    model_config = _CAMEL


class PayrollHistoryEntry(BaseModel):
    period: str
    total_amount: Decimal = Decimal("0")
    employee_count: int = 0
    processed_at: datetime

    model_config = _CAMEL


class DashboardStats(BaseModel):
    """Headline figures shown on the dashboard."""

    total_employees: int = 0
    active_employees: int = 0
    total_payroll: Decimal = Decimal("0")
    department_stats: dict[str, int] = Field(default_factory=dict)
    monthly_trend: list[TrendPoint] = Field(default_factory=list)
    payroll_history: list[PayrollHistoryEntry] = Field(default_factory=list)
    failures: list[PayrollFailure] = Field(default_factory=list)

    model_config = _CAMEL


class DepartmentBreakdown(BaseModel):
    department: str
    employee_count: int = 0
    total_salary: Decimal = Decimal("0")
    average_salary: Decimal = Decimal("0")

    model_config = _CAMEL


class SalaryBand(BaseModel):
    range: str
    count: int = 0
    percentage: Decimal = Decimal("0")

    model_config = _CAMEL


class ReportTrend(BaseModel):
    period: str
    amount: Decimal = Decimal("0")
    growth: Decimal = Decimal("0")  # percent versus the previous point

    model_config = _CAMEL


class TopEarner(BaseModel):
    name: str
    position: str = ""
    department: str = ""
    salary: Decimal = Decimal("0")

    model_config = _CAMEL


class ReportData(BaseModel):
    """Monthly or annual payroll report content."""

    period: str
    type: Literal["monthly", "annual"] = "monthly"
    total_payroll: Decimal = Decimal("0")
    total_employees: int = 0
    department_breakdown: list[DepartmentBreakdown] = Field(default_factory=list)
    salary_distribution: list[SalaryBand] = Field(default_factory=list)
    trends: list[ReportTrend] = Field(default_factory=list)
    top_earners: list[TopEarner] = Field(default_factory=list)
    generated_at: datetime

    model_config = _CAMEL
