"""Payroll report content: department breakdown, salary bands, top earners, trend."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from decimal import Decimal
from typing import Literal

from divepay.engine.payroll import PayrollCalculator, default_calculator
from divepay.models.employee import Employee
from divepay.models.payslip import PaySlip
from divepay.models.period import PayPeriod, as_period
from divepay.models.reports import (
    DepartmentBreakdown,
    ReportData,
    ReportTrend,
    SalaryBand,
    TopEarner,
)
from divepay.services.formatting import round_rupiah
from divepay.services.payroll_run import run_payroll

_MILLION = Decimal("1000000")

# (label, lower bound inclusive, upper bound exclusive; None = unbounded)
SALARY_BANDS: tuple[tuple[str, Decimal, Decimal | None], ...] = (
    ("< 5M", Decimal("0"), 5 * _MILLION),
    ("5M - 10M", 5 * _MILLION, 10 * _MILLION),
    ("10M - 15M", 10 * _MILLION, 15 * _MILLION),
    ("15M - 25M", 15 * _MILLION, 25 * _MILLION),
    ("> 25M", 25 * _MILLION, None),
)

TOP_EARNERS = 10
TREND_POINTS = 6
_CENT = Decimal("0.01")


def department_breakdown(slips: Sequence[PaySlip]) -> list[DepartmentBreakdown]:
    """Net salary per department, largest total first."""
    groups: dict[str, list[Decimal]] = defaultdict(list)
    for slip in slips:
        groups[slip.employee.department].append(slip.net_salary)

    rows = [
        DepartmentBreakdown(
            department=department,
            employee_count=len(nets),
            total_salary=round_rupiah(sum(nets, Decimal("0"))),
            average_salary=round_rupiah(sum(nets, Decimal("0")) / len(nets)),
        )
        for department, nets in groups.items()
    ]
    return sorted(rows, key=lambda row: row.total_salary, reverse=True)


def salary_distribution(slips: Sequence[PaySlip]) -> list[SalaryBand]:
    bands = []
    for label, low, high in SALARY_BANDS:
        count = sum(
            1 for s in slips
            if s.net_salary >= low and (high is None or s.net_salary < high)
        )
        percentage = (Decimal(count) * 100 / len(slips)).quantize(_CENT) if slips else Decimal("0")
        bands.append(SalaryBand(range=label, count=count, percentage=percentage))
    return bands


def top_earners(slips: Sequence[PaySlip], limit: int = TOP_EARNERS) -> list[TopEarner]:
    ranked = sorted(slips, key=lambda s: s.net_salary, reverse=True)[:limit]
    return [
        TopEarner(
            name=s.employee.name,
            position=s.employee.position,
            department=s.employee.department,
            salary=round_rupiah(s.net_salary),
        )
        for s in ranked
    ]


def _growth(amount: Decimal, previous: Decimal | None) -> Decimal:
    if previous is None or previous == 0:
        return Decimal("0")
    return ((amount - previous) * 100 / previous).quantize(_CENT)


def build_report(
    employees: Sequence[Employee],
    period: PayPeriod | str,
    *,
    calculator: PayrollCalculator | None = None,
    report_type: Literal["monthly", "annual"] = "monthly",
    clock: Callable[[], datetime] = lambda: datetime.now(UTC),
) -> ReportData:
    """Report for ``period`` with the trend of the months leading up to it."""
    p = as_period(period)
    calculator = calculator or default_calculator()

    trend_periods = [p.shift(offset) for offset in range(-(TREND_POINTS - 1), 1)]
    runs = [run_payroll(employees, tp, calculator=calculator) for tp in trend_periods]
    current = runs[-1]

    trends = []
    previous = None
    for tp, run in zip(trend_periods, runs):
        amount = round_rupiah(run.total_net)
        trends.append(ReportTrend(period=str(tp), amount=amount, growth=_growth(amount, previous)))
        previous = amount

    return ReportData(
        period=str(p),
        type=report_type,
        total_payroll=round_rupiah(current.total_net),
        total_employees=current.employee_count,
        department_breakdown=department_breakdown(current.slips),
        salary_distribution=salary_distribution(current.slips),
        trends=trends,
        top_earners=top_earners(current.slips),
        generated_at=clock(),
    )
