"""Dashboard statistics: headcount, current payroll, 12-month trend, run history."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import UTC, datetime

from divepay.engine.payroll import PayrollCalculator, default_calculator
from divepay.models.employee import Employee
from divepay.models.period import PayPeriod, as_period
from divepay.models.reports import DashboardStats, PayrollHistoryEntry, TrendPoint
from divepay.services.formatting import month_label, round_rupiah
from divepay.services.payroll_run import run_payroll

TREND_MONTHS = 12
HISTORY_MONTHS = 6
PROCESSING_DAY = 25


def build_dashboard_stats(
    employees: Sequence[Employee],
    reference_period: PayPeriod | str,
    *,
    calculator: PayrollCalculator | None = None,
) -> DashboardStats:
    """Aggregate net payroll for the reference period and the months leading to it.

    Only active employees are paid; headcount and department figures cover
    everyone on file.
    """
    ref = as_period(reference_period)
    calculator = calculator or default_calculator()

    periods = [ref.shift(offset) for offset in range(-(TREND_MONTHS - 1), 1)]
    runs = {str(p): run_payroll(employees, p, calculator=calculator) for p in periods}
    current = runs[str(ref)]

    monthly_trend = [
        TrendPoint(
            period=str(p),
            month=month_label(p),
            amount=round_rupiah(runs[str(p)].total_net),
            employees=runs[str(p)].employee_count,
        )
        for p in periods
    ]
    payroll_history = [
        PayrollHistoryEntry(
            period=str(p),
            total_amount=round_rupiah(runs[str(p)].total_net),
            employee_count=runs[str(p)].employee_count,
            processed_at=datetime(p.year, p.month, PROCESSING_DAY, tzinfo=UTC),
        )
        for p in periods[-HISTORY_MONTHS:]
    ]

    return DashboardStats(
        total_employees=len(employees),
        active_employees=sum(1 for e in employees if e.is_active),
        total_payroll=round_rupiah(current.total_net),
        department_stats=dict(Counter(e.department for e in employees)),
        monthly_trend=monthly_trend,
        payroll_history=payroll_history,
        failures=current.failures,
    )
