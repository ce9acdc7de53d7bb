"""Batch payroll runs: one period, many employees.

A failing employee (bad record, bad overtime entry) is skipped and reported;
it never aborts the rest of the batch.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any

from divepay.core.exceptions import DivePayError
from divepay.core.logging import get_logger, payroll_context
from divepay.engine.payroll import PayrollCalculator, default_calculator
from divepay.models.employee import Employee
from divepay.models.period import PayPeriod, as_period
from divepay.models.reports import PayrollFailure, PayrollRunResult

logger = get_logger(__name__)


def _record_id(employee: Employee | Mapping[str, Any]) -> str:
    if isinstance(employee, Employee):
        return employee.id
    if isinstance(employee, Mapping):
        return str(employee.get("id", ""))
    return ""


def _is_inactive(employee: Employee | Mapping[str, Any]) -> bool:
    if isinstance(employee, Employee):
        return not employee.is_active
    if isinstance(employee, Mapping):
        return str(employee.get("status", "active")).lower() == "inactive"
    return False


def run_payroll(
    employees: Iterable[Employee | Mapping[str, Any]],
    period: PayPeriod | str,
    overtime_hours: Mapping[str, Any] | None = None,
    *,
    calculator: PayrollCalculator | None = None,
    include_inactive: bool = False,
) -> PayrollRunResult:
    """Compute slips for every employee in the period.

    Args:
        employees: Employee records or raw mappings.
        period: Pay period; an unparseable period fails the whole run.
        overtime_hours: Optional employee id -> overtime hours.
        calculator: Defaults to the environment-configured calculator.
        include_inactive: Also pay employees whose status is inactive.
    """
    p = as_period(period)
    calculator = calculator or default_calculator()
    overtime_hours = overtime_hours or {}

    result = PayrollRunResult(run_id=uuid.uuid4().hex[:12], period=str(p))
    with payroll_context(run_id=result.run_id, period=p):
        for employee in employees:
            if not include_inactive and _is_inactive(employee):
                continue
            employee_id = _record_id(employee)
            with payroll_context(employee_id=employee_id or None):
                try:
                    slip = calculator.calculate(employee, p, overtime_hours.get(employee_id, 0))
                except DivePayError as exc:
                    logger.warning("Skipping employee in payroll run", extra={"error": str(exc)})
                    result.failures.append(
                        PayrollFailure(employee_id=employee_id, error_type=type(exc).__name__, message=str(exc))
                    )
                    continue
            result.slips.append(slip)

        result.total_gross = sum((s.gross_salary for s in result.slips), Decimal("0"))
        result.total_net = sum((s.net_salary for s in result.slips), Decimal("0"))
        result.total_ppn = sum((s.deductions.ppn for s in result.slips), Decimal("0"))

        logger.info(
            "Payroll run complete",
            extra={
                "slips": len(result.slips),
                "failures": len(result.failures),
                "total_net": result.total_net,
            },
        )
    return result
