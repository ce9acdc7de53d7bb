"""Payroll calculator: turns an employee, a period and overtime hours into a pay slip.

Order of computation:

1. overtime pay = hours x overtime rate (0 when the employee has no rate)
2. holiday allowance (baseline, plus the THR bonus when eligible)
3. tips = stored baseline, plus a pool share for frontline non-management staff
4. allowances total = transport + meal + bonus + tips + holiday + overtime
5. gross = base salary + allowances total
6. PPN = gross x PPN rate (levied on gross, separate from the stored income tax)
7. deductions total = stored deductions + PPN
8. net = gross - deductions total

All arithmetic is exact Decimal; nothing is rounded except the tip share.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_snake

from divepay.core.config import AppSettings
from divepay.core.exceptions import DataIntegrityError, ValidationError
from divepay.core.logging import get_logger
from divepay.core.protocols import IHolidayCalendar, ITipPool
from divepay.engine.calendar import HolidayCalendar
from divepay.engine.holiday_allowance import compute_holiday_allowance
from divepay.engine.tips import TipPool, is_tip_recipient
from divepay.models.employee import Allowances, Deductions, Employee
from divepay.models.payslip import AllowanceBreakdown, DeductionBreakdown, PaySlip
from divepay.models.period import PayPeriod, as_period

logger = get_logger(__name__)

_ZERO = Decimal("0")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class PayrollCalculator:
    """Computes pay slips against a holiday calendar and a tip pool.

    Holds only immutable configuration, so one instance can serve any number
    of calls, including concurrent ones.
    """

    def __init__(
        self,
        *,
        settings: AppSettings | None = None,
        calendar: IHolidayCalendar | None = None,
        tip_pool: ITipPool | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings or AppSettings()
        self._calendar = calendar or HolidayCalendar.from_config(self._settings.calendar)
        self._tip_pool = tip_pool or TipPool.from_config(self._settings.payroll)
        self._ppn_rate = self._settings.payroll.ppn_rate
        self._clock = clock

    @property
    def calendar(self) -> IHolidayCalendar:
        return self._calendar

    def calculate(
        self,
        employee: Employee | Mapping[str, Any],
        period: PayPeriod | str,
        overtime_hours: Any = 0,
    ) -> PaySlip:
        """Compute the pay slip for one employee and period.

        Raises:
            ValidationError: the period does not parse or overtime hours are negative.
            DataIntegrityError: a required numeric employee field is missing or NaN.
        """
        p = as_period(period)
        hours = _coerce_hours(overtime_hours)
        emp = _coerce_employee(employee)

        allow = emp.allowances
        deduct = emp.deductions

        overtime_pay = hours * (emp.overtime_rate if emp.overtime_rate is not None else _ZERO)
        holiday = compute_holiday_allowance(emp, p, self._calendar)

        tips = allow.tips
        if is_tip_recipient(emp):
            tips += self._tip_pool.distribute(p)

        allowances_total = (
            allow.transport + allow.meal + allow.bonus
            + tips + holiday.amount + overtime_pay
        )
        gross = emp.base_salary + allowances_total

        ppn = gross * self._ppn_rate
        deductions_total = (
            deduct.tax + deduct.insurance + deduct.other + deduct.cooperative_fund
            + deduct.health_insurance + deduct.loan_deduction + ppn
        )
        net = gross - deductions_total

        slip = PaySlip(
            id=f"PS-{emp.id}-{p.compact}",
            employee_id=emp.id,
            employee=emp,
            period=str(p),
            base_salary=emp.base_salary,
            allowances=AllowanceBreakdown(
                transport=allow.transport,
                meal=allow.meal,
                bonus=allow.bonus,
                overtime=overtime_pay,
                tips=tips,
                holiday_allowance=holiday.amount,
                total=allowances_total,
            ),
            deductions=DeductionBreakdown(
                tax=deduct.tax,
                insurance=deduct.insurance,
                other=deduct.other,
                cooperative_fund=deduct.cooperative_fund,
                health_insurance=deduct.health_insurance,
                loan_deduction=deduct.loan_deduction,
                ppn=ppn,
                total=deductions_total,
            ),
            gross_salary=gross,
            net_salary=net,
            generated_at=self._clock(),
            overtime_hours=hours,
            holiday_type=holiday.type,
        )
        logger.debug(
            "Computed pay slip",
            extra={
                "slip_id": slip.id,
                "employee_id": emp.id,
                "period": slip.period,
                "gross": gross,
                "net": net,
                "holiday_type": holiday.type,
            },
        )
        return slip


@lru_cache(maxsize=1)
def default_calculator() -> PayrollCalculator:
    """Calculator wired from environment settings."""
    return PayrollCalculator()


def calculate_payroll(
    employee: Employee | Mapping[str, Any],
    period: PayPeriod | str,
    overtime_hours: Any = 0,
) -> PaySlip:
    """Compute a pay slip with the default calculator."""
    return default_calculator().calculate(employee, period, overtime_hours)


# ---------------------------------------------------------------------------
# Input checks
# ---------------------------------------------------------------------------

def _coerce_hours(value: Any) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Overtime hours must be a number, got {value!r}")
    try:
        hours = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValidationError(f"Overtime hours must be a number, got {value!r}") from exc
    if not hours.is_finite():
        raise ValidationError(f"Overtime hours must be finite, got {value!r}")
    if hours < 0:
        raise ValidationError(f"Overtime hours cannot be negative, got {value!r}")
    return hours


def _coerce_employee(employee: Employee | Mapping[str, Any]) -> Employee:
    if isinstance(employee, Employee):
        return _checked_employee(employee)
    if isinstance(employee, Mapping):
        return Employee.from_record(employee)
    raise DataIntegrityError("", "employee", f"is not an employee record ({type(employee).__name__})")


def _checked_employee(employee: Employee) -> Employee:
    """Records built without validation (model_construct) may still hold gaps.

    Allowance and deduction groups given as plain mappings are validated into
    their models, so the returned employee always has typed groups.
    """
    emp_id = str(getattr(employee, "id", ""))
    _require_finite(emp_id, "base_salary", getattr(employee, "base_salary", None))
    rate = getattr(employee, "overtime_rate", None)
    if rate is not None:
        _require_finite(emp_id, "overtime_rate", rate)

    groups: dict[str, Allowances | Deductions] = {}
    for group, model in (("allowances", Allowances), ("deductions", Deductions)):
        values = getattr(employee, group, None)
        if isinstance(values, Mapping):
            values = _validate_group(emp_id, group, model, values)
            groups[group] = values
        elif not isinstance(values, model):
            raise DataIntegrityError(emp_id, group, "is missing or not a record")
        for name in model.model_fields:
            _require_finite(emp_id, f"{group}.{name}", getattr(values, name))

    return employee.model_copy(update=groups) if groups else employee


def _validate_group(
    employee_id: str, group: str, model: type[Allowances] | type[Deductions], values: Mapping[str, Any]
) -> Allowances | Deductions:
    try:
        return model.model_validate(values)
    except PydanticValidationError as exc:
        err = exc.errors()[0]
        field = ".".join([group, *(to_snake(str(part)) for part in err["loc"])])
        raise DataIntegrityError(employee_id, field, f"is invalid ({err['msg']})") from exc


def _require_finite(employee_id: str, field: str, value: Any) -> None:
    if not isinstance(value, Decimal) or not value.is_finite():
        raise DataIntegrityError(employee_id, field)
