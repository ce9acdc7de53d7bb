"""Religious holiday allowance (THR).

The employee's stored baseline is always paid. When the period holds an
active holiday the employee's religion is eligible for, a bonus of
``base_salary x multiplier`` is added on top.
"""

from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple, Optional

from divepay.core.protocols import IHolidayCalendar
from divepay.models.employee import Employee
from divepay.models.holiday import HolidayType
from divepay.models.period import PayPeriod


class HolidayAllowance(NamedTuple):
    amount: Decimal
    type: Optional[HolidayType]


def compute_holiday_allowance(
    employee: Employee,
    period: PayPeriod | str,
    calendar: IHolidayCalendar,
) -> HolidayAllowance:
    baseline = employee.allowances.holiday_allowance
    holiday = calendar.resolve(period)
    if holiday is None or not holiday.is_eligible(employee.religion):
        return HolidayAllowance(baseline, None)

    bonus = employee.base_salary * holiday.allowance_multiplier
    return HolidayAllowance(baseline + bonus, holiday.type)
