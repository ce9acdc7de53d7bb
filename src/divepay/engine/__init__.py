"""Payroll calculation engine: holiday calendar, THR, tip pool, pay slips."""

from __future__ import annotations

from divepay.engine.calendar import HolidayCalendar
from divepay.engine.holiday_allowance import HolidayAllowance, compute_holiday_allowance
from divepay.engine.payroll import PayrollCalculator, calculate_payroll
from divepay.engine.tips import TipPool, is_tip_recipient

__all__ = [
    "HolidayAllowance",
    "HolidayCalendar",
    "PayrollCalculator",
    "TipPool",
    "calculate_payroll",
    "compute_holiday_allowance",
    "is_tip_recipient",
]
