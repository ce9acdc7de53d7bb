"""Shared fixtures: a calculator with a fixed tip share and a frozen clock."""

from __future__ import annotations

from decimal import Decimal

import pytest

from divepay.core.config import AppSettings
from divepay.engine.calendar import HolidayCalendar
from divepay.engine.payroll import PayrollCalculator
from tests.fakes import FIXED_NOW, FixedTipPool


@pytest.fixture
def tip_pool():
    return FixedTipPool(Decimal("750000"))


@pytest.fixture
def calculator(tip_pool):
    return PayrollCalculator(
        settings=AppSettings(),
        calendar=HolidayCalendar(),
        tip_pool=tip_pool,
        clock=lambda: FIXED_NOW,
    )
