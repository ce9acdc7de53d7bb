"""Tests for the gratuity pool distributor."""

from __future__ import annotations

from decimal import Decimal

import pytest

from divepay.core.config import PayrollConfig
from divepay.core.exceptions import ConfigurationError, DivePayError
from divepay.engine.tips import TipPool, is_tip_recipient
from tests.fakes import make_employee


class TestDistribute:
    def test_same_period_gives_same_share(self):
        pool = TipPool()
        assert pool.distribute("4/2024") == pool.distribute("4/2024")

    def test_share_reproducible_across_instances(self):
        assert TipPool(seed="s").distribute("6/2024") == TipPool(seed="s").distribute("6/2024")

    def test_share_within_variation_band(self):
        pool = TipPool()
        for month in range(1, 13):
            share = pool.distribute(f"{month}/2024")
            assert Decimal("637500") <= share <= Decimal("862500")

    def test_share_is_whole_rupiah(self):
        share = TipPool().distribute("8/2024")
        assert share == share.to_integral_value()

    def test_zero_variation_gives_exact_split(self):
        pool = TipPool(base_pool=Decimal("15000000"), variation=Decimal("0"), headcount=20)
        assert pool.distribute("1/2025") == Decimal("750000")

    def test_split_rounds_half_up(self):
        pool = TipPool(base_pool=Decimal("5"), variation=Decimal("0"), headcount=2)
        assert pool.distribute("1/2025") == Decimal("3")

    def test_months_draw_independently(self):
        pool = TipPool()
        shares = {pool.distribute(f"{m}/2024") for m in range(1, 13)}
        assert len(shares) > 1

    @pytest.mark.parametrize("headcount", [0, -3])
    def test_non_positive_headcount_rejected(self, headcount):
        with pytest.raises(ConfigurationError, match="headcount must be positive") as exc_info:
            TipPool(headcount=headcount)
        assert isinstance(exc_info.value, DivePayError)

    def test_from_config(self):
        config = PayrollConfig(tip_pool_base=Decimal("2000000"), tip_pool_variation=Decimal("0"), tip_eligible_headcount=4)
        assert TipPool.from_config(config).distribute("2/2024") == Decimal("500000")


class TestRecipients:
    @pytest.mark.parametrize(
        "position",
        ["Dive Master", "Senior Dive Master", "Driver", "senior driver", "Diving Instructor", "SENIOR DIVING INSTRUCTOR"],
    )
    def test_frontline_positions_receive(self, position):
        assert is_tip_recipient(make_employee(position=position))

    @pytest.mark.parametrize("position", ["Receptionist", "Accountant", "Boat Captain"])
    def test_other_positions_do_not(self, position):
        assert not is_tip_recipient(make_employee(position=position))

    def test_management_never_receives(self):
        assert not is_tip_recipient(make_employee(position="Dive Master", is_management=True))

    def test_explicit_flag_overrides_position(self):
        assert is_tip_recipient(make_employee(position="Boat Crew", tip_eligible=True))
        assert not is_tip_recipient(make_employee(position="Dive Master", tip_eligible=False))

    def test_management_excluded_even_when_flag_entered(self):
        employee = make_employee(position="Dive Master", is_management=True, tip_eligible=True)
        assert employee.tip_eligible is True
        assert not is_tip_recipient(employee)
