"""Gratuity pool distribution.

Tips are collected company-wide and split among frontline staff (dive
masters, instructors, drivers) rather than attributed per transaction. The
monthly pool varies around a base amount; the variation is drawn from a
generator seeded by the period, so every slip for the same month gets the
same share and re-running a month reproduces it.
"""

from __future__ import annotations

import hashlib
import random
from decimal import ROUND_HALF_UP, Decimal

from divepay.core.config import PayrollConfig
from divepay.core.exceptions import ConfigurationError
from divepay.models.employee import Employee
from divepay.models.period import PayPeriod, as_period


def is_tip_recipient(employee: Employee) -> bool:
    """Management never shares the pool, whatever the position."""
    return not employee.is_management and employee.tip_eligible


class TipPool:
    """ITipPool with a per-period deterministic pool variation."""

    def __init__(
        self,
        base_pool: Decimal = Decimal("15000000"),
        variation: Decimal = Decimal("0.15"),
        headcount: int = 20,
        seed: str = "enjoy-dive",
    ) -> None:
        if headcount <= 0:
            raise ConfigurationError(f"Tip pool headcount must be positive, got {headcount}")
        self._base_pool = Decimal(base_pool)
        self._variation = Decimal(variation)
        self._headcount = headcount
        self._seed = seed

    @classmethod
    def from_config(cls, config: PayrollConfig) -> TipPool:
        return cls(
            base_pool=config.tip_pool_base,
            variation=config.tip_pool_variation,
            headcount=config.tip_eligible_headcount,
            seed=config.tip_pool_seed,
        )

    def _rng(self, period: PayPeriod) -> random.Random:
        digest = hashlib.sha256(f"{self._seed}:{period}".encode()).digest()
        return random.Random(int.from_bytes(digest[:8], "big"))

    def pool_total(self, period: PayPeriod | str) -> Decimal:
        """Tips collected in the period: base pool varied by up to +/- variation."""
        p = as_period(period)
        draw = Decimal(repr(self._rng(p).random()))  # [0, 1)
        factor = (draw - Decimal("0.5")) * 2 * self._variation
        return self._base_pool * (1 + factor)

    def distribute(self, period: PayPeriod | str) -> Decimal:
        """Per-head share of the period's pool, rounded to a whole rupiah."""
        share = self.pool_total(period) / self._headcount
        return share.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
