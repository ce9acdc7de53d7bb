"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class PayrollConfig(BaseSettings):
    """Payroll levy and gratuity pool parameters."""

    model_config = {"env_prefix": "DIVEPAY_PAYROLL_"}

    ppn_rate: Decimal = Decimal("0.11")
    tip_pool_base: Decimal = Decimal("15000000")  # collected per month
    tip_pool_variation: Decimal = Decimal("0.15")  # +/- fraction of the base pool
    tip_eligible_headcount: int = Field(default=20, gt=0)
    tip_pool_seed: str = "enjoy-dive"


class CalendarConfig(BaseSettings):
    """Holiday calendar source."""

    model_config = {"env_prefix": "DIVEPAY_CALENDAR_"}

    path: str = ""  # JSON file; empty uses the built-in table


class NotificationConfig(BaseSettings):
    """Pay-slip notification message settings."""

    model_config = {"env_prefix": "DIVEPAY_NOTIFY_"}

    company_name: str = "ENJOY DIVE"
    wa_base_url: str = "https://wa.me"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "DIVEPAY_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    payroll: PayrollConfig = PayrollConfig()
    calendar: CalendarConfig = CalendarConfig()
    notify: NotificationConfig = NotificationConfig()
