"""DivePay — payroll engine for the Enjoy Dive center."""

from __future__ import annotations

__version__ = "0.1.0"
