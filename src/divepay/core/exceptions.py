"""DivePay exception hierarchy."""

from __future__ import annotations


class DivePayError(Exception):
    """Base exception for all DivePay errors."""


class ValidationError(DivePayError):
    """Payroll input failed validation (period, overtime hours)."""


class DataIntegrityError(DivePayError):
    """Employee record is missing a required numeric field or holds a non-number."""

    def __init__(self, employee_id: str, field: str, message: str = "is missing or not a finite number") -> None:
        self.employee_id = employee_id
        self.field = field
        super().__init__(f"Employee {employee_id or '<unknown>'}: {field} {message}")


class CalendarError(DivePayError):
    """Holiday calendar could not be loaded."""


class ConfigurationError(DivePayError):
    """A payroll component was configured with unusable values."""
