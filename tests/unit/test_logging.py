"""Tests for structured JSON logging."""

from __future__ import annotations

import io
import json
import logging
from decimal import Decimal

import pytest

from divepay.core.logging import (
    configure_logging,
    current_payroll_context,
    get_logger,
    mask,
    payroll_context,
    reset_logging,
)


@pytest.fixture
def log_stream():
    reset_logging()
    stream = io.StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    yield stream
    reset_logging()


def test_records_are_json_lines_with_extra_fields(log_stream):
    get_logger("engine.payroll").info("Computed pay slip", extra={"employee_id": "E1", "net": Decimal("8900000")})
    payload = json.loads(log_stream.getvalue().strip())
    assert payload["level"] == "INFO"
    assert payload["logger"] == "divepay.engine.payroll"
    assert payload["message"] == "Computed pay slip"
    assert payload["employee_id"] == "E1"
    assert payload["net"] == "8900000"


def test_configure_is_idempotent(log_stream):
    configure_logging(level=logging.DEBUG, stream=io.StringIO())
    assert len(logging.getLogger("divepay").handlers) == 1


def test_module_names_are_not_double_prefixed():
    assert get_logger("divepay.engine.tips").name == "divepay.engine.tips"


def test_exception_fields_are_included(log_stream):
    from divepay.core.exceptions import DataIntegrityError

    try:
        raise DataIntegrityError("E7", "base_salary")
    except DataIntegrityError:
        get_logger("services").exception("failed")
    payload = json.loads(log_stream.getvalue().strip())
    assert payload["exc_type"] == "DataIntegrityError"
    assert payload["exc_field"] == "base_salary"
    assert payload["exc_employee_id"] == "E7"


class TestPayrollContext:
    def test_bound_fields_appear_on_every_line(self, log_stream):
        logger = get_logger("services.payroll_run")
        with payroll_context(run_id="r1", period="4/2024"):
            with payroll_context(employee_id="EMP001"):
                logger.info("inner")
            logger.info("outer")
        logger.info("after")

        inner, outer, after = (json.loads(line) for line in log_stream.getvalue().splitlines())
        assert (inner["run_id"], inner["period"], inner["employee_id"]) == ("r1", "4/2024", "EMP001")
        assert outer["run_id"] == "r1"
        assert "employee_id" not in outer
        assert "run_id" not in after

    def test_context_is_restored_after_an_error(self):
        with pytest.raises(RuntimeError):
            with payroll_context(run_id="r2"):
                raise RuntimeError("boom")
        assert current_payroll_context() == {}

    def test_explicit_extra_overrides_context(self, log_stream):
        with payroll_context(employee_id="EMP001"):
            get_logger("engine").info("slip", extra={"employee_id": "EMP002"})
        assert json.loads(log_stream.getvalue())["employee_id"] == "EMP002"


def test_contact_details_are_masked(log_stream):
    get_logger("services").info(
        "Notification prepared", extra={"phone": "+62 812-3456-7890", "bank_account": "BCA 1234567890"}
    )
    payload = json.loads(log_stream.getvalue())
    assert payload["phone"] == "*************7890"
    assert payload["bank_account"] == "**********7890"
    assert mask("123") == "***"
