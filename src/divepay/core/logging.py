"""Structured JSON logging for DivePay.

Every line carries the payroll context it was emitted in (batch run id, pay
period, employee id), bound with :func:`payroll_context`, so a skipped
employee or a slip computation can be traced back to its run. Contact and
bank details that reach a log record are masked to their last four
characters.
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

_LOGGER_PREFIX = "divepay"

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "taskName"}

# Fields an employee record may leak into a log line.
_MASKED_FIELDS = frozenset({"bank_account", "phone", "email"})


# ---------------------------------------------------------------------------
# Payroll context
# ---------------------------------------------------------------------------

_run_id: ContextVar[str | None] = ContextVar("divepay_run_id", default=None)
_period: ContextVar[str | None] = ContextVar("divepay_period", default=None)
_employee_id: ContextVar[str | None] = ContextVar("divepay_employee_id", default=None)

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    "run_id": _run_id,
    "period": _period,
    "employee_id": _employee_id,
}


@contextmanager
def payroll_context(
    *,
    run_id: str | None = None,
    period: object | None = None,
    employee_id: str | None = None,
) -> Iterator[None]:
    """Bind payroll fields to every log line emitted inside the block.

    Fields left as None keep whatever an enclosing block bound. Async and
    thread safe: bindings live in context variables.
    """
    values = {"run_id": run_id, "period": period, "employee_id": employee_id}
    tokens = [
        (_CONTEXT_VARS[name], _CONTEXT_VARS[name].set(str(value)))
        for name, value in values.items()
        if value is not None
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def current_payroll_context() -> dict[str, str]:
    """The payroll fields bound at this point, unset ones omitted."""
    return {name: var.get() for name, var in _CONTEXT_VARS.items() if var.get() is not None}


def mask(value: Any) -> str:
    """Keep the last four characters: ``****7890``."""
    text = str(value)
    if len(text) <= 4:
        return "*" * len(text)
    return "*" * (len(text) - 4) + text[-4:]


# ---------------------------------------------------------------------------
# JSON formatter
# ---------------------------------------------------------------------------

class _JSONEncoder(json.JSONEncoder):
    """Money stays exact: Decimal amounts are written as strings."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        return super().default(obj)


class StructuredFormatter(logging.Formatter):
    """Formats each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(current_payroll_context())

        # Explicit extra fields win over the bound context
        for key, val in vars(record).items():
            if key not in _STDLIB_KEYS and key not in ("ts", "level", "logger", "message"):
                payload[key] = val

        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc_message"] = str(exc)
            for k, v in vars(exc).items():
                if not k.startswith("_") and k != "args":
                    payload[f"exc_{k}"] = v
            payload["traceback"] = self.formatException(record.exc_info)

        for key in _MASKED_FIELDS.intersection(payload):
            if payload[key]:
                payload[key] = mask(payload[key])

        return json.dumps(payload, cls=_JSONEncoder, default=str)


def get_logger(name: str) -> logging.Logger:
    """Logger under the divepay namespace; module names are not prefixed twice."""
    if name == _LOGGER_PREFIX or name.startswith(f"{_LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Send divepay logs as JSON lines to ``stream`` (stderr) or ``handler``.

    Only the first call configures; the API lifespan and tests may both call it.
    """
    global _configured
    with _lock:
        if _configured:
            return
        _configured = True

    root_logger = logging.getLogger(_LOGGER_PREFIX)
    root_logger.setLevel(level)
    root_logger.propagate = False

    h = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    h.setFormatter(StructuredFormatter())
    root_logger.addHandler(h)


def reset_logging() -> None:
    """Undo configure_logging. For tests."""
    global _configured
    with _lock:
        _configured = False
    logger = logging.getLogger(_LOGGER_PREFIX)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True
