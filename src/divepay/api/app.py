"""FastAPI application with lifespan, router mounting and error mapping."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from divepay.api.routes import health, payroll
from divepay.core.config import AppSettings
from divepay.core.exceptions import DataIntegrityError, ValidationError
from divepay.core.logging import configure_logging
from divepay.engine.payroll import PayrollCalculator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Wire settings and the calculator onto application state."""
    settings = getattr(app.state, "settings", None) or AppSettings()
    configure_logging(level=settings.log_level.upper())
    app.state.settings = settings
    if getattr(app.state, "calculator", None) is None:
        app.state.calculator = PayrollCalculator(settings=settings)
    yield


async def _invalid_input(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app(
    settings: AppSettings | None = None,
    calculator: PayrollCalculator | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="DivePay Payroll Engine",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.calculator = calculator
    app.add_exception_handler(ValidationError, _invalid_input)
    app.add_exception_handler(DataIntegrityError, _invalid_input)
    app.include_router(health.router)
    app.include_router(payroll.router)
    return app
