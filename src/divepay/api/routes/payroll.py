"""Payroll calculation endpoints."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from divepay.services.payroll_run import run_payroll

router = APIRouter(tags=["payroll"])

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class CalculateRequest(BaseModel):
    """Raw employee data is checked by the engine, not by the request model."""

    employee: dict[str, Any]
    period: str
    overtime_hours: Any = 0

    model_config = _CAMEL


class RunRequest(BaseModel):
    employees: list[dict[str, Any]] = Field(default_factory=list)
    period: str
    overtime_hours: dict[str, Any] = Field(default_factory=dict)
    include_inactive: bool = False

    model_config = _CAMEL


@router.get("/holidays")
async def get_holiday(request: Request, period: str) -> Optional[dict[str, Any]]:
    """Return the active holiday for a period, or null."""
    holiday = request.app.state.calculator.calendar.resolve(period)
    if holiday is None:
        return None
    return holiday.model_dump(mode="json", by_alias=True)


@router.post("/payroll/calculate")
async def calculate(request: Request, body: CalculateRequest) -> dict[str, Any]:
    """Compute one pay slip."""
    slip = request.app.state.calculator.calculate(body.employee, body.period, body.overtime_hours)
    return slip.model_dump(mode="json", by_alias=True)


@router.post("/payroll/run")
async def run(request: Request, body: RunRequest) -> dict[str, Any]:
    """Compute slips for a batch of employees; failures are reported, not raised."""
    result = run_payroll(
        body.employees,
        body.period,
        body.overtime_hours,
        calculator=request.app.state.calculator,
        include_inactive=body.include_inactive,
    )
    return result.model_dump(mode="json", by_alias=True)
