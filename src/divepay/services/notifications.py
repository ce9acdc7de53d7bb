"""Pay-slip notification text and WhatsApp deep links.

Only the message is built here; delivery happens outside DivePay.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from divepay.core.config import NotificationConfig
from divepay.core.exceptions import ValidationError
from divepay.core.logging import get_logger
from divepay.models.payslip import PaySlip
from divepay.services.formatting import format_currency

logger = get_logger(__name__)

_NON_DIGIT = re.compile(r"\D")


class PayslipNotification(BaseModel):
    employee_id: str
    phone: str
    message: str
    url: str

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


def build_payslip_message(slip: PaySlip, config: NotificationConfig | None = None) -> str:
    config = config or NotificationConfig()
    return (
        f"\U0001F30A *{config.company_name} PAYROLL*\n\n"
        f"Hello {slip.employee.name},\n\n"
        f"Your pay slip for {slip.period} is ready!\n\n"
        f"\U0001F4B0 Net Salary: {format_currency(slip.net_salary)}\n\n"
        f"Thank you for your dedication to {config.company_name.title()}! \U0001F3CA"
    )


def whatsapp_link(phone: str, message: str, base_url: str = "https://wa.me") -> str:
    digits = _NON_DIGIT.sub("", phone)
    if not digits:
        raise ValidationError(f"Phone number {phone!r} has no digits")
    return f"{base_url.rstrip('/')}/{digits}?text={quote(message, safe='')}"


def build_notification(slip: PaySlip, config: NotificationConfig | None = None) -> PayslipNotification:
    config = config or NotificationConfig()
    message = build_payslip_message(slip, config)
    note = PayslipNotification(
        employee_id=slip.employee_id,
        phone=slip.employee.phone,
        message=message,
        url=whatsapp_link(slip.employee.phone, message, config.wa_base_url),
    )
    logger.info(
        "Pay slip notification prepared",
        extra={"employee_id": slip.employee_id, "period": slip.period, "phone": note.phone},
    )
    return note
