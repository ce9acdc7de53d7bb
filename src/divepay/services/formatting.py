"""Indonesian display formatting shared by reports and notifications."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from divepay.models.holiday import HolidayType
from divepay.models.period import PayPeriod

_MONTHS_SHORT = ("Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des")

_HOLIDAY_NAMES = {
    HolidayType.IDUL_FITRI: "Tunjangan Idul Fitri",
    HolidayType.NATAL: "Tunjangan Natal",
    HolidayType.NYEPI: "Tunjangan Nyepi",
    HolidayType.WAISAK: "Tunjangan Waisak",
    HolidayType.ANNIVERSARY: "Bonus Tahunan",
}


def round_rupiah(amount: Decimal) -> Decimal:
    """Round half-up to a whole rupiah."""
    return Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal | int) -> str:
    """id-ID rupiah: ``Rp 1.234.567``, no decimals.

    The symbol is joined to the digits by a no-break space (U+00A0), as the
    id-ID locale formats it, so the amount never wraps away from ``Rp``.
    """
    value = round_rupiah(Decimal(amount))
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,.0f}".replace(",", ".")
    return f"{sign}Rp\u00a0{grouped}"


def month_label(period: PayPeriod) -> str:
    """Short chart label, e.g. ``Apr 24``."""
    return f"{_MONTHS_SHORT[period.month - 1]} {period.year % 100:02d}"


def holiday_display_name(holiday_type: HolidayType | str | None) -> str:
    """Slip line label for a holiday allowance."""
    try:
        return _HOLIDAY_NAMES[HolidayType(holiday_type)]
    except ValueError:
        return "Tunjangan Hari Raya"
