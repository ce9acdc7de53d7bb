"""Tests for the holiday calendar resolver."""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest

from divepay.core.config import CalendarConfig
from divepay.core.exceptions import CalendarError, ValidationError
from divepay.engine.calendar import DEFAULT_HOLIDAYS, HolidayCalendar
from divepay.models.employee import Religion
from divepay.models.holiday import HolidayEntry, HolidayType
from divepay.models.period import PayPeriod


def _entry(entry_id: str, day: date, **kwargs) -> HolidayEntry:
    fields = {
        "id": entry_id,
        "name": entry_id,
        "date": day,
        "type": HolidayType.ANNIVERSARY,
        "allowance_multiplier": Decimal("0.5"),
        "eligible_religions": frozenset(Religion),
    }
    fields.update(kwargs)
    return HolidayEntry(**fields)


class TestResolve:
    def test_idul_fitri_2024_falls_in_april(self):
        holiday = HolidayCalendar().resolve("4/2024")
        assert holiday is not None
        assert holiday.type == HolidayType.IDUL_FITRI
        assert holiday.allowance_multiplier == Decimal("1.0")

    def test_month_is_one_based(self):
        # Natal is 25 December; November and January must not match.
        calendar = HolidayCalendar()
        assert calendar.resolve("12/2024").type == HolidayType.NATAL
        assert calendar.resolve("11/2024") is None
        assert calendar.resolve("1/2025") is None

    def test_year_must_match(self):
        assert HolidayCalendar().resolve("4/2025") is None
        assert HolidayCalendar().resolve("3/2025").id == "idul_fitri_2025"

    def test_accepts_pay_period_and_zero_padded_string(self):
        calendar = HolidayCalendar()
        assert calendar.resolve(PayPeriod(month=9, year=2025)).id == "anniversary_2025"
        assert calendar.resolve("09/2025").id == "anniversary_2025"

    def test_no_holiday_returns_none(self):
        assert HolidayCalendar().resolve("7/2024") is None

    def test_inactive_entries_are_skipped(self):
        calendar = HolidayCalendar([_entry("off", date(2024, 7, 1), is_active=False)])
        assert calendar.resolve("7/2024") is None

    def test_first_match_in_declaration_order_wins(self):
        calendar = HolidayCalendar([
            _entry("first", date(2024, 7, 20)),
            _entry("second", date(2024, 7, 1)),
        ])
        assert calendar.resolve("7/2024").id == "first"

    def test_invalid_period_raises(self):
        with pytest.raises(ValidationError):
            HolidayCalendar().resolve("2024-04")


def test_default_table_has_one_holiday_per_month():
    months = [(h.date.year, h.date.month) for h in DEFAULT_HOLIDAYS]
    assert len(months) == len(set(months))


def test_anniversary_is_open_to_every_religion():
    anniversary = HolidayCalendar().resolve("9/2024")
    assert anniversary.eligible_religions == frozenset(Religion)


class TestFromJson:
    def test_loads_camel_case_entries_with_all_religions(self, tmp_path):
        path = tmp_path / "holidays.json"
        path.write_text(json.dumps([
            {
                "id": "galungan_2025",
                "name": "Galungan 2025",
                "date": "2025-04-23",
                "type": "anniversary",
                "description": "Company day",
                "allowanceMultiplier": 0.25,
                "isActive": True,
                "eligibleReligions": "all",
            },
            {
                "id": "nyepi_2025",
                "name": "Nyepi 2025",
                "date": "2025-03-29",
                "type": "nyepi",
                "allowance_multiplier": "0.5",
                "eligible_religions": ["hindu"],
            },
        ]))
        calendar = HolidayCalendar.from_json(path)
        assert len(calendar.entries) == 2
        assert calendar.resolve("4/2025").eligible_religions == frozenset(Religion)
        assert calendar.resolve("3/2025").eligible_religions == {Religion.HINDU}

    def test_missing_file_raises_calendar_error(self, tmp_path):
        with pytest.raises(CalendarError):
            HolidayCalendar.from_json(tmp_path / "nope.json")

    def test_invalid_entry_raises_calendar_error(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"id": "x", "name": "x", "date": "2025-01-01", "type": "lebaran"}]))
        with pytest.raises(CalendarError, match="#0"):
            HolidayCalendar.from_json(path)

    def test_non_list_document_raises(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text("{}")
        with pytest.raises(CalendarError):
            HolidayCalendar.from_json(path)

    def test_from_config_without_path_uses_builtin_table(self):
        assert HolidayCalendar.from_config(CalendarConfig(path="")).entries == DEFAULT_HOLIDAYS
