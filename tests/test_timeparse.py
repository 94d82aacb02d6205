"""Tests for timeparse.parse_day and the entry date format."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from moodlogger._util import _fmt_entry_date, _fmt_header_date
from moodlogger.models import ValidationError
from moodlogger.timeparse import entry_date, parse_day


@pytest.fixture()
def today(monkeypatch) -> date:
    fixed = date(2024, 4, 8)
    monkeypatch.setattr("moodlogger.timeparse._today", lambda: fixed)
    return fixed


# ---- None / blank / keywords ----


def test_none_is_today(today):
    assert parse_day(None) == today


def test_blank_is_today(today):
    assert parse_day("   ") == today


def test_keywords(today):
    assert parse_day("Today") == today
    assert parse_day("yesterday") == today - timedelta(days=1)
    assert parse_day("tomorrow") == today + timedelta(days=1)


# ---- Relative ----


def test_days_ago(today):
    assert parse_day("3 days ago") == date(2024, 4, 5)


def test_one_day_ago(today):
    assert parse_day("1 day ago") == date(2024, 4, 7)


def test_weeks_ago(today):
    assert parse_day("2 weeks ago") == date(2024, 3, 25)


# ---- Absolute ----


def test_iso_date():
    assert parse_day("2024-02-29") == date(2024, 2, 29)


def test_iso_datetime_cut_to_date():
    assert parse_day("2024-02-25T07:34:00-05:00") == date(2024, 2, 25)


def test_long_month_name():
    assert parse_day("April 8, 2024") == date(2024, 4, 8)


def test_short_month_name():
    assert parse_day("Apr 8, 2024") == date(2024, 4, 8)


def test_us_slashes():
    assert parse_day("04/08/2024") == date(2024, 4, 8)


# ---- Formatting ----


def test_entry_date_has_no_leading_zero():
    assert _fmt_entry_date(date(2024, 4, 8)) == "April 8, 2024"
    assert _fmt_entry_date(date(2024, 12, 25)) == "December 25, 2024"


def test_header_date():
    assert _fmt_header_date(date(2024, 4, 8)) == "Monday, April 8, 2024"


def test_entry_date_round_trips_its_own_format(today):
    assert entry_date(None) == "April 8, 2024"
    assert parse_day(entry_date("2024-01-02")) == date(2024, 1, 2)


# ---- Invalid input ----


def test_invalid_raises():
    with pytest.raises(ValidationError):
        parse_day("not a date at all blah blah")
