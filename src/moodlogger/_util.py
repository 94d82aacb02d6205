"""Shared low-level helpers used by cli.py, gui.py and the controller."""

from __future__ import annotations

from datetime import date, datetime


def _now_local() -> datetime:
    return datetime.now().astimezone()


def _today() -> date:
    return _now_local().date()


def _fmt_entry_date(d: date) -> str:
    # "April 8, 2024"; Windows has no %-d
    try:
        return d.strftime("%B %-d, %Y")
    except ValueError:
        return d.strftime("%B %d, %Y").replace(" 0", " ")


def _fmt_header_date(d: date) -> str:
    # "Monday, April 8, 2024"
    return f"{d.strftime('%A')}, {_fmt_entry_date(d)}"
