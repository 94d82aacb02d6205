from __future__ import annotations

import re
from datetime import date, datetime, timedelta

from ._util import _fmt_entry_date, _today
from .models import ValidationError

_DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%m/%d/%Y",
]


def parse_day(value: str | None) -> date:
    """
    Parse a user-supplied calendar day.
    Accepts:
      - None / blank -> today
      - ISO date "2024-04-08" (a full ISO datetime is cut to its date)
      - "April 8, 2024", "Apr 8, 2024", "April 8 2024", "04/08/2024"
      - keywords: "today", "yesterday", "tomorrow"
      - relative: "3 days ago", "1 week ago"
    """
    if not value or not value.strip():
        return _today()

    raw = value.strip()
    s = raw.lower()
    today = _today()

    if s == "today":
        return today
    if s == "yesterday":
        return today - timedelta(days=1)
    if s == "tomorrow":
        return today + timedelta(days=1)

    m = re.fullmatch(r"(\d+)\s*(day|days|week|weeks)\s*ago", s)
    if m:
        n = int(m.group(1))
        if "week" in m.group(2):
            n *= 7
        return today - timedelta(days=n)

    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue

    raise ValidationError(
        f"Could not parse date {value!r}. Try '2024-04-08', 'April 8, 2024', "
        f"'yesterday' or '3 days ago'."
    )


def entry_date(value: str | None = None) -> str:
    """Date string stored on a new entry, e.g. 'April 8, 2024'."""
    return _fmt_entry_date(parse_day(value))
