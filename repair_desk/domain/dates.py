"""Strict ``DD-MM-YYYY`` calendar dates."""

import re
from datetime import date, datetime

DATE_FORMAT = "%d-%m-%Y"

# Two-digit day and month, four-digit year, ASCII only
_DATE_PATTERN = re.compile(r"\d{2}-\d{2}-\d{4}", re.ASCII)


def parse_date(text: str | None) -> date | None:
    """Return the calendar date spelled by ``text`` or ``None``.

    No rollover is applied: ``32-01-2024`` and ``29-02-2023`` are rejected
    rather than moved into the next month.
    """
    if text is None or not _DATE_PATTERN.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def is_valid_date(text: str | None) -> bool:
    return parse_date(text) is not None


def format_date(value: date) -> str:
    # strftime drops leading zeros from years before 1000 on some platforms
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def days_between(start: date, end: date) -> int:
    """Number of days stepped forward from ``start`` until reaching ``end``.

    Never negative: when ``start`` is on or after ``end`` the result is 0.
    """
    return max((end - start).days, 0)
