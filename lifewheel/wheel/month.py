# -*- coding: utf-8 -*-
"""Month keys.

Every wheel entry is partitioned by the first calendar day of its month.
Helpers here turn dates, datetimes and ISO strings into that key and move
between neighbouring months.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Union

MonthKey = date

_MONTH_ONLY = re.compile(r"^(\d{4})-(\d{1,2})$")

_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def normalize(value: Union[date, datetime, str]) -> MonthKey:
    """Return the first day of the month containing ``value``.

    Datetimes keep their own calendar fields; the time of day and any
    timezone are dropped without conversion.
    """
    if isinstance(value, datetime):
        return date(value.year, value.month, 1)
    if isinstance(value, date):
        return date(value.year, value.month, 1)
    if isinstance(value, str):
        return parse_month(value)
    raise TypeError(f"Cannot derive a month from {type(value).__name__}")


def parse_month(text: str) -> MonthKey:
    """Parse ``YYYY-MM``, ``YYYY-MM-DD`` or a full ISO timestamp."""
    raw = (text or "").strip()
    if not raw:
        raise ValueError("Empty month value")

    m = _MONTH_ONLY.match(raw)
    if m:
        year, month = int(m.group(1)), int(m.group(2))
        if not 1 <= month <= 12:
            raise ValueError(f"Invalid month: {text!r}")
        return date(year, month, 1)

    # Handle trailing Z.
    value = raw.replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        try:
            parsed_date = date.fromisoformat(raw[:10])
        except ValueError as exc:
            raise ValueError(f"Invalid month: {text!r}") from exc
        return date(parsed_date.year, parsed_date.month, 1)
    return date(parsed.year, parsed.month, 1)


def shift_month(key: MonthKey, delta: int) -> MonthKey:
    index = key.year * 12 + (key.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def month_label(key: MonthKey) -> str:
    return f"{_MONTH_NAMES[key.month - 1]} {key.year}"


def to_iso(key: MonthKey) -> str:
    """Storage/wire form: first calendar day, date only."""
    return normalize(key).isoformat()


def current_month() -> MonthKey:
    return normalize(date.today())
