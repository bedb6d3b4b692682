# -*- coding: utf-8 -*-
"""Life-balance aggregation over one month's entries."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

from .catalog import AREAS, TOTAL_AREAS
from .models import MonthSummary, WheelEntry
from .month import MonthKey, month_label, normalize, shift_month


def overall_balance(entries: Iterable[WheelEntry]) -> Optional[int]:
    """Average score of the tracked areas scaled to 0-100, or ``None`` with no data.

    Untracked areas are left out of the average rather than counted as zero.
    Halves round up (62.5 -> 63).
    """
    scores = [int(e.score) for e in entries]
    if not scores:
        return None
    value = Decimal(sum(scores) * 10) / Decimal(len(scores))
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def tracked_areas(entries: Iterable[WheelEntry]) -> List[str]:
    present = {e.area for e in entries}
    return [a.name for a in AREAS if a.name in present]


def tracked_count(entries: Iterable[WheelEntry]) -> int:
    return len(tracked_areas(entries))


def _neighbour(key: MonthKey, delta: int) -> Optional[MonthKey]:
    try:
        return shift_month(key, delta)
    except (ValueError, OverflowError):
        return None


def month_summary(month: MonthKey, entries: Iterable[WheelEntry]) -> MonthSummary:
    key = normalize(month)
    items = [e for e in entries if e.month == key]
    names = tracked_areas(items)
    return MonthSummary(
        month=key,
        label=month_label(key),
        overall_balance=overall_balance(items),
        tracked_count=len(names),
        total_areas=TOTAL_AREAS,
        tracked_areas=names,
        previous_month=_neighbour(key, -1),
        next_month=_neighbour(key, 1),
    )
