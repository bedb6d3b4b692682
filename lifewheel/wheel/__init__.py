# -*- coding: utf-8 -*-
"""Monthly wheel-of-life tracking: eight life areas scored 1-10 per month."""

from .aggregate import month_summary, overall_balance, tracked_count
from .catalog import AREAS, DEFAULT_SCORE, TOTAL_AREAS, areas
from .errors import StorageUnavailable, ValidationError, WheelError
from .models import MonthSummary, Notice, WheelEntry, WheelEntryDraft
from .storage import EntryRepository, SQLiteEntryRepository, build_repository
from .store import WheelStateStore

__all__ = [
    "AREAS",
    "DEFAULT_SCORE",
    "TOTAL_AREAS",
    "areas",
    "EntryRepository",
    "SQLiteEntryRepository",
    "build_repository",
    "MonthSummary",
    "Notice",
    "WheelEntry",
    "WheelEntryDraft",
    "WheelStateStore",
    "StorageUnavailable",
    "ValidationError",
    "WheelError",
    "month_summary",
    "overall_balance",
    "tracked_count",
]
