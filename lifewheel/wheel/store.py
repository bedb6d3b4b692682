# -*- coding: utf-8 -*-
"""Per-session state for the month currently shown on the wheel.

One ``WheelStateStore`` belongs to one view. A calendar overview that looks
at a different month builds its own store over the same repository instead
of sharing this one.

Only ``load_month`` and ``save`` suspend (on repository I/O). Month
navigation can fire several loads back to back; each load takes a fresh
token and a result is applied only while its token is still the newest,
so a slow answer for an older month never overwrites a newer one.
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import date
from typing import Callable, Deque, Dict, List, Optional, Tuple

from ..config import settings
from .aggregate import month_summary, overall_balance, tracked_count
from .errors import StorageUnavailable, ensure_valid_draft
from .models import MonthSummary, Notice, WheelEntry, WheelEntryDraft
from .month import MonthKey, month_label, normalize
from .storage import EntryRepository

logger = logging.getLogger(__name__)

NoticeCallback = Callable[[Notice], None]

MAX_NOTICES = 50


class WheelStateStore:
    def __init__(
        self,
        repository: EntryRepository,
        *,
        default_score: Optional[int] = None,
        on_notice: Optional[NoticeCallback] = None,
    ) -> None:
        self._repository = repository
        self.default_score: int = settings.default_score if default_score is None else int(default_score)
        self._on_notice = on_notice

        self._entries: List[WheelEntry] = []
        self._month: Optional[MonthKey] = None
        self._requested_month: Optional[MonthKey] = None
        self._load_token = 0
        self._in_flight = 0
        # Saves newer than a fetch's snapshot are replayed over it when it lands.
        self._write_seq = 0
        self._recent_saves: Dict[Tuple[str, date], Tuple[int, WheelEntry]] = {}
        # Oldest notices fall off; callers wanting every one should pass on_notice.
        self.notices: Deque[Notice] = deque(maxlen=MAX_NOTICES)

    # --- State -------------------------------------------------------------
    @property
    def entries(self) -> Tuple[WheelEntry, ...]:
        return tuple(self._entries)

    @property
    def month(self) -> Optional[MonthKey]:
        """Month the cached entries belong to (last successful load)."""
        return self._month

    @property
    def requested_month(self) -> Optional[MonthKey]:
        return self._requested_month

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    # --- Lookups -----------------------------------------------------------
    def entry_for(self, area: str) -> Optional[WheelEntry]:
        for entry in self._entries:
            if entry.area == area:
                return entry
        return None

    def score_for(self, area: str) -> int:
        entry = self.entry_for(area)
        return entry.score if entry else self.default_score

    def is_tracked(self, area: str) -> bool:
        return self.entry_for(area) is not None

    def tracked_count(self) -> int:
        return tracked_count(self._entries)

    def overall_balance(self) -> Optional[int]:
        return overall_balance(self._entries)

    def summary(self) -> Optional[MonthSummary]:
        if self._month is None:
            return None
        return month_summary(self._month, self._entries)

    # --- Mutations ---------------------------------------------------------
    async def load_month(self, month: date) -> bool:
        """Fetch ``month`` and replace the cache with it.

        Returns ``True`` when the result was applied. A failed fetch keeps the
        previous entries; a superseded fetch is dropped either way.
        """
        key = normalize(month)
        self._load_token += 1
        token = self._load_token
        started_at = self._write_seq
        self._requested_month = key
        self._in_flight += 1
        try:
            try:
                fetched = await self._repository.fetch_for_month(key)
            except StorageUnavailable as exc:
                if token != self._load_token:
                    logger.warning("Ignoring failure of superseded fetch for %s: %s", key, exc)
                    return False
                logger.error("Error fetching wheel entries for %s: %s", key, exc)
                self._notify(Notice(title="Error", description="Failed to fetch wheel entries", variant="destructive"))
                return False

            if token != self._load_token:
                logger.debug("Dropping stale wheel entries for %s (token %s < %s)", key, token, self._load_token)
                return False
            entries = [e for e in fetched if e.month == key]
            self._entries = self._replay_saves(entries, key, started_at)
            self._month = key
            return True
        finally:
            self._in_flight -= 1

    async def save(self, draft: WheelEntryDraft) -> Optional[WheelEntry]:
        """Persist one area's entry and fold the stored row into the cache.

        Returns the persisted entry, or ``None`` if the store was unreachable
        (the cache is left exactly as it was).
        """
        ensure_valid_draft(draft)
        key = normalize(draft.month)
        self._in_flight += 1
        try:
            try:
                saved = await self._repository.upsert(draft)
            except StorageUnavailable as exc:
                logger.error("Error saving %s entry for %s: %s", draft.area, key, exc)
                self._notify(Notice(title="Error", description="Failed to save wheel entry", variant="destructive"))
                return None

            self._write_seq += 1
            self._recent_saves[saved.key()] = (self._write_seq, saved)
            self._apply_saved(saved)
            logger.info("Saved %s entry for %s (id=%s)", saved.area, month_label(saved.month), saved.id)
            self._notify(Notice(title="Success", description=f"{saved.area} entry saved successfully"))
            return saved
        finally:
            self._in_flight -= 1

    def _replay_saves(self, entries: List[WheelEntry], month: MonthKey, started_at: int) -> List[WheelEntry]:
        # Later loads start no earlier than this one, so older saves are never needed again.
        self._recent_saves = {k: v for k, v in self._recent_saves.items() if v[0] > started_at}
        for _seq, saved in self._recent_saves.values():
            if saved.month == month:
                entries = _replace_entry(entries, saved)
        return entries

    def _apply_saved(self, saved: WheelEntry) -> None:
        # The cache holds a single month; a save for another month is durable but not shown here.
        shown = self._month if self._month is not None else self._requested_month
        if shown is None:
            self._month = shown = saved.month
        if saved.month != shown:
            return
        self._entries = _replace_entry(self._entries, saved)

    def _notify(self, notice: Notice) -> None:
        self.notices.append(notice)
        if self._on_notice is not None:
            self._on_notice(notice)


def _replace_entry(entries: List[WheelEntry], saved: WheelEntry) -> List[WheelEntry]:
    replaced = False
    result: List[WheelEntry] = []
    for entry in entries:
        if entry.key() == saved.key():
            result.append(saved)
            replaced = True
        else:
            result.append(entry)
    if not replaced:
        result.append(saved)
    return result
