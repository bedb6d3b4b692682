# -*- coding: utf-8 -*-
"""Wheel storage helpers (SQLite) and the repository contract shared by all backends."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Mapping, Optional, Protocol
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from ..app_db import db_conn, init_app_db
from ..config import Settings
from .errors import StorageUnavailable, ensure_valid_draft
from .models import WheelEntry, WheelEntryDraft
from .month import MonthKey, normalize, to_iso

logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    async def fetch_for_month(self, month: MonthKey) -> List[WheelEntry]:
        ...

    async def upsert(self, draft: WheelEntryDraft) -> WheelEntry:
        ...


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_entry_row(row: Mapping[str, Any]) -> Optional[WheelEntry]:
    """Map a loosely typed storage row onto a ``WheelEntry``.

    Missing text columns become empty strings. Rows with an unknown area,
    a bad score or an unreadable month are rejected (``None``).
    """
    data = dict(row)
    score = data.get("score")
    if isinstance(score, float) and score.is_integer():
        score = int(score)
    record = {
        "id": str(data["id"]) if data.get("id") is not None else None,
        "area": data.get("area"),
        "score": score,
        "what_went_well": data.get("what_went_well") or "",
        "what_can_be_improved": data.get("what_can_be_improved") or "",
        "notes": data.get("notes") or "",
        "month": data.get("month"),
        "created_at": data.get("created_at"),
        "updated_at": data.get("updated_at"),
    }
    try:
        return WheelEntry.model_validate(record)
    except PydanticValidationError as exc:
        logger.warning("Skipping malformed wheel entry row id=%s: %s", data.get("id"), exc)
        return None


def parse_entry_rows(rows: List[Mapping[str, Any]]) -> List[WheelEntry]:
    entries: List[WheelEntry] = []
    for row in rows:
        entry = parse_entry_row(row)
        if entry is not None:
            entries.append(entry)
    return entries


def fetch_entries_for_month(db_path: Path, month: MonthKey) -> List[WheelEntry]:
    key = to_iso(month)
    try:
        with db_conn(db_path) as conn:
            rows = conn.execute(
                "SELECT * FROM wheel_entries WHERE month = ? ORDER BY created_at ASC",
                (key,),
            ).fetchall()
    except (sqlite3.Error, OSError) as exc:
        logger.error("Failed to fetch wheel entries for %s: %s", key, exc)
        raise StorageUnavailable(f"Could not read wheel entries for {key}") from exc
    entries = parse_entry_rows([dict(r) for r in rows])
    # Stored keys are canonical, but filter anyway in case a row was written by hand.
    return [e for e in entries if e.month == normalize(month)]


def upsert_entry(db_path: Path, draft: WheelEntryDraft) -> WheelEntry:
    """Insert the entry for ``(area, month)`` or replace its score and text fields.

    The unique index on ``(area, month)`` makes the single statement below
    atomic: a second writer for the same pair updates the first row.
    """
    ensure_valid_draft(draft)
    key = to_iso(draft.month)
    now = _utc_now()
    try:
        with db_conn(db_path) as conn:
            conn.execute(
                """
                INSERT INTO wheel_entries (
                    id, area, month, score, what_went_well, what_can_be_improved, notes, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(area, month) DO UPDATE SET
                    score = excluded.score,
                    what_went_well = excluded.what_went_well,
                    what_can_be_improved = excluded.what_can_be_improved,
                    notes = excluded.notes,
                    updated_at = excluded.updated_at
                """,
                (
                    str(uuid4()),
                    draft.area,
                    key,
                    int(draft.score),
                    draft.what_went_well,
                    draft.what_can_be_improved,
                    draft.notes,
                    now,
                    now,
                ),
            )
            row = conn.execute(
                "SELECT * FROM wheel_entries WHERE area = ? AND month = ?",
                (draft.area, key),
            ).fetchone()
    except (sqlite3.Error, OSError) as exc:
        logger.error("Failed to upsert wheel entry %s/%s: %s", draft.area, key, exc)
        raise StorageUnavailable(f"Could not save {draft.area} entry for {key}") from exc

    entry = parse_entry_row(dict(row)) if row else None
    if entry is None:
        raise StorageUnavailable(f"Stored {draft.area} entry for {key} could not be read back")
    return entry


class SQLiteEntryRepository:
    """Async adapter over the SQLite helpers; queries run in a worker thread."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    async def fetch_for_month(self, month: MonthKey) -> List[WheelEntry]:
        return await asyncio.to_thread(fetch_entries_for_month, self.db_path, month)

    async def upsert(self, draft: WheelEntryDraft) -> WheelEntry:
        return await asyncio.to_thread(upsert_entry, self.db_path, draft)


def build_repository(settings: Settings) -> EntryRepository:
    backend = settings.storage_backend
    if backend == "sqlite":
        init_app_db(settings.app_db_path)
        return SQLiteEntryRepository(settings.app_db_path)
    if backend == "rest":
        from .remote import RestEntryRepository

        if not settings.rest_url:
            raise RuntimeError("LIFEWHEEL_REST_URL must be set when LIFEWHEEL_STORAGE=rest")
        return RestEntryRepository(
            settings.rest_url,
            api_key=settings.rest_api_key,
            table=settings.rest_table,
            timeout=settings.rest_timeout,
        )
    raise RuntimeError(f"Unknown storage backend: {backend!r}")

