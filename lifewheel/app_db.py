# -*- coding: utf-8 -*-
"""App database — SQLite helpers for the wheel entries table."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS wheel_entries (
                id TEXT PRIMARY KEY,
                area TEXT NOT NULL,
                month TEXT NOT NULL,
                score INTEGER NOT NULL CHECK (score BETWEEN 1 AND 10),
                what_went_well TEXT,
                what_can_be_improved TEXT,
                notes TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        # One row per (area, month); upserts rely on this index.
        cur.execute(
            "CREATE UNIQUE INDEX IF NOT EXISTS idx_wheel_entries_area_month ON wheel_entries(area, month);"
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_wheel_entries_month ON wheel_entries(month);"
        )
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
