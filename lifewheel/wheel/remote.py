# -*- coding: utf-8 -*-
"""Managed-backend repository (PostgREST conventions, e.g. a Supabase project).

Rows travel as loosely typed JSON; everything goes through
``parse_entry_row`` before it reaches the store.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .errors import StorageUnavailable, ensure_valid_draft
from .models import WheelEntry, WheelEntryDraft
from .month import MonthKey, normalize, to_iso
from .storage import parse_entry_row, parse_entry_rows

logger = logging.getLogger(__name__)


class RestEntryRepository:
    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        table: str = "wheel_entries",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, follow_redirects=True, transport=self._transport)

    @property
    def _url(self) -> str:
        return f"{self.base_url}/{self.table}"

    async def fetch_for_month(self, month: MonthKey) -> List[WheelEntry]:
        key = to_iso(month)
        params = {"select": "*", "month": f"eq.{key}"}
        rows = await self._request("GET", params=params, what=f"fetch entries for {key}")
        wanted = normalize(month)
        return [e for e in parse_entry_rows(rows) if e.month == wanted]

    async def upsert(self, draft: WheelEntryDraft) -> WheelEntry:
        ensure_valid_draft(draft)
        key = to_iso(draft.month)
        headers = {"Prefer": "resolution=merge-duplicates,return=representation"}
        body = {
            "area": draft.area,
            "score": draft.score,
            "what_went_well": draft.what_went_well,
            "what_can_be_improved": draft.what_can_be_improved,
            "notes": draft.notes,
            "month": key,
        }
        rows = await self._request(
            "POST",
            params={"on_conflict": "area,month"},
            json=body,
            headers=headers,
            what=f"save {draft.area} entry for {key}",
        )
        if not rows:
            raise StorageUnavailable(f"Backend returned no row after saving {draft.area} for {key}")
        entry = parse_entry_row(rows[0])
        if entry is None:
            raise StorageUnavailable(f"Backend returned a malformed {draft.area} entry for {key}")
        return entry

    async def _request(
        self,
        method: str,
        *,
        what: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        merged = self._headers()
        if headers:
            merged.update(headers)
        try:
            async with self._client() as client:
                resp = await client.request(method, self._url, params=params, json=json, headers=merged)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as exc:
            logger.error("Wheel backend request failed (%s): %s", what, exc)
            raise StorageUnavailable(f"Could not {what}") from exc
        except ValueError as exc:
            logger.error("Wheel backend sent undecodable JSON (%s): %s", what, exc)
            raise StorageUnavailable(f"Could not {what}") from exc

        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise StorageUnavailable(f"Unexpected response shape while trying to {what}")
        return data
