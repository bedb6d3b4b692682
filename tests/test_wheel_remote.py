# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from datetime import date
from typing import Any, Dict, List

import httpx

from lifewheel.wheel.errors import StorageUnavailable
from lifewheel.wheel.models import WheelEntryDraft
from lifewheel.wheel.remote import RestEntryRepository

MARCH = date(2024, 3, 1)
BASE_URL = "https://example.supabase.co/rest/v1"


class _FakePostgrest:
    """Tiny in-memory stand-in for a PostgREST table with a unique (area, month) key."""

    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []
        self.requests: List[httpx.Request] = []
        self._next_id = 1

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            wanted = request.url.params.get("month", "").removeprefix("eq.")
            return httpx.Response(200, json=[r for r in self.rows if r["month"] == wanted])

        body = json.loads(request.content)
        for row in self.rows:
            if row["area"] == body["area"] and row["month"] == body["month"]:
                row.update(body)
                return httpx.Response(201, json=[row])
        row = dict(body, id=f"uuid-{self._next_id}", created_at="2024-03-02T00:00:00Z")
        self._next_id += 1
        self.rows.append(row)
        return httpx.Response(201, json=[row])


class TestRestEntryRepository(unittest.IsolatedAsyncioTestCase):
    def _repo(self, handler, api_key: str | None = "anon-key") -> RestEntryRepository:
        return RestEntryRepository(BASE_URL + "/", api_key=api_key, transport=httpx.MockTransport(handler))

    async def test_upsert_then_fetch(self) -> None:
        backend = _FakePostgrest()
        repo = self._repo(backend)

        first = await repo.upsert(WheelEntryDraft(area="Career", score=4, month=date(2024, 3, 9)))
        second = await repo.upsert(WheelEntryDraft(area="Career", score=9, notes="Promotion", month=MARCH))
        self.assertEqual(first.id, "uuid-1")
        self.assertEqual(second.id, "uuid-1")
        self.assertEqual(len(backend.rows), 1)

        fetched = await repo.fetch_for_month(MARCH)
        self.assertEqual([(e.area, e.score, e.notes) for e in fetched], [("Career", 9, "Promotion")])
        self.assertEqual(await repo.fetch_for_month(date(2024, 4, 1)), [])

    async def test_request_shape(self) -> None:
        backend = _FakePostgrest()
        repo = self._repo(backend)
        await repo.upsert(WheelEntryDraft(area="Money", score=6, month=MARCH))
        await repo.fetch_for_month(date(2024, 3, 28))

        post, get = backend.requests
        self.assertEqual(post.url.path, "/rest/v1/wheel_entries")
        self.assertEqual(post.url.params["on_conflict"], "area,month")
        self.assertEqual(post.headers["prefer"], "resolution=merge-duplicates,return=representation")
        self.assertEqual(post.headers["apikey"], "anon-key")
        self.assertEqual(post.headers["authorization"], "Bearer anon-key")
        self.assertEqual(json.loads(post.content)["month"], "2024-03-01")
        self.assertEqual(get.url.params["month"], "eq.2024-03-01")
        self.assertEqual(get.url.params["select"], "*")

    async def test_no_auth_headers_without_key(self) -> None:
        backend = _FakePostgrest()
        await self._repo(backend, api_key=None).fetch_for_month(MARCH)
        self.assertNotIn("apikey", backend.requests[0].headers)
        self.assertNotIn("authorization", backend.requests[0].headers)

    async def test_loose_rows_are_parsed_and_bad_rows_dropped(self) -> None:
        rows = [
            {"id": "a", "area": "Health", "score": 8, "month": "2024-03-01", "notes": None},
            {"id": "b", "area": "Gardening", "score": 8, "month": "2024-03-01"},
            {"id": "c", "area": "Family", "score": "11", "month": "2024-03-01"},
        ]
        repo = self._repo(lambda request: httpx.Response(200, json=rows))
        fetched = await repo.fetch_for_month(MARCH)
        self.assertEqual([e.id for e in fetched], ["a"])
        self.assertEqual(fetched[0].notes, "")

    async def test_server_error_is_storage_unavailable(self) -> None:
        repo = self._repo(lambda request: httpx.Response(503, json={"message": "down"}))
        with self.assertRaises(StorageUnavailable):
            await repo.fetch_for_month(MARCH)
        with self.assertRaises(StorageUnavailable):
            await repo.upsert(WheelEntryDraft(area="Career", score=5, month=MARCH))

    async def test_transport_error_is_storage_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with self.assertRaises(StorageUnavailable):
            await self._repo(handler).fetch_for_month(MARCH)

    async def test_garbage_body_is_storage_unavailable(self) -> None:
        repo = self._repo(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
        with self.assertRaises(StorageUnavailable):
            await repo.fetch_for_month(MARCH)

        repo = self._repo(lambda request: httpx.Response(201, json=[]))
        with self.assertRaises(StorageUnavailable):
            await repo.upsert(WheelEntryDraft(area="Career", score=5, month=MARCH))


if __name__ == "__main__":
    unittest.main()
