# -*- coding: utf-8 -*-
"""Wheel endpoints (areas, monthly entries, monthly summary)."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..config import settings
from .aggregate import month_summary
from .catalog import areas
from .errors import StorageUnavailable, ValidationError
from .models import AreaListResponse, MonthSummary, WheelEntry, WheelEntryUpsertRequest, WheelMonthResponse, parse_draft
from .month import MonthKey, current_month, parse_month
from .storage import EntryRepository, build_repository

router = APIRouter(prefix="/api/wheel", tags=["Wheel"])

_repository: Optional[EntryRepository] = None


def get_repository() -> EntryRepository:
    global _repository
    if _repository is None:
        _repository = build_repository(settings)
    return _repository


def _month_or_400(value: Optional[str]) -> MonthKey:
    if not value:
        return current_month()
    try:
        return parse_month(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/areas", response_model=AreaListResponse, summary="List the tracked life areas")
def list_areas():
    return AreaListResponse(areas=areas(), default_score=settings.default_score)


@router.get("/entries", response_model=WheelMonthResponse, summary="Entries recorded for one month")
async def list_entries(
    month: Optional[str] = Query(default=None, description="YYYY-MM or YYYY-MM-DD"),
    repository: EntryRepository = Depends(get_repository),
):
    key = _month_or_400(month)
    try:
        entries = await repository.fetch_for_month(key)
    except StorageUnavailable:
        raise HTTPException(status_code=503, detail="Failed to fetch wheel entries")
    return WheelMonthResponse(month=key, entries=entries)


@router.put("/entries", response_model=WheelEntry, summary="Create or update one area's entry for a month")
async def upsert_entry_api(
    request: WheelEntryUpsertRequest,
    repository: EntryRepository = Depends(get_repository),
):
    key = _month_or_400(request.month)
    payload = request.model_dump()
    payload["month"] = key
    try:
        draft = parse_draft(payload)
        return await repository.upsert(draft)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except StorageUnavailable:
        raise HTTPException(status_code=503, detail="Failed to save wheel entry")


@router.get("/summary", response_model=MonthSummary, summary="Life-balance summary for one month")
async def get_summary(
    month: Optional[str] = Query(default=None, description="YYYY-MM or YYYY-MM-DD"),
    repository: EntryRepository = Depends(get_repository),
):
    key = _month_or_400(month)
    try:
        entries = await repository.fetch_for_month(key)
    except StorageUnavailable:
        raise HTTPException(status_code=503, detail="Failed to fetch wheel entries")
    return month_summary(key, entries)
