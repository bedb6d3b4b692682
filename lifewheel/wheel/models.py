# -*- coding: utf-8 -*-
"""Wheel — Pydantic models."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .catalog import MAX_SCORE, MIN_SCORE, AreaInfo, AreaName
from .errors import ValidationError
from .month import normalize


def _reject_bool(value: Any) -> Any:
    # bool is an int subclass; lax mode would otherwise store True as 1.
    if isinstance(value, bool):
        raise ValueError("score must be an integer, not a boolean")
    return value


class WheelEntryDraft(BaseModel):
    """One area's self-assessment for one month, before it has been persisted."""

    area: AreaName
    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    what_went_well: str = ""
    what_can_be_improved: str = ""
    notes: str = ""
    month: date

    @field_validator("score", mode="before")
    @classmethod
    def _score_not_bool(cls, value: Any) -> Any:
        return _reject_bool(value)

    @field_validator("month", mode="before")
    @classmethod
    def _month_key(cls, value: Any) -> date:
        try:
            return normalize(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("what_went_well", "what_can_be_improved", "notes", mode="before")
    @classmethod
    def _text_default(cls, value: Any) -> Any:
        return "" if value is None else value

    def key(self) -> tuple[str, date]:
        return self.area, self.month


class WheelEntry(WheelEntryDraft):
    id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


def parse_draft(payload: Dict[str, Any]) -> WheelEntryDraft:
    try:
        return WheelEntryDraft.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(str(exc)) from exc


class Notice(BaseModel):
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class MonthSummary(BaseModel):
    month: date
    label: str
    overall_balance: Optional[int] = Field(None, ge=0, le=100)
    tracked_count: int = Field(0, ge=0)
    total_areas: int
    tracked_areas: List[str] = Field(default_factory=list)
    # None past the ends of the calendar (January of year 1, December 9999).
    previous_month: Optional[date] = None
    next_month: Optional[date] = None


class AreaListResponse(BaseModel):
    areas: List[AreaInfo]
    default_score: int


class WheelMonthResponse(BaseModel):
    month: date
    entries: List[WheelEntry]


class WheelEntryUpsertRequest(BaseModel):
    area: AreaName
    score: int = Field(..., ge=MIN_SCORE, le=MAX_SCORE)
    what_went_well: str = Field("", description="Free-form reflection")
    what_can_be_improved: str = Field("", description="Free-form reflection")
    notes: str = ""
    month: Optional[str] = Field(None, description="YYYY-MM or YYYY-MM-DD; defaults to the current month")

    @field_validator("score", mode="before")
    @classmethod
    def _score_not_bool(cls, value: Any) -> Any:
        return _reject_bool(value)
