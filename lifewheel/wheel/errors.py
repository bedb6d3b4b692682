# -*- coding: utf-8 -*-
"""Wheel — error types."""

from __future__ import annotations

from typing import Any

from .catalog import MAX_SCORE, MIN_SCORE, is_area


class WheelError(Exception):
    """Base class for wheel tracking errors."""


class StorageUnavailable(WheelError):
    """The backing store could not be reached or answered with garbage."""


class ValidationError(WheelError, ValueError):
    """An entry would break the area/score rules if persisted."""


def ensure_valid_draft(draft: Any) -> None:
    """Reject drafts that slipped past model validation (e.g. built with ``model_construct``)."""
    area = getattr(draft, "area", None)
    if not is_area(area):
        raise ValidationError(f"Unknown area: {area!r}")
    score = getattr(draft, "score", None)
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError(f"Score must be an integer, got {score!r}")
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise ValidationError(f"Score must be between {MIN_SCORE} and {MAX_SCORE}, got {score}")
