# -*- coding: utf-8 -*-
"""Life areas tracked on the wheel.

The set is fixed: eight areas in a stable order. Rendering code walks
``areas()`` to lay out the wheel, so the order here is the order on screen.
"""

from __future__ import annotations

from typing import Final, List, Literal, Tuple

from pydantic import BaseModel, ConfigDict


class AreaInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon: str


AreaName = Literal[
    "Career",
    "Health",
    "Relationships",
    "Personal Growth",
    "Family",
    "Recreation",
    "Money",
    "Emotions",
]

AREAS: Final[Tuple[AreaInfo, ...]] = (
    AreaInfo(name="Career", icon="💼"),
    AreaInfo(name="Health", icon="🏃‍♀️"),
    AreaInfo(name="Relationships", icon="💕"),
    AreaInfo(name="Personal Growth", icon="🌱"),
    AreaInfo(name="Family", icon="👨‍👩‍👧‍👦"),
    AreaInfo(name="Recreation", icon="🎨"),
    AreaInfo(name="Money", icon="💰"),
    AreaInfo(name="Emotions", icon="😊"),
)

TOTAL_AREAS: Final[int] = len(AREAS)

# Untracked areas read as a neutral midpoint instead of zero.
DEFAULT_SCORE: Final[int] = 5

MIN_SCORE: Final[int] = 1
MAX_SCORE: Final[int] = 10


def areas() -> List[AreaInfo]:
    return list(AREAS)


def area_names() -> List[str]:
    return [a.name for a in AREAS]


def is_area(name: object) -> bool:
    return isinstance(name, str) and name in _NAMES


_NAMES = frozenset(a.name for a in AREAS)
