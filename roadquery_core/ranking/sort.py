"""RoadQuery Sort Resolver - Sort Key to Sort Specification.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

Z = 1.96  # 95% confidence

# Evaluated per document at query time, since review counts change live.
WILSON_SCRIPT = """
double p = doc['positiveReviews'].value;
double n = doc['negativeReviews'].value;
return p + n > 0 ? ((p + 1.9208) / (p + n) - 1.96 * Math.sqrt((p * n) / (p + n) + 0.9604) / (p + n)) / (1 + 3.8416 / (p + n)) : 0;
""".strip()


def wilson_lower_bound(positive: int, negative: int) -> float:
    """Lower bound of the Wilson score interval for a positive rate.

    Args:
        positive: Number of positive votes
        negative: Number of negative votes

    Returns:
        Conservative estimate in [0, 1]
    """
    total = positive + negative
    if total == 0:
        return 0.0
    z2 = Z * Z
    centre = (positive + z2 / 2) / total
    spread = Z * math.sqrt((positive * negative) / total + z2 / 4) / total
    return (centre - spread) / (1 + z2 / total)


class SortKey(Enum):
    """Sort options offered to users."""

    RELEVANCE = ""
    TITLE = "title"
    NUM_PAGES_ASC = "numPages-asc"
    NUM_PAGES_DESC = "numPages-desc"
    CREATED_AT_ASC = "createdAt-asc"
    CREATED_AT_DESC = "createdAt-desc"
    REVIEWS = "reviews"
    RANDOM = "random"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SortKey":
        """Parse a raw sort key; unrecognized keys sort by relevance."""
        try:
            return cls(raw or "")
        except ValueError:
            return cls.RELEVANCE


class SortCriterion(ABC):
    """One criterion of a multi-criterion sort."""

    @abstractmethod
    def to_dict(self) -> Any:
        pass


@dataclass(frozen=True)
class FieldSort(SortCriterion):
    field: str
    order: str = "asc"

    def to_dict(self) -> Any:
        return {self.field: self.order}


@dataclass(frozen=True)
class ScoreSort(SortCriterion):
    def to_dict(self) -> Any:
        return "_score"


@dataclass(frozen=True)
class ScriptSort(SortCriterion):
    script: str
    order: str = "desc"
    value_type: str = "number"

    def to_dict(self) -> Any:
        return {
            "_script": {
                "order": self.order,
                "type": self.value_type,
                "script": {"source": self.script},
            }
        }


class SortResolver:
    """Maps sort keys to sort specifications.

    Random ordering is not a sort: it is applied by wrapping the query in a
    random score, so ``RANDOM`` resolves to plain score order here.
    """

    def resolve(self, key: SortKey) -> List[SortCriterion]:
        if key is SortKey.TITLE:
            return [FieldSort("title.keyword", "asc")]
        if key is SortKey.NUM_PAGES_ASC:
            return [FieldSort("numPages", "asc"), ScoreSort()]
        if key is SortKey.NUM_PAGES_DESC:
            return [FieldSort("numPages", "desc"), ScoreSort()]
        # Creation timestamps practically never collide, no tie breaker.
        if key is SortKey.CREATED_AT_ASC:
            return [FieldSort("createdAt", "asc")]
        if key is SortKey.CREATED_AT_DESC:
            return [FieldSort("createdAt", "desc")]
        if key is SortKey.REVIEWS:
            return [ScriptSort(WILSON_SCRIPT, "desc"), ScoreSort()]
        return [ScoreSort()]


def sort_to_list(criteria: List[SortCriterion]) -> List[Any]:
    return [c.to_dict() for c in criteria]


__all__ = [
    "SortKey",
    "SortCriterion",
    "FieldSort",
    "ScoreSort",
    "ScriptSort",
    "SortResolver",
    "wilson_lower_bound",
    "sort_to_list",
    "WILSON_SCRIPT",
]
