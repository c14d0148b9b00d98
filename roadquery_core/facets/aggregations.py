"""RoadQuery Aggregations - Per-Field Statistics Requests.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from roadquery_core.errors import LogicError
from roadquery_core.fields.catalog import FieldDescriptor, FieldType

BOOLEAN_TERMS_SIZE = 2
STRING_TERMS_SIZE = 1000

class Aggregation(ABC):
    """Base aggregation request."""

    kind: str = ""

    def __init__(self, name: str, field: str):
        self.name = name
        self.field = field

    def options(self) -> Dict[str, Any]:
        return {"field": self.field}

    def to_dict(self) -> Dict[str, Any]:
        return {self.kind: self.options()}

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.to_dict() == other.to_dict() and self.name == other.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.field!r})"

class MissingAggregation(Aggregation):
    """Count documents without a value."""
    kind = "missing"

class MinAggregation(Aggregation):
    kind = "min"

class MaxAggregation(Aggregation):
    kind = "max"

class TermsAggregation(Aggregation):
    """Count documents per distinct value, most common first."""

    kind = "terms"

    def __init__(self, name: str, field: str, size: Optional[int] = None):
        super().__init__(name, field)
        self.size = size

    def options(self) -> Dict[str, Any]:
        options = super().options()
        if self.size is not None:
            options["size"] = self.size
        return options

def missing_name(field: FieldDescriptor) -> str:
    return f"{field.name}_missing"

def min_name(field: FieldDescriptor) -> str:
    return f"{field.name}_min"

def max_name(field: FieldDescriptor) -> str:
    return f"{field.name}_max"

def terms_name(field: FieldDescriptor) -> str:
    return f"{field.name}_terms"

class AggregationPlanner:
    """Plans the statistics requested alongside every search.

    Every filterable field gets a missing-value count, integers get their
    min and max, booleans and strings a terms histogram.
    """

    def plan(self, fields: Iterable[FieldDescriptor]) -> List[Aggregation]:
        aggregations: List[Aggregation] = []
        for field in fields:
            if not field.type.is_filterable:
                raise LogicError(
                    f"Field {field.name} has unsupported type for aggregation: {field.type.value}"
                )
            target = field.aggregation_target_name
            if not target:
                # This field cannot be aggregated.
                continue
            aggregations.append(MissingAggregation(missing_name(field), target))
            if field.type is FieldType.INTEGER:
                aggregations.append(MaxAggregation(max_name(field), target))
                aggregations.append(MinAggregation(min_name(field), target))
            elif field.type is FieldType.BOOLEAN:
                aggregations.append(TermsAggregation(terms_name(field), target, BOOLEAN_TERMS_SIZE))
            else:
                aggregations.append(TermsAggregation(terms_name(field), target, STRING_TERMS_SIZE))
        return aggregations

def aggregations_to_dict(aggregations: Iterable[Aggregation]) -> Dict[str, Any]:
    return {a.name: a.to_dict() for a in aggregations}

__all__ = [
    "Aggregation",
    "MissingAggregation",
    "MinAggregation",
    "MaxAggregation",
    "TermsAggregation",
    "AggregationPlanner",
    "aggregations_to_dict",
    "missing_name",
    "min_name",
    "max_name",
    "terms_name",
]
