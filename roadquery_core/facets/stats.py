"""RoadQuery Field Statistics - Aggregation Response Formatting.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Union

from roadquery_core.errors import LogicError
from roadquery_core.facets.aggregations import max_name, min_name, missing_name, terms_name
from roadquery_core.fields.catalog import FieldDescriptor, FieldType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bucket:
    """A single value with its document count."""
    value: Any
    count: int = 0


@dataclass(frozen=True)
class IntegerStat:
    minimum: int = 0
    maximum: int = 0
    count_unknown: int = 0


@dataclass(frozen=True)
class BooleanStat:
    count_all: int = 0
    count_unknown: int = 0
    count_no: int = 0
    count_yes: int = 0


@dataclass(frozen=True)
class StringStat:
    count_unknown: int = 0
    buckets: List[Bucket] = field(default_factory=list)


FieldStat = Union[IntegerStat, BooleanStat, StringStat]


class AggregationFormatter:
    """Reshapes raw aggregation results into per-field statistics.

    The inverse of ``AggregationPlanner``: reads back the named
    aggregations the planner requested for each field.
    """

    def format(
        self,
        fields: Iterable[FieldDescriptor],
        aggregations: Mapping[str, Any],
    ) -> Dict[str, FieldStat]:
        stats: Dict[str, FieldStat] = {}
        for descriptor in fields:
            if missing_name(descriptor) not in aggregations:
                logger.debug(f"No aggregations returned for field {descriptor.name}")
                continue
            count_unknown = int(aggregations[missing_name(descriptor)].get("doc_count", 0))

            if descriptor.type is FieldType.INTEGER:
                stats[descriptor.name] = IntegerStat(
                    minimum=self._int_value(aggregations, min_name(descriptor)),
                    maximum=self._int_value(aggregations, max_name(descriptor)),
                    count_unknown=count_unknown,
                )
            elif descriptor.type is FieldType.BOOLEAN:
                stats[descriptor.name] = self._boolean_stat(
                    self._buckets(aggregations, terms_name(descriptor)), count_unknown
                )
            elif descriptor.type is FieldType.STRING:
                stats[descriptor.name] = StringStat(
                    count_unknown=count_unknown,
                    buckets=[
                        Bucket(value=b.get("key"), count=int(b.get("doc_count", 0)))
                        for b in self._buckets(aggregations, terms_name(descriptor))
                    ],
                )
            else:
                raise LogicError(
                    f"Field {descriptor.name} has unsupported type for aggregation: {descriptor.type.value}"
                )
        return stats

    def _int_value(self, aggregations: Mapping[str, Any], name: str) -> int:
        # min/max over zero documents is null
        value = aggregations.get(name, {}).get("value")
        return int(value) if value is not None else 0

    def _buckets(self, aggregations: Mapping[str, Any], name: str) -> List[Mapping[str, Any]]:
        return list(aggregations.get(name, {}).get("buckets", []))

    def _boolean_stat(self, buckets: List[Mapping[str, Any]], count_unknown: int) -> BooleanStat:
        count_no = 0
        count_yes = 0
        for bucket in buckets:
            key = bucket.get("key")
            if key is None or isinstance(key, str):
                continue
            if key == 0:
                count_no = int(bucket.get("doc_count", 0))
            elif key == 1:
                count_yes = int(bucket.get("doc_count", 0))
        return BooleanStat(
            count_all=count_unknown + count_no + count_yes,
            count_unknown=count_unknown,
            count_no=count_no,
            count_yes=count_yes,
        )


__all__ = [
    "Bucket",
    "IntegerStat",
    "BooleanStat",
    "StringStat",
    "FieldStat",
    "AggregationFormatter",
]
