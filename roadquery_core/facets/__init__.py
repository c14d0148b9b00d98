"""RoadQuery Faceted Statistics Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadquery_core.facets.aggregations import (
    Aggregation,
    MissingAggregation,
    MinAggregation,
    MaxAggregation,
    TermsAggregation,
    AggregationPlanner,
    aggregations_to_dict,
)
from roadquery_core.facets.stats import (
    Bucket,
    IntegerStat,
    BooleanStat,
    StringStat,
    FieldStat,
    AggregationFormatter,
)

__all__ = [
    "Aggregation",
    "MissingAggregation",
    "MinAggregation",
    "MaxAggregation",
    "TermsAggregation",
    "AggregationPlanner",
    "aggregations_to_dict",
    "Bucket",
    "IntegerStat",
    "BooleanStat",
    "StringStat",
    "FieldStat",
    "AggregationFormatter",
]
