"""RoadQuery Filter Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadquery_core.filters.values import (
    MAX_INTEGER_FILTER_VALUE,
    IntegerFilter,
    StringFilter,
    BooleanFilter,
    FilterValue,
)
from roadquery_core.filters.codec import (
    FilterCodec,
    parse_filters,
)

__all__ = [
    "MAX_INTEGER_FILTER_VALUE",
    "IntegerFilter",
    "StringFilter",
    "BooleanFilter",
    "FilterValue",
    "FilterCodec",
    "parse_filters",
]
