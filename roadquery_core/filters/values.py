"""RoadQuery Filter Values - Decoded Per-Field Filters.

One variant per filterable field type. Raw filter strings are decoded into
these immediately by the codec and never travel further.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

# Integer index fields are signed 32 bit; 2**30 keeps well clear of the edge.
MAX_INTEGER_FILTER_VALUE = 2 ** 30


@dataclass(frozen=True)
class IntegerFilter:
    """Inclusive integer range filter.

    Attributes:
        minimum: Lower bound (None: unbounded)
        maximum: Upper bound (None: unbounded)
        include_unknown: Also match documents without a value
    """

    minimum: Optional[int] = None
    maximum: Optional[int] = None
    include_unknown: bool = False

    def __post_init__(self):
        if self.minimum is None and self.maximum is None:
            object.__setattr__(self, "include_unknown", False)

    @property
    def is_empty(self) -> bool:
        return self.minimum is None and self.maximum is None


@dataclass(frozen=True)
class StringFilter:
    """Any-of string filter.

    Attributes:
        values: Accepted values, in request order
        include_unknown: Also match documents without a value
    """

    values: Tuple[str, ...] = ()
    include_unknown: bool = False

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def is_empty(self) -> bool:
        return not self.values and not self.include_unknown


@dataclass(frozen=True)
class BooleanFilter:
    """Yes/no filter.

    Attributes:
        value: Required value (None: no restriction)
        include_unknown: Also match documents without a value
    """

    value: Optional[bool] = None
    include_unknown: bool = False

    def __post_init__(self):
        if self.value is None:
            object.__setattr__(self, "include_unknown", False)

    @property
    def is_empty(self) -> bool:
        return self.value is None


FilterValue = Union[IntegerFilter, StringFilter, BooleanFilter]

__all__ = [
    "MAX_INTEGER_FILTER_VALUE",
    "IntegerFilter",
    "StringFilter",
    "BooleanFilter",
    "FilterValue",
]
