"""RoadQuery Errors - Exception Taxonomy.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations


class RoadQueryError(Exception):
    """Base class for all RoadQuery errors."""


class LogicError(RoadQueryError):
    """A configuration invariant was violated.

    Raised for catalog or schema bugs (e.g. a filterable field with a type
    that cannot be filtered or aggregated), never for user input.
    """


class InvalidFilterEncoding(LogicError):
    """A filter value was decoded for a field type the codec does not handle."""

    def __init__(self, field_type: object):
        super().__init__(f"Cannot decode filter for field type: {field_type}")
        self.field_type = field_type


class OutOfRangeRequest(RoadQueryError):
    """The requested page lies outside the searchable result window."""

    def __init__(self, page: int, per_page: int, max_result_window: int):
        super().__init__(
            f"Page {page} with {per_page} results per page is outside "
            f"the first {max_result_window} results"
        )
        self.page = page
        self.per_page = per_page
        self.max_result_window = max_result_window


class UnknownField(RoadQueryError, KeyError):
    """A field name is not present in the field catalog."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Field does not exist: {self.name}"


__all__ = [
    "RoadQueryError",
    "LogicError",
    "InvalidFilterEncoding",
    "OutOfRangeRequest",
    "UnknownField",
]
