"""RoadQuery Query Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadquery_core.query.nodes import (
    QueryType,
    QueryNode,
    TermQuery,
    MatchQuery,
    MultiMatchQuery,
    PhrasePrefixQuery,
    BooleanQuery,
    RangeQuery,
    ExistsQuery,
    MatchAllQuery,
    RandomScoreQuery,
)
from roadquery_core.query.builder import (
    SearchRequest,
    SearchQuery,
    QueryBuilder,
    split_clauses,
)

__all__ = [
    "QueryType",
    "QueryNode",
    "TermQuery",
    "MatchQuery",
    "MultiMatchQuery",
    "PhrasePrefixQuery",
    "BooleanQuery",
    "RangeQuery",
    "ExistsQuery",
    "MatchAllQuery",
    "RandomScoreQuery",
    "SearchRequest",
    "SearchQuery",
    "QueryBuilder",
    "split_clauses",
]
