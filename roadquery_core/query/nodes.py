"""RoadQuery Query Nodes - Boolean Query Tree.

Structured query trees handed to the index client. Every node renders
itself as index query DSL via ``to_dict``.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Sequence, Union


class QueryType(Enum):
    """Kind of query node."""

    TERM = auto()
    MATCH = auto()
    MULTI_MATCH = auto()
    PHRASE_PREFIX = auto()
    BOOLEAN = auto()
    RANGE = auto()
    EXISTS = auto()
    MATCH_ALL = auto()
    FUNCTION_SCORE = auto()


@dataclass
class QueryNode(ABC):
    """Node of a query tree.

    ``field`` is the index field the node applies to, if any.
    """

    query_type: QueryType = field(init=False)
    boost: float = 1.0
    field: Optional[str] = None

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert to query DSL."""
        pass


@dataclass
class TermQuery(QueryNode):
    """Exact value query.

    Matches documents whose field equals the value exactly.
    """

    value: Any = None

    def __post_init__(self):
        self.query_type = QueryType.TERM

    def to_dict(self) -> Dict[str, Any]:
        if self.boost != 1.0:
            return {"term": {self.field: {"value": self.value, "boost": self.boost}}}
        return {"term": {self.field: self.value}}


@dataclass
class MatchQuery(QueryNode):
    """Analyzed full-text query on a single field."""

    query: str = ""
    operator: Optional[str] = None
    fuzziness: Optional[str] = None

    def __post_init__(self):
        self.query_type = QueryType.MATCH

    def to_dict(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {"query": self.query}
        if self.operator:
            options["operator"] = self.operator
        if self.fuzziness:
            options["fuzziness"] = self.fuzziness
        if self.boost != 1.0:
            options["boost"] = self.boost
        return {"match": {self.field: options}}


@dataclass
class MultiMatchQuery(QueryNode):
    """Full-text query across several boosted fields.

    The default ``most_fields`` type adds up the scores of every matching
    field instead of keeping only the best one.
    """

    query: str = ""
    fields: List[str] = field(default_factory=list)  # "name^boost"
    match_type: str = "most_fields"
    fuzziness: Optional[str] = "AUTO"
    prefix_length: int = 0

    def __post_init__(self):
        self.query_type = QueryType.MULTI_MATCH

    def to_dict(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "query": self.query,
            "fields": list(self.fields),
            "type": self.match_type,
        }
        if self.fuzziness:
            options["fuzziness"] = self.fuzziness
            options["prefix_length"] = self.prefix_length
        if self.boost != 1.0:
            options["boost"] = self.boost
        return {"multi_match": options}


@dataclass
class PhrasePrefixQuery(QueryNode):
    """Phrase query whose last term is matched as a prefix."""

    query: str = ""

    def __post_init__(self):
        self.query_type = QueryType.PHRASE_PREFIX

    def to_dict(self) -> Dict[str, Any]:
        return {"match_phrase_prefix": {self.field: self.query}}


@dataclass
class BooleanQuery(QueryNode):
    """Compound query.

    ``must`` clauses are ANDed. ``should`` clauses need
    ``minimum_should_match`` hits when set. ``must_not`` clauses exclude.
    """

    must: List[QueryNode] = field(default_factory=list)  # AND
    should: List[QueryNode] = field(default_factory=list)  # OR
    must_not: List[QueryNode] = field(default_factory=list)  # NOT
    minimum_should_match: Optional[Union[int, str]] = None

    def __post_init__(self):
        self.query_type = QueryType.BOOLEAN

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.must:
            body["must"] = [c.to_dict() for c in self.must]
        if self.should:
            body["should"] = [c.to_dict() for c in self.should]
            if self.minimum_should_match is not None:
                body["minimum_should_match"] = self.minimum_should_match
        if self.must_not:
            body["must_not"] = [c.to_dict() for c in self.must_not]
        if self.boost != 1.0:
            body["boost"] = self.boost
        return {"bool": body}


@dataclass
class RangeQuery(QueryNode):
    """Inclusive range query for numeric fields."""

    gte: Optional[int] = None
    lte: Optional[int] = None

    def __post_init__(self):
        self.query_type = QueryType.RANGE

    def to_dict(self) -> Dict[str, Any]:
        bounds: Dict[str, Any] = {}
        if self.gte is not None:
            bounds["gte"] = self.gte
        if self.lte is not None:
            bounds["lte"] = self.lte
        return {"range": {self.field: bounds}}


@dataclass
class ExistsQuery(QueryNode):
    """Matches documents with a non-null value in the field."""

    def __post_init__(self):
        self.query_type = QueryType.EXISTS

    def to_dict(self) -> Dict[str, Any]:
        return {"exists": {"field": self.field}}


@dataclass
class MatchAllQuery(QueryNode):
    """Matches every document with a constant score."""

    def __post_init__(self):
        self.query_type = QueryType.MATCH_ALL

    def to_dict(self) -> Dict[str, Any]:
        return {"match_all": {}}


@dataclass
class RandomScoreQuery(QueryNode):
    """Wraps a query and replaces its scores with seeded random values.

    The score depends only on the seed and the document's ``field`` value,
    so the same seed always produces the same order.
    """

    query: QueryNode = field(default_factory=MatchAllQuery)
    seed: str = ""

    def __post_init__(self):
        self.query_type = QueryType.FUNCTION_SCORE
        if self.field is None:
            self.field = "id"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "function_score": {
                "query": self.query.to_dict(),
                "random_score": {
                    "seed": self.seed,
                    "field": self.field,
                },
            }
        }


def missing(field_name: str) -> BooleanQuery:
    """Match documents without a value for the field."""
    return BooleanQuery(must_not=[ExistsQuery(field=field_name)])


def any_of(clauses: Sequence[QueryNode]) -> BooleanQuery:
    """Match documents matching at least one of the clauses."""
    return BooleanQuery(should=list(clauses), minimum_should_match=1)


def all_of(clauses: Sequence[QueryNode]) -> BooleanQuery:
    """Match documents matching every clause."""
    return BooleanQuery(must=list(clauses))


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
    "missing",
    "any_of",
    "all_of",
]
