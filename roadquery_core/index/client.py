"""RoadQuery Index Client - Abstract Index Interface.

The core never talks to the index directly. It builds ``IndexRequest``
objects and reads ``IndexResponse`` objects; an ``IndexClient``
implementation does the round trip.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from roadquery_core.facets.aggregations import Aggregation, aggregations_to_dict
from roadquery_core.query.nodes import QueryNode
from roadquery_core.ranking.sort import SortCriterion, sort_to_list


@dataclass
class IndexRequest:
    """A search request against the index.

    Attributes:
        query: Query tree
        offset: Index of the first hit to return
        size: Number of hits to return
        sort: Sort criteria (None: index default)
        aggregations: Aggregations to compute
        source: Source fields to return (False: none, None: all)
        highlight: Highlight settings
        request_cache: Allow the index to cache the response
    """

    query: Optional[QueryNode] = None
    offset: int = 0
    size: int = 10
    sort: Optional[List[SortCriterion]] = None
    aggregations: List[Aggregation] = field(default_factory=list)
    source: Optional[Union[bool, List[str]]] = None
    highlight: Optional[Dict[str, Any]] = None
    request_cache: bool = False

    def to_body(self) -> Dict[str, Any]:
        """Convert to search request parameters, named as in the search API.

        ``request_cache`` is a URL parameter of the search API; it is kept
        here so the request is described in one place.
        """
        body: Dict[str, Any] = {"size": self.size}
        if self.query is not None:
            body["query"] = self.query.to_dict()
        if self.offset:
            body["from"] = self.offset
        if self.sort is not None:
            body["sort"] = sort_to_list(self.sort)
        if self.aggregations:
            body["aggs"] = aggregations_to_dict(self.aggregations)
        if self.source is not None:
            body["_source"] = self.source
        if self.highlight is not None:
            body["highlight"] = self.highlight
        if self.request_cache:
            body["request_cache"] = True
        return body


@dataclass
class IndexHit:
    """Single raw hit.

    Attributes:
        internal_id: Index-internal document id
        score: Relevance score
        source: Returned source fields
        highlights: Highlighted fragments per field
    """

    internal_id: str
    score: Optional[float] = None
    source: Dict[str, Any] = field(default_factory=dict)
    highlights: Dict[str, List[str]] = field(default_factory=dict)


@dataclass
class IndexResponse:
    hits: List[IndexHit] = field(default_factory=list)
    total: int = 0
    aggregations: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TermStatistics:
    term_freq: int = 0
    doc_freq: int = 0


@dataclass
class FieldTermVector:
    """Terms of one field of one document, with corpus statistics.

    Attributes:
        doc_count: Number of documents with this field
        terms: Statistics per term
    """

    doc_count: int = 0
    terms: Dict[str, TermStatistics] = field(default_factory=dict)


class IndexClient(ABC):
    """Abstract index client."""

    @abstractmethod
    def search(self, request: IndexRequest) -> IndexResponse:
        pass

    @abstractmethod
    def fetch_term_vectors(self, internal_id: str, fields: Sequence[str]) -> Dict[str, FieldTermVector]:
        """Term statistics per field; empty fields are absent from the result."""
        pass

    @abstractmethod
    def lookup_internal_id(self, external_id: Any) -> Optional[str]:
        """Resolve a document id to the index-internal id, None if not indexed."""
        pass

    def close(self) -> None:
        pass


__all__ = [
    "IndexRequest",
    "IndexHit",
    "IndexResponse",
    "TermStatistics",
    "FieldTermVector",
    "IndexClient",
]
