"""RoadQuery Core Engine - Search Service.

The SearchService class is the primary interface for all search
operations, coordinating request parsing, query building, index round
trips and statistics formatting.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Mapping, Optional, Tuple

from roadquery_core.facets.stats import AggregationFormatter, FieldStat
from roadquery_core.fields.catalog import FieldCatalog, FieldDescriptor
from roadquery_core.filters.codec import FilterCodec, parse_filters
from roadquery_core.index.client import IndexClient, IndexHit, IndexRequest
from roadquery_core.query.builder import (
    DEFAULT_PER_PAGE,
    MAX_RESULT_WINDOW,
    QueryBuilder,
    SearchQuery,
    SearchRequest,
)
from roadquery_core.ranking.sort import SortKey
from roadquery_core.ranking.tfidf import TermWeight
from roadquery_core.seed import SeedProvider, WeeklySeedProvider
from roadquery_core.similarity import SimilarityConfig, SimilarityEngine, TitleMatch
from roadquery_core.suggest import SUGGESTION_SIZE, Autocompleter

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Search service configuration.

    Attributes:
        per_page: Results per page
        max_result_window: Deepest result reachable by paging
        id_field: Field holding the external document id
        suggestion_size: Number of autocomplete suggestions
        similarity: Similarity search configuration
    """

    per_page: int = DEFAULT_PER_PAGE
    max_result_window: int = MAX_RESULT_WINDOW
    id_field: str = "id"
    suggestion_size: int = SUGGESTION_SIZE
    similarity: SimilarityConfig = field(default_factory=SimilarityConfig)


@dataclass
class SearchHit:
    """Single search result hit.

    Attributes:
        id: Index-internal document ID
        score: Relevance score
        fields: Retrieved fields
    """

    id: str
    score: Optional[float] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    def get(self, field_name: str, default: Any = None) -> Any:
        """Get field value."""
        return self.fields.get(field_name, default)

    @classmethod
    def from_index_hit(cls, hit: IndexHit) -> "SearchHit":
        return cls(id=hit.internal_id, score=hit.score, fields=dict(hit.source))


@dataclass
class SearchResult:
    """Search result container.

    Attributes:
        hits: Mapped hits of the requested page
        total_hits: Total number of matching documents
        has_more: Whether a further page exists
        stats: Statistics per filterable field
    """

    hits: List[Any] = field(default_factory=list)
    total_hits: int = 0
    has_more: bool = False
    stats: Dict[str, FieldStat] = field(default_factory=dict)

    def __len__(self) -> int:
        """Return number of hits."""
        return len(self.hits)

    def __iter__(self) -> Generator[Any, None, None]:
        """Iterate over hits."""
        yield from self.hits


class SearchService:
    """Main search service class.

    Stateless per call: every operation builds its requests, runs them
    through the index client one after the other and interprets the
    responses. Index errors propagate to the caller.
    """

    def __init__(
        self,
        catalog: FieldCatalog,
        client: IndexClient,
        config: Optional[SearchConfig] = None,
        seed_provider: Optional[SeedProvider] = None,
        hit_mapper: Optional[Callable[[IndexHit], Any]] = None,
    ):
        """Initialize search service.

        Args:
            catalog: Searchable fields
            client: Index client
            config: Service configuration
            seed_provider: Default seed for random ordering
            hit_mapper: Maps raw hits to domain records
        """
        self.config = config or SearchConfig()
        self.catalog = catalog
        self.client = client
        self.seed_provider = seed_provider or WeeklySeedProvider()
        self.hit_mapper = hit_mapper or SearchHit.from_index_hit

        self.codec = FilterCodec()
        self.builder = QueryBuilder(
            catalog,
            max_result_window=self.config.max_result_window,
            id_field=self.config.id_field,
        )
        self.formatter = AggregationFormatter()
        self.similarity = SimilarityEngine(client, self.config.similarity, hit_mapper=self.hit_mapper)
        self.autocompleter = Autocompleter(client, size=self.config.suggestion_size)

        logger.info(f"Search service initialized with {len(catalog.list_fields())} fields")

    def params_to_request(self, params: Mapping[str, Any]) -> SearchRequest:
        """Build a search request from raw request parameters.

        Recognized parameters: ``q``, ``sortBy``, ``seed``, ``page`` and one
        parameter per filterable field, named like the field.
        """
        seed = params.get("seed")
        if seed is None or seed == "":
            seed = self.seed_provider.current_seed()

        return SearchRequest(
            query_text=str(params.get("q") or ""),
            filters=parse_filters(params, self.catalog.list_filterable_fields(), self.codec),
            page=_to_page(params.get("page")),
            sort_key=SortKey.parse(params.get("sortBy")),
            seed=str(seed),
            per_page=self.config.per_page,
        )

    def build_query(self, request: SearchRequest) -> SearchQuery:
        return self.builder.build(request)

    def search(self, request: SearchRequest) -> SearchResult:
        """Execute a search.

        Raises:
            OutOfRangeRequest: page is below 1 or beyond the result window
        """
        search_query = self.builder.build(request)

        response = self.client.search(IndexRequest(
            query=search_query.query,
            offset=search_query.offset,
            size=search_query.size,
            sort=search_query.sort,
            aggregations=search_query.aggregations,
        ))

        stats = self.formatter.format(self.catalog.list_filterable_fields(), response.aggregations)
        result = SearchResult(
            hits=[self.hit_mapper(hit) for hit in response.hits],
            total_hits=response.total,
            has_more=response.total > request.page * request.per_page,
            stats=stats,
        )
        logger.debug(f"Search page {request.page} returned {len(result)} of {result.total_hits} hits")
        return result

    def similar_titles(self, title: str, exclude_id: int = -1) -> List[TitleMatch]:
        return self.similarity.find_similar_titles(title, exclude_id)

    def similar_documents(self, document_id: Any, field_group: str) -> Tuple[List[Any], List[TermWeight]]:
        return self.similarity.find_similar_documents(document_id, field_group)

    def autocomplete(self, field: FieldDescriptor, prefix: str) -> List[str]:
        return self.autocompleter.suggest(field, prefix)


_LEADING_INTEGER = re.compile(r"\s*([+-]?[0-9]+)")


def _to_page(raw: Any) -> int:
    """Page number, cast like an integer query parameter."""
    if raw is None:
        return 1
    if isinstance(raw, (int, float)):
        return int(raw)
    match = _LEADING_INTEGER.match(str(raw))
    # Without leading digits the page is 0, which the pagination guard rejects.
    return int(match.group(1)) if match else 0


__all__ = [
    "SearchConfig",
    "SearchHit",
    "SearchResult",
    "SearchService",
]
