"""RoadQuery Query Builder - Search Request to Query Tree.

Builds the boolean query for a search: the free-text clauses from the
search bar, one clause per active filter from the sidebar, optional
random scoring, sort and statistics.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from roadquery_core.errors import LogicError, OutOfRangeRequest, UnknownField
from roadquery_core.facets.aggregations import Aggregation, AggregationPlanner
from roadquery_core.fields.catalog import FieldCatalog, FieldDescriptor, FieldType
from roadquery_core.filters.values import BooleanFilter, FilterValue, IntegerFilter, StringFilter
from roadquery_core.query.nodes import (
    BooleanQuery,
    MatchAllQuery,
    MultiMatchQuery,
    QueryNode,
    RandomScoreQuery,
    RangeQuery,
    TermQuery,
    all_of,
    any_of,
    missing,
)
from roadquery_core.ranking.sort import SortCriterion, SortKey, SortResolver

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 20
MAX_RESULT_WINDOW = 5000
CLAUSE_SEPARATOR = " OR "
FUZZY_PREFIX_LENGTH = 2


@dataclass(frozen=True)
class SearchRequest:
    """One search as requested by a user.

    Attributes:
        query_text: Search bar input
        filters: Decoded filter per field name
        page: 1-based page number
        sort_key: Requested ordering
        seed: Seed for random ordering
        per_page: Results per page
    """

    query_text: str = ""
    filters: Mapping[str, FilterValue] = field(default_factory=dict)
    page: int = 1
    sort_key: SortKey = SortKey.RELEVANCE
    seed: str = ""
    per_page: int = DEFAULT_PER_PAGE


@dataclass
class SearchQuery:
    """Query tree plus everything else the index needs for one search."""

    query: QueryNode
    sort: List[SortCriterion] = field(default_factory=list)
    aggregations: List[Aggregation] = field(default_factory=list)
    offset: int = 0
    size: int = DEFAULT_PER_PAGE
    has_query: bool = False


def split_clauses(query_text: str) -> List[List[str]]:
    """Split search bar input into OR-ed clauses of AND-ed terms.

    "red OR blue dragon" gives [["red"], ["blue", "dragon"]]. Clauses
    without any terms are dropped.
    """
    clauses = []
    for clause in (query_text or "").split(CLAUSE_SEPARATOR):
        terms = [term for term in clause.split(" ") if term.strip() != ""]
        if terms:
            clauses.append(terms)
    return clauses


class QueryBuilder:
    """Builds search queries against a field catalog."""

    def __init__(
        self,
        catalog: FieldCatalog,
        sort_resolver: Optional[SortResolver] = None,
        planner: Optional[AggregationPlanner] = None,
        max_result_window: int = MAX_RESULT_WINDOW,
        id_field: str = "id",
    ):
        self.catalog = catalog
        self.sort_resolver = sort_resolver or SortResolver()
        self.planner = planner or AggregationPlanner()
        self.max_result_window = max_result_window
        self.id_field = id_field

    def build(self, request: SearchRequest) -> SearchQuery:
        """Build the query for a search request.

        Raises:
            OutOfRangeRequest: page is below 1 or beyond the result window
        """
        if request.page < 1 or request.page * request.per_page > self.max_result_window:
            raise OutOfRangeRequest(request.page, request.per_page, self.max_result_window)

        clauses: List[QueryNode] = []

        text_query = self.text_query(request.query_text)
        has_query = text_query is not None
        if text_query is not None:
            clauses.append(text_query)

        clauses.extend(self.filter_queries(request.filters))

        # Neither filters nor free text: every document matches.
        if not clauses:
            clauses = [MatchAllQuery()]

        query: QueryNode = all_of(clauses)

        # Without free text all scores are equal, so shuffle instead.
        if request.sort_key is SortKey.RANDOM or not has_query:
            query = RandomScoreQuery(query=query, seed=request.seed, field=self.id_field)

        search_query = SearchQuery(
            query=query,
            sort=self.sort_resolver.resolve(request.sort_key),
            aggregations=self.planner.plan(self.catalog.list_filterable_fields()),
            offset=request.per_page * (request.page - 1),
            size=request.per_page,
            has_query=has_query,
        )
        logger.debug(f"Built search query: {search_query.query.to_dict()}")
        return search_query

    def text_query(self, query_text: str) -> Optional[QueryNode]:
        """Free-text part of the query, None if there are no terms.

        Each term is matched on its own across all free-text fields, so
        the terms of a clause may match in different fields.
        """
        fields = [f.boosted_name for f in self.catalog.list_freetext_fields()]

        or_clauses: List[QueryNode] = []
        for terms in split_clauses(query_text):
            or_clauses.append(all_of([
                MultiMatchQuery(
                    query=term,
                    fields=list(fields),
                    match_type="most_fields",
                    fuzziness="AUTO",
                    prefix_length=FUZZY_PREFIX_LENGTH,
                )
                for term in terms
            ]))

        if not or_clauses:
            return None
        return any_of(or_clauses)

    def filter_queries(self, filters: Mapping[str, FilterValue]) -> List[QueryNode]:
        """One query per non-empty filter, to be AND-ed together."""
        queries: List[QueryNode] = []
        for name, value in filters.items():
            try:
                descriptor = self.catalog.get_field(name)
            except UnknownField:
                logger.debug(f"Skipping filter on unknown field: {name}")
                continue
            if value.is_empty:
                continue

            query = self.filter_query(descriptor, value)
            if query is not None:
                queries.append(query)
        return queries

    def filter_query(self, descriptor: FieldDescriptor, value: FilterValue) -> Optional[QueryNode]:
        """Query for one filter, None if the filter does not restrict anything."""
        if descriptor.type is FieldType.INTEGER and isinstance(value, IntegerFilter):
            return self._integer_query(descriptor, value)
        if descriptor.type is FieldType.BOOLEAN and isinstance(value, BooleanFilter):
            return self._boolean_query(descriptor, value)
        if descriptor.type is FieldType.STRING and isinstance(value, StringFilter):
            return self._string_query(descriptor, value)
        raise LogicError(
            f"Unsupported filter {type(value).__name__} for field {descriptor.name} "
            f"of type {descriptor.type.value}"
        )

    def _integer_query(self, descriptor: FieldDescriptor, value: IntegerFilter) -> Optional[QueryNode]:
        bounds: List[QueryNode] = []
        if value.minimum is not None:
            bounds.append(RangeQuery(field=descriptor.name, gte=value.minimum))
        if value.maximum is not None:
            bounds.append(RangeQuery(field=descriptor.name, lte=value.maximum))
        if not bounds:
            return None

        query: QueryNode = all_of(bounds)
        if value.include_unknown:
            query = any_of([query, missing(descriptor.name)])
        return query

    def _boolean_query(self, descriptor: FieldDescriptor, value: BooleanFilter) -> Optional[QueryNode]:
        if value.value is None:
            return None

        query: QueryNode = TermQuery(field=descriptor.name, value=value.value)
        if value.include_unknown:
            query = any_of([query, missing(descriptor.name)])
        return query

    def _string_query(self, descriptor: FieldDescriptor, value: StringFilter) -> Optional[QueryNode]:
        alternatives: List[QueryNode] = [
            TermQuery(field=descriptor.exact_name, value=v) for v in value.values
        ]
        if value.include_unknown:
            alternatives.append(missing(descriptor.name))
        if not alternatives:
            return None
        return any_of(alternatives)


__all__ = [
    "SearchRequest",
    "SearchQuery",
    "QueryBuilder",
    "split_clauses",
    "DEFAULT_PER_PAGE",
    "MAX_RESULT_WINDOW",
]
