"""RoadQuery - Faceted Query Composition for BlackRoad OS.

Turns search intent (free text, sidebar filters, sort, page, seed) into
boolean index queries with per-field statistics, and finds similar
documents by TF-IDF term weighting.

Architecture:
┌─────────────────────────────────────────────────────────────────────────────┐
│                           RoadQuery Service                                 │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────────────┐   │
│   │                        Search Pipeline                              │   │
│   │  ┌────────────┐  ┌────────────┐  ┌────────────┐  ┌────────────┐    │   │
│   │  │   Decode   │→ │   Build    │→ │  Execute   │→ │   Format   │    │   │
│   │  │  Filters   │  │   Query    │  │  (Index)   │  │   Stats    │    │   │
│   │  └────────────┘  └────────────┘  └────────────┘  └────────────┘    │   │
│   └─────────────────────────────────────────────────────────────────────┘   │
│                                                                             │
│   ┌─────────────────────────────────────────────────────────────────────┐   │
│   │                       Similarity Pipeline                           │   │
│   │  ┌────────────┐  ┌────────────┐  ┌────────────┐  ┌────────────┐    │   │
│   │  │  Resolve   │→ │   Term     │→ │   TF-IDF   │→ │  Similar   │    │   │
│   │  │     Id     │  │  Vectors   │  │  Ranking   │  │   Query    │    │   │
│   │  └────────────┘  └────────────┘  └────────────┘  └────────────┘    │   │
│   └─────────────────────────────────────────────────────────────────────┘   │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Key Features:
- Compact "~"-delimited filter grammar with escaping and "unknown" option
- Free-text search: AND within clauses, OR across " OR " clauses, fuzzy
- Integer range, boolean and any-of string filters
- Sorting by title, pages, creation date, Wilson review score, or random
- Seeded random ordering, stable per week by default
- Min/max/missing/terms statistics for every filterable field
- Similar titles and TF-IDF based similar documents
- Autocomplete from common values or phrase prefixes

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

__version__ = "1.0.0"
__author__ = "BlackRoad OS"
__license__ = "Proprietary"

# Core service
from roadquery_core.engine import (
    SearchService,
    SearchConfig,
    SearchResult,
    SearchHit,
)

# Errors
from roadquery_core.errors import (
    RoadQueryError,
    LogicError,
    InvalidFilterEncoding,
    OutOfRangeRequest,
    UnknownField,
)

# Fields
from roadquery_core.fields.catalog import (
    FieldType,
    FieldDescriptor,
    FieldCatalog,
    StaticFieldCatalog,
)

# Filters
from roadquery_core.filters.values import (
    IntegerFilter,
    StringFilter,
    BooleanFilter,
    FilterValue,
)
from roadquery_core.filters.codec import (
    FilterCodec,
    parse_filters,
)

# Query components
from roadquery_core.query.nodes import (
    QueryNode,
    BooleanQuery,
    TermQuery,
    MatchQuery,
    MultiMatchQuery,
    PhrasePrefixQuery,
    RangeQuery,
    ExistsQuery,
    MatchAllQuery,
    RandomScoreQuery,
)
from roadquery_core.query.builder import (
    QueryBuilder,
    SearchRequest,
    SearchQuery,
    split_clauses,
)

# Ranking
from roadquery_core.ranking.sort import (
    SortKey,
    SortResolver,
    wilson_lower_bound,
)
from roadquery_core.ranking.tfidf import (
    TFIDFScorer,
    TermWeight,
)

# Faceted statistics
from roadquery_core.facets.aggregations import AggregationPlanner
from roadquery_core.facets.stats import (
    AggregationFormatter,
    FieldStat,
    IntegerStat,
    BooleanStat,
    StringStat,
    Bucket,
)

# Similarity and suggestions
from roadquery_core.similarity import (
    SimilarityEngine,
    SimilarityConfig,
    TitleMatch,
)
from roadquery_core.suggest import Autocompleter

# Index clients
from roadquery_core.index.client import (
    IndexClient,
    IndexRequest,
    IndexResponse,
    IndexHit,
    FieldTermVector,
    TermStatistics,
)
from roadquery_core.index.elastic import (
    ElasticsearchIndexClient,
    ElasticsearchConfig,
)

# Seeds
from roadquery_core.seed import (
    SeedProvider,
    WeeklySeedProvider,
    FixedSeedProvider,
)

__all__ = [
    # Version
    "__version__",
    "__author__",
    "__license__",
    # Core
    "SearchService",
    "SearchConfig",
    "SearchResult",
    "SearchHit",
    # Errors
    "RoadQueryError",
    "LogicError",
    "InvalidFilterEncoding",
    "OutOfRangeRequest",
    "UnknownField",
    # Fields
    "FieldType",
    "FieldDescriptor",
    "FieldCatalog",
    "StaticFieldCatalog",
    # Filters
    "IntegerFilter",
    "StringFilter",
    "BooleanFilter",
    "FilterValue",
    "FilterCodec",
    "parse_filters",
    # Query
    "QueryNode",
    "BooleanQuery",
    "TermQuery",
    "MatchQuery",
    "MultiMatchQuery",
    "PhrasePrefixQuery",
    "RangeQuery",
    "ExistsQuery",
    "MatchAllQuery",
    "RandomScoreQuery",
    "QueryBuilder",
    "SearchRequest",
    "SearchQuery",
    "split_clauses",
    # Ranking
    "SortKey",
    "SortResolver",
    "wilson_lower_bound",
    "TFIDFScorer",
    "TermWeight",
    # Facets
    "AggregationPlanner",
    "AggregationFormatter",
    "FieldStat",
    "IntegerStat",
    "BooleanStat",
    "StringStat",
    "Bucket",
    # Similarity and suggestions
    "SimilarityEngine",
    "SimilarityConfig",
    "TitleMatch",
    "Autocompleter",
    # Index
    "IndexClient",
    "IndexRequest",
    "IndexResponse",
    "IndexHit",
    "FieldTermVector",
    "TermStatistics",
    "ElasticsearchIndexClient",
    "ElasticsearchConfig",
    # Seeds
    "SeedProvider",
    "WeeklySeedProvider",
    "FixedSeedProvider",
]
