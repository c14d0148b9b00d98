"""RoadQuery Index Client Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadquery_core.index.client import (
    IndexRequest,
    IndexHit,
    IndexResponse,
    TermStatistics,
    FieldTermVector,
    IndexClient,
)
from roadquery_core.index.elastic import (
    ElasticsearchConfig,
    ElasticsearchIndexClient,
)

__all__ = [
    "IndexRequest",
    "IndexHit",
    "IndexResponse",
    "TermStatistics",
    "FieldTermVector",
    "IndexClient",
    "ElasticsearchConfig",
    "ElasticsearchIndexClient",
]
