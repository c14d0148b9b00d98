"""RoadQuery Autocomplete - Field Value Suggestions.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from roadquery_core.facets.aggregations import TermsAggregation
from roadquery_core.fields.catalog import FieldDescriptor
from roadquery_core.index.client import IndexClient, IndexRequest
from roadquery_core.query.nodes import PhrasePrefixQuery

logger = logging.getLogger(__name__)

SUGGESTION_SIZE = 20


class Autocompleter:
    """Suggests values for a field given what the user typed so far."""

    def __init__(self, client: IndexClient, size: int = SUGGESTION_SIZE):
        self.client = client
        self.size = size

    def suggest(self, field: FieldDescriptor, prefix: str) -> List[str]:
        """Values which could be what the user wants to insert.

        With an empty prefix, the most common values of the field.
        """
        if prefix == "":
            return self.most_common_values([field], self.size).get(field.aggregation_target_name or "", [])

        response = self.client.search(IndexRequest(
            query=PhrasePrefixQuery(field=field.name, query=prefix),
            size=self.size,
            source=False,
            highlight={
                "pre_tags": [""],
                "post_tags": [""],
                "fields": {field.name: {}},
            },
        ))

        results: List[str] = []
        for hit in response.hits:
            fragments = hit.highlights.get(field.name)
            if not fragments:
                continue
            for fragment in dict.fromkeys(fragments):
                if fragment not in results:
                    results.append(fragment)
        return results

    def most_common_values(self, fields: Sequence[FieldDescriptor], size: int) -> Dict[str, List[str]]:
        """Most common values per aggregation target, most common first.

        Fields that cannot be aggregated are left out. The response may be
        served from the index's request cache.
        """
        aggregations = [
            TermsAggregation(f.aggregation_target_name, f.aggregation_target_name, size)
            for f in fields
            if f.aggregation_target_name
        ]
        if not aggregations:
            logger.warning(f"No aggregatable fields among {[f.name for f in fields]}")
            return {}

        response = self.client.search(IndexRequest(
            size=0,
            aggregations=aggregations,
            request_cache=True,
        ))
        return {
            name: [bucket["key"] for bucket in aggregation.get("buckets", [])]
            for name, aggregation in response.aggregations.items()
        }


__all__ = ["Autocompleter", "SUGGESTION_SIZE"]
