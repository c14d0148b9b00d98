"""RoadQuery Elasticsearch Client - Index Client Backed by Elasticsearch.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from elasticsearch import Elasticsearch

from roadquery_core.index.client import (
    FieldTermVector,
    IndexClient,
    IndexHit,
    IndexRequest,
    IndexResponse,
    TermStatistics,
)
from roadquery_core.query.nodes import TermQuery

logger = logging.getLogger(__name__)

# Body keys that the Python client takes under another keyword.
_KEYWORD_NAMES = {"from": "from_", "_source": "source"}


@dataclass
class ElasticsearchConfig:
    """Elasticsearch connection configuration."""
    hosts: List[str] = field(default_factory=lambda: ["http://localhost:9200"])
    index_name: str = "adventures"
    api_key: str = ""
    cloud_id: str = ""
    request_timeout: Optional[float] = None
    id_field: str = "id"


class ElasticsearchIndexClient(IndexClient):
    """Index client for a single Elasticsearch index.

    Errors raised by the Elasticsearch client propagate unchanged; retries
    and timeouts are the client's configuration.
    """

    def __init__(self, config: Optional[ElasticsearchConfig] = None, client: Optional[Elasticsearch] = None):
        self.config = config or ElasticsearchConfig()
        self._es = client if client is not None else self._connect(self.config)
        logger.info(f"ElasticsearchIndexClient: index={self.config.index_name}")

    def _connect(self, config: ElasticsearchConfig) -> Elasticsearch:
        kwargs: Dict[str, Any] = {}
        if config.api_key:
            kwargs["api_key"] = config.api_key
        if config.request_timeout is not None:
            kwargs["request_timeout"] = config.request_timeout
        if config.cloud_id:
            return Elasticsearch(cloud_id=config.cloud_id, **kwargs)
        return Elasticsearch(hosts=config.hosts, **kwargs)

    def search(self, request: IndexRequest) -> IndexResponse:
        kwargs: Dict[str, Any] = {
            _KEYWORD_NAMES.get(key, key): value for key, value in request.to_body().items()
        }
        kwargs["index"] = self.config.index_name

        raw = _body(self._es.search(**kwargs))
        return self._parse_response(raw)

    def fetch_term_vectors(self, internal_id: str, fields: Sequence[str]) -> Dict[str, FieldTermVector]:
        raw = _body(self._es.termvectors(
            index=self.config.index_name,
            id=internal_id,
            fields=list(fields),
            positions=False,
            offsets=False,
            payloads=False,
            term_statistics=True,
            realtime=False,
        ))

        vectors: Dict[str, FieldTermVector] = {}
        for field_name, data in (raw.get("term_vectors") or {}).items():
            vectors[field_name] = FieldTermVector(
                doc_count=int(data.get("field_statistics", {}).get("doc_count", 0)),
                terms={
                    term: TermStatistics(
                        term_freq=int(stats.get("term_freq", 0)),
                        doc_freq=int(stats.get("doc_freq", 0)),
                    )
                    for term, stats in (data.get("terms") or {}).items()
                },
            )
        return vectors

    def lookup_internal_id(self, external_id: Any) -> Optional[str]:
        raw = _body(self._es.search(
            index=self.config.index_name,
            query=TermQuery(field=self.config.id_field, value=external_id).to_dict(),
            source=False,
            size=1,
        ))
        hits = raw["hits"]["hits"]
        if len(hits) != 1:
            return None
        return hits[0]["_id"]

    def close(self) -> None:
        self._es.close()

    def _parse_response(self, raw: Mapping[str, Any]) -> IndexResponse:
        hits_section = raw.get("hits") or {}
        total = hits_section.get("total", 0)
        if isinstance(total, Mapping):
            total = total.get("value", 0)

        return IndexResponse(
            hits=[
                IndexHit(
                    internal_id=hit.get("_id", ""),
                    score=hit.get("_score"),
                    source=dict(hit.get("_source") or {}),
                    highlights={k: list(v) for k, v in (hit.get("highlight") or {}).items()},
                )
                for hit in hits_section.get("hits", [])
            ],
            total=int(total or 0),
            aggregations=dict(raw.get("aggregations") or {}),
        )


def _body(response: Any) -> Mapping[str, Any]:
    """Plain body of an API response."""
    return getattr(response, "body", response)


__all__ = ["ElasticsearchConfig", "ElasticsearchIndexClient"]
