"""Shared fixtures for RoadQuery tests."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

from roadquery_core.fields.catalog import FieldDescriptor, FieldType, StaticFieldCatalog
from roadquery_core.index.client import (
    FieldTermVector,
    IndexClient,
    IndexRequest,
    IndexResponse,
)


class FakeIndexClient(IndexClient):
    """Index client that records requests and replays canned responses."""

    def __init__(self) -> None:
        self.requests: List[IndexRequest] = []
        self.responses: List[IndexResponse] = []
        self.internal_ids: Dict[Any, str] = {}
        self.term_vectors: Dict[str, Dict[str, FieldTermVector]] = {}
        self.lookups: List[Any] = []
        self.term_vector_calls: List[Tuple[str, List[str]]] = []

    def search(self, request: IndexRequest) -> IndexResponse:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        return IndexResponse()

    def fetch_term_vectors(self, internal_id: str, fields: Sequence[str]) -> Dict[str, FieldTermVector]:
        self.term_vector_calls.append((internal_id, list(fields)))
        vectors = self.term_vectors.get(internal_id, {})
        return {f: vectors[f] for f in fields if f in vectors}

    def lookup_internal_id(self, external_id: Any) -> Optional[str]:
        self.lookups.append(external_id)
        return self.internal_ids.get(external_id)


@pytest.fixture
def catalog() -> StaticFieldCatalog:
    return StaticFieldCatalog([
        FieldDescriptor("title", FieldType.STRING, freetext_searchable=True, search_boost=3),
        FieldDescriptor("description", FieldType.TEXT, freetext_searchable=True),
        FieldDescriptor(
            "numPages", FieldType.INTEGER, filterable=True, aggregation_target_name="numPages"
        ),
        FieldDescriptor(
            "soloable", FieldType.BOOLEAN, filterable=True, aggregation_target_name="soloable"
        ),
        FieldDescriptor(
            "setting",
            FieldType.STRING,
            filterable=True,
            freetext_searchable=True,
            search_boost=2,
            aggregation_target_name="setting.keyword",
        ),
        FieldDescriptor("link", FieldType.URL),
    ])


@pytest.fixture
def index_client() -> FakeIndexClient:
    return FakeIndexClient()
