"""Unit tests for autocomplete suggestions."""

from __future__ import annotations

import pytest

from roadquery_core.fields.catalog import FieldDescriptor, FieldType
from roadquery_core.index.client import IndexHit, IndexResponse
from roadquery_core.suggest import Autocompleter


@pytest.fixture
def autocompleter(index_client) -> Autocompleter:
    return Autocompleter(index_client)


@pytest.fixture
def setting(catalog) -> FieldDescriptor:
    return catalog.get_field("setting")


class TestPrefixSuggestions:
    def test_request(self, autocompleter, index_client, setting) -> None:
        autocompleter.suggest(setting, "Grey")
        assert index_client.requests[0].to_body() == {
            "size": 20,
            "query": {"match_phrase_prefix": {"setting": "Grey"}},
            "_source": False,
            "highlight": {"pre_tags": [""], "post_tags": [""], "fields": {"setting": {}}},
        }

    def test_fragments_are_unique_and_ordered(self, autocompleter, index_client, setting) -> None:
        index_client.responses.append(IndexResponse(hits=[
            IndexHit("1", highlights={"setting": ["Greyhawk", "Greyhawk"]}),
            IndexHit("2", highlights={"setting": ["Grey Box"]}),
            IndexHit("3"),
            IndexHit("4", highlights={"setting": ["Greyhawk"]}),
        ]))
        assert autocompleter.suggest(setting, "Grey") == ["Greyhawk", "Grey Box"]

    def test_no_hits(self, autocompleter, setting) -> None:
        assert autocompleter.suggest(setting, "zzz") == []

    def test_prefix_never_aggregates(self, autocompleter, index_client, setting) -> None:
        autocompleter.suggest(setting, "Grey")
        assert index_client.requests[0].aggregations == []

    def test_size(self, index_client, setting) -> None:
        Autocompleter(index_client, size=5).suggest(setting, "a")
        assert index_client.requests[0].size == 5


class TestCommonValues:
    def test_empty_prefix_lists_common_values(self, autocompleter, index_client, setting) -> None:
        index_client.responses.append(IndexResponse(aggregations={
            "setting.keyword": {"buckets": [
                {"key": "Forgotten Realms", "doc_count": 40},
                {"key": "Greyhawk", "doc_count": 12},
            ]},
        }))

        assert autocompleter.suggest(setting, "") == ["Forgotten Realms", "Greyhawk"]

        request = index_client.requests[0]
        assert request.request_cache is True
        assert request.query is None
        assert request.to_body() == {
            "size": 0,
            "aggs": {"setting.keyword": {"terms": {"field": "setting.keyword", "size": 20}}},
            "request_cache": True,
        }

    def test_several_fields(self, autocompleter, index_client, catalog) -> None:
        index_client.responses.append(IndexResponse(aggregations={
            "setting.keyword": {"buckets": [{"key": "Eberron", "doc_count": 1}]},
            "numPages": {"buckets": [{"key": 32, "doc_count": 7}]},
        }))
        values = autocompleter.most_common_values(
            [catalog.get_field("setting"), catalog.get_field("numPages")], 3
        )
        assert values == {"setting.keyword": ["Eberron"], "numPages": [32]}

    def test_field_without_target(self, autocompleter, index_client) -> None:
        field = FieldDescriptor("notes", FieldType.STRING)
        assert autocompleter.suggest(field, "") == []
        assert index_client.requests == []
