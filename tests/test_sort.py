"""Unit tests for sort keys and the Wilson review score."""

from __future__ import annotations

import pytest

from roadquery_core.ranking.sort import (
    WILSON_SCRIPT,
    FieldSort,
    ScoreSort,
    ScriptSort,
    SortKey,
    SortResolver,
    sort_to_list,
    wilson_lower_bound,
)


class TestWilsonLowerBound:
    def test_no_reviews(self) -> None:
        assert wilson_lower_bound(0, 0) == 0.0

    def test_more_positive_reviews_rank_higher(self) -> None:
        assert wilson_lower_bound(10, 0) > wilson_lower_bound(1, 0)

    def test_more_negative_reviews_rank_lower(self) -> None:
        assert wilson_lower_bound(10, 10) < wilson_lower_bound(10, 1)

    def test_bounded(self) -> None:
        for positive, negative in [(0, 5), (5, 0), (3, 3), (1000, 1)]:
            assert 0.0 <= wilson_lower_bound(positive, negative) <= 1.0

    def test_known_value(self) -> None:
        assert wilson_lower_bound(1, 0) == pytest.approx(0.2065, abs=1e-4)

    def test_only_negative_reviews(self) -> None:
        assert wilson_lower_bound(0, 5) == pytest.approx(0.0, abs=1e-12)


class TestSortKey:
    @pytest.mark.parametrize("raw, expected", [
        ("title", SortKey.TITLE),
        ("numPages-desc", SortKey.NUM_PAGES_DESC),
        ("reviews", SortKey.REVIEWS),
        ("random", SortKey.RANDOM),
        ("", SortKey.RELEVANCE),
        (None, SortKey.RELEVANCE),
        ("bogus", SortKey.RELEVANCE),
    ])
    def test_parse(self, raw, expected: SortKey) -> None:
        assert SortKey.parse(raw) is expected


class TestSortResolver:
    @pytest.fixture
    def resolver(self) -> SortResolver:
        return SortResolver()

    def test_title(self, resolver: SortResolver) -> None:
        assert sort_to_list(resolver.resolve(SortKey.TITLE)) == [{"title.keyword": "asc"}]

    def test_num_pages_break_ties_by_score(self, resolver: SortResolver) -> None:
        assert resolver.resolve(SortKey.NUM_PAGES_ASC) == [FieldSort("numPages", "asc"), ScoreSort()]
        assert resolver.resolve(SortKey.NUM_PAGES_DESC) == [FieldSort("numPages", "desc"), ScoreSort()]

    def test_created_at_has_no_tie_breaker(self, resolver: SortResolver) -> None:
        assert resolver.resolve(SortKey.CREATED_AT_ASC) == [FieldSort("createdAt", "asc")]
        assert resolver.resolve(SortKey.CREATED_AT_DESC) == [FieldSort("createdAt", "desc")]

    def test_reviews(self, resolver: SortResolver) -> None:
        sort = sort_to_list(resolver.resolve(SortKey.REVIEWS))
        assert sort == [
            {"_script": {"order": "desc", "type": "number", "script": {"source": WILSON_SCRIPT}}},
            "_score",
        ]

    @pytest.mark.parametrize("key", [SortKey.RELEVANCE, SortKey.RANDOM])
    def test_score_order(self, resolver: SortResolver, key: SortKey) -> None:
        assert sort_to_list(resolver.resolve(key)) == ["_score"]

    def test_wilson_script_reads_review_counts(self) -> None:
        assert "doc['positiveReviews'].value" in WILSON_SCRIPT
        assert "doc['negativeReviews'].value" in WILSON_SCRIPT
        assert ScriptSort(WILSON_SCRIPT).order == "desc"
