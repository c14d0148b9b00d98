"""RoadQuery Similarity Engine - Similar Titles and Similar Documents.

Similar documents are found outside the index's own ranking: the most
characteristic terms of a document are selected by TF-IDF, then the index
is searched for documents sharing enough of them.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from roadquery_core.index.client import FieldTermVector, IndexClient, IndexHit, IndexRequest
from roadquery_core.query.nodes import BooleanQuery, MatchQuery, QueryNode, TermQuery
from roadquery_core.ranking.tfidf import ScoringContext, TFIDFScorer, TermWeight, top_terms

logger = logging.getLogger(__name__)


def default_field_groups() -> Dict[str, List[str]]:
    return {
        "title/description": ["title.analyzed", "description.analyzed"],
        "items": ["items.keyword"],
        "bossMonsters": ["bossMonsters.keyword"],
        "commonMonsters": ["commonMonsters.keyword"],
    }


@dataclass
class SimilarityConfig:
    """Similarity search configuration.

    Attributes:
        field_groups: Group name to the analyzed fields compared
        min_term_length: Shorter terms are ignored
        max_terms: Number of top weighted terms searched for
        minimum_should_match: Share of terms a similar document must contain
        max_results: Similar documents returned
        max_title_results: Similar titles returned
        id_field: Field holding the external document id
        title_field: Field holding the title
        title_source_fields: Fields returned for similar titles
    """

    field_groups: Dict[str, List[str]] = field(default_factory=default_field_groups)
    min_term_length: int = 3
    max_terms: int = 20
    minimum_should_match: str = "25%"
    max_results: int = 6
    max_title_results: int = 10
    id_field: str = "id"
    title_field: str = "title"
    title_source_fields: List[str] = field(default_factory=lambda: ["id", "title", "slug"])


@dataclass(frozen=True)
class TitleMatch:
    id: Any
    title: str
    slug: Optional[str] = None


class SimilarityEngine:
    """Finds documents similar to a title or to another document."""

    def __init__(
        self,
        client: IndexClient,
        config: Optional[SimilarityConfig] = None,
        hit_mapper: Optional[Callable[[IndexHit], Any]] = None,
        scorer: Optional[TFIDFScorer] = None,
    ):
        self.client = client
        self.config = config or SimilarityConfig()
        self.hit_mapper = hit_mapper or (lambda hit: hit)
        self.scorer = scorer or TFIDFScorer()

    def find_similar_titles(self, title: str, exclude_id: int = -1) -> List[TitleMatch]:
        """Documents whose title fuzzily contains every word of ``title``.

        Args:
            title: Title to compare against
            exclude_id: Document id to leave out (negative: none)
        """
        if title == "":
            return []

        query: QueryNode = MatchQuery(
            field=self.config.title_field,
            query=title,
            operator="and",
            fuzziness="AUTO",
        )
        if exclude_id >= 0:
            query = BooleanQuery(
                must=[query],
                must_not=[TermQuery(field=self.config.id_field, value=exclude_id)],
            )

        response = self.client.search(IndexRequest(
            query=query,
            source=list(self.config.title_source_fields),
            size=self.config.max_title_results,
        ))
        return [
            TitleMatch(
                id=hit.source.get(self.config.id_field),
                title=hit.source.get(self.config.title_field, ""),
                slug=hit.source.get("slug"),
            )
            for hit in response.hits
        ]

    def find_similar_documents(self, document_id: Any, field_group: str) -> Tuple[List[Any], List[TermWeight]]:
        """Documents sharing the most characteristic terms of a document.

        Makes three dependent index calls: id lookup, term vectors and the
        final search.

        Args:
            document_id: External id of the source document
            field_group: Name of the group of fields to compare

        Returns:
            Similar documents and the term weights they were found with
        """
        fields = self.config.field_groups.get(field_group, [])
        if not fields:
            logger.warning(f"Unknown similarity field group: {field_group}")
            return [], []

        internal_id = self.client.lookup_internal_id(document_id)
        if internal_id is None:
            logger.info(f"Document {document_id} is not indexed")
            return [], []

        vectors = self.client.fetch_term_vectors(internal_id, fields)
        terms = top_terms(self.term_weights(fields, vectors), self.config.max_terms)
        if not terms:
            return [], []

        response = self.client.search(IndexRequest(
            query=self.similar_query(document_id, terms),
            size=self.config.max_results,
        ))
        logger.info(
            f"Found {len(response.hits)} documents similar to {document_id} "
            f"using {len(terms)} terms of {field_group}"
        )
        return [self.hit_mapper(hit) for hit in response.hits], terms

    def term_weights(self, fields: List[str], vectors: Dict[str, FieldTermVector]) -> List[TermWeight]:
        """TF-IDF weight of every long enough term, in field order."""
        weights: List[TermWeight] = []
        for field_name in fields:
            vector = vectors.get(field_name)
            if vector is None:
                # Field is empty
                continue
            context = ScoringContext(total_docs=vector.doc_count, field=field_name)
            for term, stats in vector.terms.items():
                if len(term) < self.config.min_term_length:
                    continue
                weights.append(TermWeight(
                    field=field_name,
                    term=term,
                    weight=self.scorer.score(stats.term_freq, stats.doc_freq, context),
                ))
        return weights

    def similar_query(self, document_id: Any, terms: List[TermWeight]) -> BooleanQuery:
        """Documents containing enough of the terms, boosted by weight, minus the source."""
        return BooleanQuery(must=[
            BooleanQuery(
                should=[MatchQuery(field=t.field, query=t.term, boost=t.weight) for t in terms],
                minimum_should_match=self.config.minimum_should_match,
            ),
            BooleanQuery(must_not=[TermQuery(field=self.config.id_field, value=document_id)]),
        ])


__all__ = [
    "SimilarityConfig",
    "SimilarityEngine",
    "TitleMatch",
    "default_field_groups",
]
