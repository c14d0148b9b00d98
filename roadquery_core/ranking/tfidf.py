"""RoadQuery TF-IDF Scorer - Term Importance Weighting.

Weights the terms of one document against the corpus, so the most
characteristic ones can be searched for in other documents.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List

@dataclass
class ScoringContext:
    """Corpus statistics of the field a term was taken from."""
    total_docs: int = 0
    field: str = ""
    boost: float = 1.0

class Scorer(ABC):
    """Weighs a term from its document and corpus frequencies."""

    @abstractmethod
    def score(self, term_freq: int, doc_freq: int, context: ScoringContext) -> float:
        pass

    def explain(self, term_freq: int, doc_freq: int, context: ScoringContext) -> Dict[str, Any]:
        return {
            "score": self.score(term_freq, doc_freq, context),
            "description": f"{type(self).__name__}(tf={term_freq}, df={doc_freq}, docs={context.total_docs})",
        }

@dataclass(frozen=True)
class TermWeight:
    """Importance of one term of one field."""
    field: str
    term: str
    weight: float

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "term": self.term, "tf-idf": self.weight}

class TFIDFScorer(Scorer):
    """Smoothed TF-IDF scorer.

    weight = sqrt(tf) * (ln((N + 1) / (df + 1)) + 1)

    Rare terms that occur often in the document weigh most.
    """

    def score(self, term_freq: int, doc_freq: int, context: ScoringContext) -> float:
        tf = math.sqrt(term_freq)
        idf = math.log((context.total_docs + 1.0) / (doc_freq + 1.0)) + 1.0
        return tf * idf * context.boost

def top_terms(weights: List[TermWeight], limit: int) -> List[TermWeight]:
    """Highest weights first; equal weights keep their original order."""
    return sorted(weights, key=lambda w: w.weight, reverse=True)[:limit]

__all__ = ["Scorer", "ScoringContext", "TFIDFScorer", "TermWeight", "top_terms"]
