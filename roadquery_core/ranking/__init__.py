"""RoadQuery Ranking Components.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from roadquery_core.ranking.tfidf import Scorer, ScoringContext, TFIDFScorer, TermWeight, top_terms
from roadquery_core.ranking.sort import (
    SortKey,
    SortCriterion,
    FieldSort,
    ScoreSort,
    ScriptSort,
    SortResolver,
    wilson_lower_bound,
)

__all__ = [
    "Scorer",
    "ScoringContext",
    "TFIDFScorer",
    "TermWeight",
    "top_terms",
    "SortKey",
    "SortCriterion",
    "FieldSort",
    "ScoreSort",
    "ScriptSort",
    "SortResolver",
    "wilson_lower_bound",
]
