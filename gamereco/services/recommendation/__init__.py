"""
Recommendation scoring engine.

Candidate loading, vectorization, similarity and composite ranking are kept
in small pure modules; `RecommendationService` wires them to the catalog.
"""

from .mapper import format_price, game_to_dict, is_hidden_gem, scored_game_to_dict
from .pagination import normalize_page_params, paginate
from .ranker import composite_rank, score_game
from .retrieval import load_candidates
from .similarity import non_standard_cosine, similarity
from .vectorizer import TagVector, vectorize_game, vectorize_user
from .weights import ScoringWeights, calibrate_trend_divisor

__all__ = [
    "format_price",
    "game_to_dict",
    "is_hidden_gem",
    "scored_game_to_dict",
    "normalize_page_params",
    "paginate",
    "composite_rank",
    "score_game",
    "load_candidates",
    "non_standard_cosine",
    "similarity",
    "TagVector",
    "vectorize_game",
    "vectorize_user",
    "ScoringWeights",
    "calibrate_trend_divisor",
]
