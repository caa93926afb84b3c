from __future__ import annotations

import math
from typing import Iterable, List, Optional

from gamereco.models import GameRecord, ScoredGame
from gamereco.services.recommendation.similarity import similarity
from gamereco.services.recommendation.vectorizer import TagVector, vectorize_game
from gamereco.services.recommendation.weights import ScoringWeights


def trend_component(trend_signal: float, weights: ScoringWeights) -> float:
    return math.log10(trend_signal + 1) / weights.trend_divisor


def critic_component(critic_score: int) -> float:
    return critic_score / 100


def score_game(
    user_vector: TagVector,
    game: GameRecord,
    weights: Optional[ScoringWeights] = None,
) -> ScoredGame:
    """
    Score a single candidate, keeping every component for explanations.
    """
    weights = weights or ScoringWeights()
    tag_score = similarity(user_vector, vectorize_game(game.tags))
    trend_score = trend_component(game.trend_signal, weights)
    critic_score = critic_component(game.critic_score)
    final_score = (
        (weights.tag_weight * tag_score)
        + (weights.trend_weight * trend_score)
        + (weights.critic_weight * critic_score)
    )
    return ScoredGame(
        game=game,
        final_score=final_score,
        similarity_component=tag_score,
        trend_component=trend_score,
        critic_component=critic_score,
    )


def composite_rank(
    candidates: Iterable[GameRecord],
    user_vector: TagVector,
    top_k: int,
    weights: Optional[ScoringWeights] = None,
) -> List[ScoredGame]:
    """
    Rank the candidates by their blended tag, trend and critic score.

    The sort is stable: games with equal scores keep the candidate order.
    """
    if top_k < 0:
        raise ValueError(f"top_k must be non-negative, got {top_k}")

    weights = weights or ScoringWeights()
    ranked_results: List[ScoredGame] = [
        score_game(user_vector, game, weights) for game in candidates
    ]

    ranked_results.sort(key=lambda item: item.final_score, reverse=True)
    return ranked_results[:top_k]
