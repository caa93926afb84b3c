from __future__ import annotations

from gamereco.services.recommendation.vectorizer import TagVector


def non_standard_cosine(user: TagVector, game: TagVector) -> float:
    """
    Dot product divided by the product of the two *squared* magnitudes.

    This is not true cosine similarity (which divides by the product of the
    magnitudes). The blend weights in ``ScoringWeights`` were tuned against
    this scale, so keep it as is unless the weights are retuned too.
    Returns 0.0 when either vector has zero magnitude.
    """
    magnitude_user_squared = user.squared_magnitude
    magnitude_game_squared = game.squared_magnitude
    if magnitude_user_squared == 0 or magnitude_game_squared == 0:
        return 0.0

    # Tags present in only one vector add zero, so walking the user's keys
    # covers the union in a deterministic order.
    dot = 0.0
    for tag, weight in user.items():
        dot += weight * game.get(tag, 0.0)

    return dot / (magnitude_user_squared * magnitude_game_squared)


def similarity(user: TagVector, game: TagVector) -> float:
    """
    Tag similarity in [0, 1].

    The raw quotient can only exceed 1 when a squared magnitude is below 1
    (e.g. a history-only user vector made of playtime shares).
    """
    return min(1.0, non_standard_cosine(user, game))
