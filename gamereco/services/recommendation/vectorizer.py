from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional, Sequence, Union

from gamereco.errors import InvalidVectorError
from gamereco.models import UserPreferenceSignal, clean_tags
from gamereco.services.recommendation.weights import ScoringWeights


logger = logging.getLogger(__name__)


class TagVector(Mapping):
    """
    Read-only sparse vector mapping a tag to a non-negative weight.

    Build these through ``vectorize_game`` / ``vectorize_user`` rather than
    from raw upstream tag lists.
    """

    __slots__ = ("_weights",)

    def __init__(self, weights: Optional[Mapping[str, float]] = None) -> None:
        validated: Dict[str, float] = {}
        for tag, weight in (weights or {}).items():
            if not isinstance(tag, str) or not tag.strip():
                raise InvalidVectorError(f"Invalid tag key: {tag!r}")
            try:
                value = float(weight)
            except (TypeError, ValueError) as exc:
                raise InvalidVectorError(f"Invalid weight for tag {tag!r}: {weight!r}") from exc
            if not math.isfinite(value) or value < 0:
                raise InvalidVectorError(f"Invalid weight for tag {tag!r}: {weight!r}")
            validated[tag] = value
        self._weights = validated

    def __getitem__(self, tag: str) -> float:
        return self._weights[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self) -> str:
        return f"TagVector({self._weights!r})"

    @property
    def squared_magnitude(self) -> float:
        return sum(weight * weight for weight in self._weights.values())


def vectorize_game(tags: Optional[Sequence[str]]) -> TagVector:
    """
    One unit of weight per distinct tag. Missing or empty tags give the empty vector.
    """
    return TagVector({tag: 1.0 for tag in clean_tags(tags)})


def vectorize_user(
    signal: Union[UserPreferenceSignal, Mapping[str, Any]],
    weights: Optional[ScoringWeights] = None,
) -> TagVector:
    """
    Build a user's preference vector.

    Explicit likes add ``like_weight`` per tag. Play history is
    playtime-weighted: each tag accumulates the minutes of every played game
    carrying it, then the accumulated minutes are divided by the total minutes
    of all contributing games and scaled by ``history_weight``. Games without
    playtime contribute nothing. The two sources add up.

    Raises ``pydantic.ValidationError`` when ``signal`` is not a valid
    preference signal.
    """
    weights = weights or ScoringWeights()
    if not isinstance(signal, UserPreferenceSignal):
        signal = UserPreferenceSignal.model_validate(signal)

    vector: Dict[str, float] = {}

    for tag in clean_tags(signal.liked_tags):
        vector[tag] = vector.get(tag, 0.0) + weights.like_weight

    minutes_by_tag: Dict[str, float] = {}
    total_minutes = 0
    for played in signal.history:
        minutes = played.playtime_minutes or 0
        tags = clean_tags(played.tags)
        if minutes <= 0 or not tags:
            continue
        total_minutes += minutes
        for tag in tags:
            minutes_by_tag[tag] = minutes_by_tag.get(tag, 0.0) + minutes

    if total_minutes > 0:
        for tag, minutes in minutes_by_tag.items():
            share = minutes / total_minutes
            vector[tag] = vector.get(tag, 0.0) + weights.history_weight * share

    logger.debug(
        "User vector built from %d liked tags and %d history entries (%d tags)",
        len(signal.liked_tags),
        len(signal.history),
        len(vector),
    )
    return TagVector(vector)
