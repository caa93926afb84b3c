from __future__ import annotations

import math
from typing import Iterable

import numpy as np
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_TAG_WEIGHT = 0.6
DEFAULT_TREND_WEIGHT = 0.2
DEFAULT_CRITIC_WEIGHT = 0.2
DEFAULT_LIKE_WEIGHT = 3.0
DEFAULT_HISTORY_WEIGHT = 1.0
DEFAULT_TREND_DIVISOR = 5.0


class ScoringWeights(BaseModel):
    """
    Every tunable constant of the scoring engine.

    ``tag_weight``, ``trend_weight`` and ``critic_weight`` blend the three
    components into the final score. ``like_weight`` is the vector weight of an
    explicitly liked tag and ``history_weight`` scales the playtime share of
    tags inferred from play history. ``trend_divisor`` maps
    ``log10(trend + 1)`` onto roughly [0, 1].
    """

    model_config = ConfigDict(frozen=True)

    tag_weight: float = Field(DEFAULT_TAG_WEIGHT, ge=0)
    trend_weight: float = Field(DEFAULT_TREND_WEIGHT, ge=0)
    critic_weight: float = Field(DEFAULT_CRITIC_WEIGHT, ge=0)
    like_weight: float = Field(DEFAULT_LIKE_WEIGHT, ge=0)
    history_weight: float = Field(DEFAULT_HISTORY_WEIGHT, ge=0)
    trend_divisor: float = Field(DEFAULT_TREND_DIVISOR, gt=0)


def calibrate_trend_divisor(
    trend_values: Iterable[float],
    percentile: float = 99.0,
    fallback: float = DEFAULT_TREND_DIVISOR,
) -> float:
    """
    Pick a trend divisor so that the given percentile of ``trend_values``
    maps to a trend component of 1.0.

    Returns ``fallback`` when there is nothing to calibrate against.
    """
    values = np.asarray(list(trend_values), dtype=float)
    if values.size == 0:
        return fallback
    if np.any(values < 0) or not np.all(np.isfinite(values)):
        raise ValueError("Trend values must be finite and non-negative.")

    reference = float(np.percentile(values, percentile))
    divisor = math.log10(reference + 1)
    if divisor <= 0:
        return fallback
    return divisor
