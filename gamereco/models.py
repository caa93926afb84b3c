from __future__ import annotations

from typing import Iterable, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


def clean_tags(tags: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """
    Strip tags, drop blanks and collapse duplicates keeping the first occurrence.
    """
    if not tags:
        return ()
    if isinstance(tags, str):
        raise ValueError("Tags must be a sequence of strings, not a single string")
    seen: dict[str, None] = {}
    for tag in tags:
        if not isinstance(tag, str):
            raise ValueError(f"Tag must be a string, got {type(tag).__name__}")
        stripped = tag.strip()
        if stripped:
            seen.setdefault(stripped, None)
    return tuple(seen)


class PriceSnapshot(BaseModel):
    """
    Latest known price of a game. Only used for display.
    """

    model_config = ConfigDict(frozen=True)

    current_price: Optional[float] = Field(None, ge=0)
    regular_price: Optional[float] = Field(None, ge=0)
    discount_percent: int = Field(0, ge=0, le=100)
    is_free: bool = False


class GameRecord(BaseModel):
    """
    A catalog entry as seen by the scoring engine.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    title_localized: Optional[str] = None
    tags: Tuple[str, ...] = ()
    trend_signal: float = Field(0.0, ge=0)
    critic_score: int = Field(0, ge=0, le=100)
    price: Optional[PriceSnapshot] = None
    platform_id: Optional[int] = None
    image_url: Optional[str] = None
    play_time: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def _collapse_tags(cls, value):
        return clean_tags(value)


class PlayedGame(BaseModel):
    """One entry of a user's played-game history."""

    tags: List[str] = Field(default_factory=list)
    playtime_minutes: Optional[int] = Field(None, ge=0)


class UserPreferenceSignal(BaseModel):
    """
    What the engine knows about a user for a single request:
    explicitly liked tags, a played-game history, or both.
    """

    liked_tags: List[str] = Field(default_factory=list)
    history: List[PlayedGame] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not clean_tags(self.liked_tags) and not self.history


class ScoredGame(NamedTuple):
    game: GameRecord
    final_score: float
    similarity_component: float
    trend_component: float
    critic_component: float
