from __future__ import annotations

from typing import Any, Dict, List, Optional

from gamereco.models import GameRecord, PriceSnapshot, ScoredGame
from gamereco.services.recommendation.vectorizer import TagVector


FREE_LABEL = "무료"
UNKNOWN_PRICE_LABEL = "가격 정보 없음"
UNKNOWN_PLAY_TIME_LABEL = "정보 없음"

HIDDEN_GEM_MIN_CRITIC_SCORE = 85
HIDDEN_GEM_MAX_TREND = 1000


def format_price(price: Optional[PriceSnapshot]) -> str:
    if price is None:
        return UNKNOWN_PRICE_LABEL
    if price.is_free or price.current_price == 0:
        return FREE_LABEL
    if price.current_price is not None:
        return f"₩{price.current_price:,.0f}"
    return UNKNOWN_PRICE_LABEL


def is_hidden_gem(game: GameRecord) -> bool:
    """
    Well reviewed but rarely watched or played.
    """
    return (
        game.critic_score >= HIDDEN_GEM_MIN_CRITIC_SCORE
        and game.trend_signal < HIDDEN_GEM_MAX_TREND
    )


def matched_tags(game: GameRecord, user_vector: Optional[TagVector]) -> List[str]:
    """
    Game tags the user cares about, strongest preference first.
    """
    if not user_vector:
        return []
    hits = [tag for tag in game.tags if user_vector.get(tag, 0.0) > 0]
    return sorted(hits, key=lambda tag: user_vector[tag], reverse=True)


def _base_game_payload(game: GameRecord) -> Dict[str, Any]:
    """
    Extract the common payload used across recommendation responses.
    """
    return {
        "id": game.id,
        "appid": game.platform_id,
        "name": game.title_localized or game.title,
        "title": game.title,
        "thumb": game.image_url,
        "price": format_price(game.price),
        "discount_percent": game.price.discount_percent if game.price else 0,
        "playtime": game.play_time or UNKNOWN_PLAY_TIME_LABEL,
        "tags": list(game.tags),
        "critic_score": game.critic_score,
        "trend": game.trend_signal,
        "hidden_gem": is_hidden_gem(game),
    }


def game_to_dict(game: GameRecord) -> Dict[str, Any]:
    """
    Map a catalog record to the public game representation.
    """
    return _base_game_payload(game)


def scored_game_to_dict(
    scored: ScoredGame,
    user_vector: Optional[TagVector] = None,
) -> Dict[str, Any]:
    """
    Map a ranked game to the recommendation representation, including the
    score components behind it.
    """
    payload = _base_game_payload(scored.game)
    payload["score"] = round(scored.final_score * 100)
    payload["final_score"] = scored.final_score
    payload["components"] = {
        "similarity": scored.similarity_component,
        "trend": scored.trend_component,
        "critic": scored.critic_component,
    }
    payload["matched_tags"] = matched_tags(scored.game, user_vector)
    return payload
