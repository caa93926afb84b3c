import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from gamereco.models import PlayedGame, UserPreferenceSignal
from gamereco.repositories.game_repository import GameRepository
from gamereco.services.recommendation import (
    ScoringWeights,
    composite_rank,
    game_to_dict,
    paginate,
    scored_game_to_dict,
    vectorize_user,
)

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_K = 12
DEFAULT_PERSONAL_K = 20
DEFAULT_BROWSE_PER_PAGE = 15
HISTORY_SAMPLE_SIZE = 50
TRENDING_REASON = "trending"


def sample_history(history: Iterable[PlayedGame], limit: Optional[int]) -> List[PlayedGame]:
    """Keep the most played entries, ties in their original order."""
    ordered = sorted(history, key=lambda played: played.playtime_minutes or 0, reverse=True)
    if limit is None:
        return ordered
    return ordered[: max(limit, 0)]


class RecommendationService:
    def __init__(
        self,
        repository: GameRepository,
        weights: Optional[ScoringWeights] = None,
        search_k: int = DEFAULT_SEARCH_K,
        personal_k: int = DEFAULT_PERSONAL_K,
        browse_per_page: int = DEFAULT_BROWSE_PER_PAGE,
        history_sample_size: Optional[int] = HISTORY_SAMPLE_SIZE,
    ) -> None:
        self.repository = repository
        self.weights = weights or ScoringWeights()
        self.search_k = search_k
        self.personal_k = personal_k
        self.browse_per_page = browse_per_page
        self.history_sample_size = history_sample_size

    @classmethod
    def from_config(cls, config: Any) -> "RecommendationService":
        """Build the service from a Config class (or any object with the same attributes)."""
        repository = GameRepository.from_file(config.CATALOG_PATH, limit=config.CATALOG_LIMIT)
        return cls(
            repository=repository,
            weights=config.scoring_weights(),
            search_k=config.DEFAULT_SEARCH_K,
            personal_k=config.DEFAULT_PERSONAL_K,
            browse_per_page=config.DEFAULT_BROWSE_PER_PAGE,
            history_sample_size=config.HISTORY_SAMPLE_SIZE,
        )

    def recommend_by_tags(
        self,
        term: str = "",
        liked: Sequence[str] = (),
        k: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Tag search: rank games matching the term by the picked tags."""
        top_k = self.search_k if k is None else k
        signal = UserPreferenceSignal(liked_tags=list(liked))
        user_vector = vectorize_user(signal, self.weights)

        candidates = self.repository.find(query=term)
        logger.info("[Tag Search] %d candidates for term %r and %d tags", len(candidates), term, len(liked))

        ranked = composite_rank(candidates, user_vector, top_k, self.weights)
        return [scored_game_to_dict(scored, user_vector) for scored in ranked]

    def recommend_personal(
        self,
        term: str = "",
        liked_tags: Sequence[str] = (),
        history: Sequence[PlayedGame] = (),
        owned_app_ids: Iterable[int] = (),
        k: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Personalized recommendations from liked tags and play history.
        Games the user already owns are never recommended. Without any
        preference data and without a term, falls back to trending games.
        """
        top_k = self.personal_k if k is None else k
        played_games = [PlayedGame.model_validate(played) for played in history]
        signal = UserPreferenceSignal(
            liked_tags=list(liked_tags),
            history=sample_history(played_games, self.history_sample_size),
        )

        if signal.is_empty() and not (term or "").strip():
            logger.info("[Personal] No preference data, falling back to trending games")
            return self.recommend_trending(top_k, owned_platform_ids=owned_app_ids)

        user_vector = vectorize_user(signal, self.weights)
        candidates = self.repository.find(query=term, owned_platform_ids=owned_app_ids)
        logger.info(
            "[Personal] %d candidates, user vector with %d tags",
            len(candidates),
            len(user_vector),
        )

        ranked = composite_rank(candidates, user_vector, top_k, self.weights)
        return [scored_game_to_dict(scored, user_vector) for scored in ranked]

    def recommend_trending(
        self,
        k: Optional[int] = None,
        owned_platform_ids: Optional[Iterable[int]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Most trending games first; equal trends keep catalog order.
        Games without a trend signal are left out, as are owned games.
        """
        top_k = self.personal_k if k is None else k
        if top_k < 0:
            raise ValueError(f"k must be non-negative, got {top_k}")

        candidates = self.repository.find(owned_platform_ids=owned_platform_ids)
        games = sorted(
            (game for game in candidates if game.trend_signal > 0),
            key=lambda game: game.trend_signal,
            reverse=True,
        )
        results = []
        for game in games[:top_k]:
            payload = game_to_dict(game)
            payload["match_reason"] = TRENDING_REASON
            results.append(payload)
        return results

    def browse_catalog(
        self,
        page: int = 1,
        per_page: Optional[int] = None,
        liked: Sequence[str] = (),
    ) -> Dict[str, Any]:
        """
        Whole catalog ordered by composite score, one page at a time.
        """
        per_page = self.browse_per_page if per_page is None else per_page
        user_vector = vectorize_user(UserPreferenceSignal(liked_tags=list(liked)), self.weights)

        candidates = self.repository.all()
        ranked = composite_rank(candidates, user_vector, len(candidates), self.weights)
        page_items, normalized_page, normalized_per_page = paginate(ranked, page, per_page)

        return {
            "page": normalized_page,
            "per_page": normalized_per_page,
            "total": len(ranked),
            "games": [scored_game_to_dict(scored, user_vector) for scored in page_items],
        }

    def get_game(self, game_id: str) -> Optional[Dict[str, Any]]:
        game = self.repository.get_by_id(game_id)
        if game is None:
            return None
        return game_to_dict(game)
