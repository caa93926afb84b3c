from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from gamereco.models import GameRecord
from gamereco.services.recommendation.retrieval import load_candidates
from gamereco.utils.prepare_catalog import load_catalog_file

logger = logging.getLogger(__name__)


class GameRepository:
    """
    Read-only, in-memory view of the game catalog.
    Encapsulates the collection cap, text filtering and exclusion concerns.
    """

    def __init__(self, games: Sequence[GameRecord], limit: Optional[int] = None) -> None:
        games = list(games)
        if limit is not None and limit >= 0:
            games = games[:limit]
        self._games: tuple[GameRecord, ...] = tuple(games)
        self._by_id = {game.id: game for game in self._games}

    @classmethod
    def from_file(cls, path: str, limit: Optional[int] = None) -> "GameRepository":
        games = load_catalog_file(path)
        logger.info("Loaded %d games from %s", len(games), path)
        return cls(games, limit=limit)

    def count(self) -> int:
        return len(self._games)

    def all(self) -> List[GameRecord]:
        return list(self._games)

    def get_by_id(self, game_id: str) -> Optional[GameRecord]:
        return self._by_id.get(game_id)

    def find(
        self,
        query: Optional[str] = None,
        excluded_ids: Optional[Iterable[str]] = None,
        owned_platform_ids: Optional[Iterable[int]] = None,
    ) -> List[GameRecord]:
        return load_candidates(
            self._games,
            query=query,
            excluded_ids=excluded_ids,
            owned_platform_ids=owned_platform_ids,
        )
