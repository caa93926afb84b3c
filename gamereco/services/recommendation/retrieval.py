from __future__ import annotations

import re
from typing import Iterable, List, Optional

from gamereco.models import GameRecord


def _title_matcher(query: Optional[str]):
    term = (query or "").strip()
    if not term:
        return None
    return re.compile(re.escape(term), re.IGNORECASE)


def load_candidates(
    catalog: Iterable[GameRecord],
    query: Optional[str] = None,
    excluded_ids: Optional[Iterable[str]] = None,
    owned_platform_ids: Optional[Iterable[int]] = None,
) -> List[GameRecord]:
    """
    Select the working set of games to score, keeping catalog order.

    A non-empty query keeps games whose title or localized title contains it
    (case-insensitive, literal). Tags are never used to filter here. Excluded
    game ids and already-owned platform ids are always dropped.
    """
    matcher = _title_matcher(query)
    excluded = set(excluded_ids or ())
    owned = set(owned_platform_ids or ())

    candidates: List[GameRecord] = []
    for game in catalog:
        if game.id in excluded:
            continue
        if game.platform_id is not None and game.platform_id in owned:
            continue
        if matcher is not None and not (
            matcher.search(game.title)
            or (game.title_localized and matcher.search(game.title_localized))
        ):
            continue
        candidates.append(game)
    return candidates
