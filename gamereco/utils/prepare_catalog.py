import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from gamereco.errors import CatalogError
from gamereco.models import GameRecord, PriceSnapshot

logger = logging.getLogger(__name__)


def _price_from_raw(price_info: Optional[Dict[str, Any]]) -> Optional[PriceSnapshot]:
    if not price_info:
        return None
    return PriceSnapshot(
        current_price=price_info.get("current_price"),
        regular_price=price_info.get("regular_price"),
        discount_percent=price_info.get("discount_percent") or 0,
        is_free=bool(price_info.get("isFree", False)),
    )


def raw_game_to_record(game: Dict[str, Any]) -> GameRecord:
    """
    Convert one stored catalog entry into a GameRecord.

    Stored entries use the collector's field names (slug, steam_appid,
    title_ko, smart_tags, trend_score, metacritic_score, price_info, ...).
    Missing trend and critic scores default to 0.
    """
    return GameRecord(
        id=game.get("slug") or "",
        title=game.get("title", ""),
        title_localized=game.get("title_ko") or None,
        tags=game.get("smart_tags") or [],
        trend_signal=game.get("trend_score") or 0,
        critic_score=game.get("metacritic_score") or 0,
        price=_price_from_raw(game.get("price_info")),
        platform_id=game.get("steam_appid"),
        image_url=game.get("main_image"),
        play_time=game.get("play_time"),
    )


def prepare_game_records(raw_games: List[Dict[str, Any]]) -> List[GameRecord]:
    """
    Prepares a list of GameRecords from the raw catalog entries.

    Args:
        raw_games (list[dict]): Catalog entries, in storage order.

    Returns:
        list[GameRecord]: Validated records, in the same order.

    Raises:
        CatalogError: If an entry is invalid or an id appears twice.
    """
    records: List[GameRecord] = []
    seen_ids: set[str] = set()

    for position, game in enumerate(raw_games):
        try:
            record = raw_game_to_record(game)
        except (ValidationError, AttributeError) as e:
            raise CatalogError(f"Invalid catalog entry at position {position}: {e}") from e

        if record.id in seen_ids:
            raise CatalogError(f"Duplicate game id in catalog: {record.id!r}")
        seen_ids.add(record.id)
        records.append(record)

    logger.info("Prepared %d game records", len(records))
    return records


def load_catalog_file(path: str) -> List[GameRecord]:
    """Read a JSON catalog file (a list of stored game entries)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Could not read catalog file {path!r}: {e}") from e

    if not isinstance(raw, list):
        raise CatalogError(f"Catalog file {path!r} must contain a JSON list")
    return prepare_game_records(raw)
