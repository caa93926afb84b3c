from __future__ import annotations

from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def normalize_page_params(page: int, per_page: int) -> Tuple[int, int]:
    """
    Clamp pagination parameters to at least one.
    """
    return max(page, 1), max(per_page, 1)


def paginate(items: Sequence[T], page: int, per_page: int) -> Tuple[List[T], int, int]:
    page, per_page = normalize_page_params(page, per_page)
    offset = (page - 1) * per_page
    return list(items[offset : offset + per_page]), page, per_page
