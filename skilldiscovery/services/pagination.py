"""
Result paginator.

Each channel is sliced on its own; the catalog and listing channels are
never merged into a single ranking.
"""

import math
from typing import List, Optional, Sequence, Type, TypeVar

from skilldiscovery.schemas.search import Page

T = TypeVar("T")


def paginate(
    items: Sequence[T],
    page: int,
    page_size: int,
    item_type: Optional[Type[T]] = None,
) -> Page:
    """Slice one ranked channel. `item_type` parametrizes the returned Page."""
    if page < 1:
        raise ValueError("page must be >= 1")
    if page_size < 1:
        raise ValueError("page_size must be >= 1")

    total_count = len(items)
    start = (page - 1) * page_size
    window: List[T] = list(items[start:start + page_size])
    model = Page[item_type] if item_type is not None else Page
    return model(
        items=window,
        total_count=total_count,
        current_page=page,
        page_size=page_size,
        total_pages=math.ceil(total_count / page_size) if total_count else 0,
        has_more=page * page_size < total_count,
    )
