"""
Offset/limit pagination envelope shared by list endpoints.
"""

import math
import re
from typing import Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Page(BaseModel, Generic[T]):
    """``{items, page, limit, totalItems, totalPages}``"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: List[T]
    page: int
    limit: int
    total_items: int
    total_pages: int


def parse_positive_int(value: Optional[str], default: int) -> int:
    """
    Read a query value as a positive integer.

    Only the leading digits count, so ``"2abc"`` reads as 2 and ``"5.5"`` as 5.
    Absent, non-numeric, zero, and negative values fall back to ``default``.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if match is None:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def paginate(items: Sequence[T], page: int, limit: int, item_type: Type[T]) -> Page[T]:
    """
    Slice one page out of a full collection into a ``Page[item_type]``.

    A page past the end yields an empty ``items`` list, not an error.
    """
    total_items = len(items)
    start = (page - 1) * limit
    return Page[item_type](  # type: ignore[valid-type]
        items=list(items[start:start + limit]),
        page=page,
        limit=limit,
        total_items=total_items,
        total_pages=math.ceil(total_items / limit),
    )
