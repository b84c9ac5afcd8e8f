"""
Pagination and ordering helpers shared by every list query.

Query-string values arrive as raw strings; anything missing, non-numeric or
non-positive falls back to the default instead of failing the request.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import case, func
from sqlalchemy.orm import Query

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def coerce_positive_int(value: Any, default: int) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def normalize_order(value: Optional[str], default: str = "desc") -> str:
    order = (value or "").strip().lower()
    if order in ("asc", "desc"):
        return order
    if order == "dsc":
        return "desc"
    return default


@dataclass(frozen=True)
class PageParams:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_raw(cls, page: Any = None, limit: Any = None, *, default_limit: int = DEFAULT_LIMIT) -> "PageParams":
        return cls(
            page=coerce_positive_int(page, DEFAULT_PAGE),
            limit=min(coerce_positive_int(limit, default_limit), MAX_LIMIT),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def total_pages(total_items: int, limit: int) -> int:
    return math.ceil(total_items / limit) if limit and limit > 0 else 0


def paginate(query: Query, params: PageParams) -> Tuple[List[Any], int]:
    """Return (items for the requested page, total matching rows)."""
    total = query.order_by(None).count()
    items = query.offset(params.offset).limit(params.limit).all()
    return items, total


def page_payload(items: Sequence[Any], total: int, params: PageParams) -> Dict[str, Any]:
    return {
        "success": True,
        "data": list(items),
        "page": params.page,
        "limit": params.limit,
        "total_pages": total_pages(total, params.limit),
        "total_items": total,
    }


def ordered(query: Query, column, order: str, tiebreak=None) -> Query:
    """Apply `order` to `column`, with `tiebreak` (usually the id) in the same direction."""
    direction = (lambda c: c.asc()) if order == "asc" else (lambda c: c.desc())
    clauses = [direction(column)]
    if tiebreak is not None:
        clauses.append(direction(tiebreak))
    return query.order_by(*clauses)


def relevance_rank(column, term: str):
    """
    Rank expression for title searches: exact match 0, prefix 1, substring 2.

    Sorting ascending on this expression yields relevance-descending order.
    """
    lowered = func.lower(column)
    needle = term.lower()
    return case(
        (lowered == needle, 0),
        (lowered.like(f"{needle}%"), 1),
        else_=2,
    )
