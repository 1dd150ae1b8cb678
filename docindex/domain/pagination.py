"""Pagination descriptors for the static-site build step."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, asdict
from typing import Any, TypeVar

from docindex.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 9

T = TypeVar("T")

_leading_int_re = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True, slots=True)
class Pagination:
    """Slice bounds for one page of a document listing.

    Attributes:
        count: Total number of items being paginated
        page: Current page, 1-based
        per_page: Items per page
        total_pages: Number of pages needed for ``count`` items
        start: Index of the first item on the page
        end: Index one past the last item on the page
    """

    count: int
    page: int
    per_page: int
    total_pages: int
    start: int
    end: int

    def to_dict(self) -> dict:
        return asdict(self)


def _parse_page(page: Any) -> int:
    # Route params arrive as strings; anything falsy or non-numeric means page 1.
    if isinstance(page, bool):
        return 1
    if isinstance(page, int):
        return page or 1
    if isinstance(page, float):
        return int(page) if math.isfinite(page) and int(page) else 1
    # Leading digits win, so "2", "2.0" and "2/" are all page 2.
    match = _leading_int_re.match(str(page))
    return (int(match.group(1)) or 1) if match else 1


def _parse_count(count: Any) -> int:
    if isinstance(count, int) and not isinstance(count, bool):
        return count
    if isinstance(count, str) and count.strip().isdigit():
        return int(count.strip())
    raise ConfigurationError("count must be a non-negative integer", item=count)


def build_pagination(count: int, page: Any = 1, per_page: int = DEFAULT_PER_PAGE) -> Pagination:
    """Compute the pagination descriptor, raising on invalid parameters."""
    count = _parse_count(count)
    if count < 0:
        raise ConfigurationError("count must be a non-negative integer", item=count)
    if not isinstance(per_page, int) or isinstance(per_page, bool) or per_page < 1:
        raise ConfigurationError("per_page must be a positive integer", item=per_page)

    current = _parse_page(page)
    if current < 1:
        raise ConfigurationError("page must be 1 or greater", item=page)

    start = (current - 1) * per_page
    return Pagination(
        count=count,
        page=current,
        per_page=per_page,
        total_pages=math.ceil(count / per_page),
        start=start,
        end=start + per_page,
    )


def compute_pagination(count: int, page: Any = 1, per_page: int = DEFAULT_PER_PAGE) -> Pagination | None:
    """Compute the pagination descriptor for ``count`` items.

    Args:
        count: Total number of items to paginate
        page: Current page (int or numeric string, usually a route param)
        per_page: Number of items per page

    Returns:
        Pagination descriptor, or None when the parameters are invalid
    """
    try:
        return build_pagination(count, page, per_page)
    except ConfigurationError as exc:
        logger.warning("Unable to compute pagination: %s", exc)
        return None


def paginate(items: Sequence[T], pagination: Pagination) -> list[T]:
    """Return the items that fall on the described page."""
    return list(items[pagination.start:pagination.end])
