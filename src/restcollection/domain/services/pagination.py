"""Offset/limit pagination arithmetic.

The fetching operations (next, prev, page) and the URL-only operations
(url_next, url_prev, url_page) both go through ``paginate`` so that the
offsets they compute can never diverge.
"""

from enum import Enum
from typing import Any

from restcollection.core.exceptions import PaginationError

NO_LIMIT_MESSAGE = "No limit defined in parameters"


def _to_int(name: str, value: Any) -> int:
    """Convert a pagination parameter to int, raising PaginationError if it is not numeric."""
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise PaginationError(f"Pagination parameter '{name}' is not an integer: {value!r}") from e


class Direction(str, Enum):
    """Pagination moves supported by a collection."""

    NEXT = "next"
    PREV = "prev"
    PAGE = "page"


def current_offset(params: dict[str, Any]) -> int:
    """Return the offset in params as an int, defaulting to 0."""
    offset = params.get("offset")
    if offset is None or offset == "":
        return 0
    return _to_int("offset", offset)


def compute_offset(direction: Direction, offset: int, limit: int, page: int | None = None) -> int:
    """Compute the offset a pagination move lands on.

    Args:
        direction: The move to make.
        offset: Current offset.
        limit: Page size.
        page: 1-indexed page number, required for ``Direction.PAGE``.

    Returns:
        The new offset. Not clamped; prev from offset 0 goes negative.
    """
    if direction is Direction.NEXT:
        return offset + limit
    if direction is Direction.PREV:
        return offset - limit
    if page is None:
        raise ValueError("A page number is required to compute a page offset")
    return limit * (int(page) - 1)


def paginate(
    params: dict[str, Any],
    direction: Direction,
    count: int | None = None,
    page: int | None = None,
) -> dict[str, Any]:
    """Return a copy of params moved by one pagination step.

    Args:
        params: Current parameters. Not modified.
        direction: The move to make.
        count: Optional page size overriding ``params["limit"]``.
        page: 1-indexed page number for ``Direction.PAGE``.

    Returns:
        New parameters with ``limit`` and ``offset`` set.

    Raises:
        PaginationError: If params carry no limit, or a limit, offset,
            count or page is not an integer.
    """
    if params.get("limit") is None:
        raise PaginationError(NO_LIMIT_MESSAGE)

    paged = dict(params)
    if count is not None:
        paged["limit"] = _to_int("count", count)
    limit = _to_int("limit", paged["limit"])
    if page is not None:
        page = _to_int("page", page)

    paged["offset"] = compute_offset(direction, current_offset(paged), limit, page)
    return paged


def preview(
    params: dict[str, Any],
    direction: Direction,
    count: int | None = None,
    page: int | None = None,
) -> dict[str, Any] | None:
    """Return paginated params for a URL preview, or None if no limit resolves.

    Unlike ``paginate``, a ``count`` alone is enough to resolve the limit,
    and a falsy limit means there is nothing to paginate.

    Raises:
        PaginationError: If a resolved limit or the offset is not an integer.
    """
    limit = count or params.get("limit")
    if not limit:
        return None
    return paginate({**params, "limit": _to_int("limit", limit)}, direction, page=page)
