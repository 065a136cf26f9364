"""Page window arithmetic for paginated panels."""

import math
from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def pages_count(backlog_size: int, page_size: int) -> int:
    """Number of pages needed for ``backlog_size`` entries.

    An empty backlog still has one (empty) page.
    """
    if page_size <= 0:
        page_size = 1
    return max(1, math.ceil(backlog_size / page_size))


def page_bounds(page: int, page_size: int, backlog_size: int) -> Tuple[int, int]:
    """Half-open ``[start, end)`` backlog range shown on ``page``."""
    start = (page - 1) * page_size
    end = min(page * page_size, backlog_size)
    return start, max(start, end)


def compute_page_window(backlog: Sequence[T], page: int, page_size: int, step_size: int = 0) -> List[T]:
    """Backlog entries shown on ``page``. ``step_size`` is unused for pages."""
    start, end = page_bounds(page, page_size, len(backlog))
    return list(backlog[start:end])


def can_page_next(page: int, page_size: int, backlog_size: int, step_size: int = 0) -> bool:
    return page + 1 <= pages_count(backlog_size, page_size)


def can_open_page(page: int, page_size: int, backlog_size: int, step_size: int = 0) -> bool:
    return 0 < page <= pages_count(backlog_size, page_size)
