"""Scroll window arithmetic.

A scrolling panel shows ``page_size`` entries but moves ``step_size``
entries per step, so consecutive windows overlap.
"""

from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def scroll_bounds(page: int, page_size: int, step_size: int, backlog_size: int) -> Tuple[int, int]:
    """Half-open ``[start, end)`` backlog range for scroll position ``page``."""
    start = (page - 1) * step_size
    end = min(start + page_size, backlog_size)
    return start, max(start, end)


def compute_scroll_window(backlog: Sequence[T], page: int, page_size: int, step_size: int) -> List[T]:
    start, end = scroll_bounds(page, page_size, step_size, len(backlog))
    return list(backlog[start:end])


def can_scroll_next(page: int, page_size: int, backlog_size: int, step_size: int) -> bool:
    # Denies once the step after this one would start at or past the
    # backlog's end minus a window, i.e. one step earlier than "window fits".
    return not (page * step_size + page_size >= backlog_size + step_size)


def can_open_scroll(page: int, page_size: int, backlog_size: int, step_size: int) -> bool:
    return page > 0 and page * step_size + page_size <= backlog_size + step_size
