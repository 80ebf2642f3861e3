"""
Time-window and item-window pagination.

A single page index is mapped onto either a time range (seconds of video)
or an item range (offset/limit into a list). Both share the same rules:

- ``total_pages`` is ``ceil(remaining / window_size)`` when anything remains
  after the base offset, otherwise 1.
- A window that starts at or beyond the total extent is empty.
- When the total extent is unknown only page 0 at base offset 0 has content,
  and that content is the full, unsliced payload.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

Number = Union[int, float]

WINDOW_SECONDS = 300
ITEMS_PER_PAGE = 25


@dataclass(frozen=True)
class PageWindow:
    page: int
    base_offset: Number
    window_size: Number
    start: Number
    end: Optional[Number]
    total_pages: int
    is_empty: bool
    total_extent: Optional[Number] = None

    @property
    def is_unbounded(self) -> bool:
        """Extent unknown; callers fetch the full payload instead of slicing."""
        return self.total_extent is None

    @property
    def covers_full_payload(self) -> bool:
        """First page of content that fits in a single window."""
        return (
            not self.is_empty
            and self.page == 0
            and self.base_offset == 0
            and (self.total_extent is None or self.total_extent <= self.window_size)
        )

    @property
    def offset(self) -> int:
        return int(self.start)

    @property
    def limit(self) -> int:
        return int(self.window_size)


def count_pages(total_extent: Optional[Number], window_size: Number, base_offset: Number = 0) -> int:
    if total_extent is None:
        return 1
    remaining = max(0, total_extent - base_offset)
    return math.ceil(remaining / window_size) if remaining > 0 else 1


def compute_window(
    page: int,
    base_offset: Number,
    window_size: Number,
    total_extent: Optional[Number],
) -> PageWindow:
    """Map ``page`` onto ``[start, end)`` relative to ``base_offset``.

    ``total_extent`` of None means the extent is not known yet.
    """
    if page < 0:
        raise ValueError(f"page must be >= 0, got {page}")
    if base_offset < 0:
        raise ValueError(f"base_offset must be >= 0, got {base_offset}")
    if window_size <= 0:
        raise ValueError(f"window_size must be > 0, got {window_size}")

    start = base_offset + page * window_size
    total_pages = count_pages(total_extent, window_size, base_offset)

    if total_extent is None:
        return PageWindow(
            page=page,
            base_offset=base_offset,
            window_size=window_size,
            start=start,
            end=None,
            total_pages=total_pages,
            is_empty=not (page == 0 and base_offset == 0),
        )

    end = min(base_offset + (page + 1) * window_size, total_extent)
    is_empty = base_offset >= total_extent or start >= total_extent
    return PageWindow(
        page=page,
        base_offset=base_offset,
        window_size=window_size,
        start=start,
        end=end,
        total_pages=total_pages,
        is_empty=is_empty,
        total_extent=total_extent,
    )


def compute_time_window(page: int, start_time_seconds: Number, duration_seconds: Optional[Number]) -> PageWindow:
    """Five-minute windows over a video.

    A missing or zero duration is treated as unknown, so page 0 at offset 0
    returns the full description instead of an empty one.
    """
    extent = duration_seconds if duration_seconds else None
    return compute_window(page, start_time_seconds, WINDOW_SECONDS, extent)


def compute_item_window(page: int, total_count: Optional[int] = None, page_size: int = ITEMS_PER_PAGE) -> PageWindow:
    """Offset/limit window for list-style pagination.

    Before the total is known (``total_count`` None) the window still
    carries the offset and limit to request.
    """
    window = compute_window(page, 0, page_size, total_count)
    if total_count is None:
        # Unknown totals only affect the page count for lists; any page may hold items.
        return PageWindow(
            page=page,
            base_offset=0,
            window_size=page_size,
            start=window.start,
            end=window.start + page_size,
            total_pages=1,
            is_empty=False,
        )
    return window
