"""Tests for time-window and item-window pagination."""

import pytest

from cloudglue_mcp.core.pagination import (
    ITEMS_PER_PAGE,
    WINDOW_SECONDS,
    compute_item_window,
    compute_time_window,
    compute_window,
    count_pages,
)


class TestComputeWindow:
    """Window arithmetic shared by time and item pagination."""

    @pytest.mark.parametrize("window_size", [WINDOW_SECONDS, ITEMS_PER_PAGE])
    @pytest.mark.parametrize("total", [1, 24, 25, 26, 299, 300, 301, 1000, 4321])
    @pytest.mark.parametrize("base_offset", [0, 1, 299, 300, 1000])
    def test_non_empty_pages_cover_extent_exactly(self, window_size, total, base_offset) -> None:
        """Every unit after the base offset lands in exactly one non-empty page."""
        first = compute_window(0, base_offset, window_size, total)
        windows = [compute_window(page, base_offset, window_size, total) for page in range(first.total_pages + 1)]
        covered = []
        for w in windows:
            if not w.is_empty:
                covered.extend(range(int(w.start), int(w.end)))
        assert covered == list(range(base_offset, total))
        assert windows[-1].is_empty
        if base_offset < total:
            assert not any(w.is_empty for w in windows[:-1])

    def test_page_past_end_is_empty(self) -> None:
        window = compute_window(4, 0, 300, 1000)
        assert window.is_empty
        assert window.total_pages == 4

    def test_base_offset_shifts_window(self) -> None:
        window = compute_window(1, 100, 300, 1000)
        assert (window.start, window.end) == (400, 700)
        assert window.total_pages == 3

    def test_base_offset_beyond_extent(self) -> None:
        window = compute_window(0, 1200, 300, 1000)
        assert window.is_empty
        assert window.total_pages == 1

    def test_zero_extent_has_one_empty_page(self) -> None:
        window = compute_window(0, 0, 25, 0)
        assert window.is_empty
        assert window.total_pages == 1

    def test_unknown_extent_first_page_holds_everything(self) -> None:
        window = compute_window(0, 0, 300, None)
        assert not window.is_empty
        assert window.is_unbounded
        assert window.covers_full_payload
        assert window.total_pages == 1

    def test_unknown_extent_later_pages_are_empty(self) -> None:
        assert compute_window(1, 0, 300, None).is_empty
        assert compute_window(0, 60, 300, None).is_empty

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"page": -1, "base_offset": 0, "window_size": 300},
            {"page": 0, "base_offset": -5, "window_size": 300},
            {"page": 0, "base_offset": 0, "window_size": 0},
        ],
    )
    def test_invalid_inputs_are_rejected(self, kwargs) -> None:
        with pytest.raises(ValueError):
            compute_window(total_extent=100, **kwargs)


class TestTimeWindow:
    """Five-minute windows over video durations."""

    def test_third_page_of_long_video(self) -> None:
        window = compute_time_window(2, 0, 1000)
        assert (window.start, window.end) == (600, 900)
        assert window.total_pages == 4
        assert not window.covers_full_payload

    def test_last_page_is_clamped_to_duration(self) -> None:
        window = compute_time_window(3, 0, 1000)
        assert (window.start, window.end) == (900, 1000)

    def test_short_video_first_page_is_full_payload(self) -> None:
        window = compute_time_window(0, 0, 120)
        assert window.covers_full_payload
        assert window.total_pages == 1

    def test_start_offset_first_page_is_ranged(self) -> None:
        window = compute_time_window(0, 30, 120)
        assert not window.covers_full_payload
        assert (window.start, window.end) == (30, 120)

    def test_zero_duration_is_unknown(self) -> None:
        window = compute_time_window(0, 0, 0)
        assert window.is_unbounded
        assert not window.is_empty


class TestItemWindow:
    """Offset/limit windows for lists."""

    def test_offset_and_limit(self) -> None:
        window = compute_item_window(3)
        assert window.offset == 75
        assert window.limit == 25

    def test_unknown_total_is_never_empty(self) -> None:
        window = compute_item_window(7)
        assert not window.is_empty
        assert window.total_pages == 1

    def test_known_total(self) -> None:
        window = compute_item_window(1, 60)
        assert (window.start, window.end) == (25, 50)
        assert window.total_pages == 3


@pytest.mark.parametrize(
    "total, size, expected",
    [(None, 25, 1), (0, 25, 1), (25, 25, 1), (26, 25, 2), (1000, 300, 4)],
)
def test_count_pages(total, size, expected) -> None:
    assert count_pages(total, size) == expected
