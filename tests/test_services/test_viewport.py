"""Tests for leaves.services.viewport."""

import pytest

from leaves.services.viewport import (
    SCROLLBAR_BEGIN,
    SCROLLBAR_END,
    SCROLLBAR_THUMB,
    ScrollbarGeometry,
    Viewport,
    max_scroll,
    scrollbar,
)


class TestMaxScroll:
    @pytest.mark.parametrize("total, height, expected", [
        (50, 20, 30),
        (20, 20, 0),
        (5, 20, 0),
        (0, 0, 0),
    ])
    def test_max_scroll(self, total, height, expected):
        assert max_scroll(total, height) == expected


class TestScrolling:
    def test_scroll_down_clamps_to_max(self):
        vp = Viewport()
        assert vp.scroll_down(35, 50, 20) == 30

    def test_scroll_down_within_range(self):
        vp = Viewport()
        assert vp.scroll_down(25, 50, 20) == 25
        assert vp.scroll_down(25, 50, 20) == 30

    def test_scroll_down_is_idempotent_at_bottom(self):
        vp = Viewport()
        vp.go_bottom(50, 20)
        assert vp.scroll_down(1, 50, 20) == 30
        assert vp.scroll_down(1, 50, 20) == 30

    def test_scroll_up_floors_at_zero(self):
        vp = Viewport()
        vp.scroll_down(3, 50, 20)
        assert vp.scroll_up(10) == 0
        assert vp.scroll_up(1) == 0

    @pytest.mark.parametrize("start, delta, expected", [
        (5, 10, 5),
        (0, 30, 0),
        (25, 10, 20),
        (30, 5, 25),
    ])
    def test_down_then_up_returns_at_most_to_start(self, start, delta, expected):
        vp = Viewport()
        vp.offset = start
        vp.scroll_down(delta, 50, 20)
        assert vp.scroll_up(delta) == expected
        if start + delta <= max_scroll(50, 20):
            assert vp.offset == start
        else:
            assert vp.offset < start

    def test_short_content_never_scrolls(self):
        vp = Viewport()
        assert vp.scroll_down(5, 10, 20) == 0

    def test_pages(self):
        vp = Viewport()
        assert vp.page_down(50, 20) == 20
        assert vp.page_down(50, 20) == 30
        assert vp.page_up(20) == 10

    def test_top_and_bottom(self):
        vp = Viewport()
        vp.go_bottom(50, 20)
        assert vp.offset == 30
        vp.go_top()
        assert vp.offset == 0

    def test_clamp_after_resize(self):
        vp = Viewport()
        vp.go_bottom(50, 20)
        assert vp.clamp(50, 40) == 10

    def test_reset(self):
        vp = Viewport()
        vp.scroll_down(7, 50, 20)
        vp.reset()
        assert vp.offset == 0


class TestScrollbar:
    def test_none_when_content_fits(self):
        assert scrollbar(20, 20, 0) is None
        assert scrollbar(3, 20, 0) is None

    def test_thumb_at_top(self):
        geo = scrollbar(50, 20, 0)
        assert geo == ScrollbarGeometry(thumb_start=0, thumb_length=8, track_length=18)

    def test_thumb_at_bottom(self):
        geo = scrollbar(50, 20, 30)
        assert geo.thumb_start + geo.thumb_length == geo.track_length

    def test_thumb_midway(self):
        geo = scrollbar(50, 20, 15)
        assert geo.thumb_start == 5

    def test_thumb_never_smaller_than_one(self):
        geo = scrollbar(10_000, 20, 0)
        assert geo.thumb_length == 1

    def test_cells(self):
        cells = scrollbar(50, 20, 0).cells()
        assert len(cells) == 20
        assert cells[0] == SCROLLBAR_BEGIN
        assert cells[-1] == SCROLLBAR_END
        assert cells[1:9] == [SCROLLBAR_THUMB] * 8

    def test_viewport_method_uses_offset(self):
        vp = Viewport()
        vp.go_bottom(50, 20)
        assert vp.scrollbar(50, 20) == scrollbar(50, 20, 30)
