"""Scroll state and scrollbar geometry for the poem viewport."""

from __future__ import annotations

from dataclasses import dataclass

# Glyphs drawn at either end of the scrollbar track.
SCROLLBAR_BEGIN = "▲"
SCROLLBAR_END = "▼"
SCROLLBAR_THUMB = "▐"
SCROLLBAR_TRACK = "│"


def max_scroll(total_lines: int, viewport_height: int) -> int:
    return max(0, total_lines - viewport_height)


@dataclass(frozen=True)
class ScrollbarGeometry:
    """Where to draw the thumb inside a vertical scrollbar.

    ``thumb_start`` counts rows from the top of the track interior, which
    excludes the two endpoint glyphs; ``track_length`` is that interior's
    height.
    """

    thumb_start: int
    thumb_length: int
    track_length: int

    def cells(self) -> list[str]:
        """The full column, endpoints included, one glyph per row."""
        track = [
            SCROLLBAR_THUMB if self.thumb_start <= i < self.thumb_start + self.thumb_length else SCROLLBAR_TRACK
            for i in range(self.track_length)
        ]
        return [SCROLLBAR_BEGIN, *track, SCROLLBAR_END]


def scrollbar(total_lines: int, viewport_height: int, scroll_offset: int) -> ScrollbarGeometry | None:
    """Compute scrollbar geometry, or ``None`` when everything fits."""
    if viewport_height <= 0 or total_lines <= viewport_height:
        return None

    track = max(0, viewport_height - 2)
    thumb = max(1, round(viewport_height * viewport_height / total_lines))
    thumb = min(thumb, track) if track else 0

    limit = max_scroll(total_lines, viewport_height)
    offset = min(max(0, scroll_offset), limit)
    start = round(offset / limit * (track - thumb)) if limit else 0
    return ScrollbarGeometry(thumb_start=start, thumb_length=thumb, track_length=track)


class Viewport:
    """Vertical scroll offset, clamped to the content it shows."""

    def __init__(self) -> None:
        self.offset: int = 0

    def scroll_up(self, delta: int = 1) -> int:
        self.offset = max(0, self.offset - delta)
        return self.offset

    def scroll_down(self, delta: int, total_lines: int, viewport_height: int) -> int:
        self.offset = min(max_scroll(total_lines, viewport_height), self.offset + delta)
        return self.offset

    def page_up(self, viewport_height: int) -> int:
        return self.scroll_up(max(1, viewport_height))

    def page_down(self, total_lines: int, viewport_height: int) -> int:
        return self.scroll_down(max(1, viewport_height), total_lines, viewport_height)

    def go_top(self) -> int:
        self.offset = 0
        return self.offset

    def go_bottom(self, total_lines: int, viewport_height: int) -> int:
        self.offset = max_scroll(total_lines, viewport_height)
        return self.offset

    def clamp(self, total_lines: int, viewport_height: int) -> int:
        """Pull the offset back inside the content after a resize or re-layout."""
        self.offset = min(self.offset, max_scroll(total_lines, viewport_height))
        return self.offset

    def reset(self) -> None:
        """Called whenever the active mode changes."""
        self.offset = 0

    def scrollbar(self, total_lines: int, viewport_height: int) -> ScrollbarGeometry | None:
        return scrollbar(total_lines, viewport_height, self.offset)
