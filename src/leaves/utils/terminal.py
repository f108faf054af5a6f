"""Terminal size detection."""

from __future__ import annotations

import shutil

# Rows taken by the border and the status bar around the poem.
CHROME_ROWS = 3


def get_terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size(fallback=(80, 24))
    return size.columns, size.lines


def content_height(rows: int | None = None) -> int:
    """Rows available to poem text on a terminal with *rows* lines."""
    if rows is None:
        _, rows = get_terminal_size()
    return max(1, rows - CHROME_ROWS)
