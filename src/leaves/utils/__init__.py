"""Utility modules."""

from __future__ import annotations

from leaves.utils.bidi import has_rtl, reorder_rtl_line
from leaves.utils.formatting import (
    format_byline,
    format_count_label,
    format_language,
    language_name,
    truncate,
)
from leaves.utils.terminal import content_height, get_terminal_size

__all__ = [
    "has_rtl",
    "reorder_rtl_line",
    "format_byline",
    "format_count_label",
    "format_language",
    "language_name",
    "truncate",
    "content_height",
    "get_terminal_size",
]
