"""Reusable widgets for the TUI."""

from __future__ import annotations

from leaves.ui.widgets.entry_list import EntryList
from leaves.ui.widgets.poem_view import PoemView
from leaves.ui.widgets.search_bar import SearchBar

__all__ = ["EntryList", "PoemView", "SearchBar"]
