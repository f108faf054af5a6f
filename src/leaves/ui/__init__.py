"""UI components for leaves."""

from __future__ import annotations

from leaves.ui.status_bar import StatusBar
from leaves.ui.theme import ThemeColors, get_theme

__all__ = ["ThemeColors", "get_theme", "StatusBar"]
