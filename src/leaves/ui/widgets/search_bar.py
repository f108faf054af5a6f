"""Query line shown above the search results."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget

from leaves.ui.theme import get_theme


class SearchBar(Widget):
    DEFAULT_CSS = """
    SearchBar {
        dock: top;
        height: 1;
        width: 1fr;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._query = ""
        self._count = 0

    def set_query(self, query: str, count: int) -> None:
        self._query = query
        self._count = count
        self.refresh()

    def render(self) -> Text:
        theme = get_theme()
        result = Text()
        result.append("/ ", style=theme.accent)
        result.append(self._query)
        result.append("▏", style=theme.accent)
        if self._query:
            result.append(f"  {self._count} match{'es' if self._count != 1 else ''}", style=theme.muted_text)
        return result
