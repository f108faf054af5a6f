"""A selectable list that keeps its cursor in view."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget

from leaves.services.navigation import Frame
from leaves.ui.theme import get_theme
from leaves.utils.formatting import truncate


def visible_window(cursor: int | None, count: int, height: int) -> int:
    """First row to draw so that *cursor* is on screen, roughly centred."""
    if height <= 0 or count <= height or cursor is None:
        return 0
    return min(max(0, cursor - height // 2), count - height)


class EntryList(Widget):
    """Renders a list-mode :class:`Frame`: items with the cursor highlighted."""

    DEFAULT_CSS = """
    EntryList {
        width: 1fr;
        height: 1fr;
        border: round $border;
        border-title-color: $accent;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._items: list[str] = []
        self._cursor: int | None = None
        self._empty_text = "Nothing here."

    def show(self, frame: Frame, *, empty_text: str = "Nothing here.") -> None:
        self._items = frame.items
        self._cursor = frame.cursor
        self._empty_text = empty_text
        self.border_title = f" {frame.title} " if frame.title else ""
        self.refresh()

    def render(self) -> Text:
        theme = get_theme()
        if not self._items:
            return Text(self._empty_text, style=theme.muted_text)

        height = max(1, self.content_size.height)
        width = max(1, self.content_size.width)
        start = visible_window(self._cursor, len(self._items), height)

        out = Text(no_wrap=True, overflow="crop")
        for row, item in enumerate(self._items[start:start + height]):
            if row:
                out.append("\n")
            label = truncate(item, width).ljust(width)
            if start + row == self._cursor:
                out.append(label, style=f"{theme.selected_fg} on {theme.selected_bg}")
            else:
                out.append(label, style=theme.foreground)
        return out
