"""The poem body: laid-out lines, a scroll window and a scrollbar."""

from __future__ import annotations

from rich.cells import cell_len
from rich.text import Text
from textual.widget import Widget

from leaves.services.markup import Span
from leaves.services.navigation import Frame
from leaves.ui.theme import get_theme


def styled_line(spans: list[Span]) -> Text:
    """Turn tagged spans into a rich Text with bold/italic styles."""
    line = Text(no_wrap=True, overflow="crop")
    for span in spans:
        style = " ".join(s for s, on in (("bold", span.bold), ("italic", span.italic)) if on)
        line.append(span.text, style=style or None)
    return line


class PoemView(Widget):
    """Shows the visible window of a :class:`Frame`'s lines.

    The frame's lines are already laid out for this widget's size, so the
    view only slices by the scroll offset, right-aligns RTL text and paints
    the scrollbar column.
    """

    DEFAULT_CSS = """
    PoemView {
        width: 1fr;
        height: 1fr;
        border: round $border;
        border-title-color: $accent;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._frame: Frame | None = None
        self._show_scrollbar = True

    def show(self, frame: Frame, *, show_scrollbar: bool = True) -> None:
        self._frame = frame
        self._show_scrollbar = show_scrollbar
        self.border_title = f" {frame.title} " if frame.title else ""
        self.refresh()

    @property
    def content_height(self) -> int:
        return max(1, self.content_size.height)

    @property
    def content_width(self) -> int:
        """Columns for text, one kept back for the scrollbar."""
        return max(1, self.content_size.width - 1)

    def render(self) -> Text:
        frame = self._frame
        if frame is None or frame.version is None:
            return Text("No poem to show.", style=get_theme().muted_text)

        theme = get_theme()
        height = self.content_height
        width = self.content_width
        rtl = frame.version.rtl and not frame.version.vertical
        # Full-width title glyphs take two cells, plus one of spacing.
        title_cells = 3 if frame.title_column else 0
        width = max(1, width - title_cells)

        bar = frame.scrollbar.cells() if frame.scrollbar and self._show_scrollbar else []
        out = Text(no_wrap=True, overflow="crop")
        for row in range(height):
            index = frame.scroll_offset + row
            line = styled_line(frame.spans[index]) if index < len(frame.spans) else Text()
            if index < frame.epigraph_rows:
                line.stylize(f"italic {theme.epigraph}")
            pad = max(0, width - line.cell_len)
            if rtl:
                line = Text(" " * pad) + line
            else:
                line.append(" " * pad)
            line.truncate(width)
            if title_cells:
                glyph = frame.title_column[row] if row < len(frame.title_column) else ""
                cell = f" {glyph}"
                line.append(cell + " " * max(0, title_cells - cell_len(cell)), style=theme.heading)
            if row < len(bar):
                line.append(bar[row], style=theme.scrollbar)
            if row:
                out.append("\n")
            out.append_text(line)
        return out
