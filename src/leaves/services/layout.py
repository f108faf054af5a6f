"""Text layout: turn a poem version into display lines for a viewport.

The pipeline is epigraph prefix, then a script transform picked by the
version's ``(vertical, rtl)`` flags:

* horizontal LTR -- markup is normalized, lines otherwise pass through;
* horizontal RTL -- markup is normalized, then each line is reordered
  with the Unicode Bidirectional Algorithm (one paragraph per line);
* vertical -- the raw text, markers included, is treated as a character
  grid and transposed so characters run top-to-bottom within a column.
  Markers are not parsed there.  When the longest line does not fit in
  the viewport height, lines are cut into height-sized chunks first, and
  RTL text lays its columns out right-to-left.

Everything here is pure: the same version and viewport always produce the
same lines.
"""

from __future__ import annotations

import re

from rich.cells import cell_len, get_character_cell_size

from leaves.models import Version
from leaves.services.markup import Span, normalize_markup, spans_for_lines
from leaves.utils.bidi import reorder_rtl_line

# Full-width space used to pad vertical columns.
VERTICAL_PAD = chr(0x3000)

# 24-row terminal minus the border and status bar.
DEFAULT_VIEWPORT_HEIGHT = 21


def render(
    version: Version,
    viewport_height: int | None = None,
    *,
    width: int | None = None,
    indent: int = 2,
) -> list[str]:
    """Return the display lines for *version*.

    *viewport_height* bounds vertical columns; ``None`` uses
    :data:`DEFAULT_VIEWPORT_HEIGHT`.  When *width* is given, horizontal lines
    longer than it are wrapped with a hanging *indent* before any bidi
    reordering.  Vertical text is never wrapped horizontally.
    """
    return epigraph_lines(version, width, indent) + _body_lines(
        version, viewport_height, width, indent
    )


def render_text(version: Version, viewport_height: int | None = None, **kwargs: int | None) -> str:
    """:func:`render` joined into one string, as printed by ``leaves show``."""
    return "\n".join(render(version, viewport_height, **kwargs))


def render_spans(
    version: Version,
    viewport_height: int | None = None,
    *,
    width: int | None = None,
    indent: int = 2,
) -> list[list[Span]]:
    """Like :func:`render`, but each line is a list of styled runs.

    Epigraph and vertical lines are plain; emphasis state carries across the
    lines of a horizontal body the same way the markers toggle it.
    """
    result = [[Span(line)] if line else [] for line in epigraph_lines(version, width, indent)]
    body = _body_lines(version, viewport_height, width, indent)
    if version.vertical:
        result.extend([Span(line)] if line else [] for line in body)
    else:
        result.extend(spans_for_lines(body))
    return result


# ── Pipeline stages ─────────────────────────────────────────────────


def epigraph_lines(version: Version, width: int | None = None, indent: int = 2) -> list[str]:
    """The epigraph as display lines plus one blank separator, or nothing."""
    if not version.epigraph:
        return []
    lines = version.epigraph.split("\n")
    if width:
        lines = wrap_lines(lines, width, indent)
    return [*lines, ""]


def _body_lines(
    version: Version,
    viewport_height: int | None,
    width: int | None,
    indent: int,
) -> list[str]:
    if version.vertical:
        height = viewport_height if viewport_height and viewport_height > 0 else DEFAULT_VIEWPORT_HEIGHT
        return layout_vertical(version.text, height, rtl=version.rtl)

    lines = normalize_markup(version.text).split("\n")
    if width:
        lines = wrap_lines(lines, width, indent)
    if version.rtl:
        lines = [reorder_rtl_line(line) for line in lines]
    return lines


def wrap_lines(lines: list[str], width: int, indent: int = 2) -> list[str]:
    """Wrap lines wider than *width* terminal cells.

    Breaks fall on whitespace; a word wider than the row (a run of CJK text
    has no spaces) is cut at a cell boundary.  Continuation rows get
    *indent* spaces.
    """
    if width < 1:
        return list(lines)
    prefix = " " * max(0, min(indent, width - 1))
    out: list[str] = []
    for line in lines:
        if cell_len(line) <= width or not line.strip():
            out.append(line)
            continue
        rows = _wrap_cells(line, width, width - len(prefix))
        out.append(rows[0])
        out.extend(prefix + row for row in rows[1:])
    return out


def _wrap_cells(line: str, first_width: int, rest_width: int) -> list[str]:
    rows: list[str] = []
    current = ""
    for token in re.findall(r"\S+|\s+", line):
        limit = rest_width if rows else first_width
        if token.isspace():
            # Leading whitespace survives only on the first row.
            if current or not rows:
                current += token
            continue
        if cell_len(current + token) <= limit:
            current += token
            continue
        if current.strip():
            rows.append(current.rstrip())
        current = ""
        pieces = _chop_cells(token, rest_width)
        rows.extend(pieces[:-1])
        current = pieces[-1]
    if current.strip():
        rows.append(current.rstrip())
    return rows


def _chop_cells(word: str, width: int) -> list[str]:
    """Cut *word* into pieces no wider than *width* cells."""
    pieces: list[str] = []
    piece = ""
    size = 0
    for ch in word:
        cells = get_character_cell_size(ch)
        if piece and size + cells > width:
            pieces.append(piece)
            piece, size = "", 0
        piece += ch
        size += cells
    pieces.append(piece)
    return pieces


# ── Vertical scripts ────────────────────────────────────────────────


def layout_vertical(text: str, height: int, *, rtl: bool = False) -> list[str]:
    """Transpose *text* into top-to-bottom columns.

    If every trimmed line fits in *height*, the result has one output line
    per grid column, each read from the last source line to the first, so
    the first source line ends up in the rightmost column.  Otherwise every
    line is cut into chunks of *height* characters which become the columns
    and the result has exactly *height* lines.
    """
    rows = [line.strip() for line in text.splitlines()]
    longest = max((len(row) for row in rows), default=0)

    if longest <= height:
        grid = [row.ljust(longest, VERTICAL_PAD) for row in rows]
        return ["".join(grid[y][x] for y in reversed(range(len(grid)))) for x in range(longest)]

    columns = _segment_columns(rows, height, rtl=rtl)
    return ["".join(column[r] for column in columns) for r in range(height)]


def _segment_columns(rows: list[str], height: int, *, rtl: bool) -> list[str]:
    """Cut rows into padded chunks, ordered left-to-right as displayed."""
    groups: list[list[str]] = []
    for row in rows:
        chunks = [row[i:i + height].ljust(height, VERTICAL_PAD) for i in range(0, len(row), height)]
        if rtl:
            chunks.reverse()
        groups.append(chunks)
    if rtl:
        groups.reverse()
    return [chunk for group in groups for chunk in group]


def vertical_title(author: str, title: str) -> list[str]:
    """One character per line, ``author|title``, for vertical headers."""
    return list(f"{author}|{title}")
