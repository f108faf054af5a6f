"""Inline emphasis markup for poem text.

Poems use a tiny subset of Markdown: ``## Heading`` lines, ``*italic*`` and
``**bold**``.  :func:`normalize_markup` rewrites the source into a canonical
paired-marker form (``**`` for bold, ``_`` for italic) and
:func:`parse_spans` turns one canonical line into styled runs so that the
renderer never has to parse markers itself.
"""

from __future__ import annotations

from typing import NamedTuple

BOLD_MARKER = "**"
ITALIC_MARKER = "_"

_RULE = "———"


class Span(NamedTuple):
    """A run of text sharing one emphasis style."""

    text: str
    bold: bool = False
    italic: bool = False


def format_heading(title: str) -> str:
    return f"  {_RULE} {BOLD_MARKER}{title.strip()}{BOLD_MARKER} {_RULE} "


def normalize_markup(text: str) -> str:
    """Rewrite inline markup into canonical paired markers in one scan."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""
        if ch == "#" and nxt == "#":
            end = text.find("\n", i + 2)
            if end == -1:
                end = n
            out.append(format_heading(text[i + 2:end]))
            i = end
        elif ch == "*" and nxt == "*":
            out.append(BOLD_MARKER)
            i += 2
        elif ch == "*":
            out.append(ITALIC_MARKER)
            i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def parse_spans(line: str, *, bold: bool = False, italic: bool = False) -> list[Span]:
    """Split one canonical-marker line into styled runs.

    Markers are consumed; an unterminated marker styles to end of line.
    Empty runs are dropped, so an empty line yields an empty list.
    *bold* and *italic* give the emphasis already open when the line starts.
    """
    return _scan(line, bold, italic)[0]


def spans_for_lines(lines: list[str]) -> list[list[Span]]:
    """Parse canonical markers line by line, carrying open emphasis over."""
    out: list[list[Span]] = []
    bold = italic = False
    for line in lines:
        spans, bold, italic = _scan(line, bold, italic)
        out.append(spans)
    return out


def _scan(line: str, bold: bool, italic: bool) -> tuple[list[Span], bool, bool]:
    spans: list[Span] = []
    buf: list[str] = []

    def flush() -> None:
        if buf:
            spans.append(Span("".join(buf), bold, italic))
            buf.clear()

    i = 0
    while i < len(line):
        if line.startswith(BOLD_MARKER, i):
            flush()
            bold = not bold
            i += len(BOLD_MARKER)
        elif line.startswith(ITALIC_MARKER, i):
            flush()
            italic = not italic
            i += len(ITALIC_MARKER)
        else:
            buf.append(line[i])
            i += 1
    flush()
    return spans, bold, italic
