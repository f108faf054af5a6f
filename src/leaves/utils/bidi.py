"""BiDi text utilities for correct RTL display in terminals.

Terminals mostly lack full BiDi support, so RTL text appears in logical
order.  Each line is run through the Unicode Bidirectional Algorithm as its
own paragraph and emitted in visual order, which keeps embedded LTR runs
(numbers, Latin loanwords) readable inside an RTL line.
"""

from __future__ import annotations

import re

from bidi.algorithm import get_display

# Matches any character from RTL scripts (Arabic, Hebrew, Thaana, Syriac, N'Ko).
_RTL_RE = re.compile(
    r"[\u0590-\u05FF\u0600-\u06FF\u0700-\u074F\u0750-\u077F"
    r"\u0780-\u07BF\u07C0-\u07FF\u08A0-\u08FF"
    r"\uFB1D-\uFB4F\uFB50-\uFDFF\uFE70-\uFEFF]"
)


def has_rtl(text: str) -> bool:
    """Return True if text contains any RTL script characters."""
    return bool(_RTL_RE.search(text))


def reorder_rtl_line(text: str) -> str:
    """Reorder one logical line into visual order.

    The base direction is taken from the line's first strong character, so a
    line with no RTL characters passes through unchanged.
    """
    if not text or not has_rtl(text):
        return text
    return get_display(text)

