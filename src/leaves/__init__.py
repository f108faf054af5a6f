"""leaves -- a terminal reader for a personal poetry collection."""

from __future__ import annotations

__version__ = "0.4.0"
