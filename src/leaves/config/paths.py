"""Centralized path definitions for leaves.

Single source of truth for all filesystem paths used across the application.
Respects $XDG_CONFIG_HOME and $XDG_STATE_HOME when set.
"""

from __future__ import annotations

import os
from pathlib import Path

_xdg_config = os.environ.get("XDG_CONFIG_HOME")
_xdg_state = os.environ.get("XDG_STATE_HOME")

SECURE_FILE_MODE = 0o600
SECURE_DIR_MODE = 0o700

CONFIG_DIR = (
    (Path(_xdg_config) / "leaves") if _xdg_config else (Path.home() / ".config" / "leaves")
)
CONFIG_FILE = CONFIG_DIR / "config.toml"
KEYMAP_FILE = CONFIG_DIR / "keymap.toml"
THEME_FILE = CONFIG_DIR / "theme.toml"

STATE_DIR = (
    (Path(_xdg_state) / "leaves")
    if _xdg_state
    else (Path.home() / ".local" / "state" / "leaves")
)
LOG_FILE = STATE_DIR / "leaves.log"

# Where the poems live unless config.toml or --poems-dir says otherwise.
POEMS_DIR = Path.home() / "Documents" / "poetry"

# Extension of the YAML documents the loader picks up.
POEM_SUFFIX = ".poem"

_dirs_ensured = False


def ensure_dirs() -> None:
    """Create config and state directories with secure permissions.

    Called lazily on first invocation (not at import time) so that merely
    importing the module does not create directories on disk.
    """
    global _dirs_ensured
    if _dirs_ensured:
        return
    for _dir in (CONFIG_DIR, STATE_DIR):
        _dir.mkdir(parents=True, exist_ok=True)
        os.chmod(_dir, SECURE_DIR_MODE)
    _dirs_ensured = True
