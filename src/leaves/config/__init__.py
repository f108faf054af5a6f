"""Configuration management for leaves."""

from __future__ import annotations

from leaves.config.keymap import Action, KeyMap, MatchResult, get_keymap
from leaves.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "KeyMap", "Action", "MatchResult", "get_keymap"]
