"""Keybinding system with multi-key sequences and modifier support."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Self

from leaves.config.paths import KEYMAP_FILE

logger = logging.getLogger(__name__)


class Action(str, Enum):
    # Movement
    MOVE_DOWN = "move_down"
    MOVE_UP = "move_up"
    PAGE_DOWN = "page_down"
    PAGE_UP = "page_up"
    GO_TOP = "go_top"
    GO_BOTTOM = "go_bottom"
    SELECT = "select"
    GO_BACK = "go_back"

    # Reading
    NEXT_POEM = "next_poem"
    PREVIOUS_POEM = "previous_poem"
    SWITCH_VERSION = "switch_version"
    PICK_VERSION = "pick_version"
    EDIT = "edit"

    # Modes
    MENU = "menu"
    SEARCH = "search"
    RANDOM_POEM = "random_poem"
    QUIT = "quit"


class MatchResult(Enum):
    NO_MATCH = "no_match"
    PENDING = "pending"
    EXACT = "exact"


DEFAULT_BINDINGS: dict[str, list[str]] = {
    # Movement
    "move_down": ["j", "down"],
    "move_up": ["k", "up"],
    "page_down": ["C-f", "page_down", "space"],
    "page_up": ["C-b", "page_up"],
    "go_top": ["g g", "home"],
    "go_bottom": ["G", "end"],
    "select": ["enter"],
    "go_back": ["backspace", "escape"],

    # Reading
    "next_poem": ["right", "l"],
    "previous_poem": ["left", "h"],
    "switch_version": ["s"],
    "pick_version": ["v"],
    "edit": ["C-e"],

    # Modes
    "menu": ["m"],
    "search": ["/"],
    "random_poem": ["r"],
    "quit": ["q"],
}


def parse_key_sequence(raw: str) -> tuple[str, ...]:
    return tuple(raw.strip().split())


@dataclass
class KeyMap:
    bindings: dict[tuple[str, ...], Action] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path = KEYMAP_FILE) -> Self:
        keymap = cls()

        if path.exists():
            with open(path, "rb") as f:
                data = tomllib.load(f)
            keymap._load_from_dict(data)
        else:
            keymap._load_defaults()

        return keymap

    def _load_defaults(self) -> None:
        for action_name, key_strs in DEFAULT_BINDINGS.items():
            action = Action(action_name)
            for key_str in key_strs:
                seq = parse_key_sequence(key_str)
                self.bindings[seq] = action

    def _load_from_dict(self, data: dict) -> None:
        self._load_defaults()

        for section in data.values():
            if not isinstance(section, dict):
                continue
            for action_name, keys in section.items():
                try:
                    action = Action(action_name)
                except ValueError:
                    logger.warning("Unknown action in keymap: %s", action_name)
                    continue

                self._remove_action(action)

                if isinstance(keys, str):
                    keys = [keys]
                for key_str in keys:
                    seq = parse_key_sequence(key_str)
                    self.bindings[seq] = action

    def _remove_action(self, action: Action) -> None:
        to_remove = [k for k, v in self.bindings.items() if v == action]
        for key in to_remove:
            del self.bindings[key]

    def match(self, key_sequence: tuple[str, ...]) -> tuple[MatchResult, Action | None]:
        if key_sequence in self.bindings:
            return MatchResult.EXACT, self.bindings[key_sequence]

        for bound_seq in self.bindings:
            if len(bound_seq) > len(key_sequence) and bound_seq[:len(key_sequence)] == key_sequence:
                return MatchResult.PENDING, None

        return MatchResult.NO_MATCH, None

    def get_keys_for_action(self, action: Action) -> list[tuple[str, ...]]:
        return [seq for seq, act in self.bindings.items() if act == action]

    def format_key(self, seq: tuple[str, ...]) -> str:
        return " ".join(seq)

    def hint_for(self, action: Action) -> str:
        """First bound key for *action*, formatted for the status bar."""
        keys = self.get_keys_for_action(action)
        return self.format_key(keys[0]) if keys else ""


_keymap: KeyMap | None = None


def get_keymap() -> KeyMap:
    global _keymap
    if _keymap is None:
        _keymap = KeyMap.load()
    return _keymap
