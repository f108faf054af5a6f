"""One-line key hint bar along the bottom of the screen."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget

from leaves.config.keymap import Action, KeyMap
from leaves.services.navigation import Mode, Navigator
from leaves.ui.theme import get_theme

_PRETTY_KEYS = {
    "up": "↑",
    "down": "↓",
    "left": "←",
    "right": "→",
    "backspace": "backspace",
    "escape": "esc",
    "enter": "enter",
}


def _pretty(key: str) -> str:
    if key.startswith("C-"):
        return f"ctrl+{key[2:]}"
    return _PRETTY_KEYS.get(key, key)


def _keys(keymap: KeyMap, *actions: Action) -> str:
    """``"↑/↓"`` style label: the first binding of each action, joined."""
    labels = []
    for action in actions:
        seqs = keymap.get_keys_for_action(action)
        # Prefer a single named key (arrows) over letters for readability.
        seqs.sort(key=lambda seq: (len(seq), len(seq[0]) == 1))
        if seqs:
            labels.append(" ".join(_pretty(k) for k in seqs[0]))
    return "/".join(labels)


def status_hints(nav: Navigator, keymap: KeyMap) -> list[tuple[str, str]]:
    """Key hints for the current mode, most important first."""
    back = _keys(keymap, Action.GO_BACK)
    select = (_keys(keymap, Action.MOVE_UP, Action.MOVE_DOWN), "select")
    choose = (_keys(keymap, Action.SELECT), "choose")

    match nav.mode:
        case Mode.VIEWING:
            st = nav.state
            menu = _keys(keymap, Action.MENU)
            if st.filtered is None and st.previous_mode is None:
                menu = f"{menu}/{back}"
            items = [(menu, "menu"), (_keys(keymap, Action.PREVIOUS_POEM, Action.NEXT_POEM), "navigate poems")]
            if nav.can_scroll():
                items.append((_keys(keymap, Action.MOVE_UP, Action.MOVE_DOWN), "scroll"))
            if st.filtered is not None:
                items.append((back, "back to list"))
            poem = nav.current_poem
            if poem is not None and poem.has_variants:
                items.append((_keys(keymap, Action.SWITCH_VERSION), "switch version"))
                items.append((_keys(keymap, Action.PICK_VERSION), "versions"))
            items.append((_keys(keymap, Action.EDIT), "edit"))
            return items
        case Mode.MENU:
            return [(_keys(keymap, Action.QUIT), "quit"), select, choose]
        case Mode.SEARCH:
            return [("type", "search"), select, (_keys(keymap, Action.SELECT), "open"), ("esc", "back")]
        case Mode.VERSION_SELECT:
            return [select, (_keys(keymap, Action.SELECT), "pick"), ("esc", "cancel")]
        case _:
            return [select, choose, (back, "back")]


class StatusBar(Widget):
    """Renders ``key: description | key: description`` hints."""

    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: 1;
        width: 1fr;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._hints: list[tuple[str, str]] = []

    def set_hints(self, hints: list[tuple[str, str]]) -> None:
        self._hints = hints
        self.refresh()

    def render(self) -> Text:
        theme = get_theme()
        result = Text(no_wrap=True, overflow="ellipsis")
        for i, (key, desc) in enumerate(self._hints):
            if i:
                result.append(" | ", style=theme.muted_text)
            result.append(key, style=theme.accent)
            result.append(f": {desc}")
        return result
