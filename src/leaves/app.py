"""Main Textual TUI application for leaves."""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.events import Key, Resize

from leaves.config import Action, KeyMap, MatchResult, get_keymap
from leaves.config.settings import Settings, get_settings
from leaves.models import Poem
from leaves.services.library import LibraryIndex
from leaves.services.loader import resolve_source
from leaves.services.navigation import Frame, Mode, Navigator
from leaves.services.opener import OpenerError, open_path
from leaves.ui.status_bar import StatusBar, status_hints
from leaves.ui.theme import ThemeColors, get_theme
from leaves.ui.widgets import EntryList, PoemView, SearchBar

logger = logging.getLogger(__name__)

_MAX_KEY_COUNT = 1000

# Modes accepted for general.start_mode in config.toml.
_START_MODES = {
    "menu": Mode.MENU,
    "authors": Mode.AUTHOR_LIST,
    "languages": Mode.LANGUAGE_LIST,
    "titles": Mode.TITLE_LIST,
    "search": Mode.SEARCH,
}


class LeavesApp(App):
    """The reader: maps keys onto :class:`Navigator` transitions and paints
    each resulting :class:`~leaves.services.navigation.Frame`.
    """

    TITLE = "leaves"

    CSS = """
    Screen {
        background: $background;
        color: $foreground;
    }

    #versions {
        height: auto;
        max-height: 10;
    }
    """

    # We handle all bindings ourselves through the KeyMap system.
    BINDINGS = []

    def __init__(self, poems: list[Poem], settings: Settings | None = None) -> None:
        super().__init__()

        self.settings: Settings = settings or get_settings()
        self.keymap: KeyMap = get_keymap()
        self.theme_colors: ThemeColors = get_theme()

        self.library = LibraryIndex(poems)
        self.navigator = Navigator(self.library, wrap_indent=self.settings.display.wrap_indent)
        self.navigator.state.viewport_height = self.settings.display.default_viewport_height

        start = _START_MODES.get(self.settings.general.start_mode)
        if start is None:
            logger.warning("Unknown start_mode %r, using menu", self.settings.general.start_mode)
        elif start == Mode.SEARCH:
            self.navigator.open_search()
        else:
            self.navigator.set_mode(start)

        # Key input state for multi-key sequences and count prefixes.
        self._key_buffer: list[str] = []
        self._count_buffer: str = ""

    def get_css_variables(self) -> dict[str, str]:
        """Inject theme colors as Textual CSS variables ($var-name)."""
        variables = super().get_css_variables()
        tc = getattr(self, "theme_colors", None) or get_theme()
        variables.update(
            {
                "background": tc.background,
                "foreground": tc.foreground,
                "accent": tc.accent,
                "border": tc.border,
            }
        )
        return variables

    def compose(self) -> ComposeResult:
        yield SearchBar(id="search-bar")
        yield EntryList(id="versions")
        yield EntryList(id="entries")
        yield PoemView(id="poem")
        yield StatusBar(id="status-bar")

    def on_mount(self) -> None:
        self.title = f"leaves ({len(self.library)} poems)"
        self.refresh_view()

    def on_resize(self, event: Resize) -> None:
        self.call_after_refresh(self.refresh_view)

    # ── Rendering ────────────────────────────────────────────────────

    def refresh_view(self) -> None:
        """Push the navigator's current frame into the widgets."""
        nav = self.navigator
        poem_view = self.query_one("#poem", PoemView)
        entries = self.query_one("#entries", EntryList)
        versions = self.query_one("#versions", EntryList)
        search_bar = self.query_one("#search-bar", SearchBar)

        mode = nav.mode
        showing_poem = mode in (Mode.VIEWING, Mode.VERSION_SELECT)
        poem_view.display = showing_poem
        entries.display = not showing_poem
        versions.display = mode == Mode.VERSION_SELECT
        search_bar.display = mode == Mode.SEARCH

        if showing_poem and poem_view.content_size.height > 0:
            nav.set_viewport(poem_view.content_height, poem_view.content_width)

        frame = nav.frame()
        if showing_poem:
            poem_view.show(frame, show_scrollbar=self.settings.display.show_scrollbar)
            if mode == Mode.VERSION_SELECT:
                versions.show(Frame(mode=mode, title="Versions", items=frame.items, cursor=frame.cursor))
        else:
            empty = "No matches." if mode == Mode.SEARCH else "Nothing here."
            entries.show(frame, empty_text=empty)
            if mode == Mode.SEARCH:
                search_bar.set_query(frame.query, len(frame.items))

        self.query_one("#status-bar", StatusBar).set_hints(status_hints(nav, self.keymap))

    # ── Key handling ─────────────────────────────────────────────────

    async def on_key(self, event: Key) -> None:
        """Process keyboard input through the KeyMap system.

        In search mode printable characters edit the query; everything else
        goes through the keymap, with vim-style count prefixes ("5j") and
        multi-key sequences ("g g").
        """
        nav = self.navigator

        if nav.mode == Mode.SEARCH and self._handle_search_key(event):
            event.prevent_default()
            event.stop()
            self.refresh_view()
            return

        key = self._normalize_key(event)

        if key.isdigit() and not self._key_buffer and nav.mode != Mode.SEARCH:
            self._count_buffer += key
            event.prevent_default()
            return

        self._key_buffer.append(key)
        result, action = self.keymap.match(tuple(self._key_buffer))

        if result == MatchResult.EXACT:
            count = int(self._count_buffer) if self._count_buffer else 1
            count = min(count, _MAX_KEY_COUNT)
            self._key_buffer.clear()
            self._count_buffer = ""
            event.prevent_default()
            event.stop()
            await self._handle_action(action, count)
            self.refresh_view()

        elif result == MatchResult.PENDING:
            event.prevent_default()
            event.stop()

        else:
            self._key_buffer.clear()
            self._count_buffer = ""

    def _handle_search_key(self, event: Key) -> bool:
        """Edit the search query; returns True if the key was consumed."""
        nav = self.navigator
        if event.key == "backspace":
            if nav.state.search_query:
                nav.search_backspace()
                return True
            return False
        if event.is_printable and event.character:
            nav.search_append(event.character)
            return True
        return False

    @staticmethod
    def _normalize_key(event: Key) -> str:
        """Convert a Textual Key event into the string format used by KeyMap.

        Textual key names like 'ctrl+e' become 'C-e', 'shift+tab' becomes
        'S-tab', etc.
        """
        key = event.key

        if key.startswith("ctrl+"):
            return f"C-{key[5:]}"
        if key.startswith("shift+"):
            return f"S-{key[6:]}"
        if key.startswith("alt+"):
            return f"M-{key[4:]}"

        key_map = {
            "pageup": "page_up",
            "pagedown": "page_down",
            "return": "enter",
            "question_mark": "?",
            "slash": "/",
        }

        return key_map.get(key, key)

    # ── Action dispatch ──────────────────────────────────────────────

    async def _handle_action(self, action: Action | None, count: int = 1) -> None:
        """Dispatch a resolved action to the navigator."""
        if action is None:
            return
        nav = self.navigator
        step = self.settings.display.scroll_step

        match action:
            case Action.MOVE_DOWN:
                nav.move_down(count * (step if nav.mode == Mode.VIEWING else 1))
            case Action.MOVE_UP:
                nav.move_up(count * (step if nav.mode == Mode.VIEWING else 1))
            case Action.PAGE_DOWN:
                nav.page_down()
            case Action.PAGE_UP:
                nav.page_up()
            case Action.GO_TOP:
                nav.go_top()
            case Action.GO_BOTTOM:
                nav.go_bottom()
            case Action.SELECT:
                nav.activate()
            case Action.GO_BACK:
                nav.back()

            case Action.NEXT_POEM if nav.mode == Mode.VIEWING:
                for _ in range(count):
                    nav.next_poem()
            case Action.PREVIOUS_POEM if nav.mode == Mode.VIEWING:
                for _ in range(count):
                    nav.previous_poem()
            case Action.SWITCH_VERSION if nav.mode == Mode.VIEWING:
                nav.toggle_version()
            case Action.PICK_VERSION if nav.mode == Mode.VIEWING:
                nav.open_version_picker()
            case Action.EDIT if nav.mode == Mode.VIEWING:
                self._open_external()

            case Action.MENU:
                nav.go_menu()
            case Action.SEARCH:
                nav.open_search()
            case Action.RANDOM_POEM:
                nav.random_poem()
            case Action.QUIT:
                self.exit()

            case _:
                logger.debug("Unhandled action in %s: %s", nav.mode, action)

    def _open_external(self) -> None:
        """Open the current poem's file, suspending the TUI for the editor."""
        source_id = self.navigator.source_id()
        if not source_id:
            return
        path = resolve_source(self.settings.poems_dir, source_id)
        try:
            with self.suspend():
                open_path(path, self.settings.editor.command, wait=True)
        except OpenerError as exc:
            logger.warning("%s", exc)
            self.notify(str(exc), severity="error", timeout=4)
