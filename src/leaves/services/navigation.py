"""Modal navigation over the library: lists, filters, search and reading.

:class:`Navigator` is the single owner of :class:`NavigationState`.  Every
user command maps onto one of its transition methods; each runs
synchronously and leaves the state consistent:

* ``current_poem`` always indexes a real poem (when the library is not
  empty);
* an active filter is never empty and contains the current poem while
  viewing or browsing the filtered list;
* every list cursor is either ``None`` or a valid index into that list.

Operations that have nothing to act on (empty library, empty list, no
search results) are no-ops rather than errors.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import StrEnum, auto

from leaves.models import CANONICAL, Poem, Version, resolve_version
from leaves.services.layout import epigraph_lines, render, render_spans, vertical_title
from leaves.services.library import LibraryIndex
from leaves.services.markup import Span
from leaves.services.viewport import ScrollbarGeometry, Viewport
from leaves.utils.formatting import format_byline, format_count_label, format_language

logger = logging.getLogger(__name__)


class Mode(StrEnum):
    """What the screen is currently showing."""

    MENU = auto()
    AUTHOR_LIST = auto()
    LANGUAGE_LIST = auto()
    TITLE_LIST = auto()
    FILTERED_LIST = auto()
    VIEWING = auto()
    SEARCH = auto()
    VERSION_SELECT = auto()


# Modes that show a selectable list and keep a cursor of their own.
LIST_MODES = (
    Mode.MENU,
    Mode.AUTHOR_LIST,
    Mode.LANGUAGE_LIST,
    Mode.TITLE_LIST,
    Mode.FILTERED_LIST,
    Mode.SEARCH,
    Mode.VERSION_SELECT,
)


class MenuItem(StrEnum):
    AUTHORS = auto()
    LANGUAGES = auto()
    TITLES = auto()
    RANDOM = auto()


MENU_ITEMS = tuple(MenuItem)


@dataclass
class FilterContext:
    """How the active filter was built.

    ``language`` is captured when the filter comes from the language list so
    that opening an entry later does not depend on that list's cursor.
    ``version_keys`` runs parallel to the filtered indices for language
    filters: entry *i* shows poem ``indices[i]`` in version
    ``version_keys[i]``.
    """

    origin: Mode
    label: str
    language: str | None = None
    version_keys: list[str] = field(default_factory=list)


@dataclass
class NavigationState:
    current_poem: int = 0
    current_version: str = CANONICAL
    mode: Mode = Mode.MENU
    previous_mode: Mode | None = None
    viewport_height: int | None = None
    viewport_width: int | None = None
    filtered: list[int] | None = None
    filter_context: FilterContext | None = None
    cursors: dict[Mode, int | None] = field(default_factory=dict)
    search_query: str = ""
    search_results: list[int] = field(default_factory=list)
    viewport: Viewport = field(default_factory=Viewport)

    @property
    def scroll_offset(self) -> int:
        return self.viewport.offset


@dataclass(frozen=True)
class Frame:
    """Everything the renderer needs to paint one screen.

    For ``VIEWING`` and ``VERSION_SELECT`` the poem fields are filled in;
    for list modes ``items``/``cursor`` are; ``SEARCH`` adds ``query``.
    Vertical right-to-left poems also get ``title_column``, the byline one
    character per row, drawn along the right edge.
    """

    mode: Mode
    title: str
    version: Version | None = None
    lines: list[str] = field(default_factory=list)
    spans: list[list[Span]] = field(default_factory=list)
    epigraph_rows: int = 0
    title_column: list[str] = field(default_factory=list)
    scroll_offset: int = 0
    scrollbar: ScrollbarGeometry | None = None
    items: list[str] = field(default_factory=list)
    cursor: int | None = None
    query: str = ""


_MODE_TITLES = {
    Mode.MENU: "Menu",
    Mode.AUTHOR_LIST: "Authors",
    Mode.LANGUAGE_LIST: "Languages",
    Mode.TITLE_LIST: "Titles",
    Mode.SEARCH: "Search",
    Mode.VERSION_SELECT: "Versions",
}


class Navigator:
    """The modal controller over a fixed :class:`LibraryIndex`."""

    def __init__(self, library: LibraryIndex, *, wrap_indent: int = 2) -> None:
        self.library = library
        self.state = NavigationState()
        self._wrap_indent = wrap_indent
        self._layout_key: tuple | None = None
        self._layout_lines: list[str] = []

        for mode in LIST_MODES:
            self.state.cursors[mode] = 0 if self._list_length(mode) else None

    # -- Current selection ------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def current_poem(self) -> Poem | None:
        if self.library.is_empty:
            return None
        return self.library[self.state.current_poem]

    def resolve_version(self, poem: Poem, key: str) -> Version:
        return resolve_version(poem, key)

    def current_version(self) -> Version | None:
        poem = self.current_poem
        if poem is None:
            return None
        return resolve_version(poem, self.state.current_version)

    def current_version_key(self) -> str:
        """The active key after fallback: canonical if the key is unknown."""
        poem = self.current_poem
        key = self.state.current_version
        if poem is None or key not in poem.variants:
            return CANONICAL
        return key

    def source_id(self) -> str | None:
        poem = self.current_poem
        return poem.source_id if poem else None

    def cursor(self, mode: Mode | None = None) -> int | None:
        return self.state.cursors.get(mode or self.state.mode)

    # -- Mode changes -----------------------------------------------------

    def set_mode(self, mode: Mode) -> None:
        """Enter *mode*, resetting the scroll position."""
        if mode != self.state.mode:
            logger.debug("Mode %s -> %s", self.state.mode, mode)
        self.state.mode = mode
        self.state.viewport.reset()
        if mode in LIST_MODES:
            self._revalidate(mode)

    def go_menu(self) -> None:
        self.set_mode(Mode.MENU)

    def back(self) -> None:
        """Step out of the current mode (Backspace / Esc)."""
        match self.state.mode:
            case Mode.VIEWING:
                self.set_mode(Mode.FILTERED_LIST if self.state.filtered else Mode.MENU)
            case Mode.FILTERED_LIST:
                self.set_mode(self.state.previous_mode or Mode.MENU)
            case Mode.AUTHOR_LIST | Mode.LANGUAGE_LIST | Mode.TITLE_LIST | Mode.SEARCH:
                self.set_mode(Mode.MENU)
            case Mode.VERSION_SELECT:
                self.cancel_version_picker()
            case Mode.MENU:
                pass

    # -- List cursors -----------------------------------------------------

    def list_items(self, mode: Mode | None = None) -> list[str]:
        """Display labels for the list shown in *mode*."""
        lib = self.library
        match mode or self.state.mode:
            case Mode.MENU:
                return [
                    format_count_label("Browse by author", len(lib.author_counts)),
                    format_count_label("Browse by language", len(lib.language_counts)),
                    format_count_label("Browse by title", len(lib)),
                    "Random poem",
                ]
            case Mode.AUTHOR_LIST:
                return [format_count_label(a, lib.author_counts[a]) for a in lib.sorted_authors()]
            case Mode.LANGUAGE_LIST:
                return [
                    format_count_label(format_language(lang), lib.language_counts[lang])
                    for lang in lib.sorted_languages()
                ]
            case Mode.TITLE_LIST:
                return [title for _i, title in lib.sorted_titles()]
            case Mode.FILTERED_LIST:
                return self.filtered_entries()
            case Mode.SEARCH:
                return [
                    format_byline(lib[i].canonical.author, lib[i].canonical.title)
                    for i in self.state.search_results
                ]
            case Mode.VERSION_SELECT:
                poem = self.current_poem
                if poem is None:
                    return []
                return [f"{key}: {v.title} [{v.language}]" for key, v in poem.versions()]
        return []

    def _list_length(self, mode: Mode) -> int:
        lib = self.library
        match mode:
            case Mode.MENU:
                return len(MENU_ITEMS)
            case Mode.AUTHOR_LIST:
                return len(lib.author_counts)
            case Mode.LANGUAGE_LIST:
                return len(lib.language_counts)
            case Mode.TITLE_LIST:
                return len(lib)
            case Mode.FILTERED_LIST:
                return len(self.state.filtered or ())
            case Mode.SEARCH:
                return len(self.state.search_results)
            case Mode.VERSION_SELECT:
                poem = self.current_poem
                return len(poem.version_keys()) if poem else 0
        return 0

    def _revalidate(self, mode: Mode) -> None:
        """Clamp *mode*'s cursor into its list, or clear it if the list is empty."""
        length = self._list_length(mode)
        cursor = self.state.cursors.get(mode)
        if length == 0:
            self.state.cursors[mode] = None
        elif cursor is not None and cursor >= length:
            self.state.cursors[mode] = length - 1

    def _move_cursor(self, step: int) -> None:
        mode = self.state.mode
        length = self._list_length(mode)
        if length == 0:
            self.state.cursors[mode] = None
            return
        cursor = self.state.cursors.get(mode)
        self.state.cursors[mode] = 0 if cursor is None else (cursor + step) % length

    def _jump_cursor(self, target: int) -> None:
        mode = self.state.mode
        length = self._list_length(mode)
        self.state.cursors[mode] = min(max(0, target), length - 1) if length else None

    def move_down(self, count: int = 1) -> None:
        if self.state.mode == Mode.VIEWING:
            self.scroll_down(count)
        else:
            for _ in range(count):
                self._move_cursor(1)

    def move_up(self, count: int = 1) -> None:
        if self.state.mode == Mode.VIEWING:
            self.scroll_up(count)
        else:
            for _ in range(count):
                self._move_cursor(-1)

    def page_down(self) -> None:
        height = self._height()
        if self.state.mode == Mode.VIEWING:
            self.state.viewport.page_down(self.total_lines(), height)
        else:
            self._jump_cursor((self.cursor() or 0) + height)

    def page_up(self) -> None:
        height = self._height()
        if self.state.mode == Mode.VIEWING:
            self.state.viewport.page_up(height)
        else:
            self._jump_cursor((self.cursor() or 0) - height)

    def go_top(self) -> None:
        if self.state.mode == Mode.VIEWING:
            self.state.viewport.go_top()
        else:
            self._jump_cursor(0)

    def go_bottom(self) -> None:
        if self.state.mode == Mode.VIEWING:
            self.state.viewport.go_bottom(self.total_lines(), self._height())
        else:
            self._jump_cursor(self._list_length(self.state.mode) - 1)

    # -- Activation -------------------------------------------------------

    def activate(self) -> None:
        """Act on the entry under the cursor (Enter)."""
        mode = self.state.mode
        cursor = self.state.cursors.get(mode)
        if mode == Mode.VIEWING or cursor is None:
            return

        match mode:
            case Mode.MENU:
                match MENU_ITEMS[cursor]:
                    case MenuItem.AUTHORS:
                        self.set_mode(Mode.AUTHOR_LIST)
                    case MenuItem.LANGUAGES:
                        self.set_mode(Mode.LANGUAGE_LIST)
                    case MenuItem.TITLES:
                        self.set_mode(Mode.TITLE_LIST)
                    case MenuItem.RANDOM:
                        self.random_poem()
            case Mode.AUTHOR_LIST:
                self.select_author(self.library.sorted_authors()[cursor])
            case Mode.LANGUAGE_LIST:
                self.select_language(self.library.sorted_languages()[cursor])
            case Mode.TITLE_LIST:
                poem_index, _title = self.library.sorted_titles()[cursor]
                self.select_title(poem_index)
            case Mode.FILTERED_LIST:
                self.select_filtered(cursor)
            case Mode.SEARCH:
                self.select_search(cursor)
            case Mode.VERSION_SELECT:
                self.pick_version(cursor)

    # -- Filters ----------------------------------------------------------

    def select_author(self, author: str) -> None:
        indices = self.library.poems_by_author(author)
        if not indices:
            return
        authors = self.library.sorted_authors()
        self.state.cursors[Mode.AUTHOR_LIST] = authors.index(author)
        self._apply_filter(
            indices,
            FilterContext(origin=Mode.AUTHOR_LIST, label=author),
        )
        self.state.current_version = CANONICAL
        self.set_mode(Mode.FILTERED_LIST)

    def select_language(self, language: str) -> None:
        """Filter to every version written in *language*.

        A poem appears once per matching version, so a poem with two French
        variants is listed twice.
        """
        matches = self.library.language_versions(language)
        if not matches:
            return
        languages = self.library.sorted_languages()
        self.state.cursors[Mode.LANGUAGE_LIST] = languages.index(language)
        self._apply_filter(
            [i for i, _key in matches],
            FilterContext(
                origin=Mode.LANGUAGE_LIST,
                label=language,
                language=language,
                version_keys=[key for _i, key in matches],
            ),
        )
        self.state.current_version = matches[0][1]
        self.set_mode(Mode.FILTERED_LIST)

    def select_title(self, poem_index: int) -> None:
        """Open one poem straight from the title list."""
        if not 0 <= poem_index < len(self.library):
            return
        for pos, (i, _title) in enumerate(self.library.sorted_titles()):
            if i == poem_index:
                self.state.cursors[Mode.TITLE_LIST] = pos
                break
        self._apply_filter(
            [poem_index],
            FilterContext(origin=Mode.TITLE_LIST, label=self.library[poem_index].canonical.title),
        )
        self.state.current_version = CANONICAL
        self.set_mode(Mode.VIEWING)

    def select_filtered(self, cursor: int | None = None) -> None:
        """Open the filtered entry at *cursor* (defaults to the list cursor)."""
        indices = self.state.filtered
        if cursor is None:
            cursor = self.state.cursors.get(Mode.FILTERED_LIST)
        if not indices or cursor is None or not 0 <= cursor < len(indices):
            return
        self.state.cursors[Mode.FILTERED_LIST] = cursor
        self.state.current_poem = indices[cursor]
        self.state.current_version = self._filtered_version_key(cursor)
        self.set_mode(Mode.VIEWING)

    def _filtered_version_key(self, position: int) -> str:
        ctx = self.state.filter_context
        if ctx is None or ctx.origin != Mode.LANGUAGE_LIST or ctx.language is None:
            return CANONICAL
        poem_index = self.state.filtered[position]
        if position < len(ctx.version_keys):
            key = ctx.version_keys[position]
            if resolve_version(self.library[poem_index], key).language == ctx.language:
                return key
        key, _found = self.library.find_version_in_language(poem_index, ctx.language)
        return key

    def _apply_filter(self, indices: list[int], context: FilterContext) -> None:
        self.state.filtered = list(indices)
        self.state.filter_context = context
        self.state.current_poem = indices[0]
        self.state.cursors[Mode.FILTERED_LIST] = 0
        self.state.previous_mode = context.origin

    def clear_filter(self) -> None:
        self.state.filtered = None
        self.state.filter_context = None
        self.state.cursors[Mode.FILTERED_LIST] = None

    def filtered_list_title(self) -> str:
        ctx = self.state.filter_context
        if ctx is not None:
            match ctx.origin:
                case Mode.AUTHOR_LIST:
                    return f"Poems by {ctx.label}"
                case Mode.LANGUAGE_LIST:
                    return f"Poems in {format_language(ctx.label)}"
                case Mode.TITLE_LIST | Mode.SEARCH:
                    return "Search Results"
        return "Filtered Poems"

    def filtered_entries(self) -> list[str]:
        indices = self.state.filtered or []
        ctx = self.state.filter_context
        entries: list[str] = []
        for pos, idx in enumerate(indices):
            poem = self.library[idx]
            if ctx is not None and ctx.origin == Mode.AUTHOR_LIST:
                entries.append(poem.canonical.title)
            elif ctx is not None and ctx.origin == Mode.LANGUAGE_LIST:
                version = resolve_version(poem, self._filtered_version_key(pos))
                entries.append(format_byline(version.author, version.title))
            else:
                entries.append(format_byline(poem.canonical.author, poem.canonical.title))
        return entries

    # -- Reading ----------------------------------------------------------

    def random_poem(self, rng: random.Random | None = None) -> None:
        if self.library.is_empty:
            return
        rng = rng or random
        self.clear_filter()
        self.state.previous_mode = None
        self.state.current_poem = rng.randrange(len(self.library))
        self.state.current_version = CANONICAL
        self.set_mode(Mode.VIEWING)

    def next_poem(self) -> None:
        self._step_poem(1)

    def previous_poem(self) -> None:
        self._step_poem(-1)

    def _step_poem(self, step: int) -> None:
        if self.library.is_empty:
            return
        indices = self.state.filtered
        if indices:
            pos = self._filter_position()
            new_pos = (pos + step) % len(indices)
            self.state.cursors[Mode.FILTERED_LIST] = new_pos
            self.state.current_poem = indices[new_pos]
            ctx = self.state.filter_context
            if ctx is not None and ctx.origin == Mode.LANGUAGE_LIST:
                self.state.current_version = self._filtered_version_key(new_pos)
        else:
            self.state.current_poem = (self.state.current_poem + step) % len(self.library)
        self.state.viewport.reset()

    def _filter_position(self) -> int:
        """Position of the current poem in the filter, 0 if it is not there.

        The filtered-list cursor wins when it already points at the current
        poem, which keeps repeated entries (one per language version) apart.
        """
        indices = self.state.filtered or []
        cursor = self.state.cursors.get(Mode.FILTERED_LIST)
        if cursor is not None and 0 <= cursor < len(indices) and indices[cursor] == self.state.current_poem:
            return cursor
        try:
            return indices.index(self.state.current_poem)
        except ValueError:
            return 0

    # -- Versions ---------------------------------------------------------

    def toggle_version(self) -> None:
        """Advance to the next version: canonical, then variants by key."""
        poem = self.current_poem
        if poem is None:
            return
        keys = poem.version_keys()
        if len(keys) <= 1:
            return
        current = self.current_version_key()
        self.state.current_version = keys[(keys.index(current) + 1) % len(keys)]
        self.state.viewport.reset()

    def open_version_picker(self) -> None:
        poem = self.current_poem
        if poem is None or self.state.mode != Mode.VIEWING:
            return
        self.state.cursors[Mode.VERSION_SELECT] = poem.version_keys().index(self.current_version_key())
        self.set_mode(Mode.VERSION_SELECT)

    def pick_version(self, cursor: int | None = None) -> None:
        poem = self.current_poem
        if poem is None:
            return
        if cursor is None:
            cursor = self.state.cursors.get(Mode.VERSION_SELECT)
        keys = poem.version_keys()
        if cursor is not None and 0 <= cursor < len(keys):
            self.state.current_version = keys[cursor]
        self.set_mode(Mode.VIEWING)

    def cancel_version_picker(self) -> None:
        self.set_mode(Mode.VIEWING)

    # -- Search -----------------------------------------------------------

    def open_search(self) -> None:
        self.update_search("")
        self.set_mode(Mode.SEARCH)

    def update_search(self, query: str) -> None:
        """Recompute results for *query* and keep the cursor valid.

        The cursor is never advanced by an edit: it lands on the first result
        when there was none, and is clamped if the list shrank.
        """
        self.state.search_query = query
        self.state.search_results = self.library.search(query)
        if not self.state.search_results:
            self.state.cursors[Mode.SEARCH] = None
        elif self.state.cursors.get(Mode.SEARCH) is None:
            self.state.cursors[Mode.SEARCH] = 0
        else:
            self._revalidate(Mode.SEARCH)

    def search_append(self, text: str) -> None:
        self.update_search(self.state.search_query + text)

    def search_backspace(self) -> None:
        self.update_search(self.state.search_query[:-1])

    def select_search(self, cursor: int | None = None) -> None:
        """View a search hit; the results become the active filter."""
        results = self.state.search_results
        if cursor is None:
            cursor = self.state.cursors.get(Mode.SEARCH)
        if not results or cursor is None or not 0 <= cursor < len(results):
            return
        self._apply_filter(
            results,
            FilterContext(origin=Mode.SEARCH, label=self.state.search_query),
        )
        self.state.cursors[Mode.FILTERED_LIST] = cursor
        self.state.current_poem = results[cursor]
        self.state.current_version = CANONICAL
        self.set_mode(Mode.VIEWING)

    # -- Viewport ---------------------------------------------------------

    def set_viewport(self, height: int | None, width: int | None = None) -> None:
        """Record the viewport size reported by the renderer for this frame."""
        self.state.viewport_height = height
        self.state.viewport_width = width
        if self.state.mode == Mode.VIEWING and height:
            self.state.viewport.clamp(self.total_lines(), height)

    def _height(self) -> int:
        return max(1, self.state.viewport_height or 1)

    def layout(self) -> list[str]:
        """Display lines of the current version for the current viewport."""
        poem = self.current_poem
        if poem is None:
            return []
        key = (
            self.state.current_poem,
            self.current_version_key(),
            self.state.viewport_height,
            self.state.viewport_width,
        )
        if key != self._layout_key:
            self._layout_lines = render(
                resolve_version(poem, key[1]),
                self.state.viewport_height,
                width=self.state.viewport_width,
                indent=self._wrap_indent,
            )
            self._layout_key = key
        return self._layout_lines

    def total_lines(self) -> int:
        return len(self.layout())

    def can_scroll(self) -> bool:
        height = self.state.viewport_height
        return bool(height) and self.total_lines() > height

    def scroll_down(self, delta: int = 1) -> None:
        if self.state.viewport_height is None:
            return
        self.state.viewport.scroll_down(delta, self.total_lines(), self.state.viewport_height)

    def scroll_up(self, delta: int = 1) -> None:
        self.state.viewport.scroll_up(delta)

    # -- Frame ------------------------------------------------------------

    def frame(self) -> Frame:
        """Snapshot of the current mode for the renderer."""
        mode = self.state.mode
        if mode in (Mode.VIEWING, Mode.VERSION_SELECT):
            return self._poem_frame(mode)
        title = self.filtered_list_title() if mode == Mode.FILTERED_LIST else _MODE_TITLES[mode]
        return Frame(
            mode=mode,
            title=title,
            items=self.list_items(mode),
            cursor=self.state.cursors.get(mode),
            query=self.state.search_query if mode == Mode.SEARCH else "",
        )

    def _poem_frame(self, mode: Mode) -> Frame:
        version = self.current_version()
        if version is None:
            return Frame(mode=mode, title="")
        lines = self.layout()
        height = self.state.viewport_height
        spans = render_spans(
            version,
            height,
            width=self.state.viewport_width,
            indent=self._wrap_indent,
        )
        overlay = mode == Mode.VERSION_SELECT
        return Frame(
            mode=mode,
            title=format_byline(version.author, version.title),
            version=version,
            lines=lines,
            spans=spans,
            epigraph_rows=len(epigraph_lines(version, self.state.viewport_width, self._wrap_indent)),
            title_column=vertical_title(version.author, version.title) if version.vertical and version.rtl else [],
            scroll_offset=self.state.scroll_offset,
            scrollbar=self.state.viewport.scrollbar(len(lines), height) if height else None,
            items=self.list_items(Mode.VERSION_SELECT) if overlay else [],
            cursor=self.state.cursors.get(Mode.VERSION_SELECT) if overlay else None,
        )
