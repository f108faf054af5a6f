"""Aggregate views over the loaded poems: authors, languages, titles."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from leaves.models import CANONICAL, Poem


class LibraryIndex:
    """Read-only index over an ordered, fixed sequence of poems.

    A poem's position in ``poems`` is its identity for the whole run.
    ``author_counts`` counts canonical versions only; ``language_counts``
    counts the canonical version and every variant, so a poem translated
    into three languages lands in three buckets.
    """

    def __init__(self, poems: Sequence[Poem]) -> None:
        self._poems: tuple[Poem, ...] = tuple(poems)
        self.author_counts: Counter[str] = Counter(p.canonical.author for p in self._poems)
        self.language_counts: Counter[str] = Counter(
            version.language for p in self._poems for _key, version in p.versions()
        )

    # -- Properties -------------------------------------------------------

    @property
    def poems(self) -> tuple[Poem, ...]:
        return self._poems

    def __len__(self) -> int:
        return len(self._poems)

    def __getitem__(self, index: int) -> Poem:
        return self._poems[index]

    @property
    def is_empty(self) -> bool:
        return not self._poems

    # -- Sorted views -----------------------------------------------------

    def sorted_authors(self) -> list[str]:
        return sorted(self.author_counts)

    def sorted_languages(self) -> list[str]:
        """Most-used language first; equal counts fall back to the code."""
        return sorted(self.language_counts, key=lambda lang: (-self.language_counts[lang], lang))

    def sorted_titles(self) -> list[tuple[int, str]]:
        titles = [(i, p.canonical.title) for i, p in enumerate(self._poems)]
        titles.sort(key=lambda item: (item[1].casefold(), item[0]))
        return titles

    # -- Lookups ----------------------------------------------------------

    def poems_by_author(self, author: str) -> list[int]:
        return [i for i, p in enumerate(self._poems) if p.canonical.author == author]

    def language_versions(self, language: str) -> list[tuple[int, str]]:
        """Every ``(poem_index, version_key)`` written in *language*.

        Library order; within a poem the canonical version comes first,
        then matching variants by sorted key.
        """
        return [
            (i, key)
            for i, p in enumerate(self._poems)
            for key, version in p.versions()
            if version.language == language
        ]

    def find_version_in_language(self, poem_index: int, language: str) -> tuple[str, bool]:
        """Key of the poem's version in *language*, or canonical if none match."""
        for key, version in self._poems[poem_index].versions():
            if version.language == language:
                return key, True
        return CANONICAL, False

    def search(self, query: str) -> list[int]:
        """Poems whose canonical title or author contains *query*, case-folded."""
        needle = query.casefold()
        if not needle:
            return []
        return [
            i
            for i, p in enumerate(self._poems)
            if needle in p.canonical.title.casefold() or needle in p.canonical.author.casefold()
        ]
