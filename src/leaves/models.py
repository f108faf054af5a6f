"""In-memory document model for poems and their language variants."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

# Key under which every poem stores its required, default-displayed text.
CANONICAL = "canonical"


@dataclass(frozen=True)
class Version:
    """One rendition of a poem: a language, a spelling, a script."""

    title: str
    author: str
    language: str
    text: str
    epigraph: str | None = None
    rtl: bool = False
    vertical: bool = False


@dataclass(frozen=True)
class Poem:
    """A poem with its canonical version and any number of variants.

    ``source_id`` is the originating file name, used only to locate the
    document again when opening it in an external editor.
    """

    canonical: Version
    variants: Mapping[str, Version] = field(default_factory=dict)
    source_id: str = ""

    def __post_init__(self) -> None:
        # Freeze the variant mapping so the poem is immutable after load.
        object.__setattr__(self, "variants", MappingProxyType(dict(self.variants)))

    def version_keys(self) -> list[str]:
        """Canonical first, then variant keys in sorted order."""
        return [CANONICAL, *sorted(self.variants)]

    def versions(self) -> Iterator[tuple[str, Version]]:
        for key in self.version_keys():
            yield key, resolve_version(self, key)

    @property
    def has_variants(self) -> bool:
        return bool(self.variants)


def resolve_version(poem: Poem, key: str) -> Version:
    """Return the version stored under *key*, falling back to canonical."""
    if key == CANONICAL:
        return poem.canonical
    return poem.variants.get(key, poem.canonical)
