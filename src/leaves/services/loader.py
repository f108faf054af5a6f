"""Load poems from YAML ``.poem`` documents.

A document is a mapping whose ``canonical`` entry is the required default
version; every other top-level mapping is a variant stored under its key::

    canonical:
      title: Ozymandias
      author: Percy Bysshe Shelley
      language: en
      text: |
        I met a traveller from an antique land...
    modern_spelling:
      ...

Documents that cannot be parsed, or that lack a usable canonical version,
are skipped with a warning; they never stop the rest of the library from
loading.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from leaves.config.paths import POEM_SUFFIX
from leaves.models import CANONICAL, Poem, Version

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("title", "author", "language", "text")


class PoemLoadError(Exception):
    """Raised when the poems directory itself cannot be read."""


class InvalidDocument(ValueError):
    """A single document is malformed and will be excluded."""


def parse_version(data: Any) -> Version:
    if not isinstance(data, Mapping):
        raise InvalidDocument("version must be a mapping")
    missing = [name for name in _REQUIRED_FIELDS if data.get(name) is None]
    if missing:
        raise InvalidDocument(f"missing field(s): {', '.join(missing)}")
    epigraph = data.get("epigraph")
    return Version(
        title=str(data["title"]),
        author=str(data["author"]),
        language=str(data["language"]),
        text=str(data["text"]),
        epigraph=str(epigraph) if epigraph is not None else None,
        rtl=bool(data.get("rtl") or False),
        vertical=bool(data.get("vertical") or False),
    )


def parse_poem(content: str, source_id: str = "") -> Poem:
    """Build a :class:`Poem` from one YAML document.

    Variants that fail to parse are dropped with a warning; a bad or
    missing canonical version rejects the whole document.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise InvalidDocument(f"invalid YAML: {exc}") from exc

    if not isinstance(data, Mapping):
        raise InvalidDocument("document must be a mapping")
    if CANONICAL not in data:
        raise InvalidDocument("no canonical version")

    canonical = parse_version(data[CANONICAL])
    variants: dict[str, Version] = {}
    for key, value in data.items():
        if key == CANONICAL or not isinstance(value, Mapping):
            continue
        try:
            variants[str(key)] = parse_version(value)
        except InvalidDocument as exc:
            logger.warning("%s: skipping variant %r: %s", source_id or "<poem>", key, exc)

    return Poem(canonical=canonical, variants=variants, source_id=source_id)


def load_poems(poems_dir: Path) -> list[Poem]:
    """Load every ``*.poem`` file in *poems_dir*, sorted by file name."""
    try:
        entries = sorted(p for p in poems_dir.iterdir() if p.suffix == POEM_SUFFIX and p.is_file())
    except OSError as exc:
        raise PoemLoadError(f"cannot read poems directory {poems_dir}: {exc}") from exc

    poems: list[Poem] = []
    for path in entries:
        try:
            content = path.read_text(encoding="utf-8")
            poems.append(parse_poem(content, source_id=path.name))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read %s: %s", path, exc)
        except InvalidDocument as exc:
            logger.warning("Skipping %s: %s", path.name, exc)

    logger.debug("Loaded %d poem(s) from %s", len(poems), poems_dir)
    return poems


def resolve_source(poems_dir: Path, source_id: str) -> Path:
    """Path of the document a poem was loaded from."""
    return poems_dir / source_id
