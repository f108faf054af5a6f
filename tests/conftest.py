"""Shared test fixtures for leaves."""


import pytest

from leaves.models import Poem, Version


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def tmp_poems_dir(tmp_path):
    """Create a temporary poems directory."""
    poems_dir = tmp_path / "poetry"
    poems_dir.mkdir()
    return poems_dir


def _make_version(
    title: str = "Ozymandias",
    author: str = "Percy Bysshe Shelley",
    language: str = "en",
    text: str = "I met a traveller from an antique land,\nWho said—“Two vast and trunkless legs of stone",
    **kwargs,
) -> Version:
    return Version(title=title, author=author, language=language, text=text, **kwargs)


@pytest.fixture
def make_version():
    return _make_version


@pytest.fixture
def sample_poem() -> Poem:
    return Poem(canonical=_make_version(), source_id="ozymandias.poem")


@pytest.fixture
def two_poems() -> list[Poem]:
    """Poem One by Alice (en); Poem Two by Bob (en, plus a French variant)."""
    return [
        Poem(
            canonical=_make_version("Poem One", "Alice", "en", "one"),
            source_id="one.poem",
        ),
        Poem(
            canonical=_make_version("Poem Two", "Bob", "en", "two"),
            variants={"french": _make_version("Poème Deux", "Bob", "fr", "deux")},
            source_id="two.poem",
        ),
    ]


@pytest.fixture
def sample_poems() -> list[Poem]:
    return [
        Poem(
            canonical=_make_version("Tyger", "William Blake", "en", "Tyger Tyger, burning bright"),
            source_id="tyger.poem",
        ),
        Poem(
            canonical=_make_version("Зимний вечер", "Александр Пушкин", "ru", "Буря мглою небо кроет"),
            variants={
                "english": _make_version("Winter Evening", "Alexander Pushkin", "en", "Storm has dimmed"),
                "bulgarian": _make_version("Зимна вечер", "Александър Пушкин", "bg", "Буря с мрак"),
                "french": _make_version("Soir d'hiver", "Alexandre Pouchkine", "fr", "La tempête"),
            },
            source_id="winter.poem",
        ),
        Poem(
            canonical=_make_version("ab", "Hafez", "fa", "یوسف گم گشته", rtl=True),
            variants={"english": _make_version("Lost Joseph", "Hafez", "en", "Joseph, lost")},
            source_id="hafez.poem",
        ),
        Poem(
            canonical=_make_version("Ah Sunflower", "William Blake", "en", "Ah Sun-flower! weary of time"),
            source_id="sunflower.poem",
        ),
        Poem(
            canonical=_make_version("静夜思", "李白", "lzh", "床前明月光\n疑是地上霜", vertical=True, rtl=True),
            variants={
                "english": _make_version("Quiet Night Thought", "Li Bai", "en", "Before my bed"),
                "english_alt": _make_version("Night Thoughts", "Li Bai", "en", "Moonlight before my bed"),
            },
            source_id="jingyesi.poem",
        ),
    ]


@pytest.fixture
def library(sample_poems):
    from leaves.services.library import LibraryIndex
    return LibraryIndex(sample_poems)


@pytest.fixture
def navigator(library):
    from leaves.services.navigation import Navigator
    return Navigator(library)
