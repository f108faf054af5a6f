"""Tests for leaves.services.loader."""

import logging

import pytest

from leaves.services.loader import (
    InvalidDocument,
    PoemLoadError,
    load_poems,
    parse_poem,
    parse_version,
    resolve_source,
)

OZYMANDIAS = """\
canonical:
  title: Ozymandias
  author: Percy Bysshe Shelley
  language: en
  epigraph: "1818"
  text: |
    I met a traveller from an antique land,
    Who said
french:
  title: Ozymandias
  author: Percy Bysshe Shelley
  language: fr
  text: J'ai rencontré un voyageur
"""

JINGYESI = """\
canonical:
  title: 静夜思
  author: 李白
  language: lzh
  vertical: true
  rtl: true
  text: "床前明月光\\n疑是地上霜"
"""


class TestParseVersion:
    def test_required_fields(self):
        with pytest.raises(InvalidDocument, match="author, language"):
            parse_version({"title": "x", "text": "y"})

    def test_not_a_mapping(self):
        with pytest.raises(InvalidDocument):
            parse_version(["title"])

    def test_scalars_become_strings(self):
        version = parse_version({"title": 1984, "author": "A", "language": "en", "text": 1})
        assert version.title == "1984"
        assert version.text == "1"
        assert version.epigraph is None
        assert version.rtl is False


class TestParsePoem:
    def test_canonical_and_variant(self):
        poem = parse_poem(OZYMANDIAS, "ozymandias.poem")
        assert poem.canonical.title == "Ozymandias"
        assert poem.canonical.epigraph == "1818"
        assert poem.canonical.text.endswith("Who said\n")
        assert poem.version_keys() == ["canonical", "french"]
        assert poem.variants["french"].language == "fr"
        assert poem.source_id == "ozymandias.poem"

    def test_flags(self):
        poem = parse_poem(JINGYESI)
        assert poem.canonical.vertical is True
        assert poem.canonical.rtl is True
        assert poem.canonical.text == "床前明月光\n疑是地上霜"

    @pytest.mark.parametrize("content", [
        "",
        "- just\n- a list\n",
        "french:\n  title: x\n",
        "canonical: [unclosed\n",
        "canonical:\n  title: only a title\n",
    ])
    def test_rejected(self, content):
        with pytest.raises(InvalidDocument):
            parse_poem(content)

    def test_bad_variant_is_skipped(self, caplog):
        content = OZYMANDIAS + "broken:\n  title: no text\nnote: a plain string\n"
        with caplog.at_level(logging.WARNING, logger="leaves.services.loader"):
            poem = parse_poem(content, "ozymandias.poem")
        assert poem.version_keys() == ["canonical", "french"]
        assert "broken" in caplog.text


class TestLoadPoems:
    def test_sorted_by_file_name(self, tmp_poems_dir):
        (tmp_poems_dir / "b.poem").write_text(JINGYESI, encoding="utf-8")
        (tmp_poems_dir / "a.poem").write_text(OZYMANDIAS, encoding="utf-8")
        poems = load_poems(tmp_poems_dir)
        assert [p.source_id for p in poems] == ["a.poem", "b.poem"]

    def test_other_files_ignored(self, tmp_poems_dir):
        (tmp_poems_dir / "a.poem").write_text(OZYMANDIAS, encoding="utf-8")
        (tmp_poems_dir / "notes.txt").write_text(OZYMANDIAS, encoding="utf-8")
        (tmp_poems_dir / "dir.poem").mkdir()
        assert len(load_poems(tmp_poems_dir)) == 1

    def test_invalid_file_skipped_with_warning(self, tmp_poems_dir, caplog):
        (tmp_poems_dir / "good.poem").write_text(OZYMANDIAS, encoding="utf-8")
        (tmp_poems_dir / "bad.poem").write_text("canonical: {title: x}\n", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="leaves.services.loader"):
            poems = load_poems(tmp_poems_dir)
        assert [p.source_id for p in poems] == ["good.poem"]
        assert "bad.poem" in caplog.text

    def test_empty_directory(self, tmp_poems_dir):
        assert load_poems(tmp_poems_dir) == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(PoemLoadError):
            load_poems(tmp_path / "nowhere")


def test_resolve_source(tmp_poems_dir):
    assert resolve_source(tmp_poems_dir, "a.poem") == tmp_poems_dir / "a.poem"
