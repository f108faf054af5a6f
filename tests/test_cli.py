"""Tests for the headless leaves commands."""

import json

import pytest
from click.testing import CliRunner

from leaves import cli
from leaves.config.settings import Settings

TYGER = """\
canonical:
  title: Tyger
  author: William Blake
  language: en
  text: |
    Tyger Tyger, burning bright,
    In the forests of the night;
"""

JINGYESI = """\
canonical:
  title: 静夜思
  author: 李白
  language: lzh
  vertical: true
  rtl: true
  text: "床前明月光\\n疑是地上霜"
english:
  title: Quiet Night Thought
  author: Li Bai
  language: en
  text: Before my bed
"""


@pytest.fixture
def runner(monkeypatch, tmp_poems_dir):
    (tmp_poems_dir / "tyger.poem").write_text(TYGER, encoding="utf-8")
    (tmp_poems_dir / "jingyesi.poem").write_text(JINGYESI, encoding="utf-8")
    monkeypatch.setattr(cli, "ensure_dirs", lambda: None)
    monkeypatch.setattr(cli, "get_settings", Settings)
    return CliRunner()


def _invoke(runner, poems_dir, *args):
    return runner.invoke(cli.main, ["--poems-dir", str(poems_dir), *args])


class TestList:
    def test_titles(self, runner, tmp_poems_dir):
        result = _invoke(runner, tmp_poems_dir, "list")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["William Blake - Tyger", "李白 - 静夜思"]

    def test_languages(self, runner, tmp_poems_dir):
        result = _invoke(runner, tmp_poems_dir, "list", "--by", "language")
        assert result.output.splitlines() == ["en · English (2)", "lzh · 文言 (1)"]

    def test_empty(self, runner, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        result = _invoke(runner, empty, "list")
        assert result.output.strip() == "No poems found."

    def test_missing_directory(self, runner, tmp_path):
        result = _invoke(runner, tmp_path / "nowhere", "list")
        assert result.exit_code == 1
        assert "cannot read poems directory" in result.output


class TestShow:
    def test_horizontal(self, runner, tmp_poems_dir):
        result = _invoke(runner, tmp_poems_dir, "show", "tyger")
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "William Blake - Tyger"
        assert lines[2] == "Tyger Tyger, burning bright,"

    def test_vertical(self, runner, tmp_poems_dir):
        result = _invoke(runner, tmp_poems_dir, "show", "李白", "--height", "10")
        assert result.output.splitlines()[2:] == ["疑床", "是前", "地明", "上月", "霜光"]

    def test_variant(self, runner, tmp_poems_dir):
        result = _invoke(runner, tmp_poems_dir, "show", "李白", "--version", "english")
        assert result.output.splitlines()[0] == "Li Bai - Quiet Night Thought"

    def test_unknown_variant(self, runner, tmp_poems_dir):
        result = _invoke(runner, tmp_poems_dir, "show", "tyger", "--version", "french")
        assert result.exit_code == 1
        assert "available: canonical" in result.output

    def test_no_match(self, runner, tmp_poems_dir):
        result = _invoke(runner, tmp_poems_dir, "show", "nothing")
        assert result.exit_code == 1


def test_stats(runner, tmp_poems_dir):
    result = _invoke(runner, tmp_poems_dir, "stats", "--json")
    assert json.loads(result.output) == {
        "poems": 2,
        "versions": 3,
        "authors": {"William Blake": 1, "李白": 1},
        "languages": {"en": 2, "lzh": 1},
    }
