"""Tests for leaves.services.markup."""

import pytest

from leaves.services.markup import Span, format_heading, normalize_markup, parse_spans, spans_for_lines


class TestNormalizeMarkup:
    @pytest.mark.parametrize("text, expected", [
        ("", ""),
        ("plain line", "plain line"),
        ("**bold**", "**bold**"),
        ("*italic*", "_italic_"),
        ("a *b* and **c**", "a _b_ and **c**"),
        ("***both***", "**_both**_"),
        ("snake_case stays", "snake_case stays"),
        ("# single hash stays", "# single hash stays"),
    ])
    def test_inline_markers(self, text, expected):
        assert normalize_markup(text) == expected

    def test_heading_line(self):
        assert normalize_markup("## Part One  \nfirst line") == "  ——— **Part One** ——— \nfirst line"

    def test_heading_at_end_of_text(self):
        assert normalize_markup("x\n##Coda") == "x\n" + format_heading("Coda")

    def test_newlines_preserved(self):
        text = "one\n\n  two\n"
        assert normalize_markup(text) == text


class TestParseSpans:
    def test_empty_line(self):
        assert parse_spans("") == []

    def test_plain(self):
        assert parse_spans("just text") == [Span("just text")]

    def test_mixed(self):
        assert parse_spans("**b** x _i_") == [
            Span("b", bold=True),
            Span(" x "),
            Span("i", italic=True),
        ]

    def test_unterminated_runs_to_end(self):
        assert parse_spans("a **b c") == [Span("a "), Span("b c", bold=True)]

    def test_initial_state(self):
        assert parse_spans("end_ rest", italic=True) == [Span("end", italic=True), Span(" rest")]

    def test_heading_is_bold(self):
        spans = parse_spans(format_heading("Title"))
        assert Span("Title", bold=True) in spans


class TestSpansForLines:
    def test_emphasis_carries_over(self):
        lines = normalize_markup("*first\nsecond*\nthird").split("\n")
        assert spans_for_lines(lines) == [
            [Span("first", italic=True)],
            [Span("second", italic=True)],
            [Span("third")],
        ]
