"""Tests for core/text.py — whitespace normalisation and clamping."""

from __future__ import annotations

from core.text import MAX_CHARS, clamp, normalize_whitespace, prepare_text


class TestNormalizeWhitespace:
    def test_collapses_runs_and_newlines(self):
        assert normalize_whitespace("a  b\n\n\tc") == "a b c"

    def test_trims_ends(self):
        assert normalize_whitespace("  \n hello \t ") == "hello"

    def test_whitespace_only_becomes_empty(self):
        assert normalize_whitespace(" \n\t ") == ""


class TestClamp:
    def test_short_text_unchanged(self):
        assert clamp("abc", 10) == "abc"

    def test_cuts_mid_word(self):
        assert clamp("abcdef", 4) == "abcd"


class TestPrepareText:
    def test_long_text_clamped_to_exact_budget(self):
        raw = ("word \n " * 5000) + "tail"
        result = prepare_text(raw)

        assert len(result) == MAX_CHARS
        assert normalize_whitespace(raw).startswith(result)

    def test_default_budget_is_12000(self):
        assert MAX_CHARS == 12_000

    def test_custom_budget(self):
        assert prepare_text("one   two three", max_chars=7) == "one two"
