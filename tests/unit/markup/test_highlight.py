#!/usr/bin/env python3
"""
test_highlight.py
-----------------
Tests for the search and selection highlight overlay.
"""
# --- Annotations ---
from __future__ import annotations

# --- Local imports ---
from notemark.markup.highlight import NO_HIGHLIGHT, HighlightOverlay, find_spans
from notemark.markup.nodes import Fragment, MatchKind


class TestFindSpans:
    """Tests for literal term matching."""

    def test_all_occurrences(self):
        """Every non-overlapping occurrence is found."""
        assert find_spans("aaa", "a", ignore_case=False) == [(0, 1), (1, 2), (2, 3)]

    def test_metacharacters_are_literal(self):
        """Regex syntax in the term has no special meaning."""
        assert find_spans("axb a.b", "a.b", ignore_case=True) == [(4, 7)]

    def test_blank_term(self):
        """Whitespace-only terms find nothing."""
        assert find_spans("a b", "   ", ignore_case=True) == []
        assert find_spans("a b", None, ignore_case=True) == []


class TestSearchPass:
    """Tests for the case-insensitive search pass."""

    def test_case_insensitive(self):
        """Search ignores case and keeps the original text."""
        overlay = HighlightOverlay(search="milk")
        assert overlay.split("buy Milk") == [Fragment("buy "), Fragment("Milk", search=True)]

    def test_term_is_stripped(self):
        """Surrounding whitespace in the term is ignored."""
        assert HighlightOverlay(search="  milk ").search == "milk"

    def test_no_match_single_fragment(self):
        """Text without matches stays whole."""
        assert HighlightOverlay(search="tea").split("coffee") == [Fragment("coffee")]

    def test_empty_text(self):
        """Empty text has no fragments."""
        assert HighlightOverlay(search="x").split("") == []


class TestSelectionPass:
    """Tests for the selection pass."""

    def test_case_sensitive_by_default(self):
        """Selection honours case unless configured otherwise."""
        overlay = HighlightOverlay(selection="Milk")
        assert overlay.split("milk Milk") == [Fragment("milk "), Fragment("Milk", selection=True)]

    def test_case_insensitive_option(self):
        """Selection can be made case-insensitive."""
        overlay = HighlightOverlay(selection="Milk", selection_case_sensitive=False)
        assert overlay.split("milk Milk") == [
            Fragment("milk", selection=True),
            Fragment(" "),
            Fragment("Milk", selection=True),
        ]

    def test_blank_selection_disables_pass(self):
        """A blank selection is no overlay at all."""
        overlay = HighlightOverlay(selection=" \n ")
        assert overlay.active is False
        assert overlay == NO_HIGHLIGHT


class TestOverlap:
    """Search and selection applied together."""

    def test_overlapping_regions_carry_both_flags(self):
        """Where both terms match, the fragment is search and selection."""
        overlay = HighlightOverlay(search="buy milk", selection="milk")
        fragments = overlay.split("buy milk")
        assert fragments == [
            Fragment("buy ", search=True),
            Fragment("milk", search=True, selection=True),
        ]
        assert fragments[1].match_kind is MatchKind.SEARCH

    def test_fragments_reassemble_text(self):
        """Fragment texts concatenate back to the input."""
        overlay = HighlightOverlay(search="an", selection="ana")
        text = "banana bandana"
        assert "".join(f.text for f in overlay.split(text)) == text

    def test_match_kind(self):
        """match_kind reflects which pass matched."""
        assert Fragment("x", selection=True).match_kind is MatchKind.SELECTION
        assert Fragment("x").match_kind is MatchKind.NONE
        assert Fragment("x").is_match is False
