#!/usr/bin/env python3
"""
highlight.py
------------
Search and selection highlighting for Text spans.

The overlay only ever sees the literal text of Text leaves. Code spans,
link targets and image attributes never reach it, so highlighting cannot
corrupt markup that the tokenizer already delimited.

Two passes run independently over the same text:
    - search: case-insensitive, from the diary's search box
    - selection: case-sensitive by default, from the editor's selected text

Where both match, the fragment carries both flags.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Pattern, Tuple

# --- Local imports ---
from notemark.markup.nodes import Fragment


Span = Tuple[int, int]


@lru_cache(maxsize=64)
def _term_pattern(term: str, ignore_case: bool) -> Pattern[str]:
    return re.compile(re.escape(term), re.IGNORECASE if ignore_case else 0)


def _normalize_term(term: Optional[str]) -> Optional[str]:
    if term is None:
        return None
    term = term.strip()
    return term or None


def find_spans(text: str, term: Optional[str], ignore_case: bool) -> List[Span]:
    """
    Locate non-overlapping occurrences of ``term`` in ``text``.

    Args:
        text: Text to search
        term: Literal term (regex metacharacters have no meaning), or None
        ignore_case: Match case-insensitively

    Returns:
        List of (start, end) offsets, empty when the term is blank
    """
    term = _normalize_term(term)
    if term is None or not text:
        return []
    return [m.span() for m in _term_pattern(term, ignore_case).finditer(text)]


def _covered(start: int, end: int, spans: List[Span]) -> bool:
    return any(s <= start and end <= e for s, e in spans)


@dataclass(frozen=True)
class HighlightOverlay:
    """
    Active highlight terms for one render pass.

    Blank or whitespace-only terms are stored as None and disable their
    pass. Terms are stripped before matching.

    Attributes:
        search: Search-box term
        selection: Currently selected editor text
        selection_case_sensitive: Whether the selection pass honours case
    """

    search: Optional[str] = None
    selection: Optional[str] = None
    selection_case_sensitive: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "search", _normalize_term(self.search))
        object.__setattr__(self, "selection", _normalize_term(self.selection))

    @property
    def active(self) -> bool:
        return self.search is not None or self.selection is not None

    def split(self, text: str) -> List[Fragment]:
        """
        Split literal text into highlight fragments.

        Args:
            text: Literal text of one Text span

        Returns:
            Fragments in order whose texts concatenate back to ``text``.
            Empty text yields an empty list.

        Examples:
            >>> HighlightOverlay(search="milk").split("buy Milk")
            [Fragment(text='buy ', ...), Fragment(text='Milk', search=True, ...)]
        """
        if not text:
            return []
        if not self.active:
            return [Fragment(text)]

        search_spans = find_spans(text, self.search, ignore_case=True)
        selection_spans = find_spans(
            text, self.selection, ignore_case=not self.selection_case_sensitive
        )
        if not search_spans and not selection_spans:
            return [Fragment(text)]

        cuts = {0, len(text)}
        for start, end in search_spans + selection_spans:
            cuts.update((start, end))
        bounds = sorted(cuts)

        fragments: List[Fragment] = []
        for start, end in zip(bounds, bounds[1:]):
            search = _covered(start, end, search_spans)
            selection = _covered(start, end, selection_spans)
            if fragments and (fragments[-1].search, fragments[-1].selection) == (search, selection):
                previous = fragments.pop()
                fragments.append(Fragment(previous.text + text[start:end], search, selection))
            else:
                fragments.append(Fragment(text[start:end], search, selection))
        return fragments


NO_HIGHLIGHT = HighlightOverlay()
