#!/usr/bin/env python3
"""
nodes.py
--------
Document tree produced by the markup engine.

Blocks and inline spans are plain dataclasses forming two tagged unions,
``Block`` and ``Inline``. Renderers dispatch on the concrete type; nodes
carry no behaviour beyond small convenience properties.

Block nodes:
    - Heading: level 1-6 with inline children
    - Rule: horizontal rule
    - Blockquote: nested blocks
    - ListBlock: ordered/unordered list of ListItem
    - Paragraph: inline children, optionally a task

Inline spans:
    - Bold, Italic: inline children
    - Code: literal text
    - Image: src and alt
    - Link: href and inline children
    - Text: literal text split into highlight fragments
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class MatchKind(str, Enum):
    """Which highlight pass produced a fragment."""

    NONE = "none"
    SEARCH = "search"
    SELECTION = "selection"


@dataclass(frozen=True)
class Fragment:
    """
    Piece of a Text span after the highlight overlay.

    Search and selection are independent, so a fragment can carry both.

    Attributes:
        text: Literal text of the fragment
        search: True when the text matched the search term
        selection: True when the text matched the selected text
    """

    text: str
    search: bool = False
    selection: bool = False

    @property
    def is_match(self) -> bool:
        return self.search or self.selection

    @property
    def match_kind(self) -> MatchKind:
        """Primary kind; search wins when both passes matched."""
        if self.search:
            return MatchKind.SEARCH
        if self.selection:
            return MatchKind.SELECTION
        return MatchKind.NONE


@dataclass(frozen=True)
class TaskMarker:
    """
    Task state attached to a list item or paragraph.

    Attributes:
        ordinal: Zero-based position among all tasks in document order
        completed: True for ``[x]``/``DONE``
        source_line: Zero-based index of the source line holding the task
    """

    ordinal: int
    completed: bool
    source_line: int


# ----- Inline spans -----
@dataclass
class Text:
    text: str
    fragments: List[Fragment] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.fragments and self.text:
            self.fragments = [Fragment(self.text)]


@dataclass
class Bold:
    children: List["Inline"] = field(default_factory=list)


@dataclass
class Italic:
    children: List["Inline"] = field(default_factory=list)


@dataclass
class Code:
    text: str


@dataclass
class Image:
    src: str = ""
    alt: str = ""


@dataclass
class Link:
    href: str = ""
    children: List["Inline"] = field(default_factory=list)


Inline = Union[Text, Bold, Italic, Code, Image, Link]


# ----- Blocks -----
@dataclass
class Heading:
    level: int
    children: List[Inline] = field(default_factory=list)
    line: int = 0


@dataclass
class Rule:
    line: int = 0


@dataclass
class Blockquote:
    children: List["Block"] = field(default_factory=list)
    line: int = 0


@dataclass
class ListItem:
    """
    One entry of a list.

    Attributes:
        children: Inline content of the item (task marker token removed)
        sublist: Nested list, when deeper-indented lines followed the item
        task: Task state, when the item's source line is a task line
        line: Source line index of the item
    """

    children: List[Inline] = field(default_factory=list)
    sublist: Optional["ListBlock"] = None
    task: Optional[TaskMarker] = None
    line: int = 0


@dataclass
class ListBlock:
    ordered: bool = False
    items: List[ListItem] = field(default_factory=list)
    line: int = 0


@dataclass
class Paragraph:
    children: List[Inline] = field(default_factory=list)
    task: Optional[TaskMarker] = None
    line: int = 0


Block = Union[Heading, Rule, Blockquote, ListBlock, Paragraph]


@dataclass
class Document:
    """
    Result of one parse.

    Attributes:
        blocks: Top-level blocks in source order
        tasks: Every rendered task marker, depth-first in document order
        source: The original, unprocessed source text
    """

    blocks: List[Block] = field(default_factory=list)
    tasks: List[TaskMarker] = field(default_factory=list)
    source: str = ""

    @property
    def open_tasks(self) -> List[TaskMarker]:
        return [task for task in self.tasks if not task.completed]
