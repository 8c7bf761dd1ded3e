#!/usr/bin/env python3
"""
blocks.py
---------
Block segmenter: splits preprocessed note text into block nodes.

The segmenter consumes lines from a cursor, one block at a time:

    heading      "# Title" ... "###### Title", or "<h2>Title</h2>" on one line
    rule         "---", "***", "___", "<hr>", "<hr/>"
    blockquote   a run of ">" lines, or a balanced <blockquote> element
    list         a run of Markdown list lines, or a balanced <ul>/<ol>
    paragraph    anything else, lines joined with soft breaks

Blank lines end the current block and are skipped.

Line numbers are tracked as absolute indexes into the source text (the
preprocessor keeps lines 1:1). Whether a list item or paragraph carries a
task is decided by classifying the *original* source line at that index
with ``classify_line``, the same function the task mapper uses, so a
rendered checkbox's ordinal always leads back to the right line.

HTML containers are located with a balanced-tag scan. When the scan
cannot find the matching close tag the opening line degrades to a plain
paragraph and segmentation continues with the next line.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

# --- Local imports ---
from notemark.markup.highlight import NO_HIGHLIGHT, HighlightOverlay
from notemark.markup.inline import tokenize_inline
from notemark.markup.markers import LineTask, classify_line, scan_task_lines
from notemark.markup.nodes import (
    Block,
    Blockquote,
    Heading,
    Inline,
    ListBlock,
    ListItem,
    Paragraph,
    Rule,
    TaskMarker,
)


HEADING_RE = re.compile(r"^(#{1,6})\s(.*)$")
HTML_HEADING_RE = re.compile(r"^\s*<h([1-6])\b[^>]*>(.*)</h\1\s*>\s*$", re.IGNORECASE)
RULE_RE = re.compile(r"^(?:---|\*\*\*|___)\s*$")
HTML_RULE_RE = re.compile(r"^\s*<hr\s*/?>\s*$", re.IGNORECASE)
QUOTE_RE = re.compile(r"^\s{0,3}>\s?(.*)$")
LIST_RE = re.compile(r"^(\s*)([-*+]|\d+\.)\s+(.*)$")
HTML_CONTAINER_RE = re.compile(r"^\s*<(blockquote|ul|ol)\b", re.IGNORECASE)


# ----- Balanced-tag scan -----
@dataclass(frozen=True)
class ScanResult:
    """
    Location of a balanced HTML element inside a string.

    Attributes:
        start: Offset of the opening tag's ``<``
        content_start: Offset just past the opening tag's ``>``
        content_end: Offset of the matching closing tag's ``<``
        end: Offset just past the matching closing tag
    """

    start: int
    content_start: int
    content_end: int
    end: int


def balanced_scan(text: str, tag: str, start: int = 0) -> Optional[ScanResult]:
    """
    Find the first ``<tag>`` element in ``text`` and its matching close tag.

    Every opening ``<tag ...>`` token increments a depth counter and every
    ``</tag>`` decrements it; the element ends at the close tag that brings
    the depth back to zero. Tokens are found by plain pattern search, so a
    tag written inside an attribute value is counted too.

    Args:
        text: Text to scan
        tag: Tag name (``blockquote``, ``ul``, ``ol``, ``li``)
        start: Offset to start scanning from

    Returns:
        ScanResult, or None when no opening tag exists or depth never
        returns to zero

    Examples:
        >>> r = balanced_scan("<ul><li>a</li></ul>", "ul")
        >>> "<ul><li>a</li></ul>"[r.content_start:r.content_end]
        '<li>a</li>'
        >>> balanced_scan("<blockquote>unterminated", "blockquote") is None
        True
    """
    token_re = re.compile(rf"<(/?){re.escape(tag)}\b[^>]*>", re.IGNORECASE)
    depth = 0
    opening: Optional["re.Match[str]"] = None

    for token in token_re.finditer(text, start):
        closing = token.group(1) == "/"
        if opening is None:
            if not closing:
                opening = token
                depth = 1
            continue
        depth += -1 if closing else 1
        if depth == 0:
            return ScanResult(
                start=opening.start(),
                content_start=opening.end(),
                content_end=token.start(),
                end=token.end(),
            )
    return None


def indentation(prefix: str) -> int:
    """Width of leading whitespace, tabs counted as four spaces."""
    return len(prefix.replace("\t", "    "))


# ----- Segmenter -----
class BlockSegmenter:
    """
    Segments preprocessed lines into blocks for one document.

    Attributes:
        source_lines: Original, unprocessed source lines
        overlay: Highlight terms handed to the inline tokenizer
        tasks: Map of source line index to (ordinal, classification)
    """

    def __init__(
        self,
        source: str,
        overlay: Optional[HighlightOverlay] = None,
    ) -> None:
        """
        Initialize the segmenter for one source text.

        Args:
            source: Original note text, before preprocessing
            overlay: Highlight terms for Text leaves
        """
        self.source_lines = source.split("\n")
        self.overlay = overlay or NO_HIGHLIGHT
        self.tasks: Dict[int, Tuple[int, LineTask]] = {
            line_index: (ordinal, task)
            for ordinal, (line_index, task) in enumerate(scan_task_lines(self.source_lines))
        }

    # ---- Public API ----
    def segment(self, lines: List[str], base: int = 0) -> List[Block]:
        """
        Segment lines into blocks.

        Args:
            lines: Preprocessed lines
            base: Absolute source index of ``lines[0]``

        Returns:
            Blocks in source order
        """
        lines = list(lines)
        blocks: List[Block] = []
        cursor = 0
        while cursor < len(lines):
            if not lines[cursor].strip():
                cursor += 1
                continue
            block, cursor = self.next_block(lines, cursor, base)
            blocks.append(block)
        return blocks

    def next_block(self, lines: List[str], cursor: int, base: int = 0) -> Tuple[Block, int]:
        """
        Consume one block starting at a non-blank line.

        Text following an HTML container's closing tag on the same line is
        written back into ``lines`` at that index, and the returned cursor
        points at it so it becomes the next block.

        Args:
            lines: Preprocessed lines (may be modified as described above)
            cursor: Index of the first line of the block
            base: Absolute source index of ``lines[0]``

        Returns:
            Tuple of (block, index of the first line after the block)
        """
        line = lines[cursor]
        absolute = base + cursor

        match = HEADING_RE.match(line)
        if match:
            return Heading(len(match.group(1)), self._inline(match.group(2)), absolute), cursor + 1

        match = HTML_HEADING_RE.match(line)
        if match:
            return Heading(int(match.group(1)), self._inline(match.group(2)), absolute), cursor + 1

        if RULE_RE.match(line) or HTML_RULE_RE.match(line):
            return Rule(absolute), cursor + 1

        if QUOTE_RE.match(line):
            return self._markdown_quote(lines, cursor, base)

        if LIST_RE.match(line):
            return self._markdown_list(lines, cursor, base)

        match = HTML_CONTAINER_RE.match(line)
        if match:
            result = self._html_container(match.group(1).lower(), lines, cursor, base)
            if result is not None:
                return result
            return self._paragraph_line(line, absolute), cursor + 1

        return self._paragraph(lines, cursor, base)

    # ---- Helpers ----
    def _inline(self, text: str) -> List[Inline]:
        return tokenize_inline(text, self.overlay)

    def _task(self, absolute: int) -> Optional[TaskMarker]:
        entry = self.tasks.get(absolute)
        if entry is None:
            return None
        ordinal, task = entry
        return TaskMarker(ordinal=ordinal, completed=task.completed, source_line=absolute)

    def _starts_block(self, line: str) -> bool:
        return bool(
            HEADING_RE.match(line)
            or HTML_HEADING_RE.match(line)
            or RULE_RE.match(line)
            or HTML_RULE_RE.match(line)
            or QUOTE_RE.match(line)
            or LIST_RE.match(line)
            or HTML_CONTAINER_RE.match(line)
        )

    # ---- Paragraphs ----
    def _paragraph(self, lines: List[str], cursor: int, base: int) -> Tuple[Block, int]:
        start = cursor
        collected = [lines[cursor]]
        cursor += 1
        while cursor < len(lines):
            line = lines[cursor]
            if not line.strip() or self._starts_block(line) or (base + cursor) in self.tasks:
                break
            collected.append(line)
            cursor += 1

        absolute = base + start
        task = self._task(absolute)
        if task is not None:
            classified = classify_line(collected[0])
            if classified is not None:
                collected[0] = classified.text
        else:
            collected[0] = collected[0].lstrip()
        text = "\n".join(line.strip() for line in collected)
        return Paragraph(self._inline(text), task, absolute), cursor

    def _paragraph_line(self, line: str, absolute: int) -> Paragraph:
        return Paragraph(self._inline(line.strip()), None, absolute)

    # ---- Blockquotes ----
    def _markdown_quote(self, lines: List[str], cursor: int, base: int) -> Tuple[Block, int]:
        start = cursor
        inner: List[str] = []
        while cursor < len(lines):
            match = QUOTE_RE.match(lines[cursor])
            if not match:
                break
            inner.append(match.group(1))
            cursor += 1
        return Blockquote(self.segment(inner, base + start), base + start), cursor

    # ---- Lists ----
    def _markdown_list(self, lines: List[str], cursor: int, base: int) -> Tuple[Block, int]:
        end = cursor
        while end < len(lines) and LIST_RE.match(lines[end]):
            end += 1
        return self._list_run(lines[cursor:end], base + cursor), end

    def _list_run(self, run: List[str], base: int) -> ListBlock:
        """
        Build a list from a contiguous run of Markdown list lines.

        Items at the run's minimal indentation are top-level; deeper lines
        are collected under the preceding item and built into its sublist.
        """
        matches = [LIST_RE.match(line) for line in run]
        baseline = min(indentation(m.group(1)) for m in matches)
        ordered = matches[0].group(2)[0].isdigit()
        block = ListBlock(ordered=ordered, items=[], line=base)

        current: Optional[ListItem] = None
        nested_start: Optional[int] = None

        def finish(upto: int) -> None:
            if current is not None and nested_start is not None:
                current.sublist = self._list_run(run[nested_start:upto], base + nested_start)

        for index, match in enumerate(matches):
            if indentation(match.group(1)) > baseline:
                if current is None:
                    current = ListItem(line=base + index)
                    block.items.append(current)
                if nested_start is None:
                    nested_start = index
                continue
            finish(index)
            nested_start = None
            current = self._list_item(run[index], match.group(3), base + index)
            block.items.append(current)

        finish(len(run))
        return block

    def _list_item(self, line: str, content: str, absolute: int) -> ListItem:
        task = self._task(absolute)
        if task is not None:
            classified = classify_line(line)
            if classified is not None:
                content = classified.text
        return ListItem(children=self._inline(content), task=task, line=absolute)

    # ---- HTML containers ----
    def _html_container(
        self, tag: str, lines: List[str], cursor: int, base: int
    ) -> Optional[Tuple[Block, int]]:
        joined = "\n".join(lines[cursor:])
        scan = balanced_scan(joined, tag)
        if scan is None:
            return None

        content = joined[scan.content_start : scan.content_end]
        content_base = base + cursor + joined.count("\n", 0, scan.content_start)
        if tag == "blockquote":
            block: Optional[Block] = Blockquote(
                self.segment(content.split("\n"), content_base), base + cursor
            )
        else:
            block = self._html_list(tag == "ol", content, content_base)
            if block is None:
                return None

        end_line = cursor + joined.count("\n", 0, scan.end)
        line_end = joined.find("\n", scan.end)
        trailing = joined[scan.end :] if line_end == -1 else joined[scan.end : line_end]
        if trailing.strip():
            lines[end_line] = trailing
            return block, end_line
        return block, end_line + 1

    def _html_list(self, ordered: bool, content: str, base: int) -> Optional[ListBlock]:
        """
        Build a list from the interior of a <ul>/<ol> element.

        Each balanced <li> becomes an item; a nested <ul>/<ol> inside an
        item becomes its sublist. Returns None when an <li> is unbalanced.
        """
        block = ListBlock(ordered=ordered, items=[], line=base)
        position = 0
        while True:
            scan = balanced_scan(content, "li", position)
            if scan is None:
                if re.search(r"<li\b", content[position:], re.IGNORECASE):
                    return None
                return block
            line = base + content.count("\n", 0, scan.start)
            item_text = content[scan.content_start : scan.content_end]
            block.items.append(self._html_item(item_text, line))
            position = scan.end

    def _html_item(self, text: str, line: int) -> ListItem:
        nested = re.search(r"<(ul|ol)\b", text, re.IGNORECASE)
        if nested:
            tag = nested.group(1).lower()
            scan = balanced_scan(text, tag, nested.start())
            if scan is not None:
                inner = text[scan.content_start : scan.content_end]
                inner_base = line + text.count("\n", 0, scan.content_start)
                sublist = self._html_list(tag == "ol", inner, inner_base)
                if sublist is not None:
                    label = (text[: scan.start] + " " + text[scan.end :]).strip()
                    return ListItem(self._inline(label), sublist, None, line)
        return ListItem(self._inline(text.strip()), None, None, line)


def segment(
    text: str,
    source: Optional[str] = None,
    overlay: Optional[HighlightOverlay] = None,
) -> List[Block]:
    """
    Segment preprocessed text into blocks.

    Args:
        text: Preprocessed note text
        source: Original text the preprocessed text came from (default:
            ``text`` itself); task markers are read from it
        overlay: Highlight terms for Text leaves

    Returns:
        Top-level blocks in source order
    """
    segmenter = BlockSegmenter(text if source is None else source, overlay)
    return segmenter.segment(text.split("\n"))
