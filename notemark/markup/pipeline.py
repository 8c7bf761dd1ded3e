#!/usr/bin/env python3
"""
pipeline.py
-----------
Entry points of the markup engine.

Render flow:
    source text
      -> preprocess      (shorthand to canonical, lines kept 1:1)
      -> BlockSegmenter  (blocks; task markers read from the source lines)
      -> tokenize_inline (spans; highlight overlay on Text leaves)
      -> HtmlRenderer    (HTML fragment)
      -> sanitize_html   (allow-list filter)

Edit flow:
    checkbox ordinal -> toggle_task(source, ordinal) -> new source text,
    which is rendered again from scratch.

``parse_note`` is memoised on its arguments. The returned Document is
shared between callers and must not be modified.

Usage:
    from notemark.markup.pipeline import NoteRenderer, render_note

    html = render_note(text, search="milk")

    renderer = NoteRenderer(logger=logger)
    html = renderer.render_preview(text, selection="buy")
    text = renderer.toggle(text, 0)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from functools import lru_cache
from typing import List, Optional

# --- Local imports ---
from notemark.core.config import DEFAULT_CONFIG, MarkupConfig
from notemark.core.exceptions import NoteRenderError
from notemark.core.logging_manager import NotemarkLogger, safe_logger
from notemark.markup.blocks import BlockSegmenter
from notemark.markup.highlight import HighlightOverlay
from notemark.markup.markers import preprocess
from notemark.markup.nodes import (
    Block,
    Blockquote,
    Document,
    ListBlock,
    ListItem,
    Paragraph,
    TaskMarker,
)
from notemark.markup.renderer import HtmlRenderer
from notemark.markup.sanitizer import sanitize_html
from notemark.markup.tasks import TaskLine, collect_tasks, toggle_task


PREVIEW_UNAVAILABLE = '<p class="preview-unavailable">Preview unavailable</p>'


def _collect_markers(blocks: List[Block]) -> List[TaskMarker]:
    """Task markers of a block tree, depth-first in document order."""
    markers: List[TaskMarker] = []

    def visit_list(block: ListBlock) -> None:
        for item in block.items:
            visit_item(item)

    def visit_item(item: ListItem) -> None:
        if item.task is not None:
            markers.append(item.task)
        if item.sublist is not None:
            visit_list(item.sublist)

    for block in blocks:
        if isinstance(block, ListBlock):
            visit_list(block)
        elif isinstance(block, Blockquote):
            markers.extend(_collect_markers(block.children))
        elif isinstance(block, Paragraph) and block.task is not None:
            markers.append(block.task)
    return markers


@lru_cache(maxsize=128)
def _parse(
    text: str,
    search: Optional[str],
    selection: Optional[str],
    config: MarkupConfig,
) -> Document:
    overlay = HighlightOverlay(
        search=search,
        selection=selection,
        selection_case_sensitive=config.selection_case_sensitive,
    )
    canonical = preprocess(text, indent_unit=config.indent_unit)
    segmenter = BlockSegmenter(source=text, overlay=overlay)
    blocks = segmenter.segment(canonical.split("\n"))
    return Document(blocks=blocks, tasks=_collect_markers(blocks), source=text)


def parse_note(
    text: str,
    search: Optional[str] = None,
    selection: Optional[str] = None,
    config: Optional[MarkupConfig] = None,
) -> Document:
    """
    Parse a note into a document tree.

    Args:
        text: Original note text
        search: Search-box term to highlight (case-insensitive)
        selection: Selected editor text to highlight
        config: Markup configuration (default: DEFAULT_CONFIG)

    Returns:
        Document with blocks, task markers and the original source

    Raises:
        NoteRenderError: If parsing fails outside the recoverable cases,
            e.g. nesting deep enough to exhaust the recursion limit
    """
    try:
        return _parse(text, search, selection, config or DEFAULT_CONFIG)
    except (RecursionError, MemoryError) as e:
        raise NoteRenderError(f"Cannot parse note: {type(e).__name__}") from e


def render_note(
    text: str,
    search: Optional[str] = None,
    selection: Optional[str] = None,
    config: Optional[MarkupConfig] = None,
) -> str:
    """
    Render a note to a sanitized HTML fragment.

    Args:
        text: Original note text
        search: Search-box term to highlight
        selection: Selected editor text to highlight
        config: Markup configuration (default: DEFAULT_CONFIG)

    Returns:
        Sanitized HTML fragment

    Raises:
        NoteRenderError: If the render pass fails unexpectedly

    Examples:
        >>> render_note("**hi**")
        '<p><strong>hi</strong></p>'
    """
    config = config or DEFAULT_CONFIG
    document = parse_note(text, search, selection, config)
    try:
        return sanitize_html(HtmlRenderer(config).render(document))
    except (RecursionError, MemoryError) as e:
        raise NoteRenderError(f"Cannot render note: {type(e).__name__}") from e


class NoteRenderer:
    """
    Render and edit notes with logging.

    Wraps the module-level functions for callers that hold a logger and a
    configuration, such as the CLI and a preview pane.

    Attributes:
        config: Markup configuration for every pass
        logger: Logger for operations and failures
    """

    def __init__(
        self,
        config: Optional[MarkupConfig] = None,
        logger: Optional[NotemarkLogger] = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self.logger = safe_logger(logger)

    def parse(
        self,
        text: str,
        search: Optional[str] = None,
        selection: Optional[str] = None,
    ) -> Document:
        return parse_note(text, search, selection, self.config)

    def render(
        self,
        text: str,
        search: Optional[str] = None,
        selection: Optional[str] = None,
    ) -> str:
        """
        Render a note to sanitized HTML.

        Raises:
            NoteRenderError: If the render pass fails unexpectedly
        """
        html = render_note(text, search, selection, self.config)
        self.logger.log_debug(
            "Rendered note",
            {"lines": text.count("\n") + 1, "search": search, "selection": selection},
        )
        return html

    def render_preview(
        self,
        text: str,
        search: Optional[str] = None,
        selection: Optional[str] = None,
    ) -> str:
        """
        Render a note for display, never raising.

        A failed render pass is logged and replaced by the
        "preview unavailable" fragment.

        Returns:
            Sanitized HTML fragment or PREVIEW_UNAVAILABLE
        """
        try:
            return self.render(text, search, selection)
        except NoteRenderError as e:
            self.logger.log_error(e, {"operation": "render_preview"})
            return PREVIEW_UNAVAILABLE

    def toggle(self, text: str, ordinal: int) -> str:
        """
        Toggle the ordinal-th task of a note.

        Returns:
            New note text (unchanged for a stale ordinal)
        """
        updated = toggle_task(text, ordinal)
        if updated == text:
            self.logger.log_warning("Task ordinal not found", {"ordinal": ordinal})
        else:
            self.logger.log_operation("toggle_task", {"ordinal": ordinal})
        return updated

    def tasks(self, text: str) -> List[TaskLine]:
        return collect_tasks(text)
