#!/usr/bin/env python3
"""
renderer.py
-----------
HTML renderer for the note document tree.

Walks a Document depth-first and writes an HTML fragment. Text is always
escaped; markup only comes from node types, so raw HTML typed into a note
that the tokenizer did not recognise shows up literally.

Task-carrying list items and paragraphs become:

    <li class="task-item task-done" data-task-ordinal="0">
      <input type="checkbox" class="task-checkbox" data-task-ordinal="0" checked>
      ...
    </li>

so that a click handler can read the ordinal back and pass it to
``toggle_task``. Highlight fragments become ``<mark>`` (search) and
``<span>`` (selection) elements with configurable classes.

Link and image targets go through markdown-it-py's link validation and
normalisation; a rejected target renders the element without it.

The output is not sanitized here; ``pipeline.render_note`` runs it through
``sanitizer.sanitize_html``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional

# --- Third party imports ---
from markdown_it.common.normalize_url import normalizeLink, validateLink
from markdown_it.common.utils import escapeHtml

# --- Local imports ---
from notemark.core.config import DEFAULT_CONFIG, MarkupConfig
from notemark.markup.nodes import (
    Block,
    Blockquote,
    Bold,
    Code,
    Document,
    Fragment,
    Heading,
    Image,
    Inline,
    Italic,
    Link,
    ListBlock,
    ListItem,
    Paragraph,
    Rule,
    TaskMarker,
    Text,
)


LINK_REL = "noopener noreferrer nofollow"


def safe_target(url: str) -> Optional[str]:
    """
    Validate and normalise a link or image target.

    Args:
        url: Target as written in the note

    Returns:
        Normalised URL, or None when the target is empty or unsafe
    """
    url = url.strip()
    if not url:
        return None
    normalized = normalizeLink(url)
    if not validateLink(normalized):
        return None
    return normalized


class HtmlRenderer:
    """
    Renders Document trees to HTML fragments.

    Attributes:
        config: Class names and link target used in the output
    """

    def __init__(self, config: Optional[MarkupConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def render(self, document: Document) -> str:
        """Render every top-level block, one per line."""
        return self.render_blocks(document.blocks)

    def render_blocks(self, blocks: List[Block]) -> str:
        return "\n".join(self.render_block(block) for block in blocks)

    def render_block(self, block: Block) -> str:
        if isinstance(block, Heading):
            return f"<h{block.level}>{self.render_inline(block.children)}</h{block.level}>"
        if isinstance(block, Rule):
            return "<hr>"
        if isinstance(block, Blockquote):
            return f"<blockquote>\n{self.render_blocks(block.children)}\n</blockquote>"
        if isinstance(block, ListBlock):
            return self.render_list(block)
        if isinstance(block, Paragraph):
            attrs = self._task_attrs(block.task)
            body = self._checkbox(block.task) + self.render_inline(block.children)
            return f"<p{attrs}>{body}</p>"
        raise TypeError(f"Unknown block node: {type(block).__name__}")

    def render_list(self, block: ListBlock) -> str:
        tag = "ol" if block.ordered else "ul"
        items = "\n".join(self.render_item(item) for item in block.items)
        return f"<{tag}>\n{items}\n</{tag}>"

    def render_item(self, item: ListItem) -> str:
        body = self._checkbox(item.task) + self.render_inline(item.children)
        if item.sublist is not None:
            body += "\n" + self.render_list(item.sublist)
        return f"<li{self._task_attrs(item.task)}>{body}</li>"

    # ---- Inline ----
    def render_inline(self, spans: List[Inline]) -> str:
        return "".join(self.render_span(span) for span in spans)

    def render_span(self, span: Inline) -> str:
        if isinstance(span, Text):
            return "".join(self.render_fragment(fragment) for fragment in span.fragments)
        if isinstance(span, Bold):
            return f"<strong>{self.render_inline(span.children)}</strong>"
        if isinstance(span, Italic):
            return f"<em>{self.render_inline(span.children)}</em>"
        if isinstance(span, Code):
            return f"<code>{escapeHtml(span.text)}</code>"
        if isinstance(span, Image):
            src = safe_target(span.src)
            src_attr = f' src="{escapeHtml(src)}"' if src else ""
            return f'<img{src_attr} alt="{escapeHtml(span.alt)}">'
        if isinstance(span, Link):
            href = safe_target(span.href)
            inner = self.render_inline(span.children)
            if href is None:
                return f"<a>{inner}</a>"
            return (
                f'<a href="{escapeHtml(href)}" rel="{LINK_REL}" '
                f'target="{escapeHtml(self.config.link_target)}">{inner}</a>'
            )
        raise TypeError(f"Unknown inline node: {type(span).__name__}")

    def render_fragment(self, fragment: Fragment) -> str:
        html = escapeHtml(fragment.text).replace("\n", "<br>\n")
        if fragment.selection:
            html = f'<span class="{escapeHtml(self.config.selection_class)}">{html}</span>'
        if fragment.search:
            html = f'<mark class="{escapeHtml(self.config.search_class)}">{html}</mark>'
        return html

    # ---- Tasks ----
    def _task_attrs(self, task: Optional[TaskMarker]) -> str:
        if task is None:
            return ""
        classes = self.config.task_class
        if task.completed:
            classes += " task-done"
        return f' class="{escapeHtml(classes)}" data-task-ordinal="{task.ordinal}"'

    def _checkbox(self, task: Optional[TaskMarker]) -> str:
        if task is None:
            return ""
        checked = " checked" if task.completed else ""
        return (
            f'<input type="checkbox" class="task-checkbox" '
            f'data-task-ordinal="{task.ordinal}"{checked}> '
        )
