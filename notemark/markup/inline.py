#!/usr/bin/env python3
"""
inline.py
---------
Inline tokenizer: splits the text of one block into spans.

A single alternation pattern recognises, in priority order, bold, italic,
inline code, images and links, each in its Markdown or HTML spelling:

    bold      **x**  __x__  <strong>x</strong>  <b>x</b>
    italic    *x*    _x_    <em>x</em>          <i>x</i>
    code      `x`           <code>x</code>
    image     ![alt](src)   <img src="..." alt="...">
    link      [text](href)  <a href="...">text</a>

Captured contents of bold, italic and link spans are tokenized again, so
``[**bold** link](url)`` nests. Text between matches becomes Text leaves,
which is the only place the highlight overlay is applied.

HTML attributes are read with one simple regex per attribute name. Tags
whose attributes the regex cannot read still render, with the attribute
left empty.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import List, Optional

# --- Local imports ---
from notemark.markup.highlight import NO_HIGHLIGHT, HighlightOverlay
from notemark.markup.nodes import Bold, Code, Image, Inline, Italic, Link, Text


INLINE_RE = re.compile(
    # bold
    r"(?P<bold>\*\*(?P<bold_star>.+?)\*\*"
    r"|__(?P<bold_under>.+?)__"
    r"|<(?P<bold_tag>strong|b)\b[^>]*>(?P<bold_html>.*?)</(?P=bold_tag)\s*>)"
    # italic
    r"|(?P<italic>\*(?P<italic_star>[^*\s](?:[^*]*?[^*\s])?)\*"
    r"|(?<!\w)_(?P<italic_under>[^_\s](?:[^_]*?[^_\s])?)_(?!\w)"
    r"|<(?P<italic_tag>em|i)\b[^>]*>(?P<italic_html>.*?)</(?P=italic_tag)\s*>)"
    # code
    r"|(?P<code>`(?P<code_tick>[^`]+)`"
    r"|<code\b[^>]*>(?P<code_html>.*?)</code\s*>)"
    # image
    r"|(?P<image>!\[(?P<image_alt>[^\]]*)\]\((?P<image_src>[^)\s]*)(?:\s+\"[^\"]*\")?\)"
    r"|<img\b(?P<image_attrs>[^>]*)>)"
    # link
    r"|(?P<link>\[(?P<link_text>[^\]]+)\]\((?P<link_href>[^)\s]*)(?:\s+\"[^\"]*\")?\)"
    r"|<a\b(?P<link_attrs>[^>]*)>(?P<link_html>.*?)</a\s*>)",
    re.IGNORECASE | re.DOTALL,
)


def html_attribute(attrs: str, name: str) -> str:
    """
    Read one attribute value from the inside of an HTML tag.

    Only ``name="value"`` and ``name='value'`` are understood; anything
    else yields an empty string.

    Args:
        attrs: Text between the tag name and the closing ``>``
        name: Attribute name (``src``, ``alt``, ``href``)

    Returns:
        The attribute value, or "" when it cannot be read

    Examples:
        >>> html_attribute(' src="a.png" alt=\\'cat\\'', "alt")
        'cat'
        >>> html_attribute(" src=a.png", "src")
        ''
    """
    match = re.search(
        rf"(?<![\w-]){re.escape(name)}\s*=\s*(?:\"([^\"]*)\"|'([^']*)')",
        attrs,
        re.IGNORECASE,
    )
    if not match:
        return ""
    return match.group(1) if match.group(1) is not None else match.group(2)


def tokenize_inline(
    text: str, overlay: Optional[HighlightOverlay] = None
) -> List[Inline]:
    """
    Tokenize block text into an inline span tree.

    Args:
        text: Raw text of one block (paragraph, list item, heading)
        overlay: Active highlight terms applied to Text leaves

    Returns:
        Ordered list of inline spans

    Examples:
        >>> tokenize_inline("a **b** c")
        [Text(text='a ', ...), Bold(children=[Text(text='b', ...)]), Text(text=' c', ...)]
    """
    overlay = overlay or NO_HIGHLIGHT
    spans: List[Inline] = []
    position = 0

    for match in INLINE_RE.finditer(text):
        if match.start() > position:
            spans.append(_text(text[position : match.start()], overlay))
        spans.append(_span(match, overlay))
        position = match.end()

    if position < len(text):
        spans.append(_text(text[position:], overlay))
    return spans


def _text(text: str, overlay: HighlightOverlay) -> Text:
    return Text(text, overlay.split(text))


def _first(match: "re.Match[str]", *groups: str) -> str:
    for group in groups:
        value = match.group(group)
        if value is not None:
            return value
    return ""


def _span(match: "re.Match[str]", overlay: HighlightOverlay) -> Inline:
    kind = match.lastgroup
    if kind == "bold":
        inner = _first(match, "bold_star", "bold_under", "bold_html")
        return Bold(tokenize_inline(inner, overlay))
    if kind == "italic":
        inner = _first(match, "italic_star", "italic_under", "italic_html")
        return Italic(tokenize_inline(inner, overlay))
    if kind == "code":
        return Code(_first(match, "code_tick", "code_html"))
    if kind == "image":
        if match.group("image_attrs") is not None:
            attrs = match.group("image_attrs")
            return Image(src=html_attribute(attrs, "src"), alt=html_attribute(attrs, "alt"))
        return Image(src=match.group("image_src"), alt=match.group("image_alt"))
    # link
    if match.group("link_attrs") is not None:
        href = html_attribute(match.group("link_attrs"), "href")
        inner = match.group("link_html")
    else:
        href = match.group("link_href")
        inner = match.group("link_text")
    return Link(href=href, children=tokenize_inline(inner, overlay))
