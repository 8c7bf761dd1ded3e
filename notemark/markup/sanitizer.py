#!/usr/bin/env python3
"""
sanitizer.py
------------
Allow-list HTML sanitizer for rendered notes.

Every fragment the renderer produces passes through ``sanitize_html``
before it is handed to a page or a web view. The fragment is parsed into
a tree and walked once:

    - script-like elements (script, style, iframe, ...) are removed with
      their content
    - any other element outside the allow-list is unwrapped, keeping its
      text
    - attributes outside the per-tag allow-list are dropped, as are all
      ``on*`` event handlers
    - href/src values with an unsafe protocol are dropped
    - <input> survives only as a checkbox
    - comments are removed

Nothing is reported: stripped content simply does not appear in the output.

Usage:
    from notemark.markup.sanitizer import sanitize_html

    sanitize_html('<p onclick="x()">hi<script>evil()</script></p>')
    # '<p>hi</p>'
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Dict, FrozenSet

# --- Third party imports ---
from bs4 import BeautifulSoup, Comment, Tag


ALLOWED_TAGS: FrozenSet[str] = frozenset(
    {
        "p", "br", "hr", "blockquote",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "ul", "ol", "li",
        "strong", "em", "code",
        "img", "a",
        "mark", "span",
        "input",
    }
)

# Elements whose content is never meaningful as note text
DROPPED_TAGS: FrozenSet[str] = frozenset(
    {
        "script", "style", "iframe", "frame", "frameset", "object", "embed",
        "applet", "template", "noscript", "textarea", "select", "option",
        "head", "title", "meta", "link", "base", "svg", "math",
    }
)

GLOBAL_ATTRIBUTES: FrozenSet[str] = frozenset({"class"})

ALLOWED_ATTRIBUTES: Dict[str, FrozenSet[str]] = {
    "a": frozenset({"href", "title", "rel", "target"}),
    "img": frozenset({"src", "alt", "title"}),
    "li": frozenset({"data-task-ordinal"}),
    "p": frozenset({"data-task-ordinal"}),
    "input": frozenset({"type", "checked", "disabled", "data-task-ordinal"}),
}

URL_ATTRIBUTES: FrozenSet[str] = frozenset({"href", "src"})
SAFE_SCHEMES: FrozenSet[str] = frozenset({"http", "https", "mailto", "tel"})
SAFE_DATA_IMAGE_RE = re.compile(r"^data:image/(?:gif|png|jpeg|webp);", re.IGNORECASE)

SCHEME_RE = re.compile(r"^([a-z][a-z0-9+.\-]*):", re.IGNORECASE)
# Control characters and whitespace browsers ignore inside a scheme
URL_NOISE_RE = re.compile(r"[\x00-\x20\x7f]+")


def is_safe_url(value: str, allow_data_image: bool = False) -> bool:
    """
    Check whether a URL may appear in an href or src attribute.

    Relative URLs and fragments are safe; absolute URLs must use one of
    http, https, mailto or tel. Inline ``data:image/...`` URLs are accepted
    for image sources only.

    Args:
        value: Attribute value
        allow_data_image: Accept raster ``data:image`` URLs

    Returns:
        True when the URL is safe to keep

    Examples:
        >>> is_safe_url("https://example.com")
        True
        >>> is_safe_url(" JaVa\\tScript:alert(1)")
        False
        >>> is_safe_url("notes/2024-01-01.md")
        True
    """
    compact = URL_NOISE_RE.sub("", value)
    match = SCHEME_RE.match(compact)
    if not match:
        return True
    scheme = match.group(1).lower()
    if scheme in SAFE_SCHEMES:
        return True
    return allow_data_image and bool(SAFE_DATA_IMAGE_RE.match(compact))


def _attribute_text(value: object) -> str:
    # bs4 stores multi-valued attributes (class, rel) as lists
    if isinstance(value, list):
        return " ".join(str(v) for v in value)
    return str(value)


def _keep_attribute(tag: Tag, name: str, value: object) -> bool:
    name = name.lower()
    if name.startswith("on"):
        return False
    allowed = GLOBAL_ATTRIBUTES | ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
    if name not in allowed:
        return False
    if name in URL_ATTRIBUTES:
        return is_safe_url(_attribute_text(value), allow_data_image=tag.name == "img")
    if name == "data-task-ordinal":
        return _attribute_text(value).isdigit()
    return True


def _clean_tag(tag: Tag) -> None:
    tag.attrs = {
        name: value
        for name, value in tag.attrs.items()
        if _keep_attribute(tag, name, value)
    }


def sanitize_html(html: str) -> str:
    """
    Filter an HTML fragment down to the allow-listed tags and attributes.

    Args:
        html: HTML fragment produced by the renderer

    Returns:
        Sanitized HTML fragment

    Examples:
        >>> sanitize_html('<a href="javascript:alert(1)">x</a>')
        '<a>x</a>'
        >>> sanitize_html('<input type="text" value="x">')
        ''
    """
    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()

    # One at a time: decomposing an element also destroys nested matches
    dropped = soup.find(sorted(DROPPED_TAGS))
    while dropped is not None:
        dropped.decompose()
        dropped = soup.find(sorted(DROPPED_TAGS))

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue
        if tag.name == "input" and _attribute_text(tag.get("type", "")).lower() != "checkbox":
            tag.decompose()
            continue
        _clean_tag(tag)

    return str(soup)
