"""
Notemark Package
================

The note-markup engine behind a personal diary.

Turns freeform diary text (Markdown, a little raw HTML, and the shorthand
``- - `` nesting and ``TODO``/``DONE`` task keywords) into a document tree,
renders it to sanitized HTML with search and selection highlights, and maps
clicks on rendered task checkboxes back to the source line they came from.

Main Components:
    - markup: Preprocessor, block segmenter, inline tokenizer, highlight
      overlay, task mapper, sanitizer and HTML renderer
    - core: Logging, configuration, paths and exceptions
    - utils: Filesystem helpers for reading diary entries
    - cli: Command-line interface (``notemark``)

Example Usage:
    >>> from notemark import render_note, toggle_task
    >>> html = render_note("- - TODO buy milk\\nsome note", search="milk")
    >>> toggle_task("- - TODO buy milk\\nsome note", 0)
    '- - DONE buy milk\\nsome note'

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "Notemark Project"

# Expose primary interfaces for convenience
from notemark.markup.pipeline import NoteRenderer, parse_note, render_note
from notemark.markup.tasks import collect_tasks, line_for_ordinal, toggle_task

__all__ = [
    "NoteRenderer",
    "parse_note",
    "render_note",
    "collect_tasks",
    "line_for_ordinal",
    "toggle_task",
]
