#!/usr/bin/env python3
"""
markers.py
----------
Shorthand marker grammar: the preprocessor and the shared task-line
classifier.

Diary notes use two shorthands that are not Markdown:

    - - item            nested bullet (one extra level per "- ")
    TODO buy milk       open task, becomes "- [ ] buy milk"
    - DONE call mom     finished task, becomes "- [x] call mom"

``preprocess`` rewrites them into canonical list/task syntax without ever
adding, removing or reordering lines, so line N of the preprocessed text is
always line N of the source.

``classify_line`` is the single definition of what a task line is. The
block segmenter uses it to attach task markers while rendering, and the
task mapper uses it to find the line behind a clicked checkbox, so both
directions agree on which lines count.

Usage:
    from notemark.markup.markers import preprocess, classify_line

    preprocess("- - TODO buy milk")       # "  - [ ] buy milk"
    classify_line("- - TODO buy milk")    # LineTask(..., marker="TODO", ...)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple


INDENT_UNIT = 2

# "- - - rest": one repetition per nesting level
DASH_RUN_RE = re.compile(r"^((?:-\s)+)(.*)$")

# (indent)(-\s+)*[ ]/[x] rest
CANONICAL_TASK_RE = re.compile(r"^(\s*)((?:-\s+)*)\[([ xX])\]\s(.*)$")

# (indent)(-\s+)*TODO|DONE rest
SHORTHAND_TASK_RE = re.compile(r"^(\s*)((?:-\s+)*)(TODO|DONE)\s+(.*)$", re.IGNORECASE)


@dataclass(frozen=True)
class LineTask:
    """
    A line recognised as a task.

    Attributes:
        indent: Leading whitespace
        bullets: The run of ``-`` bullets after the indent (may be empty)
        marker: Marker token as written: ``[ ]``, ``[x]``, ``TODO``, ``done``...
        text: Everything after the marker and its separating whitespace
        completed: True for ``[x]``/``[X]``/``DONE``
        shorthand: True for the ``TODO``/``DONE`` keyword form
        start: Offset of the marker token in the line
        end: Offset just past the marker token
    """

    indent: str
    bullets: str
    marker: str
    text: str
    completed: bool
    shorthand: bool
    start: int
    end: int

    @property
    def prefix(self) -> str:
        return self.indent + self.bullets


def classify_line(line: str) -> Optional[LineTask]:
    """
    Recognise a task line in either canonical or shorthand form.

    Args:
        line: One line of text, without its newline

    Returns:
        LineTask describing the marker, or None for ordinary lines

    Examples:
        >>> classify_line("  - [x] call mom").completed
        True
        >>> classify_line("TODO buy milk").marker
        'TODO'
        >>> classify_line("# TODO heading") is None
        True
    """
    match = CANONICAL_TASK_RE.match(line)
    if match:
        box = match.group(3)
        return LineTask(
            indent=match.group(1),
            bullets=match.group(2),
            marker=f"[{box}]",
            text=match.group(4),
            completed=box in "xX",
            shorthand=False,
            start=match.start(3) - 1,
            end=match.end(3) + 1,
        )

    match = SHORTHAND_TASK_RE.match(line)
    if match:
        keyword = match.group(3)
        return LineTask(
            indent=match.group(1),
            bullets=match.group(2),
            marker=keyword,
            text=match.group(4),
            completed=keyword.upper() == "DONE",
            shorthand=True,
            start=match.start(3),
            end=match.end(3),
        )

    return None


def scan_task_lines(lines: Iterable[str]) -> Iterator[Tuple[int, LineTask]]:
    """
    Yield ``(line_index, task)`` for every task line, top to bottom.

    The position of a pair in this sequence is the task's ordinal.
    """
    for index, line in enumerate(lines):
        task = classify_line(line)
        if task is not None:
            yield index, task


def flip_marker(line: str, task: LineTask) -> str:
    """
    Return ``line`` with its task marker toggled.

    ``[ ]`` becomes ``[x]`` and back; ``TODO`` becomes ``DONE`` and back,
    keeping the keyword's case style. Nothing outside the marker token
    changes.

    Args:
        line: The line ``task`` was classified from
        task: Classification of ``line``

    Returns:
        The toggled line
    """
    if task.shorthand:
        replacement = "TODO" if task.completed else "DONE"
        if task.marker.islower():
            replacement = replacement.lower()
        elif not task.marker.isupper():
            replacement = replacement.capitalize()
    else:
        replacement = "[ ]" if task.completed else "[x]"
    return line[: task.start] + replacement + line[task.end :]


def _normalize_dashes(line: str, indent_unit: int) -> str:
    match = DASH_RUN_RE.match(line)
    if not match:
        return line
    level = len(match.group(1)) // 2
    if level <= 1:
        return line
    return " " * ((level - 1) * indent_unit) + "- " + match.group(2)


def _normalize_task(line: str) -> str:
    match = SHORTHAND_TASK_RE.match(line)
    if not match:
        return line
    indent, bullets, keyword, rest = match.groups()
    box = "[x] " if keyword.upper() == "DONE" else "[ ] "
    if bullets:
        return indent + bullets + box + rest
    return indent + "- " + box + rest


def preprocess_line(line: str, indent_unit: int = INDENT_UNIT) -> str:
    """Rewrite shorthand on a single line."""
    return _normalize_task(_normalize_dashes(line, indent_unit))


def preprocess(text: str, indent_unit: int = INDENT_UNIT) -> str:
    """
    Rewrite shorthand bullets and task keywords into canonical syntax.

    Args:
        text: Raw note text
        indent_unit: Spaces per extra nesting level (default: 2)

    Returns:
        Text with the same number of lines, shorthand rewritten

    Examples:
        >>> preprocess("- - TODO buy milk\\nsome note")
        '  - [ ] buy milk\\nsome note'
        >>> preprocess("- DONE call mom")
        '- [x] call mom'
    """
    lines: List[str] = text.split("\n")
    return "\n".join(preprocess_line(line, indent_unit) for line in lines)
