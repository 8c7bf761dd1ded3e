#!/usr/bin/env python3
"""
tasks.py
--------
Task mapper: from a rendered checkbox back to the source line.

Rendered checkboxes carry an ordinal, the task's zero-based position among
all task lines of the note. Toggling re-scans the original source text
with the shared ``classify_line`` grammar, counts task lines until the
ordinal is reached and flips that line's marker in place:

    [ ]  <->  [x]
    TODO <->  DONE     (case style of the keyword is kept)

Everything else on the line is kept byte for byte and the line count never
changes. A stale ordinal (the text changed since the render) leaves the
text untouched.

The module also collects task lines across diary entries for the task
overview: open and done counts, grouped by entry, newest first.

Usage:
    from notemark.markup.tasks import toggle_task, collect_tasks

    text = "- - TODO buy milk\\nsome note"
    toggle_task(text, 0)       # "- - DONE buy milk\\nsome note"
    collect_tasks(text)[0]     # TaskLine(ordinal=0, line_index=0, ...)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

# --- Local imports ---
from notemark.markup.markers import classify_line, flip_marker, scan_task_lines


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskLine:
    """
    One task line of a note.

    Attributes:
        ordinal: Position among the note's task lines
        line_index: Zero-based line index in the source text
        prefix: Indentation and bullets before the marker (e.g. "- - ")
        marker: Marker as written ("TODO", "DONE", "[ ]", "[x]")
        text: Task text after the marker
        completed: Whether the task is done
    """

    ordinal: int
    line_index: int
    prefix: str
    marker: str
    text: str
    completed: bool


def collect_tasks(text: str) -> List[TaskLine]:
    """
    List every task line of a note in source order.

    Args:
        text: Original note text

    Returns:
        TaskLine per task, ordinals counting from zero
    """
    return [
        TaskLine(
            ordinal=ordinal,
            line_index=line_index,
            prefix=task.prefix,
            marker=task.marker,
            text=task.text,
            completed=task.completed,
        )
        for ordinal, (line_index, task) in enumerate(scan_task_lines(text.split("\n")))
    ]


def line_for_ordinal(text: str, ordinal: int) -> Optional[int]:
    """
    Reverse-map a rendered task ordinal to its source line index.

    Args:
        text: Original note text
        ordinal: Ordinal embedded in the rendered checkbox

    Returns:
        Zero-based line index, or None when the ordinal is out of range
    """
    if ordinal < 0:
        return None
    for position, (line_index, _task) in enumerate(scan_task_lines(text.split("\n"))):
        if position == ordinal:
            return line_index
    return None


def toggle_task(text: str, ordinal: int) -> str:
    """
    Flip the completion state of the ordinal-th task line.

    Args:
        text: Original, unprocessed note text
        ordinal: Zero-based task ordinal from the rendered checkbox

    Returns:
        New note text with only that line's marker changed, or ``text``
        itself when the ordinal does not exist

    Examples:
        >>> toggle_task("- - TODO buy milk\\nsome note", 0)
        '- - DONE buy milk\\nsome note'
        >>> toggle_task("- [x] done", 3)
        '- [x] done'
    """
    line_index = line_for_ordinal(text, ordinal)
    if line_index is None:
        logger.debug("Ignoring toggle for stale task ordinal %s", ordinal)
        return text
    return toggle_line(text, line_index)


def toggle_line(text: str, line_index: int) -> str:
    """
    Flip the task marker on a known line.

    Args:
        text: Original note text
        line_index: Zero-based line index

    Returns:
        New note text, or ``text`` unchanged when the line is out of range
        or is not a task line
    """
    lines = text.split("\n")
    if not 0 <= line_index < len(lines):
        return text
    task = classify_line(lines[line_index])
    if task is None:
        return text
    lines[line_index] = flip_marker(lines[line_index], task)
    return "\n".join(lines)


# ----- Task overview across entries -----
@dataclass(frozen=True)
class EntryTask:
    """A task line together with the entry it belongs to."""

    entry: str
    entry_date: Optional[date]
    task: TaskLine


@dataclass
class TaskOverview:
    """
    Task lines of many entries, newest entry first.

    Attributes:
        items: Entry tasks sorted by entry date (newest first, undated
            entries last) and then by line index
    """

    items: List[EntryTask] = field(default_factory=list)

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Tuple[str, Optional[date], str]],
        open_only: bool = False,
    ) -> TaskOverview:
        """
        Build an overview from ``(entry_key, entry_date, text)`` triples.

        Args:
            entries: Entries to scan
            open_only: Skip completed tasks

        Returns:
            TaskOverview instance
        """
        items = [
            EntryTask(key, entry_date, task)
            for key, entry_date, text in entries
            for task in collect_tasks(text)
            if not (open_only and task.completed)
        ]
        items.sort(
            key=lambda item: (
                item.entry_date is None,
                -(item.entry_date.toordinal() if item.entry_date else 0),
                item.entry,
                item.task.line_index,
            )
        )
        return cls(items)

    @property
    def open_count(self) -> int:
        return sum(1 for item in self.items if not item.task.completed)

    @property
    def done_count(self) -> int:
        return sum(1 for item in self.items if item.task.completed)

    def grouped(self) -> Dict[str, List[EntryTask]]:
        """Tasks grouped by entry key, in overview order."""
        groups: Dict[str, List[EntryTask]] = {}
        for item in self.items:
            groups.setdefault(item.entry, []).append(item)
        return groups
