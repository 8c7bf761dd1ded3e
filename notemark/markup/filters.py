#!/usr/bin/env python3
"""
filters.py
----------
Custom Jinja2 filters for preview pages.

Filters:
    - entry_date: Long display form of an entry date
    - pluralize: Singular/plural count strings
    - task_summary: "2 open · 1 done" line for a Document or TaskOverview
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from typing import Any, Optional


def entry_date(d: Optional[date], fmt: str = "%A, %B %d, %Y") -> str:
    """
    Format an entry date for display.

    Args:
        d: Entry date, or None for undated entries
        fmt: strftime format

    Returns:
        Formatted date, or "Undated"
    """
    if d is None:
        return "Undated"
    return d.strftime(fmt)


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """
    Return singular or plural form based on count.

    Returns:
        Formatted string like "3 tasks" or "1 task"
    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


def task_summary(source: Any) -> str:
    """
    Summarise open and completed tasks.

    Accepts anything with ``open_count``/``done_count`` (TaskOverview) or a
    ``tasks`` list of markers (Document).

    Returns:
        "N open · M done", or "No tasks"
    """
    if hasattr(source, "open_count"):
        open_count, done_count = source.open_count, source.done_count
    else:
        tasks = list(getattr(source, "tasks", []))
        done_count = sum(1 for task in tasks if task.completed)
        open_count = len(tasks) - done_count

    if open_count == 0 and done_count == 0:
        return "No tasks"
    return f"{open_count} open · {done_count} done"
