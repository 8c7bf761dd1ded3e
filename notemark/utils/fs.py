#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem utilities for reading and writing diary entries.

Entries are plain text/Markdown files, usually named after their date
(``2024-01-15.md``). Text is read and written without newline translation
so that toggling a task changes exactly one marker and nothing else.

Functions:
    find_note_files: Expand files and directories into entry files
    parse_date_from_filename: Extract date from YYYY, YYYY-MM, or YYYY-MM-DD filenames
    entry_date: Like parse_date_from_filename, None for undated files
    read_note: Read an entry verbatim
    write_note: Write an entry verbatim, reporting whether it changed
    load_entries: (key, date, text) triples for the task overview

Usage:
    from notemark.utils.fs import load_entries, read_note

    text = read_note(Path("2024-01-15.md"))
    entries = load_entries([Path("journal/")])
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Tuple


NOTE_SUFFIXES = (".md", ".txt")


def find_note_files(paths: Iterable[Path], pattern: str = "**/*") -> List[Path]:
    """
    Expand a mix of files and directories into a sorted list of entry files.

    Files are kept as given; directories are searched with ``pattern`` for
    ``.md`` and ``.txt`` files. Missing paths are skipped.
    """
    found: List[Path] = []
    for path in paths:
        if path.is_file():
            found.append(path)
        elif path.is_dir():
            found.extend(
                p for p in path.glob(pattern) if p.is_file() and p.suffix in NOTE_SUFFIXES
            )
    return sorted(set(found))


def parse_date_from_filename(path: Path) -> date:
    """
    Parse a date from a filename formatted as:
        - YYYY
        - YYYY-MM
        - YYYY-MM-DD

    Falls back to the first day of the year/month if incomplete.

    Args:
        path: Path object or filename containing the date.

    Returns:
        datetime.date object corresponding to the parsed date.

    Raises:
        ValueError: If the filename does not match a supported format.
    """
    stem = path.stem  # "2023", "2023-09", or "2023-09-15"
    try:
        if len(stem) == 4:  # YYYY
            return date(int(stem), 1, 1)
        elif "-" in stem and len(stem) == 7:  # YYYY-MM
            year, month = map(int, stem.split("-"))
            return date(year, month, 1)
        elif "-" in stem and len(stem) == 10:  # YYYY-MM-DD
            year, month, day = map(int, stem.split("-"))
            return date(year, month, day)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Invalid date format in filename: {stem}") from e

    raise ValueError(f"Unsupported date format in filename: {stem}")


def entry_date(path: Path) -> Optional[date]:
    """Date of an entry file, or None when its name is not a date."""
    try:
        return parse_date_from_filename(path)
    except ValueError:
        return None


def read_note(path: Path) -> str:
    """
    Read an entry without newline translation.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_note(path: Path, text: str) -> bool:
    """
    Write an entry without newline translation.

    Returns:
        True if the file was written, False if it already held ``text``
    """
    if path.exists() and read_note(path) == text:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    return True


def load_entries(paths: Iterable[Path]) -> List[Tuple[str, Optional[date], str]]:
    """
    Read entries for the task overview.

    Args:
        paths: Files and/or directories of entries

    Returns:
        (entry key, entry date, text) per file; the key is the file stem
    """
    return [(path.stem, entry_date(path), read_note(path)) for path in find_note_files(paths)]
