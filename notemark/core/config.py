#!/usr/bin/env python3
"""
config.py
---------
Markup configuration loaded from YAML.

The engine works with defaults alone; a ``notemark.yaml`` file may
override the indentation unit used for shorthand nesting, the CSS class
names placed on highlights and task items, selection case sensitivity and
the link target.

Example notemark.yaml:
    indent_unit: 2
    search_class: search-match
    selection_class: selection-match
    selection_case_sensitive: true

Usage:
    from notemark.core.config import load_config

    config = load_config()                      # paths.default_config_path() or defaults
    config = load_config(Path("notemark.yaml"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from notemark.core.exceptions import ConfigError
from notemark.core.paths import default_config_path


@dataclass(frozen=True)
class MarkupConfig:
    """
    Presentation settings for the markup engine.

    Frozen so that it can be part of the memoisation key of a render pass.

    Attributes:
        indent_unit: Spaces per nesting level produced by ``- - `` shorthand
        search_class: CSS class of search-term highlights
        selection_class: CSS class of selection highlights
        task_class: CSS class of list items and paragraphs carrying a task
        selection_case_sensitive: Whether selection matching honours case
        link_target: ``target`` attribute placed on rendered links
    """

    indent_unit: int = 2
    search_class: str = "search-match"
    selection_class: str = "selection-match"
    task_class: str = "task-item"
    selection_case_sensitive: bool = True
    link_target: str = "_blank"

    def __post_init__(self) -> None:
        """Validate field values."""
        if isinstance(self.indent_unit, bool) or not isinstance(self.indent_unit, int):
            raise ConfigError(
                f"indent_unit must be an integer, got {type(self.indent_unit).__name__}"
            )
        if self.indent_unit < 1:
            raise ConfigError(f"indent_unit must be positive, got {self.indent_unit}")
        for name in ("search_class", "selection_class", "task_class", "link_target"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"{name} must be a non-empty string")
        if not isinstance(self.selection_case_sensitive, bool):
            raise ConfigError("selection_case_sensitive must be true or false")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> MarkupConfig:
        """
        Build a config from a mapping, rejecting unknown keys.

        Args:
            data: Mapping of field name to value

        Returns:
            MarkupConfig with the given overrides applied to the defaults

        Raises:
            ConfigError: If a key is unknown or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {', '.join(unknown)}")
        return replace(cls(), **data)


DEFAULT_CONFIG = MarkupConfig()


def load_config(path: Optional[Path] = None) -> MarkupConfig:
    """
    Load markup configuration from a YAML file.

    A missing file yields the defaults. An empty file does too.

    Args:
        path: YAML file to read (default: paths.default_config_path())

    Returns:
        MarkupConfig instance

    Raises:
        ConfigError: If the file is not valid YAML, is not a mapping, or
            holds unknown keys or invalid values
    """
    config_path = Path(path) if path is not None else default_config_path()
    if not config_path.is_file():
        return DEFAULT_CONFIG

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse {config_path}: {e}") from e

    if data is None:
        return DEFAULT_CONFIG
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping of settings")

    return MarkupConfig.from_dict(data)
