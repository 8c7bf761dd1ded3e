#!/usr/bin/env python3
"""
paths.py
-------------------
Path constants for the notemark project.

Packaged resources are resolved relative to the installed ``notemark``
package. Files notemark writes or reads on behalf of a user (logs and the
optional markup configuration) live in the per-user application directory
reported by click, never next to the package:

    PACKAGE_DIR/
    └── templates/         # Jinja2 templates for preview pages

    app_dir()/             # ~/.config/notemark on Linux
    ├── logs/              # Application logs
    └── notemark.yaml      # Optional markup configuration
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path

# --- Third party imports ---
import click


APP_NAME = "notemark"

# ----- Package directory -----
PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent

# ---- Templates ----
TEMPLATES_DIR = PACKAGE_DIR / "templates"

# ---- User files ----
CONFIG_NAME = "notemark.yaml"
LOG_DIR_NAME = "logs"


def app_dir() -> Path:
    """
    Per-user application directory.

    Resolved on every call so that ``XDG_CONFIG_HOME`` and friends are
    honoured at run time rather than at import time.

    Returns:
        Path object for the notemark application directory
    """
    return Path(click.get_app_dir(APP_NAME))


def default_config_path() -> Path:
    """Markup configuration file read when no ``--config`` is given."""
    return app_dir() / CONFIG_NAME


def default_log_dir() -> Path:
    """Log directory used when no ``--log-dir`` is given."""
    return app_dir() / LOG_DIR_NAME
