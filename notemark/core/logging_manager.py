#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Centralized logging for notemark operations.

Render passes, task toggles and CLI commands report through a
NotemarkLogger, which writes a rotating component log plus a dedicated
errors log. Code that may run without a configured logger wraps it in
``safe_logger()`` and gets a NullLogger instead.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click


FILE_FORMAT = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
CONSOLE_FORMAT = logging.Formatter("%(levelname)s: %(message)s")


class NotemarkLogger:
    """
    Structured logger for a notemark component.

    One logger per component (``notemark.<component>``) writes everything
    from DEBUG up to ``<component>.log`` and echoes warnings to the
    console. A child ``notemark.<component>.errors`` logger keeps error
    reports, with context and traceback, in the shared ``errors.log``.

    Attributes:
        log_dir: Directory for log files
        component_name: Name of the component using this logger
        main_logger: Logger for all operations of the component
        error_logger: Dedicated logger for errors only
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "notemark",
        max_bytes: int = 1024 * 1024,
        backup_count: int = 2,
    ) -> None:
        """
        Initialize the logging system for one component.

        Args:
            log_dir: Directory for log files (created if missing)
            component_name: Name for the component logger (e.g. 'cli')
            max_bytes: Log file size that triggers rotation (default: 1MB)
            backup_count: Number of rotated files to keep (default: 2)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = self._build(
            f"notemark.{component_name}",
            self.log_dir / f"{component_name}.log",
            logging.DEBUG,
            max_bytes,
            backup_count,
        )
        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(CONSOLE_FORMAT)
        self.main_logger.addHandler(console)

        self.error_logger = self._build(
            f"notemark.{component_name}.errors",
            self.log_dir / "errors.log",
            logging.ERROR,
            max_bytes,
            backup_count,
        )

    @staticmethod
    def _build(
        name: str, file_path: Path, level: int, max_bytes: int, backup_count: int
    ) -> logging.Logger:
        """Return the named logger with a single rotating file handler."""
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # A second NotemarkLogger for the same component replaces the handlers
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        handler = RotatingFileHandler(
            file_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(FILE_FORMAT)
        logger.addHandler(handler)
        return logger

    def _log(self, level: int, message: str, details: Optional[Dict[str, Any]]) -> None:
        if details:
            message = f"{message}: {json.dumps(details, default=str)}"
        self.main_logger.log(level, message, stacklevel=3)

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Record a completed operation (toggle, page write, task overview).

        Args:
            operation: Name of the operation
            details: Optional operation details, written as JSON
        """
        self._log(logging.INFO, f"OPERATION - {operation}", details)

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record debug information such as render timings."""
        self._log(logging.DEBUG, message, details)

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Record a warning; also shown on the console."""
        self._log(logging.WARNING, message, details)

    def log_error(
        self, error: BaseException, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Write an error report to ``errors.log``.

        The report holds the exception, the context as ``key=value`` pairs
        and the exception's own traceback.

        Args:
            error: Exception that occurred
            context: Optional context information dictionary
        """
        lines = [f"{type(error).__name__}: {error}"]
        if context:
            lines.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
        self.error_logger.error(
            "\n".join(lines),
            exc_info=(type(error), error, error.__traceback__),
        )

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log full error details and return a short message for the terminal.

        Args:
            error: Exception to log
            context: Optional context information about where error occurred
            show_traceback: If True, include full traceback in CLI output

        Returns:
            Formatted error message suitable for CLI display

        Examples:
            >>> logger.log_cli_error(ConfigError("indent_unit must be positive"))
            '❌ ConfigError: indent_unit must be positive'
        """
        self.log_error(error, context or {"source": "cli"})
        return cli_message(error, show_traceback)


def cli_message(error: BaseException, show_traceback: bool = False) -> str:
    """Short terminal form of an error, optionally with its traceback."""
    message = f"❌ {type(error).__name__}: {error}"
    if show_traceback:
        trace = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        return f"{message}\n\n{trace}"
    return message


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Standardized error handling for CLI commands.

    Logs the error through the logger stored on the click context, prints a
    clean message to stderr and exits.

    Args:
        ctx: Click context object containing logger and verbose flag
        error: Exception that occurred
        operation: Name of the operation that failed (e.g., 'render', 'toggle')
        additional_context: Optional extra context (file path, ordinal, etc.)
        exit_code: Exit code for sys.exit() (default: 1)

    Note:
        This function never returns - it always calls sys.exit()
    """
    obj = ctx.obj or {}
    logger: Optional[NotemarkLogger] = obj.get("logger")
    verbose: bool = obj.get("verbose", False)

    context = {"operation": operation}
    if additional_context:
        context.update(additional_context)

    error_msg = safe_logger(logger).log_cli_error(error, context, show_traceback=verbose)
    click.echo(error_msg, err=True)
    sys.exit(exit_code)


class NullLogger:
    """
    Null Object logger with the NotemarkLogger interface.

    Library code calls ``safe_logger(logger).log_debug(...)`` and never
    checks for a missing logger. Only log_cli_error does anything: it still
    has to produce the terminal message.
    """

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: BaseException, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return cli_message(error, show_traceback)


_null_logger = NullLogger()


def safe_logger(logger: Optional[NotemarkLogger]) -> NotemarkLogger:
    """
    Return the provided logger or the shared null logger if None.

    Args:
        logger: NotemarkLogger instance or None

    Returns:
        The provided logger or a NullLogger instance
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def setup_logger(log_dir: Path, component_name: str) -> NotemarkLogger:
    """
    Setup logging for CLI operations.

    Creates ``log_dir/operations`` if needed and returns a logger for the
    component.

    Args:
        log_dir: Base log directory (typically paths.default_log_dir())
        component_name: Component identifier for logging (e.g., 'cli')

    Returns:
        Configured NotemarkLogger instance
    """
    operations_log_dir = log_dir / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return NotemarkLogger(operations_log_dir, component_name=component_name)
