"""
Tests for logging_manager module.

Tests NotemarkLogger file output, the NullLogger/safe_logger pair that
keeps library code free of ``if logger:`` checks, and handle_cli_error.
"""
import pytest
from unittest.mock import MagicMock

import click

from notemark.core.exceptions import ConfigError
from notemark.core.logging_manager import (
    NotemarkLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
    setup_logger,
)


class TestNotemarkLogger:
    """Tests for NotemarkLogger file handlers."""

    def test_creates_component_and_error_logs(self, tmp_path):
        """Operations go to the component log, errors to errors.log."""
        logger = NotemarkLogger(tmp_path, "render")
        logger.log_operation("render_note", {"lines": 2})
        try:
            raise ValueError("broken note")
        except ValueError as e:
            logger.log_error(e, {"file": "2024-01-15.md"})

        component_log = (tmp_path / "render.log").read_text(encoding="utf-8")
        errors_log = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert "OPERATION - render_note" in component_log
        assert "ValueError: broken note" in errors_log
        assert "file=2024-01-15.md" in errors_log

    def test_debug_details_serialized(self, tmp_path):
        """Detail dictionaries are written as JSON."""
        logger = NotemarkLogger(tmp_path, "debug")
        logger.log_debug("Rendered note", {"search": "milk"})
        assert '{"search": "milk"}' in (tmp_path / "debug.log").read_text(encoding="utf-8")

    def test_log_cli_error_message(self, tmp_path):
        """CLI errors are logged and returned as a short message."""
        logger = NotemarkLogger(tmp_path, "cli")
        message = logger.log_cli_error(ConfigError("indent_unit must be positive"))
        assert message == "❌ ConfigError: indent_unit must be positive"

    def test_error_report_carries_traceback(self, tmp_path):
        """The exception's own traceback is written even outside an except block."""
        logger = NotemarkLogger(tmp_path, "render")
        try:
            raise RecursionError("too deep")
        except RecursionError as e:
            caught = e
        logger.log_error(caught)

        errors_log = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert "RecursionError: too deep" in errors_log
        assert "Traceback (most recent call last)" in errors_log

    def test_verbose_cli_error_includes_traceback(self, tmp_path):
        """show_traceback appends the traceback to the terminal message."""
        try:
            raise ValueError("bad")
        except ValueError as e:
            message = NotemarkLogger(tmp_path, "cli").log_cli_error(e, show_traceback=True)
        assert message.startswith("❌ ValueError: bad\n\n")
        assert "Traceback" in message

    def test_setup_logger_uses_operations_dir(self, tmp_path):
        """setup_logger writes under log_dir/operations."""
        logger = setup_logger(tmp_path, "cli")
        logger.log_operation("render_page")
        assert (tmp_path / "operations" / "cli.log").exists()


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_null_logger_methods_no_op(self):
        """Every NullLogger method is a no-op."""
        logger = NullLogger()
        logger.log_operation("toggle_task", {"ordinal": 0})
        logger.log_error(ValueError("x"), {"context": "test"})
        logger.log_debug("debug message", {"key": "value"})
        logger.log_warning("warning message")

    def test_null_logger_log_cli_error_returns_formatted(self):
        """NullLogger.log_cli_error should return formatted error string."""
        result = NullLogger().log_cli_error(ValueError("test error"), {"context": "test"})
        assert "ValueError" in result
        assert "test error" in result


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_safe_logger_returns_logger_when_provided(self):
        """safe_logger should return the same logger when not None."""
        mock_logger = MagicMock(spec=NotemarkLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_safe_logger_returns_null_logger_when_none(self):
        """safe_logger should return NullLogger when logger is None."""
        assert isinstance(safe_logger(None), NullLogger)

    def test_safe_logger_null_logger_is_singleton(self):
        """safe_logger should return the same NullLogger instance."""
        assert safe_logger(None) is safe_logger(None)

    def test_works_with_log_details(self):
        """Calls are forwarded unchanged to a real logger."""
        mock_logger = MagicMock(spec=NotemarkLogger)
        details = {"file": "2024-01-15.md", "ordinal": 3}
        safe_logger(mock_logger).log_operation("toggle_task", details)
        mock_logger.log_operation.assert_called_once_with("toggle_task", details)


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_exits_with_code_and_logs(self, tmp_path, capsys):
        """The error is logged, echoed to stderr, and the process exits."""
        logger = MagicMock(spec=NotemarkLogger)
        logger.log_cli_error.return_value = "❌ ValueError: bad"
        ctx = click.Context(click.Command("test"), obj={"logger": logger, "verbose": False})

        with pytest.raises(SystemExit) as excinfo:
            handle_cli_error(ctx, ValueError("bad"), "render", {"file": "a.md"}, exit_code=3)

        assert excinfo.value.code == 3
        logger.log_cli_error.assert_called_once()
        context = logger.log_cli_error.call_args[0][1]
        assert context == {"operation": "render", "file": "a.md"}
        assert "❌ ValueError: bad" in capsys.readouterr().err

    def test_without_logger(self, capsys):
        """Missing context objects fall back to the null logger."""
        ctx = click.Context(click.Command("test"))
        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("bad"), "render")
        assert "ValueError: bad" in capsys.readouterr().err
