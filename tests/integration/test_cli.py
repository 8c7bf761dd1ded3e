#!/usr/bin/env python3
"""
test_cli.py
-----------
Integration tests for the ``notemark`` CLI commands.

Tests CLI invocation via Click's CliRunner for render, preprocess,
toggle and tasks, including configuration and error handling.
"""
# --- Annotations ---
from __future__ import annotations

# --- Third-party imports ---
import pytest
from click.testing import CliRunner

# --- Local imports ---
from notemark.cli import cli
from notemark.core import paths


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture
def base_args(tmp_dir):
    """Group options isolating logs and configuration in a temp dir."""
    return ["--log-dir", str(tmp_dir / "logs"), "--config", str(tmp_dir / "absent.yaml")]


class TestRenderCLI:
    """Tests for ``notemark render``."""

    def test_render_help(self, runner):
        """Help text works for render command."""
        result = runner.invoke(cli, ["render", "--help"])
        assert result.exit_code == 0
        assert "Render a note to sanitized HTML" in result.output

    def test_render_fragment(self, runner, base_args, note_file):
        """The HTML fragment is printed."""
        result = runner.invoke(cli, base_args + ["render", str(note_file)], catch_exceptions=False)
        assert result.exit_code == 0
        assert 'data-task-ordinal="0"' in result.output
        assert "<p>some note</p>" in result.output

    def test_render_search(self, runner, base_args, note_file):
        """--search highlights matches."""
        result = runner.invoke(cli, base_args + ["render", str(note_file), "--search", "MILK"])
        assert '<mark class="search-match">milk</mark>' in result.output

    def test_render_uses_config(self, runner, tmp_dir, note_file, config_file):
        """Class names come from --config."""
        args = ["--log-dir", str(tmp_dir / "logs"), "--config", str(config_file)]
        result = runner.invoke(cli, args + ["render", str(note_file), "-s", "milk"])
        assert result.exit_code == 0
        assert '<mark class="hit">milk</mark>' in result.output

    def test_render_page(self, runner, base_args, note_file, tmp_dir):
        """-o writes a preview page, then detects it is unchanged."""
        output = tmp_dir / "preview.html"
        args = base_args + ["render", str(note_file), "-o", str(output)]

        first = runner.invoke(cli, args, catch_exceptions=False)
        assert first.exit_code == 0
        assert "Preview written" in first.output
        assert output.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")

        second = runner.invoke(cli, args, catch_exceptions=False)
        assert "Preview unchanged" in second.output

    def test_render_missing_file(self, runner, base_args, tmp_dir):
        """A missing file is a usage error."""
        result = runner.invoke(cli, base_args + ["render", str(tmp_dir / "nope.md")])
        assert result.exit_code == 2


class TestPreprocessCLI:
    """Tests for ``notemark preprocess``."""

    def test_preprocess(self, runner, base_args, note_file):
        """Shorthand is rewritten, lines kept."""
        result = runner.invoke(cli, base_args + ["preprocess", str(note_file)], catch_exceptions=False)
        assert result.exit_code == 0
        assert result.output == "  - [ ] buy milk\nsome note"


class TestToggleCLI:
    """Tests for ``notemark toggle``."""

    def test_toggle_stdout(self, runner, base_args, note_file):
        """The toggled text is printed; the file is untouched."""
        result = runner.invoke(cli, base_args + ["toggle", str(note_file), "0"], catch_exceptions=False)
        assert result.exit_code == 0
        assert result.output == "- - DONE buy milk\nsome note"
        assert note_file.read_text(encoding="utf-8") == "- - TODO buy milk\nsome note"

    def test_toggle_in_place(self, runner, base_args, note_file):
        """--in-place writes the result back."""
        result = runner.invoke(
            cli, base_args + ["toggle", str(note_file), "0", "--in-place"], catch_exceptions=False
        )
        assert result.exit_code == 0
        assert "Toggled task #0" in result.output
        assert note_file.read_text(encoding="utf-8") == "- - DONE buy milk\nsome note"

    def test_toggle_stale_ordinal(self, runner, base_args, note_file):
        """A stale ordinal changes nothing."""
        result = runner.invoke(cli, base_args + ["toggle", str(note_file), "9", "-i"])
        assert result.exit_code == 0
        assert "No task #9" in result.output
        assert note_file.read_text(encoding="utf-8") == "- - TODO buy milk\nsome note"

    def test_toggle_non_integer(self, runner, base_args, note_file):
        """ORDINAL must be an integer."""
        result = runner.invoke(cli, base_args + ["toggle", str(note_file), "first"])
        assert result.exit_code == 2


class TestTasksCLI:
    """Tests for ``notemark tasks``."""

    def test_overview(self, runner, base_args, entries_dir):
        """Counts and entries are listed newest first."""
        result = runner.invoke(cli, base_args + ["tasks", str(entries_dir)], catch_exceptions=False)
        assert result.exit_code == 0
        assert "3 open, 2 done" in result.output
        output = result.output
        assert output.index("2024-01-15") < output.index("2024-01-14") < output.index("ideas")
        assert "[x] pay rent" in output

    def test_open_only(self, runner, base_args, entries_dir):
        """--open-only hides completed tasks."""
        result = runner.invoke(cli, base_args + ["tasks", str(entries_dir), "--open-only"])
        assert "pay rent" not in result.output
        assert "[ ] water plants" in result.output

    def test_overview_page(self, runner, base_args, entries_dir, tmp_dir):
        """-o writes the overview page."""
        output = tmp_dir / "tasks.html"
        result = runner.invoke(cli, base_args + ["tasks", str(entries_dir), "-o", str(output)])
        assert result.exit_code == 0
        assert "book flights" in output.read_text(encoding="utf-8")

    def test_requires_paths(self, runner, base_args):
        """At least one path is required."""
        result = runner.invoke(cli, base_args + ["tasks"])
        assert result.exit_code == 2


class TestConfigErrors:
    """Invalid configuration stops the command."""

    def test_unknown_config_key(self, runner, tmp_dir, note_file):
        """An unknown key is reported through handle_cli_error."""
        bad = tmp_dir / "bad.yaml"
        bad.write_text("bogus: 1\n", encoding="utf-8")
        args = ["--log-dir", str(tmp_dir / "logs"), "--config", str(bad), "render", str(note_file)]
        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "ConfigError" in result.output
        assert (tmp_dir / "logs" / "operations" / "errors.log").exists()


class TestDefaultLocations:
    """Logs and configuration default to the per-user app directory."""

    @pytest.fixture
    def app_dir(self, tmp_dir, monkeypatch):
        """Point the app directory at a temp dir."""
        target = tmp_dir / "app"
        monkeypatch.setattr(paths, "app_dir", lambda: target)
        return target

    def test_logs_go_to_app_dir(self, runner, app_dir, note_file):
        """Without --log-dir, logs are written under the app directory."""
        site_logs = paths.PACKAGE_DIR.parent / "logs"
        existed = site_logs.exists()

        result = runner.invoke(cli, ["render", str(note_file)], catch_exceptions=False)

        assert result.exit_code == 0
        assert (app_dir / "logs" / "operations" / "cli.log").exists()
        assert site_logs.exists() == existed
        assert not (paths.PACKAGE_DIR / "logs").exists()

    def test_config_read_from_app_dir(self, runner, app_dir, note_file):
        """Without --config, notemark.yaml in the app directory is used."""
        app_dir.mkdir(parents=True)
        (app_dir / "notemark.yaml").write_text("search_class: hit\n", encoding="utf-8")

        result = runner.invoke(cli, ["render", str(note_file), "-s", "milk"])

        assert result.exit_code == 0
        assert '<mark class="hit">milk</mark>' in result.output

    def test_unusable_log_dir_is_reported(self, runner, tmp_dir, note_file):
        """A log directory that cannot be created exits cleanly."""
        args = ["--log-dir", str(note_file / "logs"), "--config", str(tmp_dir / "absent.yaml")]
        result = runner.invoke(cli, args + ["render", str(note_file)])
        assert result.exit_code == 1
        assert "❌" in result.output
