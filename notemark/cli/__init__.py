#!/usr/bin/env python3
"""
Notemark CLI
------------

Command-line interface for rendering diary notes and working with their
tasks.

Commands:
    - render: Note to sanitized HTML, or to a preview page with -o
    - preprocess: Note with shorthand rewritten to canonical syntax
    - toggle: Flip one task by its rendered ordinal
    - tasks: Task overview across entries

Usage:
    notemark render 2024-01-15.md --search milk
    notemark render 2024-01-15.md -o preview.html
    notemark preprocess 2024-01-15.md
    notemark toggle 2024-01-15.md 0 --in-place
    notemark tasks journal/ --open-only
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from notemark.core import paths
from notemark.core.config import load_config
from notemark.core.logging_manager import handle_cli_error, setup_logger


@click.group()
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory for log files (default: <app dir>/logs)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Markup configuration file (default: <app dir>/notemark.yaml)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    log_dir: Optional[str],
    verbose: bool,
    config_path: Optional[str],
) -> None:
    """Notemark diary note renderer"""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["log_dir"] = Path(log_dir) if log_dir else paths.default_log_dir()
    config_file = Path(config_path) if config_path else paths.default_config_path()

    try:
        ctx.obj["logger"] = setup_logger(ctx.obj["log_dir"], "cli")
    except OSError as e:
        handle_cli_error(ctx, e, "setup_logger", additional_context={"log_dir": str(ctx.obj["log_dir"])})

    try:
        ctx.obj["config"] = load_config(config_file)
    except Exception as e:
        handle_cli_error(ctx, e, "load_config", additional_context={"config": str(config_file)})


# Import and register commands from submodules
from .rendering import render, preprocess_cmd
from .tasks import toggle, tasks_cmd

cli.add_command(render)
cli.add_command(preprocess_cmd)
cli.add_command(toggle)
cli.add_command(tasks_cmd)


if __name__ == "__main__":
    cli(obj={})
