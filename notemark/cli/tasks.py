"""
Task Commands
-------------

Commands for the tasks inside notes.

Commands:
    - toggle: Flip one task, addressed by its rendered ordinal
    - tasks: Open/done overview across entries, newest first
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional, Tuple

from notemark.core.logging_manager import NotemarkLogger, handle_cli_error
from notemark.markup.page import TASKS_TEMPLATE, PreviewPage
from notemark.markup.pipeline import NoteRenderer
from notemark.markup.tasks import TaskOverview
from notemark.utils.fs import load_entries, read_note, write_note


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("ordinal", type=int)
@click.option("-i", "--in-place", is_flag=True, help="Write the result back to FILE")
@click.pass_context
def toggle(ctx: click.Context, file: Path, ordinal: int, in_place: bool) -> None:
    """
    Toggle the ORDINAL-th task of a note.

    ORDINAL is the zero-based task number carried by the rendered
    checkbox (data-task-ordinal). An ordinal that no longer exists
    leaves the note unchanged.
    """
    logger: NotemarkLogger = ctx.obj["logger"]
    renderer = NoteRenderer(config=ctx.obj["config"], logger=logger)

    try:
        text = read_note(file)
        updated = renderer.toggle(text, ordinal)

        if not in_place:
            click.echo(updated, nl=False)
            return

        if updated == text:
            click.echo(f"⚠️  No task #{ordinal} in {file.name}; nothing changed")
            return

        write_note(file, updated)
        click.echo(f"✅ Toggled task #{ordinal} in {file.name}")

    except Exception as e:
        handle_cli_error(
            ctx, e, "toggle", additional_context={"file": str(file), "ordinal": ordinal}
        )


@click.command("tasks")
@click.argument(
    "paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path)
)
@click.option("--open-only", is_flag=True, help="Show only open tasks")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the overview as an HTML page to this file",
)
@click.pass_context
def tasks_cmd(
    ctx: click.Context,
    paths: Tuple[Path, ...],
    open_only: bool,
    output: Optional[Path],
) -> None:
    """
    Show the tasks of every entry in PATHS.

    PATHS may be entry files or directories of entries. Entries are
    listed newest first, tasks in the order they appear.
    """
    logger: NotemarkLogger = ctx.obj["logger"]

    try:
        overview = TaskOverview.from_entries(load_entries(paths), open_only=open_only)
        logger.log_operation(
            "task_overview",
            {"paths": [str(p) for p in paths], "open": overview.open_count, "done": overview.done_count},
        )

        if output is not None:
            PreviewPage().render_to_file(
                TASKS_TEMPLATE, {"title": "Tasks", "overview": overview}, output
            )
            click.echo(f"✅ Task overview written: {output}")
            return

        click.echo(f"📋 {overview.open_count} open, {overview.done_count} done")
        for entry, items in overview.grouped().items():
            click.echo(f"\n{entry}")
            for item in items:
                box = "[x]" if item.task.completed else "[ ]"
                click.echo(f"  {box} {item.task.text}")

    except Exception as e:
        handle_cli_error(ctx, e, "tasks", additional_context={"paths": [str(p) for p in paths]})


__all__ = ["toggle", "tasks_cmd"]
