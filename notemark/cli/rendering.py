"""
Render Commands
---------------

Commands for turning a note into HTML.

Commands:
    - render: Sanitized HTML fragment to stdout, or a preview page file
    - preprocess: Canonicalised note text to stdout
"""
from __future__ import annotations

import click
from pathlib import Path
from typing import Optional

from notemark.core.logging_manager import NotemarkLogger, handle_cli_error
from notemark.markup.markers import preprocess
from notemark.markup.page import PREVIEW_TEMPLATE, PreviewPage
from notemark.markup.pipeline import NoteRenderer
from notemark.utils.fs import entry_date, read_note


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-s", "--search", default=None, help="Highlight this term (case-insensitive)")
@click.option("--selection", default=None, help="Highlight this selected text")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write a full preview page to this file",
)
@click.pass_context
def render(
    ctx: click.Context,
    file: Path,
    search: Optional[str],
    selection: Optional[str],
    output: Optional[Path],
) -> None:
    """
    Render a note to sanitized HTML.

    Without -o the HTML fragment is printed. With -o a standalone preview
    page is written, and left untouched when its content is unchanged.
    """
    logger: NotemarkLogger = ctx.obj["logger"]
    renderer = NoteRenderer(config=ctx.obj["config"], logger=logger)

    try:
        text = read_note(file)
        html = renderer.render(text, search=search, selection=selection)

        if output is None:
            click.echo(html)
            return

        document = renderer.parse(text, search=search, selection=selection)
        changed = PreviewPage().render_to_file(
            PREVIEW_TEMPLATE,
            {
                "title": file.stem,
                "entry_date": entry_date(file),
                "document": document,
                "search": search,
                "body": html,
            },
            output,
        )
        logger.log_operation("render_page", {"file": str(file), "output": str(output), "changed": changed})
        if changed:
            click.echo(f"✅ Preview written: {output}")
        else:
            click.echo(f"⏭️  Preview unchanged: {output}")

    except Exception as e:
        handle_cli_error(ctx, e, "render", additional_context={"file": str(file)})


@click.command("preprocess")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def preprocess_cmd(ctx: click.Context, file: Path) -> None:
    """Print a note with its shorthand rewritten to canonical syntax."""
    try:
        text = read_note(file)
        click.echo(preprocess(text, indent_unit=ctx.obj["config"].indent_unit), nl=False)
    except Exception as e:
        handle_cli_error(ctx, e, "preprocess", additional_context={"file": str(file)})


__all__ = ["render", "preprocess_cmd"]
