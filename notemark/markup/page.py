#!/usr/bin/env python3
"""
page.py
-------
Jinja2 preview pages for rendered notes.

Wraps sanitized note fragments in a standalone HTML page, for opening a
note or a task overview in a browser. Supports both filesystem-based
templates (the packaged ``notemark/templates``) and dict-based templates
(tests).

Key Features:
    - Autoescaping on; note bodies are inserted with ``| safe`` because
      they are already sanitized
    - Change detection: only writes files when content differs

Usage:
    from notemark.markup.page import PreviewPage

    page = PreviewPage()
    html = page.render("preview.html.jinja2", {"title": "2024-01-15", "body": fragment})
    changed = page.render_to_file("preview.html.jinja2", context, Path("out.html"))

    page = PreviewPage(templates={"t.jinja2": "{{ body | safe }}"})

Dependencies:
    - jinja2>=3.1.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third-party imports ---
from jinja2 import BaseLoader, DictLoader, Environment, FileSystemLoader, TemplateError

# --- Local imports ---
from notemark.core.exceptions import PageBuildError
from notemark.core.paths import TEMPLATES_DIR
from notemark.markup import filters as page_filters


PREVIEW_TEMPLATE = "preview.html.jinja2"
TASKS_TEMPLATE = "tasks.html.jinja2"


class PreviewPage:
    """
    Jinja2-based preview page builder.

    Attributes:
        env: Configured Jinja2 Environment instance
    """

    def __init__(
        self,
        templates_dir: Optional[Path] = None,
        templates: Optional[Dict[str, str]] = None,
    ) -> None:
        """
        Initialize the page builder.

        Provide either a filesystem templates directory or a dict of
        template strings. If neither is provided, the packaged templates
        are used.

        Args:
            templates_dir: Path to templates directory (FileSystemLoader)
            templates: Dict of template_name -> template_string (DictLoader)

        Raises:
            ValueError: If both templates_dir and templates are provided
        """
        if templates_dir and templates:
            raise ValueError("Provide either templates_dir or templates, not both")

        loader: BaseLoader
        if templates is not None:
            loader = DictLoader(templates)
        elif templates_dir is not None:
            loader = FileSystemLoader(str(templates_dir))
        else:
            loader = FileSystemLoader(str(TEMPLATES_DIR))

        self.env = Environment(
            loader=loader,
            autoescape=True,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._register_filters()

    def _register_filters(self) -> None:
        """Register the page filters as ``{{ value | filter_name }}``."""
        self.env.filters["entry_date"] = page_filters.entry_date
        self.env.filters["pluralize"] = page_filters.pluralize
        self.env.filters["task_summary"] = page_filters.task_summary

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Template path relative to the templates root
            context: Template variables

        Returns:
            Rendered HTML page

        Raises:
            PageBuildError: If the template is missing or fails to render
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateError as e:
            raise PageBuildError(f"Cannot render {template_name}: {e}") from e

    def render_to_file(
        self,
        template_name: str,
        context: Dict[str, Any],
        output_path: Path,
    ) -> bool:
        """
        Render a template and write it to a file, with change detection.

        Args:
            template_name: Template path relative to the templates root
            context: Template variables
            output_path: Destination file path

        Returns:
            True if the file was written (content changed or new file),
            False if the existing file already had identical content

        Raises:
            PageBuildError: If rendering fails
        """
        content = self.render(template_name, context)

        if output_path.exists():
            existing = output_path.read_text(encoding="utf-8")
            if existing == content:
                return False

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        return True
