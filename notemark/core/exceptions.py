#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the notemark project.

Most markup problems are recovered inside the engine (malformed HTML
degrades to a paragraph, stale task ordinals are no-ops, unsafe markup is
stripped). The classes below cover what is left: failures that must reach
the caller.

Exception Hierarchy:
    Exception (built-in)
    ├── MarkupError - Base for markup engine errors
    │   └── NoteRenderError - A render pass failed unexpectedly
    ├── ValidationError - Invalid input data
    │   └── ConfigError - Invalid configuration file or values
    └── PageBuildError - Preview page template failures

Usage:
    from notemark.core.exceptions import NoteRenderError

    try:
        html = renderer.render(text)
    except NoteRenderError:
        html = PREVIEW_UNAVAILABLE
"""


class MarkupError(Exception):
    """
    Base exception for markup engine errors.

    Catch this to handle any error raised by the parsing and rendering
    pipeline, or catch a subclass for finer handling.

    See Also:
        NoteRenderError
    """

    pass


class NoteRenderError(MarkupError):
    """
    Exception for a render pass that could not complete.

    Raised when something outside the recoverable markup taxonomy goes
    wrong while parsing or rendering a note, such as pathological nesting
    exhausting the recursion limit. The original exception is chained as
    ``__cause__``.

    Examples:
        >>> raise NoteRenderError("Nesting too deep to render note")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Examples:
        >>> raise ValidationError("Task ordinal must be an integer")
    """

    pass


class ConfigError(ValidationError):
    """
    Exception for invalid markup configuration.

    Raised when a configuration file cannot be parsed or contains unknown
    keys or values of the wrong type.

    Examples:
        >>> raise ConfigError("Unknown configuration key: 'indent'")
        >>> raise ConfigError("indent_unit must be a positive integer")
    """

    pass


class PageBuildError(Exception):
    """
    Exception for preview page generation errors.

    Raised when a Jinja2 template is missing or fails to render.

    Examples:
        >>> raise PageBuildError("Template not found: preview.html.jinja2")
    """

    pass
