"""Markup engine: from note text to a document tree, HTML and back."""
