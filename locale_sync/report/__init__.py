"""Report rendering."""

from .markdown import render_markdown, render_section

__all__ = ["render_markdown", "render_section"]
