"""Conversion entry points."""

from .converter import html2markdown, markdown2blocks

__all__ = ["html2markdown", "markdown2blocks"]
