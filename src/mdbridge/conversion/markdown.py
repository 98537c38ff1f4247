"""HTML to GitHub-Flavored-Markdown conversion."""

from __future__ import annotations

import logging
import re
from typing import Optional

import html2text
from bs4 import BeautifulSoup

from ..models.config import MarkdownConfig
from .handlers import ResolverState, resolve_tree

logger = logging.getLogger(__name__)


class HtmlToMarkdown:
    """
    Converts HTML content to GFM Markdown.

    The HTML is parsed with BeautifulSoup, link and image references are
    resolved by the element handlers, and the tree is serialized with
    html2text.

    Each call to ``convert`` gets fresh resolver state, so one instance can
    be reused across documents.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert('<base href="https://example.com/"><a href="a.html">A</a>')
    """

    def __init__(
        self,
        config: Optional[MarkdownConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the Markdown converter.

        Args:
            config: Serialization options (defaults to MarkdownConfig())
            logger: Logger receiving conversion diagnostics (e.g. invalid base URLs)
        """
        self._config = config or MarkdownConfig()
        self.logger = logger or logging.getLogger(__name__)

    def _make_serializer(self) -> html2text.HTML2Text:
        """Build an html2text serializer configured for GFM output."""
        config = self._config
        converter = html2text.HTML2Text()

        # Line width (0 = no wrapping for consistent output)
        converter.body_width = config.body_width

        # References are resolved before serialization
        converter.baseurl = ""
        converter.inline_links = config.inline_links
        converter.use_automatic_links = config.use_automatic_links
        converter.protect_links = False
        converter.wrap_links = False

        # Content handling
        converter.ignore_images = config.ignore_images
        converter.ignore_tables = config.ignore_tables
        converter.pad_tables = config.pad_tables
        converter.unicode_snob = config.unicode_snob
        converter.default_image_alt = ""
        converter.single_line_break = False

        # Code blocks
        converter.mark_code = False
        converter.backquote_code_style = config.fenced_code

        return converter

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        # Remove trailing whitespace on each line
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))

        # Remove excessive blank lines
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)

        markdown = markdown.strip()
        if not markdown:
            return ""

        # Ensure single newline at end
        return markdown + "\n"

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string

        Returns:
            Markdown string
        """
        soup = BeautifulSoup(html, "html.parser")

        state = ResolverState(logger=self.logger)
        nodes = resolve_tree(soup, state)
        logger.debug(f"Resolved {len(nodes)} references (base: {state.base_url or 'none'})")

        markdown = self._make_serializer().handle(str(soup))
        return self._clean_output(markdown)
