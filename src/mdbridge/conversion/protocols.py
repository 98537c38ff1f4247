"""Protocol definitions for content conversion."""

from typing import Any, Optional, Protocol


class ContentExtractor(Protocol):
    """
    Protocol for extracting readable article content from HTML.

    Implementations strip navigation, headers, footers, ads, etc. and
    return the main article as HTML.
    """

    def extract(self, html: str, url: Optional[str]) -> str:
        """
        Extract the readable article from HTML.

        Args:
            html: Raw HTML markup
            url: Document location (for relative link resolution)

        Returns:
            Article content as HTML

        Raises:
            ValueError: If no article content can be found
        """
        ...


class MarkdownConverter(Protocol):
    """
    Protocol for converting HTML to Markdown.

    Implementations convert (possibly extracted) HTML to Markdown text.
    """

    def convert(self, html: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string

        Returns:
            Markdown string
        """
        ...


class BlockConverter(Protocol):
    """Protocol for converting Markdown to editor blocks."""

    def convert(self, markdown: str) -> list[dict[str, Any]]:
        """
        Convert Markdown to a list of block objects.

        Args:
            markdown: Markdown text

        Returns:
            List of block dicts
        """
        ...
