"""
mdbridge - Convert HTML to GitHub-Flavored Markdown and Markdown to editor blocks.

Usage:
    from mdbridge import html2markdown, markdown2blocks

    markdown = html2markdown(
        {"url": "https://example.com/post", "html": html, "readable": True}
    )
    blocks = markdown2blocks({"markdown": markdown})
"""

__version__ = "1.0.0"

from .blocks import BlockLimitError, MarkdownToBlocks, UnsupportedMarkdownError
from .conversion import ArticleNotFoundError, HtmlToMarkdown, ReadabilityExtractor
from .core.converter import html2markdown, markdown2blocks
from .models.config import BlocksConfig, MarkdownConfig, MdBridgeConfig
from .models.requests import Html2MarkdownRequest, Markdown2BlocksRequest
from .security.url_validator import is_valid_url

__all__ = [
    "__version__",
    # Entry points
    "html2markdown",
    "markdown2blocks",
    "is_valid_url",
    # Converters
    "HtmlToMarkdown",
    "MarkdownToBlocks",
    "ReadabilityExtractor",
    # Config
    "MdBridgeConfig",
    "MarkdownConfig",
    "BlocksConfig",
    # Requests
    "Html2MarkdownRequest",
    "Markdown2BlocksRequest",
    # Errors
    "ArticleNotFoundError",
    "BlockLimitError",
    "UnsupportedMarkdownError",
]
