"""Markdown to editor block conversion (Notion block schema)."""

from .builder import (
    BlockLimitError,
    MarkdownToBlocks,
    UnsupportedMarkdownError,
    is_supported_image_url,
    markdown_to_blocks,
)
from .notion import Block, RichText, code_language

__all__ = [
    "Block",
    "RichText",
    "MarkdownToBlocks",
    "markdown_to_blocks",
    "is_supported_image_url",
    "code_language",
    # Errors
    "BlockLimitError",
    "UnsupportedMarkdownError",
]
