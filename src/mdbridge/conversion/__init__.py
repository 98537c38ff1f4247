"""Content conversion for mdbridge (readable extraction, HTML to Markdown)."""

from .extractor import ArticleNotFoundError, ReadabilityExtractor
from .handlers import HANDLERS, ImageNode, LinkNode, ResolverState, TaskMarkerNode, resolve_tree
from .markdown import HtmlToMarkdown
from .protocols import BlockConverter, ContentExtractor, MarkdownConverter

__all__ = [
    # Protocols
    "BlockConverter",
    "ContentExtractor",
    "MarkdownConverter",
    # Implementations
    "ReadabilityExtractor",
    "HtmlToMarkdown",
    # Handlers
    "HANDLERS",
    "ImageNode",
    "LinkNode",
    "ResolverState",
    "TaskMarkerNode",
    "resolve_tree",
    # Errors
    "ArticleNotFoundError",
]
