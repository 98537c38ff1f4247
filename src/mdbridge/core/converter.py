"""Conversion entry points: HTML to Markdown, Markdown to blocks."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

from ..blocks import Block, MarkdownToBlocks
from ..conversion.extractor import ReadabilityExtractor
from ..conversion.markdown import HtmlToMarkdown
from ..conversion.protocols import ContentExtractor
from ..models.config import MdBridgeConfig
from ..models.requests import Html2MarkdownRequest, Markdown2BlocksRequest


def html2markdown(
    params: Union[Html2MarkdownRequest, Mapping[str, Any]],
    *,
    config: MdBridgeConfig | None = None,
    extractor: ContentExtractor | None = None,
    logger: logging.Logger | None = None,
) -> str:
    """
    Convert HTML to GitHub-Flavored Markdown.

    When ``readable`` is set, the page is first reduced to its readable
    article; extraction failures are not caught.

    Args:
        params: Request with ``url``, ``html`` and ``readable``
        config: Conversion settings (defaults to MdBridgeConfig())
        extractor: Readable content extractor (defaults to ReadabilityExtractor)
        logger: Logger receiving conversion diagnostics

    Returns:
        Markdown text

    Raises:
        ArticleNotFoundError: If ``readable`` is set and the page has no article
        ValueError: If the extraction library cannot parse the document

    Example:
        markdown = html2markdown({"url": "https://example.com", "html": html, "readable": True})
    """
    request = (
        params if isinstance(params, Html2MarkdownRequest) else Html2MarkdownRequest.model_validate(params)
    )
    config = config or MdBridgeConfig()

    html = request.html
    if request.readable:
        extractor = extractor or ReadabilityExtractor()
        html = extractor.extract(html, request.url)

    return HtmlToMarkdown(config.markdown, logger=logger).convert(html)


def markdown2blocks(
    params: Union[Markdown2BlocksRequest, Mapping[str, Any]],
    *,
    config: MdBridgeConfig | None = None,
    logger: logging.Logger | None = None,
) -> list[Block]:
    """
    Convert Markdown to editor blocks.

    Any failure yields an empty list; callers cannot tell an empty document
    from a failed conversion.

    Args:
        params: Request with ``url`` (unused) and ``markdown``
        config: Conversion settings (defaults to MdBridgeConfig(), which
            accepts any image URL)
        logger: Logger for conversion messages

    Returns:
        List of Notion block objects, empty on failure
    """
    log = logger or logging.getLogger(__name__)
    try:
        request = (
            params
            if isinstance(params, Markdown2BlocksRequest)
            else Markdown2BlocksRequest.model_validate(params)
        )
        options = (config or MdBridgeConfig()).blocks.model_dump()
        return MarkdownToBlocks(**options, logger=logger).convert(request.markdown)
    except Exception as e:
        log.debug(f"Markdown to blocks conversion failed: {e}")
        return []
