"""Mdbridge configuration and request models."""

from .config import BlocksConfig, MarkdownConfig, MdBridgeConfig
from .requests import Html2MarkdownRequest, Markdown2BlocksRequest

__all__ = [
    # Config
    "BlocksConfig",
    "MarkdownConfig",
    "MdBridgeConfig",
    # Requests
    "Html2MarkdownRequest",
    "Markdown2BlocksRequest",
]
