"""Request models for the conversion entry points."""

from typing import Optional

from pydantic import BaseModel, Field


class Html2MarkdownRequest(BaseModel):
    """Parameters for converting HTML to Markdown."""

    url: Optional[str] = Field(None, description="Document location, used to resolve relative links")
    html: str = Field(..., description="HTML markup to convert")
    readable: bool = Field(False, description="Reduce the page to its readable article first")

    model_config = {"extra": "ignore"}


class Markdown2BlocksRequest(BaseModel):
    """Parameters for converting Markdown to editor blocks."""

    url: Optional[str] = Field(None, description="Source location (accepted but unused)")
    markdown: str = Field(..., description="Markdown text to convert")

    model_config = {"extra": "ignore"}
