"""Pydantic configuration models for mdbridge."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class MarkdownConfig(BaseModel):
    """Configuration for HTML to Markdown serialization."""

    body_width: int = Field(0, ge=0, description="Max line width (0 = no wrapping)")
    inline_links: bool = Field(True, description="Use inline [text](url) vs reference style")
    use_automatic_links: bool = Field(
        True,
        description="Emit <url> autolinks when link text equals the target",
    )
    pad_tables: bool = Field(False, description="Pad table cells to equal column widths")
    ignore_images: bool = Field(False, description="Skip image conversion")
    ignore_tables: bool = Field(False, description="Skip table conversion")
    unicode_snob: bool = Field(True, description="Use Unicode chars instead of ASCII fallbacks")
    fenced_code: bool = Field(True, description="Emit ``` fences for pre blocks")

    model_config = {"extra": "forbid"}


class BlocksConfig(BaseModel):
    """Configuration for Markdown to editor block conversion."""

    strict_image_urls: bool = Field(
        False,
        description="Only emit image blocks for absolute http(s) URLs with an image extension",
    )
    allow_unsupported: bool = Field(
        False,
        description=(
            "Drop raw HTML instead of failing the conversion. When off, any inline "
            "or block HTML (including <br> inside table cells) makes markdown2blocks "
            "return no blocks"
        ),
    )
    truncate: bool = Field(
        True,
        description="Truncate content exceeding Notion API limits instead of failing",
    )
    enable_alert_callouts: bool = Field(
        True,
        description="Convert GFM alerts (> [!NOTE]) into callout blocks",
    )

    model_config = {"extra": "forbid"}


class MdBridgeConfig(BaseModel):
    """
    Root configuration model for mdbridge.

    Example:
        config = MdBridgeConfig(blocks=BlocksConfig(strict_image_urls=True))

    YAML format:
        markdown:
          pad_tables: true
        blocks:
          truncate: false
        log_level: DEBUG
    """

    markdown: MarkdownConfig = Field(default_factory=MarkdownConfig)
    blocks: BlocksConfig = Field(default_factory=BlocksConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "MdBridgeConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "MdBridgeConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text(encoding="utf-8"))
