"""Markdown to Notion block conversion."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional
from urllib.parse import urlparse

import mistune

from ..security.url_validator import is_valid_url
from . import notion
from .notion import Block, RichText

logger = logging.getLogger(__name__)

Token = dict[str, Any]

MISTUNE_PLUGINS = ["strikethrough", "table", "task_lists", "url", "math"]

ALERT_PATTERN = re.compile(r"^\[!(NOTE|TIP|IMPORTANT|WARNING|CAUTION)\][ \t]*", re.IGNORECASE)


class UnsupportedMarkdownError(ValueError):
    """Raised for Markdown constructs that have no block equivalent."""


class BlockLimitError(ValueError):
    """Raised when content exceeds Notion API limits and truncation is off."""


@dataclass(frozen=True)
class _Style:
    """Inline formatting in effect while walking inline tokens."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    link: Optional[str] = None


def is_supported_image_url(url: Optional[str]) -> bool:
    """Check for an absolute http(s) URL pointing at a known image type."""
    if not is_valid_url(url):
        return False
    return urlparse(url).path.lower().endswith(notion.IMAGE_EXTENSIONS)


class MarkdownToBlocks:
    """
    Converts Markdown to Notion block objects.

    Markdown is parsed with mistune (GFM tables, strikethrough, task lists,
    autolinks and math enabled) and the token tree is mapped onto the
    Notion block schema.

    Example:
        converter = MarkdownToBlocks(strict_image_urls=False)
        blocks = converter.convert("# Title\\n\\nSome *text*")
    """

    def __init__(
        self,
        strict_image_urls: bool = True,
        allow_unsupported: bool = False,
        truncate: bool = True,
        enable_alert_callouts: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the block converter.

        Args:
            strict_image_urls: Emit image blocks only for supported image URLs;
                other images become paragraphs holding the URL
            allow_unsupported: Drop raw HTML instead of raising
            truncate: Truncate content over Notion limits instead of raising
            enable_alert_callouts: Map GFM alerts to callout blocks
            logger: Optional logger for conversion messages
        """
        self._strict_image_urls = strict_image_urls
        self._allow_unsupported = allow_unsupported
        self._truncate = truncate
        self._enable_alert_callouts = enable_alert_callouts
        self.logger = logger or logging.getLogger(__name__)

        self._markdown = mistune.create_markdown(renderer=None, plugins=MISTUNE_PLUGINS)

        self._block_handlers: dict[str, Callable[[Token], list[Block]]] = {
            "paragraph": self._paragraph,
            "block_text": self._paragraph,
            "heading": self._heading,
            "block_code": self._code,
            "block_quote": self._block_quote,
            "list": self._list,
            "thematic_break": lambda token: [notion.divider()],
            "table": self._table,
            "block_math": self._equation,
            "blank_line": lambda token: [],
        }

    # -- limits -------------------------------------------------------------

    def _limit(self, items: list[Any], limit: int, what: str) -> list[Any]:
        """Apply a Notion array limit."""
        if len(items) <= limit:
            return items
        if not self._truncate:
            raise BlockLimitError(f"{what} has {len(items)} items (limit {limit})")
        self.logger.warning(f"Truncating {what} from {len(items)} to {limit} items")
        return items[:limit]

    def _unsupported(self, token: Token) -> list[Any]:
        if not self._allow_unsupported:
            raise UnsupportedMarkdownError(f"Unsupported markdown construct: {token['type']}")
        self.logger.debug(f"Dropping unsupported markdown construct: {token['type']}")
        return []

    # -- rich text ----------------------------------------------------------

    def _inline(self, tokens: list[Token], style: _Style) -> list[RichText]:
        """Walk inline tokens, producing unmerged rich text items."""
        items: list[RichText] = []

        for token in tokens:
            token_type = token.get("type", "")
            children = token.get("children", [])

            if token_type == "text":
                items.append(self._text(token.get("raw", ""), style))
            elif token_type == "strong":
                items.extend(self._inline(children, replace(style, bold=True)))
            elif token_type == "emphasis":
                items.extend(self._inline(children, replace(style, italic=True)))
            elif token_type == "strikethrough":
                items.extend(self._inline(children, replace(style, strikethrough=True)))
            elif token_type == "codespan":
                items.append(self._text(token.get("raw", ""), style, code=True))
            elif token_type in ("linebreak", "softbreak"):
                items.append(self._text("\n", style))
            elif token_type == "link":
                url = token.get("attrs", {}).get("url")
                link = url if is_valid_url(url) else style.link
                items.extend(self._inline(children, replace(style, link=link)))
            elif token_type == "image":
                # Images nested in text keep their alt text, linked to the source
                url = token.get("attrs", {}).get("url")
                link = url if is_valid_url(url) else style.link
                items.extend(self._inline(children, replace(style, link=link)))
            elif token_type == "inline_math":
                items.append(notion.equation_text(token.get("raw", "")))
            elif token_type == "inline_html":
                items.extend(self._unsupported(token))
            elif children:
                items.extend(self._inline(children, style))
            elif "raw" in token:
                items.append(self._text(token["raw"], style))

        return items

    def _text(self, content: str, style: _Style, code: bool = False) -> RichText:
        return notion.text(
            content,
            link=style.link,
            bold=style.bold,
            italic=style.italic,
            strikethrough=style.strikethrough,
            code=code,
        )

    def _merge(self, items: list[RichText]) -> list[RichText]:
        """Merge adjacent text items with identical formatting."""
        merged: list[RichText] = []
        for item in items:
            previous = merged[-1] if merged else None
            if (
                previous is not None
                and item["type"] == "text"
                and previous["type"] == "text"
                and item["annotations"] == previous["annotations"]
                and item["text"]["link"] == previous["text"]["link"]
            ):
                previous["text"]["content"] += item["text"]["content"]
            else:
                merged.append(item)
        return merged

    def _split(self, items: list[RichText]) -> list[RichText]:
        """Split text items longer than the Notion content limit."""
        result: list[RichText] = []
        size = notion.MAX_TEXT_CONTENT
        for item in items:
            content = item["text"]["content"] if item["type"] == "text" else ""
            if len(content) <= size:
                result.append(item)
                continue
            for start in range(0, len(content), size):
                chunk = {**item, "text": {**item["text"], "content": content[start : start + size]}}
                result.append(chunk)
        return result

    def _rich_text(self, tokens: list[Token], what: str = "rich text") -> list[RichText]:
        """Convert inline tokens to a Notion rich text array."""
        items = self._split(self._merge(self._inline(tokens, _Style())))
        return self._limit(items, notion.MAX_RICH_TEXT_ITEMS, what)

    @staticmethod
    def _has_content(rich_text: list[RichText]) -> bool:
        for item in rich_text:
            if item["type"] != "text" or item["text"]["content"].strip():
                return True
        return False

    # -- blocks -------------------------------------------------------------

    def _blocks(self, tokens: list[Token]) -> list[Block]:
        blocks: list[Block] = []
        for token in tokens:
            handler = self._block_handlers.get(token.get("type", ""))
            if handler is None:
                blocks.extend(self._unsupported(token))
                continue
            blocks.extend(handler(token))
        return blocks

    def _children(self, tokens: list[Token]) -> list[Block]:
        return self._limit(self._blocks(tokens), notion.MAX_CHILDREN, "block children")

    def _image(self, token: Token) -> Block:
        url = token.get("attrs", {}).get("url", "")
        if self._strict_image_urls and not is_supported_image_url(url):
            return notion.paragraph([notion.text(url)])
        return notion.image(url)

    def _paragraph(self, token: Token) -> list[Block]:
        """Convert a paragraph, lifting images out into image blocks."""
        blocks: list[Block] = []
        pending: list[Token] = []

        def flush() -> None:
            if pending:
                rich_text = self._rich_text(pending)
                if self._has_content(rich_text):
                    blocks.append(notion.paragraph(rich_text))
                pending.clear()

        for child in token.get("children", []):
            if child.get("type") == "image":
                flush()
                blocks.append(self._image(child))
            else:
                pending.append(child)
        flush()

        return blocks

    def _heading(self, token: Token) -> list[Block]:
        level = token.get("attrs", {}).get("level", 1)
        return [notion.heading(level, self._rich_text(token.get("children", [])))]

    def _code(self, token: Token) -> list[Block]:
        raw = token.get("raw", "")
        if raw.endswith("\n"):
            raw = raw[:-1]
        language = notion.code_language(token.get("attrs", {}).get("info"))
        rich_text = self._limit(self._split([notion.text(raw)]), notion.MAX_RICH_TEXT_ITEMS, "code block")
        return [notion.code(rich_text, language)]

    def _equation(self, token: Token) -> list[Block]:
        expression = token.get("raw", "").strip()
        if len(expression) > notion.MAX_EQUATION_EXPRESSION:
            if not self._truncate:
                raise BlockLimitError(
                    f"Equation has {len(expression)} characters (limit {notion.MAX_EQUATION_EXPRESSION})"
                )
            self.logger.warning("Truncating equation expression")
            expression = expression[: notion.MAX_EQUATION_EXPRESSION]
        return [notion.equation(expression)]

    def _split_alert(self, inline: list[Token]) -> tuple[Optional[str], list[Token]]:
        """Detect a leading GFM alert marker and strip it from the tokens."""
        prefix = ""
        for token in inline:
            if token.get("type") != "text":
                break
            prefix += token.get("raw", "")

        match = ALERT_PATTERN.match(prefix)
        if not match:
            return None, inline

        remaining = match.end()
        rest = list(inline)
        while remaining and rest:
            raw = rest[0].get("raw", "")
            if len(raw) <= remaining:
                remaining -= len(raw)
                rest.pop(0)
            else:
                rest[0] = {**rest[0], "raw": raw[remaining:]}
                remaining = 0

        while rest and rest[0].get("type") in ("softbreak", "linebreak"):
            rest.pop(0)

        return match.group(1).upper(), rest

    def _block_quote(self, token: Token) -> list[Block]:
        children = [child for child in token.get("children", []) if child.get("type") != "blank_line"]

        alert = None
        rich_text: list[RichText] = []
        if children and children[0].get("type") == "paragraph":
            inline = children[0].get("children", [])
            if self._enable_alert_callouts:
                alert, inline = self._split_alert(inline)
            rich_text = self._rich_text(inline)
            children = children[1:]

        child_blocks = self._children(children)
        if alert is not None:
            return [notion.callout(rich_text, notion.ALERT_EMOJIS[alert], child_blocks)]
        return [notion.quote(rich_text, child_blocks)]

    def _list(self, token: Token) -> list[Block]:
        ordered = token.get("attrs", {}).get("ordered", False)
        blocks: list[Block] = []

        for item in token.get("children", []):
            item_type = item.get("type")
            if item_type not in ("list_item", "task_list_item"):
                continue

            children = [child for child in item.get("children", []) if child.get("type") != "blank_line"]
            rich_text: list[RichText] = []
            if children and children[0].get("type") in ("block_text", "paragraph"):
                rich_text = self._rich_text(children[0].get("children", []))
                children = children[1:]
            child_blocks = self._children(children)

            if item_type == "task_list_item":
                checked = bool(item.get("attrs", {}).get("checked", False))
                blocks.append(notion.to_do(rich_text, checked, child_blocks))
            elif ordered:
                blocks.append(notion.numbered_list_item(rich_text, child_blocks))
            else:
                blocks.append(notion.bulleted_list_item(rich_text, child_blocks))

        return blocks

    def _table(self, token: Token) -> list[Block]:
        rows: list[list[list[RichText]]] = []

        for section in token.get("children", []):
            section_type = section.get("type")
            if section_type == "table_head":
                rows.append([self._rich_text(cell.get("children", [])) for cell in section.get("children", [])])
            elif section_type == "table_body":
                for row in section.get("children", []):
                    rows.append([self._rich_text(cell.get("children", [])) for cell in row.get("children", [])])

        width = max((len(row) for row in rows), default=0)
        if width == 0:
            return []

        row_blocks = [notion.table_row(row + [[] for _ in range(width - len(row))]) for row in rows]
        return [notion.table(width, self._limit(row_blocks, notion.MAX_CHILDREN, "table rows"))]

    # -- entry point --------------------------------------------------------

    def convert(self, markdown: str) -> list[Block]:
        """
        Convert Markdown to Notion blocks.

        Args:
            markdown: Markdown text

        Returns:
            List of Notion block objects

        Raises:
            UnsupportedMarkdownError: On raw HTML when allow_unsupported is off
            BlockLimitError: On content over Notion limits when truncate is off
        """
        tokens, _state = self._markdown.parse(markdown)
        blocks = self._blocks(tokens)
        return self._limit(blocks, notion.MAX_PAYLOAD_BLOCKS, "payload")


def markdown_to_blocks(markdown: str, **options: Any) -> list[Block]:
    """Convert Markdown to Notion blocks with the given MarkdownToBlocks options."""
    return MarkdownToBlocks(**options).convert(markdown)
