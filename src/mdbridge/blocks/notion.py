"""Notion block and rich text object factories."""

from typing import Any, Optional

Block = dict[str, Any]
RichText = dict[str, Any]

# Notion API request limits
MAX_TEXT_CONTENT = 2000
MAX_RICH_TEXT_ITEMS = 100
MAX_CHILDREN = 100
MAX_PAYLOAD_BLOCKS = 1000
MAX_EQUATION_EXPRESSION = 1000

SUPPORTED_CODE_LANGUAGES = {
    "abap",
    "arduino",
    "bash",
    "basic",
    "c",
    "clojure",
    "coffeescript",
    "c++",
    "c#",
    "css",
    "dart",
    "diff",
    "docker",
    "elixir",
    "elm",
    "erlang",
    "flow",
    "fortran",
    "f#",
    "gherkin",
    "glsl",
    "go",
    "graphql",
    "groovy",
    "haskell",
    "html",
    "java",
    "javascript",
    "json",
    "julia",
    "kotlin",
    "latex",
    "less",
    "lisp",
    "livescript",
    "lua",
    "makefile",
    "markdown",
    "markup",
    "matlab",
    "mermaid",
    "nix",
    "objective-c",
    "ocaml",
    "pascal",
    "perl",
    "php",
    "plain text",
    "powershell",
    "prolog",
    "protobuf",
    "python",
    "r",
    "reason",
    "ruby",
    "rust",
    "sass",
    "scala",
    "scheme",
    "scss",
    "shell",
    "sql",
    "swift",
    "typescript",
    "vb.net",
    "verilog",
    "vhdl",
    "visual basic",
    "webassembly",
    "xml",
    "yaml",
}

CODE_LANGUAGE_ALIASES = {
    "py": "python",
    "python3": "python",
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "sh": "shell",
    "zsh": "shell",
    "console": "shell",
    "yml": "yaml",
    "cpp": "c++",
    "cxx": "c++",
    "cs": "c#",
    "csharp": "c#",
    "fsharp": "f#",
    "rb": "ruby",
    "rs": "rust",
    "kt": "kotlin",
    "golang": "go",
    "objc": "objective-c",
    "ps1": "powershell",
    "pwsh": "powershell",
    "tex": "latex",
    "proto": "protobuf",
    "dockerfile": "docker",
    "md": "markdown",
    "htm": "html",
    "vb": "visual basic",
    "wasm": "webassembly",
    "text": "plain text",
    "txt": "plain text",
    "plaintext": "plain text",
}

# GFM alert type -> callout icon
ALERT_EMOJIS = {
    "NOTE": "ℹ️",
    "TIP": "\U0001f4a1",
    "IMPORTANT": "❗",
    "WARNING": "⚠️",
    "CAUTION": "\U0001f6d1",
}

IMAGE_EXTENSIONS = (
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".tif",
    ".tiff",
    ".bmp",
    ".svg",
    ".heic",
    ".webp",
)


def code_language(info: Optional[str]) -> str:
    """Map a fence info string to a Notion code language."""
    if not info:
        return "plain text"
    name = info.strip().split(maxsplit=1)[0].lower() if info.strip() else ""
    name = CODE_LANGUAGE_ALIASES.get(name, name)
    return name if name in SUPPORTED_CODE_LANGUAGES else "plain text"


def annotations(
    bold: bool = False,
    italic: bool = False,
    strikethrough: bool = False,
    code: bool = False,
) -> dict[str, Any]:
    return {
        "bold": bold,
        "italic": italic,
        "strikethrough": strikethrough,
        "underline": False,
        "code": code,
        "color": "default",
    }


def text(content: str, link: Optional[str] = None, **annotation_flags: bool) -> RichText:
    """Create a text rich text object."""
    return {
        "type": "text",
        "annotations": annotations(**annotation_flags),
        "text": {
            "content": content,
            "link": {"url": link} if link else None,
        },
    }


def equation_text(expression: str) -> RichText:
    """Create an inline equation rich text object."""
    return {
        "type": "equation",
        "annotations": annotations(),
        "equation": {"expression": expression},
    }


def _block(block_type: str, body: dict[str, Any]) -> Block:
    return {"object": "block", "type": block_type, block_type: body}


def _with_children(body: dict[str, Any], children: Optional[list[Block]]) -> dict[str, Any]:
    if children:
        body["children"] = children
    return body


def paragraph(rich_text: list[RichText]) -> Block:
    return _block("paragraph", {"rich_text": rich_text})


def heading(level: int, rich_text: list[RichText]) -> Block:
    """Create a heading block. Notion only has three heading levels."""
    block_type = f"heading_{min(max(level, 1), 3)}"
    return _block(block_type, {"rich_text": rich_text})


def bulleted_list_item(rich_text: list[RichText], children: Optional[list[Block]] = None) -> Block:
    return _block("bulleted_list_item", _with_children({"rich_text": rich_text}, children))


def numbered_list_item(rich_text: list[RichText], children: Optional[list[Block]] = None) -> Block:
    return _block("numbered_list_item", _with_children({"rich_text": rich_text}, children))


def to_do(
    rich_text: list[RichText],
    checked: bool,
    children: Optional[list[Block]] = None,
) -> Block:
    return _block("to_do", _with_children({"rich_text": rich_text, "checked": checked}, children))


def quote(rich_text: list[RichText], children: Optional[list[Block]] = None) -> Block:
    return _block("quote", _with_children({"rich_text": rich_text}, children))


def callout(
    rich_text: list[RichText],
    emoji: str,
    children: Optional[list[Block]] = None,
) -> Block:
    body = {"rich_text": rich_text, "icon": {"type": "emoji", "emoji": emoji}}
    return _block("callout", _with_children(body, children))


def code(rich_text: list[RichText], language: str) -> Block:
    return _block("code", {"rich_text": rich_text, "language": language})


def divider() -> Block:
    return _block("divider", {})


def equation(expression: str) -> Block:
    return _block("equation", {"expression": expression})


def image(url: str) -> Block:
    return _block("image", {"type": "external", "external": {"url": url}})


def table_row(cells: list[list[RichText]]) -> Block:
    return _block("table_row", {"cells": cells})


def table(width: int, rows: list[Block], has_column_header: bool = True) -> Block:
    return _block(
        "table",
        {
            "table_width": width,
            "has_column_header": has_column_header,
            "has_row_header": False,
            "children": rows,
        },
    )
