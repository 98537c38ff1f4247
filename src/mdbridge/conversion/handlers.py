"""Element handlers that resolve link and image references during conversion.

Each handler is a function ``(ResolverState, Tag) -> node`` registered in
``HANDLERS`` under the tag name it handles. The tree walker visits elements
in document order with children before their parent, so a link sees its
already-converted children and the first ``<base>`` in ``<head>`` is seen
before anything in ``<body>``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Callable, Optional, Union
from urllib.parse import quote, urljoin

from bs4 import NavigableString, PageElement, Tag

from ..security.url_validator import is_valid_url, normalize_url

logger = logging.getLogger(__name__)

# Reserved characters and existing %XX escapes are left as they are
URL_SAFE_CHARS = ":/?#[]@!$&'()*+,;=%~"


@dataclass
class ResolverState:
    """
    Per-conversion resolution state.

    The base URL is taken from the first ``<base>`` element only and is
    frozen for the rest of the conversion.
    """

    logger: logging.Logger = field(default_factory=lambda: logger)
    base_url: Optional[str] = None
    base_found: bool = False

    def freeze_base(self, url: Optional[str]) -> None:
        """Record the base URL. Only the first call has any effect."""
        if self.base_found:
            return
        self.base_url = url
        self.base_found = True

    def resolve(self, url: Optional[str]) -> str:
        """Resolve a reference against the frozen base URL and percent-encode it."""
        if url is None:
            return ""
        if self.base_url:
            url = urljoin(self.base_url, url)
        return quote(url, safe=URL_SAFE_CHARS)


@dataclass
class ImageNode:
    """Resolved image reference."""

    url: str
    alt: str = ""
    title: Optional[str] = None

    def apply(self, tag: Tag) -> None:
        """Write the resolved reference back onto the ``<img>`` element."""
        tag.attrs = {k: v for k, v in tag.attrs.items() if k not in ("src", "data-src", "alt", "title")}
        if self.url:
            tag["src"] = self.url
        tag["alt"] = self.alt
        if self.title:
            tag["title"] = self.title


@dataclass
class LinkNode:
    """Resolved link with its converted children."""

    url: str
    title: Optional[str] = None
    children: list[PageElement] = field(default_factory=list)

    def apply(self, tag: Tag) -> None:
        """Write the resolved reference back onto the ``<a>`` element."""
        tag.attrs = {k: v for k, v in tag.attrs.items() if k not in ("href", "title")}
        if self.url:
            tag["href"] = self.url
        if self.title:
            tag["title"] = self.title

    @property
    def text(self) -> str:
        return "".join(
            child.get_text() if isinstance(child, Tag) else str(child) for child in self.children
        )


@dataclass
class TaskMarkerNode:
    """GFM task list marker produced from a checkbox input."""

    checked: bool

    @property
    def marker(self) -> str:
        return "[x] " if self.checked else "[ ] "

    def apply(self, tag: Tag) -> None:
        tag.replace_with(NavigableString(self.marker))


OutputNode = Union[ImageNode, LinkNode, TaskMarkerNode]
NodeHandler = Callable[[ResolverState, Tag], Optional[OutputNode]]


def _attr(tag: Tag, name: str) -> Optional[str]:
    """Return a string attribute, or None when missing or empty."""
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if value is None or value == "":
        return None
    return str(value)


def handle_base(state: ResolverState, tag: Tag) -> None:
    """Freeze the base URL from the first ``<base href>`` seen."""
    if state.base_found:
        return None

    href = _attr(tag, "href") or ""
    if is_valid_url(href):
        state.freeze_base(normalize_url(href))
    else:
        state.logger.error(f"Invalid URL: {href}")
        state.freeze_base(None)
    return None


def handle_img(state: ResolverState, tag: Tag) -> ImageNode:
    """Resolve an image source, falling back to ``data-src``."""
    src = _attr(tag, "src")
    if is_valid_url(src):
        src = normalize_url(src)
    else:
        # Lazy-loaded images keep the real source in data-src
        src = _attr(tag, "data-src") or src

    return ImageNode(
        url=state.resolve(src or ""),
        alt=_attr(tag, "alt") or "",
        title=_attr(tag, "title"),
    )


def handle_a(state: ResolverState, tag: Tag) -> LinkNode:
    """Resolve a link target. Children are already converted."""
    return LinkNode(
        url=state.resolve(_attr(tag, "href")),
        title=_attr(tag, "title"),
        children=list(tag.contents),
    )


def handle_input(state: ResolverState, tag: Tag) -> Optional[TaskMarkerNode]:
    """Turn checkbox inputs into task list markers."""
    if (_attr(tag, "type") or "").lower() != "checkbox":
        return None
    return TaskMarkerNode(checked=tag.has_attr("checked"))


HANDLERS: dict[str, NodeHandler] = {
    "base": handle_base,
    "img": handle_img,
    "a": handle_a,
    "input": handle_input,
}


def iter_elements(root: Tag) -> Iterator[Tag]:
    """Yield elements in document order, children before their parent."""
    stack: list[tuple[Tag, bool]] = [(root, False)]
    while stack:
        element, expanded = stack.pop()
        if expanded:
            yield element
            continue
        stack.append((element, True))
        children = [child for child in element.children if isinstance(child, Tag)]
        for child in reversed(children):
            stack.append((child, False))


def resolve_tree(root: Tag, state: ResolverState) -> list[OutputNode]:
    """
    Run the element handlers over a parsed tree.

    The tree is updated in place so the serializer sees resolved
    references. Returns the produced nodes in visiting order.

    Args:
        root: Parsed document (or fragment)
        state: Resolver state for this conversion

    Returns:
        The output nodes produced by the handlers
    """
    nodes: list[OutputNode] = []
    for element in iter_elements(root):
        handler = HANDLERS.get(element.name)
        if handler is None:
            continue
        node = handler(state, element)
        if node is not None:
            node.apply(element)
            nodes.append(node)
    return nodes
