"""HTML helpers shared by the parser modules."""

import re

from bs4 import BeautifulSoup, NavigableString, Tag

from .patterns import DEFAULT_CONFIG, ParserConfig

_WHITESPACE_RE = re.compile(r"\s+")


def load_html(html: str) -> BeautifulSoup:
    # html5lib builds tables the way browsers do, with an implicit <tbody>
    return BeautifulSoup(html, "html5lib")


def normalize_text(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def element_text(element: Tag) -> str:
    """Visible text of an element, whitespace collapsed and trimmed.

    A ``<br>`` counts as whitespace so that "update.<br>At most" doesn't run
    the two sentences together.
    """
    parts = []
    for node in element.descendants:
        if isinstance(node, Tag):
            if node.name == "br":
                parts.append(" ")
        elif type(node) is NavigableString:
            parts.append(str(node))
    return normalize_text("".join(parts))


def child_elements(element: Tag) -> list[Tag]:
    """Direct child elements, skipping text and comment nodes."""
    return [child for child in element.children if isinstance(child, Tag)]


def resolve_url(href: str, config: ParserConfig = DEFAULT_CONFIG) -> str:
    if href.startswith("#"):
        return f"{config.doc_base_url}{href}"
    if href.startswith("/"):
        return f"{config.site_origin}{href}"
    return href


def html_to_markdown(element: Tag, config: ParserConfig = DEFAULT_CONFIG) -> str:
    """Render an element's content as Markdown, keeping links and emphasis."""
    return _render_children(element, config).strip()


def _render_children(element: Tag, config: ParserConfig) -> str:
    parts = []
    for child in element.children:
        if isinstance(child, NavigableString):
            if type(child) is NavigableString:
                parts.append(_WHITESPACE_RE.sub(" ", str(child)))
            continue
        if not isinstance(child, Tag):
            continue

        tag = child.name.lower()
        if tag == "a":
            text = element_text(child)
            href = child.get("href") or ""
            parts.append(f"[{text}]({resolve_url(href, config)})")
        elif tag in ("em", "i"):
            parts.append(f"*{element_text(child)}*")
        elif tag in ("strong", "b"):
            parts.append(f"**{element_text(child)}**")
        elif tag == "code":
            parts.append(f"`{element_text(child)}`")
        else:
            parts.append(_render_children(child, config))
    return "".join(parts)
