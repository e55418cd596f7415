"""Splits the API reference into per-entity runs.

The documentation has no semantic markup for methods or objects. The only
reliable structure is the flat sequence of children of the content
container: an ``h3`` per chapter, an ``h4`` per entity, followed by the
paragraphs, lists and at most one table that document it.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from bs4 import BeautifulSoup, Tag

from .errors import AnchorNotFoundError, ContentContainerNotFoundError, VersionNotFoundError
from .html import child_elements, element_text, load_html
from .patterns import DEFAULT_CONFIG, ParserConfig, compile_pattern

logger = logging.getLogger(__name__)

TAG_H3 = "h3"
TAG_H4 = "h4"
TAG_TABLE = "table"


class EntityKind(Enum):
    OBJECT = "object"
    METHOD = "method"


@dataclass
class EntityRun:
    """Everything documented between one h4 heading and the next heading."""

    name: str
    kind: EntityKind
    description: str = ""
    table: Tag | None = None
    elements: list[Tag] = field(default_factory=list)


def find_content_container(soup: BeautifulSoup, config: ParserConfig = DEFAULT_CONFIG) -> Tag:
    container = soup.find(id=config.content_container_id)
    if not isinstance(container, Tag):
        raise ContentContainerNotFoundError(config.content_container_id)
    return container


def classify_heading(name: str) -> EntityKind | None:
    """Decide whether an h4 heading names an object, a method, or neither."""
    if not name:
        return None
    # Objects and methods are single identifiers; anything with a space is a sub-header
    if " " in name:
        logger.debug("Skipping section header: %s", name)
        return None
    if name[0].isupper():
        return EntityKind.OBJECT
    if name[0].islower():
        return EntityKind.METHOD
    logger.warning("h4 tag is neither object nor method: %s", name)
    return None


def collect_run(name: str, kind: EntityKind, siblings: list[Tag]) -> EntityRun:
    description = []
    table = None
    for element in siblings:
        if element.name == TAG_TABLE:
            table = element
        else:
            description.append(element_text(element) + "\n")
    return EntityRun(
        name=name,
        kind=kind,
        description="".join(description).strip(),
        table=table,
        elements=list(siblings),
    )


def segment(soup: BeautifulSoup, config: ParserConfig = DEFAULT_CONFIG) -> list[EntityRun]:
    """Return the entity runs after the section anchor, in document order."""
    elements = child_elements(find_content_container(soup, config))

    start = next(
        (
            i for i, el in enumerate(elements)
            if el.name == TAG_H3 and element_text(el) == config.section_anchor
        ),
        None,
    )
    if start is None:
        raise AnchorNotFoundError(config.section_anchor)

    runs: list[EntityRun] = []
    remaining = elements[start + 1:]
    for i, element in enumerate(remaining):
        if element.name != TAG_H4:
            continue
        name = element_text(element)
        kind = classify_heading(name)
        if kind is None:
            continue

        siblings = []
        for sibling in remaining[i + 1:]:
            if sibling.name in (TAG_H3, TAG_H4):
                break
            siblings.append(sibling)
        runs.append(collect_run(name, kind, siblings))

    return runs


def extract_version(html: str, config: ParserConfig = DEFAULT_CONFIG) -> str:
    """Find the "Bot API X.Y" marker right after the "Recent changes" heading."""
    elements = child_elements(find_content_container(load_html(html), config))
    heading = config.version_heading.lower()
    version_re = compile_pattern(config.version_pattern)

    for i, element in enumerate(elements):
        if element.name == TAG_H3 and heading in element_text(element).lower():
            for candidate in elements[i + 1:i + config.version_lookahead]:
                match = version_re.search(element_text(candidate))
                if match:
                    version = match.group(1)
                    logger.info("Extracted Bot API version: %s", version)
                    return version
            break

    raise VersionNotFoundError()
