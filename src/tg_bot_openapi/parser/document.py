"""Parser entry point: one HTML document in, methods and objects out."""

import logging

from .base import ApiMethod, ApiObject
from .classifier import parse_method, parse_object
from .html import load_html
from .patterns import DEFAULT_CONFIG, ParserConfig
from .segmenter import EntityKind, segment

logger = logging.getLogger(__name__)


def parse(html: str, config: ParserConfig = DEFAULT_CONFIG) -> tuple[list[ApiMethod], list[ApiObject]]:
    """Parse the Bot API reference page.

    Returns methods and objects in document order. Raises a
    ``DocumentParseError`` subclass when the document can't be interpreted;
    there is no partial result.
    """
    methods: list[ApiMethod] = []
    objects: list[ApiObject] = []

    for run in segment(load_html(html), config):
        if run.kind is EntityKind.OBJECT:
            objects.append(parse_object(run, config))
        else:
            methods.append(parse_method(run, config))

    logger.info("Parsed %d objects and %d methods", len(objects), len(methods))
    return methods, objects
