"""Union (sum type) detection and discriminator inference.

Union objects such as ``ChatMember`` are documented as prose ("This object
... can be one of") followed by a bulleted list of variant objects. Each
variant usually carries a field like ``status`` whose description pins a
literal value ("The member's status in the chat, always “creator”"); when
every variant has one, that field becomes the union's discriminator.
"""

import logging
from collections.abc import Iterable

from bs4 import Tag

from .base import ApiObject, Discriminator
from .html import element_text
from .patterns import DEFAULT_CONFIG, ParserConfig, compile_pattern

logger = logging.getLogger(__name__)


def is_union_description(description: str, config: ParserConfig = DEFAULT_CONFIG) -> bool:
    """True when an object's description announces a closed set of variants."""
    lowered = description.lower()
    if any(phrase.lower() in lowered for phrase in config.union_phrases):
        return True
    return any(compile_pattern(p).search(description) for p in config.union_patterns)


def extract_union_subtypes(elements: Iterable[Tag]) -> list[str]:
    """Variant names from the first bulleted list that names any."""
    subtypes: list[str] = []
    for element in elements:
        if element.name != "ul":
            continue
        for item in element.select("li"):
            link = item.find("a")
            name = element_text(link) if link is not None else element_text(item)
            if name and name[0].isupper():
                subtypes.append(name)
        if subtypes:
            break
    return subtypes


def discriminator_value(description: str, config: ParserConfig = DEFAULT_CONFIG) -> str | None:
    """The literal a field description pins its value to, if any."""
    for pattern in config.discriminator_patterns:
        match = compile_pattern(pattern).search(description)
        if match:
            return match.group("value").strip()
    return None


def infer_discriminators(
    objects: Iterable[ApiObject], config: ParserConfig = DEFAULT_CONFIG
) -> dict[str, Discriminator]:
    """Find, for every union, a field whose literal value tells its variants apart.

    Must run after every object has been parsed: variants are looked up by
    name. A field is only promoted when every listed variant pins a value
    for it.
    """
    objects = list(objects)
    by_name = {obj.name: obj for obj in objects}
    discriminators: dict[str, Discriminator] = {}

    for union in objects:
        if not union.is_union_type or not union.union_subtypes:
            continue

        candidates: dict[str, dict[str, str]] = {}
        for variant_name in union.union_subtypes:
            variant = by_name.get(variant_name)
            if variant is None:
                logger.debug("%s: variant %s is not a parsed object, skipping", union.name, variant_name)
                continue
            for field in variant.fields:
                value = discriminator_value(field.description, config)
                if value is not None:
                    candidates.setdefault(field.name, {})[variant_name] = value

        for field_name, values in candidates.items():
            if all(variant in values for variant in union.union_subtypes):
                discriminators[union.name] = Discriminator(
                    property_name=field_name,
                    mapping={variant: values[variant] for variant in union.union_subtypes},
                )
                logger.debug("%s: discriminator is %s", union.name, field_name)
                break
            logger.debug(
                "%s: field %s covers %d of %d variants, not promoted",
                union.name, field_name, len(values), len(union.union_subtypes),
            )

    logger.info("Inferred discriminators for %d union types", len(discriminators))
    return discriminators
