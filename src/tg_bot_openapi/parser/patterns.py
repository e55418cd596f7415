"""Tunable heuristics of the document parser.

All of these are matched against one live document and may stop matching
when Telegram restructures its reference. Override them with
``DEFAULT_CONFIG.model_copy(update={...})`` instead of editing the parser.
"""

import re
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

# Prefix of a discriminator field description, e.g. "Type of the result"
_DISCRIMINATOR_PREFIX = r"^\s*(?:Type of the [^,]+|Source of the [^,]+|Scope type|Error source|The [^,]+),\s*"
_QUOTE_OPEN = "[\"“]"
_QUOTE_CLOSE = "[\"”]"


class ParserConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_container_id: str = "dev_page_content"
    section_anchor: str = "Getting updates"

    version_heading: str = "Recent changes"
    version_pattern: str = r"Bot API (\d+\.\d+)"
    version_lookahead: int = 10

    union_phrases: tuple[str, ...] = (
        "can be one of",
        "should be one of",
        "It can be one of",
    )
    union_patterns: tuple[str, ...] = (
        r"the following \d+ \w+ are supported",
        r"the following \d+ types",
        r"support.*the following \d+ types",
    )

    # Each pattern must define a named group "value"
    discriminator_patterns: tuple[str, ...] = (
        _DISCRIMINATOR_PREFIX + r"always\s+" + _QUOTE_OPEN + r"(?P<value>[^\"”]+)" + _QUOTE_CLOSE,
        _DISCRIMINATOR_PREFIX + r"must\s+be\s+\*(?P<value>[^*]+)\*",
        _DISCRIMINATOR_PREFIX + r"must\s+" + _QUOTE_OPEN + r"(?P<value>[^\"”]+)" + _QUOTE_CLOSE,
    )

    file_types: tuple[str, ...] = ("InputFile", "InputMedia")

    doc_base_url: str = "https://core.telegram.org/bots/api"
    site_origin: str = "https://core.telegram.org"


DEFAULT_CONFIG = ParserConfig()


@lru_cache(maxsize=None)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a heuristic pattern; every heuristic is case-insensitive."""
    return re.compile(pattern, re.IGNORECASE)
