"""Return type extraction from a method's free-text description.

Methods never tabulate their return type; it is buried in prose such as
"On success, the sent Message is returned." The rules below are tried in
order and the first hit wins, so more specific phrasings come first.
"""

import re
from collections.abc import Callable
from typing import NamedTuple

from .errors import ReturnTypeExtractionError
from .types import ARRAY_PREFIX


class ReturnTypeRule(NamedTuple):
    name: str
    patterns: tuple[re.Pattern[str], ...]
    resolve: Callable[[re.Match[str]], str | None]


def _rx(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def _constant(type_name: str) -> Callable[[re.Match[str]], str]:
    return lambda match: type_name


def _captured(match: re.Match[str]) -> str:
    return match.group(1)


def _captured_uppercase(match: re.Match[str]) -> str | None:
    # [A-Z] also matches lowercase under IGNORECASE
    type_name = match.group(1)
    return type_name if type_name[0].isupper() else None


def _array(match: re.Match[str]) -> str | None:
    prefix, element = match.group(1), match.group(2)
    if not element[0].isupper():
        return None
    return ARRAY_PREFIX * len(_rx(re.escape(ARRAY_PREFIX)).findall(prefix)) + element


def _on_success(match: re.Match[str]) -> str:
    type_name = match.group(1)
    if type_name.lower() in ("true", "false"):
        return "Boolean"
    return type_name


RETURN_TYPE_RULES: tuple[ReturnTypeRule, ...] = (
    ReturnTypeRule(
        "boolean",
        (
            _rx(r"returns?\s+True"),
            _rx(r"True\s+(?:is|on)\s+(?:returned|success)"),
            _rx(r"returns?\s+False"),
        ),
        _constant("Boolean"),
    ),
    ReturnTypeRule(
        "string",
        (
            _rx(r"returns?\s+(?:a\s+)?String"),
            _rx(r"String\s+is\s+returned"),
            _rx(r"as\s+(?:a\s+)?String"),
        ),
        _constant("String"),
    ),
    ReturnTypeRule(
        "integer",
        (
            _rx(r"returns?\s+(?:an?\s+)?Int(?:eger)?"),
            _rx(r"Integer\s+is\s+returned"),
            _rx(r"returns?\s+(?:the\s+)?number"),
        ),
        _constant("Integer"),
    ),
    ReturnTypeRule(
        "array",
        (_rx(r"(?:returns?\s+(?:an?\s+)?)?((?:Array of )+)([A-Z]\w+)"),),
        _array,
    ),
    ReturnTypeRule(
        "object is returned",
        (_rx(r"(?:an?|the)\s+([A-Z]\w+)\s+object\s+is\s+returned"),),
        _captured,
    ),
    ReturnTypeRule(
        "type is returned",
        (_rx(r"(?:the\s+)?(?:[a-z]+\s+)?([A-Z]\w+)\s+is\s+returned"),),
        _captured,
    ),
    ReturnTypeRule(
        "returns on success",
        (_rx(r"returns?\s+(?:an?\s+)?([A-Z]\w+)\s+on\s+success"),),
        _on_success,
    ),
    ReturnTypeRule(
        "as type",
        (_rx(r"as\s+(?:an?\s+)?([A-Z]\w+)(?:\s+object)?"),),
        _captured,
    ),
    ReturnTypeRule(
        "returns object",
        (_rx(r"returns?\s+(?:an?\s+)?([A-Z]\w+)\s+object"),),
        _captured,
    ),
    ReturnTypeRule(
        "type object",
        (_rx(r"([A-Z]\w+)\s+object"),),
        _captured,
    ),
    ReturnTypeRule(
        "returns type of",
        (_rx(r"returns?\s+(?:the\s+)?([A-Z]\w+)\s+of"),),
        _captured,
    ),
    ReturnTypeRule(
        "returns type",
        (_rx(r"returns?\s+(?:the\s+)?(?:[a-z]+\s+)?([A-Z]\w+)(?:\s|\.|,|$)"),),
        _captured_uppercase,
    ),
)


def extract_return_type(
    description: str, rules: tuple[ReturnTypeRule, ...] = RETURN_TYPE_RULES
) -> str:
    """Return the raw type string a method returns, e.g. ``"Array of Update"``."""
    for rule in rules:
        for pattern in rule.patterns:
            match = pattern.search(description)
            if match is None:
                continue
            type_name = rule.resolve(match)
            if type_name is not None:
                return type_name
    raise ReturnTypeExtractionError(description)
