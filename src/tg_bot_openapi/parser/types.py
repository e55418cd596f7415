"""Type grammar for the documentation's type column.

Turns strings like ``"Array of Array of PhotoSize"`` into nested
``ArrayType``/``SimpleType`` trees.
"""

import re

from .base import ArrayType, SimpleType, TypeRef
from .errors import EmptyTypeError, InvalidArrayElementError

ARRAY_PREFIX = "Array of "

_ARRAY_PREFIX_RE = re.compile(re.escape(ARRAY_PREFIX), re.IGNORECASE)
_BOOLEAN_LITERALS = {"True", "False"}


def parse_type(raw: str) -> TypeRef:
    """Parse a raw type string into a type tree."""
    normalized = raw.strip()
    if normalized in _BOOLEAN_LITERALS:
        normalized = "Boolean"

    prefixes = list(_ARRAY_PREFIX_RE.finditer(normalized))
    if not prefixes:
        if not normalized:
            raise EmptyTypeError()
        return SimpleType(name=normalized)

    element = normalized[prefixes[-1].end():].strip()
    if not element or not element[0].isupper():
        raise InvalidArrayElementError(element, raw)

    result: TypeRef = SimpleType(name=element)
    for _ in prefixes:
        result = ArrayType(element=result)
    return result
