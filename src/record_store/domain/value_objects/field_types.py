"""Primitive field types and their literal parsers.

Every stored value is text. A field's type only decides which text is
acceptable for that column; nothing is converted on write or read.
"""

from __future__ import annotations

import re
from enum import Enum

# Bounds of a 32-bit signed integer column
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
_INT_MAX_DIGITS = len(str(INT_MAX))

_INTEGER_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")
_BOOLEAN_LITERALS = frozenset({"true", "false"})


class FieldType(Enum):
    """Type tag of a schema field."""

    INTEGER = "integer"
    STRING = "string"
    BOOLEAN = "boolean"

    @classmethod
    def parse(cls, tag: FieldType | str) -> FieldType:
        """Resolve a type tag given as an enum member or a name.

        Names are matched case-insensitively against the enum values.

        Raises:
            ValueError: If the tag names no known type.
        """
        if isinstance(tag, FieldType):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown field type: {tag!r}") from None

    def accepts(self, value: str) -> bool:
        """Check whether a text value is a literal of this type."""
        if self is FieldType.INTEGER:
            return is_integer_literal(value)
        if self is FieldType.BOOLEAN:
            return is_boolean_literal(value)
        return True


def is_integer_literal(value: str) -> bool:
    """True for an optionally signed decimal that fits in 32 bits.

    Surrounding whitespace is tolerated; digit-group underscores are not.
    """
    if not _INTEGER_PATTERN.match(value):
        return False
    # int() raises past the interpreter digit limit; leading zeros count toward it
    text = value.strip()
    digits = text.lstrip("+-").lstrip("0") or "0"
    if len(digits) > _INT_MAX_DIGITS:
        return False
    number = -int(digits) if text.startswith("-") else int(digits)
    return INT_MIN <= number <= INT_MAX


def is_boolean_literal(value: str) -> bool:
    """True for ``true`` or ``false`` in any letter case."""
    return value.strip().lower() in _BOOLEAN_LITERALS
