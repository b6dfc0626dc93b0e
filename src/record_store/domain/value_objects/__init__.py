"""Value objects for the record store domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Field Types:
        - FieldType: INTEGER, STRING, BOOLEAN type tags
        - is_integer_literal, is_boolean_literal: literal checks
        - INT_MIN, INT_MAX: integer column bounds

    Names:
        - is_valid_name: path-safe database/collection name check
"""

from record_store.domain.value_objects.field_types import (
    INT_MAX,
    INT_MIN,
    FieldType,
    is_boolean_literal,
    is_integer_literal,
)
from record_store.domain.value_objects.identifiers import is_valid_name

__all__ = [
    # Field types
    "FieldType",
    "INT_MIN",
    "INT_MAX",
    "is_integer_literal",
    "is_boolean_literal",
    # Names
    "is_valid_name",
]
