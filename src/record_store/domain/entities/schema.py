"""Table schema: ordered, typed fields with one identity field.

A schema is fixed for the lifetime of its table. Field order is the column
order of every stored line, and the identity field's position decides
which value of a record is its key.

Example:
    >>> schema = Schema.from_mapping(
    ...     {"id": "string", "age": "integer", "active": "boolean"},
    ...     identity_field="id",
    ... )
    >>> schema.field_names
    ('id', 'age', 'active')
    >>> schema.identity_index
    0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from record_store.domain.exceptions import SchemaError
from record_store.domain.value_objects import FieldType


@dataclass(frozen=True, slots=True)
class SchemaField:
    """A named, typed column."""

    name: str
    type: FieldType


@dataclass(frozen=True)
class Schema:
    """Ordered field declaration plus the designated identity field.

    Construction does not validate; call validate_schema() (the table does
    this exactly once, before accepting any record).
    """

    fields: tuple[SchemaField, ...]
    identity_field: str

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str, FieldType | str]],
        identity_field: str,
    ) -> Schema:
        """Build a schema from ``(name, type)`` pairs in column order.

        Raises:
            SchemaError: If a type tag names no known type.
        """
        fields = []
        for name, tag in pairs:
            try:
                field_type = FieldType.parse(tag)
            except ValueError:
                raise SchemaError(
                    "unknown field type", f"field {name!r} has unknown type {tag!r}"
                ) from None
            fields.append(SchemaField(name=name, type=field_type))
        return cls(fields=tuple(fields), identity_field=identity_field)

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, FieldType | str],
        identity_field: str,
    ) -> Schema:
        """Build a schema from an ordered name -> type mapping."""
        return cls.from_pairs(mapping.items(), identity_field)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    @property
    def identity_index(self) -> int:
        """Position of the identity field in every record.

        Raises:
            SchemaError: If the identity field is not declared.
        """
        for index, schema_field in enumerate(self.fields):
            if schema_field.name == self.identity_field:
                return index
        raise SchemaError("identity field missing")

    def to_dict(self) -> dict[str, str]:
        """Name -> type tag, in column order."""
        return {f.name: f.type.value for f in self.fields}


def validate_schema(schema: Schema) -> None:
    """Check the structural rules every table schema must satisfy.

    Rules, in order: more than one field; identity field declared; no
    repeated field name; every field name purely alphabetic.

    Raises:
        SchemaError: With reason "too few fields", "identity field missing",
            "duplicate field name" or "invalid field name".
    """
    if len(schema.fields) <= 1:
        raise SchemaError("too few fields", f"schema needs at least 2 fields, got {len(schema.fields)}")

    names = schema.field_names
    if schema.identity_field not in names:
        raise SchemaError(
            "identity field missing",
            f"identity field {schema.identity_field!r} is not in the schema",
        )

    if len(set(names)) != len(names):
        raise SchemaError("duplicate field name")

    for name in names:
        # str.isalpha() is False for the empty string
        if not name.isalpha():
            raise SchemaError("invalid field name", f"field name {name!r} must only contain letters")
