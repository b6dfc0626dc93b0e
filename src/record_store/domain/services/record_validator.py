"""Record validation against a table schema.

Checks run in a fixed order because later checks index into the schema by
position and so rely on the shape check having passed:

1. shape mismatch      - value count differs from field count
2. empty identity      - identity value is ""
3. duplicate identity  - identity value already stored (insert mode)
4. type mismatch       - INTEGER/BOOLEAN value is not a literal of its type
5. forbidden content   - value contains <script> or </script> (when enabled)
6. empty field         - any value is ""
7. delimiter conflict  - value contains ";" or a line break

On success in insert mode the identity value is added to the caller's seen
set. The table owns that set and rolls the registration back if the
subsequent append fails.
"""

from __future__ import annotations

from typing import MutableSet, Sequence

from record_store.domain.entities import RecordCodec, Schema
from record_store.domain.exceptions import DataError

SCRIPT_TAGS = ("<script>", "</script>")


class RecordValidator:
    """Validates candidate records for one schema."""

    def __init__(
        self,
        schema: Schema,
        codec: RecordCodec | None = None,
        sanitize_scripts: bool = True,
    ) -> None:
        """Initialize the validator.

        Args:
            schema: A schema that already passed validate_schema().
            codec: Codec whose delimiter values must not contain.
            sanitize_scripts: Reject values containing script tags.
        """
        self._schema = schema
        self._codec = codec or RecordCodec()
        self._sanitize_scripts = sanitize_scripts
        self._identity_index = schema.identity_index

    @property
    def sanitize_scripts(self) -> bool:
        return self._sanitize_scripts

    def identity_of(self, candidate: Sequence[str]) -> str:
        """Return the identity value of a correctly shaped record."""
        return candidate[self._identity_index]

    def validate(self, candidate: Sequence[str], seen: MutableSet[str]) -> str:
        """Validate a record for insertion and register its identity.

        Args:
            candidate: Values in schema field order.
            seen: Identity values already stored; updated on success.

        Returns:
            The registered identity value.

        Raises:
            DataError: On the first failed rule.
        """
        self._check_shape(candidate)
        identity = self.identity_of(candidate)
        if identity == "":
            raise DataError("empty identity", self._schema.identity_field)
        if identity in seen:
            raise DataError("duplicate identity", self._schema.identity_field)

        self._check_values(candidate)

        seen.add(identity)
        return identity

    def validate_replacement(self, identity: str, candidate: Sequence[str]) -> None:
        """Validate a record that replaces the stored record ``identity``.

        Same rules as validate() except the duplicate check: the candidate
        must carry the identity it replaces. Nothing is registered.

        Raises:
            DataError: On the first failed rule, or "identity mismatch".
        """
        self._check_shape(candidate)
        new_identity = self.identity_of(candidate)
        if new_identity == "":
            raise DataError("empty identity", self._schema.identity_field)
        if new_identity != identity:
            raise DataError("identity mismatch", self._schema.identity_field)

        self._check_values(candidate)

    def _check_shape(self, candidate: Sequence[str]) -> None:
        if len(candidate) != len(self._schema):
            raise DataError("shape mismatch")

    def _check_values(self, candidate: Sequence[str]) -> None:
        fields = self._schema.fields

        for schema_field, value in zip(fields, candidate):
            if not schema_field.type.accepts(value):
                raise DataError("type mismatch", schema_field.name)

        if self._sanitize_scripts:
            for schema_field, value in zip(fields, candidate):
                if any(tag in value for tag in SCRIPT_TAGS):
                    raise DataError("forbidden content", schema_field.name)

        for schema_field, value in zip(fields, candidate):
            if value == "":
                raise DataError("empty field", schema_field.name)

        for schema_field, value in zip(fields, candidate):
            if self._codec.conflicts(value):
                raise DataError("delimiter conflict", schema_field.name)
