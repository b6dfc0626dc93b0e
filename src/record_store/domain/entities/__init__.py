"""Domain entities for the record store.

Exports:
    Schema:
        - SchemaField: A named, typed column
        - Schema: Ordered fields plus the identity field
        - validate_schema: Structural schema rules

    Record:
        - Record: Type alias for a list of text values
        - RecordCodec: Line serialization of records
        - FIELD_DELIMITER, RECORD_DELIMITERS: Line format characters
"""

from record_store.domain.entities.record import (
    FIELD_DELIMITER,
    RECORD_DELIMITERS,
    Record,
    RecordCodec,
)
from record_store.domain.entities.schema import Schema, SchemaField, validate_schema

__all__ = [
    # Schema
    "Schema",
    "SchemaField",
    "validate_schema",
    # Record
    "Record",
    "RecordCodec",
    "FIELD_DELIMITER",
    "RECORD_DELIMITERS",
]
