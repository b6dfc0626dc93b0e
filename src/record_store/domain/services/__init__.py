"""Domain services for the record store.

Exports:
    - RecordValidator: Ordered record checks against a schema
    - SCRIPT_TAGS: Substrings rejected when sanitization is enabled
"""

from record_store.domain.services.record_validator import SCRIPT_TAGS, RecordValidator

__all__ = [
    "RecordValidator",
    "SCRIPT_TAGS",
]
