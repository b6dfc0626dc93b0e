"""Inbound ports - API contracts for the record store.

Inbound ports define the interfaces that clients use to interact with the
store, together with the errors those interfaces raise.
"""

from record_store.domain.exceptions import (
    ConflictError,
    DataError,
    InvalidNameError,
    NotFoundError,
    RecordStoreError,
    SchemaError,
    StorageError,
)
from record_store.ports.inbound.record_store import RecordStore, RecordStoreStats

__all__ = [
    "RecordStore",
    "RecordStoreStats",
    # Errors
    "RecordStoreError",
    "SchemaError",
    "DataError",
    "NotFoundError",
    "ConflictError",
    "InvalidNameError",
    "StorageError",
]
