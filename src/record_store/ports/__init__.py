"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: APIs offered to clients (RecordStore)
- Outbound ports: Dependencies on external systems (RecordFile)

Adapters implement these ports with concrete functionality.
"""

from record_store.ports.inbound import (
    ConflictError,
    DataError,
    InvalidNameError,
    NotFoundError,
    RecordStore,
    RecordStoreError,
    RecordStoreStats,
    SchemaError,
    StorageError,
)
from record_store.ports.outbound import RecordFile, SyncMode

__all__ = [
    # Inbound ports
    "RecordStore",
    "RecordStoreStats",
    "RecordStoreError",
    "SchemaError",
    "DataError",
    "NotFoundError",
    "ConflictError",
    "InvalidNameError",
    "StorageError",
    # Outbound ports
    "RecordFile",
    "SyncMode",
]
