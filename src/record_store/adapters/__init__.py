"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (REST)
- Outbound adapters: Implement external dependencies (record files)

The REST adapter is imported from ``record_store.adapters.inbound``.
"""

from record_store.adapters.outbound import FileRecordFile, MemoryRecordFile

__all__ = [
    # Outbound adapters
    "FileRecordFile",
    "MemoryRecordFile",
]
