"""Outbound ports - contracts for external dependencies.

Outbound ports define what the record store needs from the outside world
(persistent line storage) without fixing an implementation.
"""

from record_store.ports.outbound.record_file import RecordFile, SyncMode

__all__ = [
    "RecordFile",
    "SyncMode",
]
