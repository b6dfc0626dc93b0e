"""Outbound adapters - implementations of outbound ports.

These adapters implement the RecordFile port on a text file or in memory.
"""

from record_store.adapters.outbound.file_record_file import FileRecordFile
from record_store.adapters.outbound.memory_record_file import MemoryRecordFile

__all__ = [
    "FileRecordFile",
    "MemoryRecordFile",
]
