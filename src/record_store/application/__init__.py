"""Application layer for the record store.

The application layer owns the catalog (manager -> databases -> tables)
and runs every public operation against it.

Exports:
    - DatabaseManager: Main entry point; implements the RecordStore port
    - Database: Collection routing for one database
    - Table: Schema-checked record storage for one collection
"""

from record_store.application.database import Database, file_path_for
from record_store.application.manager import DatabaseManager
from record_store.application.table import Table

__all__ = [
    "DatabaseManager",
    "Database",
    "Table",
    "file_path_for",
]
