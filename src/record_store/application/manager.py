"""Database Manager - unified entry point for the record store.

This module provides the DatabaseManager class, which owns every database
by name and routes each public operation to the right database and table.

Usage:
    from record_store.application import DatabaseManager

    with DatabaseManager(data_dir="/path/to/data") as store:
        store.create_database("shop")
        store.create_collection(
            "shop", "users",
            {"id": "string", "age": "integer", "active": "boolean"},
            identity_field="id",
        )
        store.write_record("shop", "users", ["u1", "30", "true"])
        store.read_record("shop", "users", "u1")   # ['u1', '30', 'true']
"""

from __future__ import annotations

import tempfile
import threading
from pathlib import Path
from typing import Literal, Mapping, Sequence

from record_store.adapters.outbound import FileRecordFile, MemoryRecordFile
from record_store.application.database import Database, file_path_for
from record_store.domain.entities import Record, Schema
from record_store.domain.exceptions import ConflictError, InvalidNameError, NotFoundError
from record_store.domain.value_objects import FieldType, is_valid_name
from record_store.infrastructure.config import Config
from record_store.infrastructure.logging import get_logger
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics
from record_store.infrastructure.tracing import trace_span
from record_store.ports.inbound import RecordStoreStats
from record_store.ports.outbound import RecordFile, SyncMode

logger = get_logger(__name__)


class DatabaseManager:
    """Owns databases by name; implements the RecordStore port.

    Thread Safety:
        Database creation is serialized; table writes are atomic per
        table. Multiple threads can share one manager.
    """

    def __init__(
        self,
        data_dir: str | Path | None = None,
        backend: Literal["file", "memory"] = "file",
        sync_mode: SyncMode = "fsync",
        sanitize_scripts: bool = True,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize an empty manager.

        Args:
            data_dir: Root directory of record files. Uses a temp dir if
                None and the backend is "file".
            backend: "file" for text files, "memory" for in-process lists.
            sync_mode: Whether file appends are fsynced.
            sanitize_scripts: Reject values containing script tags.
            metrics: Metrics registry (global registry if None).
        """
        if backend == "file":
            if data_dir is None:
                data_dir = tempfile.mkdtemp(prefix="record_store_")
            data_dir = Path(data_dir)
            data_dir.mkdir(parents=True, exist_ok=True)
        self._data_dir = Path(data_dir) if data_dir is not None else None
        self._backend = backend
        self._sync_mode = sync_mode
        self._sanitize_scripts = sanitize_scripts
        self._metrics = metrics or get_metrics()

        self._databases: dict[str, Database] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Config, metrics: MetricsRegistry | None = None) -> DatabaseManager:
        """Build a manager from the application configuration."""
        return cls(
            data_dir=config.storage.data_dir,
            backend=config.storage.backend,
            sync_mode=config.storage.sync_mode,
            sanitize_scripts=config.validation.sanitize_scripts,
            metrics=metrics,
        )

    @property
    def data_dir(self) -> Path | None:
        return self._data_dir

    def _open_record_file(self, database: str, collection: str) -> RecordFile:
        if self._backend == "memory":
            return MemoryRecordFile(f"{database}/{collection}")
        return FileRecordFile(
            file_path_for(self._data_dir, database, collection),
            sync_mode=self._sync_mode,
        )

    def _get_database(self, name: str) -> Database:
        database = self._databases.get(name)
        if database is None:
            raise NotFoundError("database", name)
        return database

    def create_database(self, name: str) -> None:
        """Create an empty database.

        Raises:
            InvalidNameError: If the name is not path-safe.
            ConflictError: If the database already exists.
        """
        if not is_valid_name(name):
            raise InvalidNameError("database", name)

        with trace_span("record_store.create_database", {"database": name}):
            with self._lock:
                if name in self._databases:
                    raise ConflictError("database", name)
                self._databases[name] = Database(
                    name,
                    self._open_record_file,
                    sanitize_scripts=self._sanitize_scripts,
                    metrics=self._metrics,
                )

        self._metrics.databases.inc()
        logger.info("database_created", database=name)

    def create_collection(
        self,
        database: str,
        collection: str,
        schema: Mapping[str, FieldType | str] | Schema,
        identity_field: str | None = None,
    ) -> None:
        """Create a collection with a fixed schema.

        ``schema`` is either a ready Schema or an ordered name -> type
        mapping, in which case ``identity_field`` is required.
        """
        with trace_span(
            "record_store.create_collection",
            {"database": database, "collection": collection},
        ):
            db = self._get_database(database)
            if not isinstance(schema, Schema):
                if identity_field is None:
                    raise TypeError("identity_field is required with a schema mapping")
                schema = Schema.from_mapping(schema, identity_field)
            db.create_collection(collection, schema)

    def write_record(self, database: str, collection: str, record: Sequence[str]) -> str:
        """Validate and store a record; return its identity value."""
        with trace_span(
            "record_store.write_record",
            {"database": database, "collection": collection},
        ):
            return self._get_database(database).add_data(collection, record)

    def read_record(self, database: str, collection: str, identity: str) -> Record:
        """Return the record with the given identity, or ``[]``."""
        with trace_span(
            "record_store.read_record",
            {"database": database, "collection": collection},
        ):
            return self._get_database(database).get_data(collection, identity)

    def update_record(
        self,
        database: str,
        collection: str,
        identity: str,
        record: Sequence[str],
    ) -> Record:
        """Replace the record with the given identity; return the replacement."""
        with trace_span(
            "record_store.update_record",
            {"database": database, "collection": collection},
        ):
            return self._get_database(database).update_data(collection, identity, record)

    def list_databases(self) -> set[str]:
        return set(self._databases)

    def list_collections(self, database: str) -> set[str]:
        return self._get_database(database).collections

    def list_all_records(self, database: str, collection: str) -> list[Record]:
        with trace_span(
            "record_store.list_all_records",
            {"database": database, "collection": collection},
        ):
            return self._get_database(database).get_all(collection)

    def get_stats(self) -> RecordStoreStats:
        """Get record store statistics."""
        per_database = {name: db.record_counts() for name, db in self._databases.items()}
        return RecordStoreStats(
            databases=len(per_database),
            collections=sum(len(counts) for counts in per_database.values()),
            records=sum(sum(counts.values()) for counts in per_database.values()),
            per_database=per_database,
        )

    def close(self) -> None:
        """Close every database."""
        with self._lock:
            for database in self._databases.values():
                database.close()
        logger.info("record_store_closed", databases=len(self._databases))

    def __enter__(self) -> DatabaseManager:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
