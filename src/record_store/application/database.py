"""Database - named collections routed to their tables."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Callable, Sequence

from record_store.application.table import Table
from record_store.domain.entities import Record, Schema
from record_store.domain.exceptions import ConflictError, InvalidNameError, NotFoundError
from record_store.domain.value_objects import is_valid_name
from record_store.infrastructure.logging import get_logger
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics
from record_store.ports.outbound import RecordFile

RecordFileFactory = Callable[[str, str], RecordFile]
"""Builds the record file for a (database, collection) pair."""


class Database:
    """Owns the tables of one database, addressed by collection name."""

    def __init__(
        self,
        name: str,
        record_file_factory: RecordFileFactory,
        sanitize_scripts: bool = True,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize an empty database.

        Args:
            name: Database name.
            record_file_factory: Opens the backing store of a new collection.
            sanitize_scripts: Passed to every table.
            metrics: Metrics registry (global registry if None).
        """
        self._name = name
        self._record_file_factory = record_file_factory
        self._sanitize_scripts = sanitize_scripts
        self._metrics = metrics or get_metrics()
        self._tables: dict[str, Table] = {}
        self._lock = threading.Lock()
        self._log = get_logger(__name__, database=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def collections(self) -> set[str]:
        return set(self._tables)

    def create_collection(self, name: str, schema: Schema) -> Table:
        """Create a table for a new collection name.

        Raises:
            InvalidNameError: If the name is not path-safe.
            ConflictError: If the collection already exists.
            SchemaError: If the schema is malformed.
        """
        if not is_valid_name(name):
            raise InvalidNameError("collection", name)

        with self._lock:
            if name in self._tables:
                raise ConflictError("collection", name)

            table = Table(
                name,
                schema,
                self._record_file_factory(self._name, name),
                sanitize_scripts=self._sanitize_scripts,
                metrics=self._metrics,
            )
            self._tables[name] = table

        self._metrics.collections.inc()
        self._log.info(
            "collection_created",
            collection=name,
            fields=list(schema.field_names),
            identity_field=schema.identity_field,
            location=table.location,
        )
        return table

    def get_table(self, collection: str) -> Table:
        """Return the table of a collection.

        Raises:
            NotFoundError: If the collection does not exist.
        """
        table = self._tables.get(collection)
        if table is None:
            raise NotFoundError("collection", collection)
        return table

    def get_data(self, collection: str, identity: str) -> Record:
        return self.get_table(collection).read(identity)

    def add_data(self, collection: str, record: Sequence[str]) -> str:
        return self.get_table(collection).write(record)

    def update_data(self, collection: str, identity: str, record: Sequence[str]) -> Record:
        return self.get_table(collection).update(identity, record)

    def get_all(self, collection: str) -> list[Record]:
        return self.get_table(collection).read_all()

    def record_counts(self) -> dict[str, int]:
        """Collection name -> number of stored records."""
        return {name: len(table) for name, table in self._tables.items()}

    def close(self) -> None:
        """Close every table."""
        with self._lock:
            for table in self._tables.values():
                table.close()


def file_path_for(data_dir: Path, database: str, collection: str) -> Path:
    """Location of a collection's backing file under ``data_dir``."""
    return data_dir / database / f"{collection}.csv"
