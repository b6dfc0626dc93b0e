"""Record Store port - the public operation surface.

This inbound port defines what clients (the REST API, embedding code) can
do with a record store: manage databases and collections, and write, read,
update and list records.

Every operation names its database first. Unknown database or collection
names fail with NotFoundError before anything else happens.

Example:
    store.create_database("shop")
    store.create_collection("shop", "users", {"id": "string", "age": "integer"}, "id")
    store.write_record("shop", "users", ["u1", "30"])      # -> "u1"
    store.read_record("shop", "users", "u1")               # -> ["u1", "30"]
    store.read_record("shop", "users", "nobody")           # -> []
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence

from record_store.domain.entities import Record
from record_store.domain.value_objects import FieldType


@dataclass
class RecordStoreStats:
    """Statistics for record store monitoring."""

    databases: int
    collections: int
    records: int
    per_database: dict[str, dict[str, int]] = field(default_factory=dict)


class RecordStore(Protocol):
    """Protocol for the multi-database record store.

    Thread Safety:
        All methods are safe to call from multiple threads of one process.
        A table's validate-and-append step is atomic.
    """

    @abstractmethod
    def create_database(self, name: str) -> None:
        """Create an empty database.

        Raises:
            ConflictError: If the name is taken.
            InvalidNameError: If the name is not path-safe.
        """
        ...

    @abstractmethod
    def create_collection(
        self,
        database: str,
        collection: str,
        schema: Mapping[str, FieldType | str],
        identity_field: str,
    ) -> None:
        """Create a collection with a fixed schema.

        Args:
            database: Owning database.
            collection: New collection name.
            schema: Ordered field name -> type tag.
            identity_field: Field whose value identifies a record.

        Raises:
            NotFoundError: If the database does not exist.
            ConflictError: If the collection name is taken.
            SchemaError: If the schema is malformed.
        """
        ...

    @abstractmethod
    def write_record(self, database: str, collection: str, record: Sequence[str]) -> str:
        """Validate and store a record.

        Returns:
            The record's identity value (chosen by the caller).

        Raises:
            NotFoundError: Unknown database or collection.
            DataError: The record was rejected; nothing was stored.
            StorageError: The backing file could not be written.
        """
        ...

    @abstractmethod
    def read_record(self, database: str, collection: str, identity: str) -> Record:
        """Look up a record by identity value.

        Returns:
            The stored values, or ``[]`` if no record has that identity.
        """
        ...

    @abstractmethod
    def update_record(
        self,
        database: str,
        collection: str,
        identity: str,
        record: Sequence[str],
    ) -> Record:
        """Replace the record with the given identity.

        Returns:
            The stored replacement.

        Raises:
            NotFoundError: Unknown database, collection or record.
            DataError: The replacement was rejected.
        """
        ...

    @abstractmethod
    def list_databases(self) -> set[str]:
        """Return the names of all databases."""
        ...

    @abstractmethod
    def list_collections(self, database: str) -> set[str]:
        """Return the collection names of a database."""
        ...

    @abstractmethod
    def list_all_records(self, database: str, collection: str) -> list[Record]:
        """Return every stored record of a collection in insertion order."""
        ...

    @abstractmethod
    def get_stats(self) -> RecordStoreStats:
        """Return record store statistics."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release every table's record file."""
        ...
