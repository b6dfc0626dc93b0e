"""Table - a schema-checked collection of records over one record file.

The table is where every data-integrity rule is enforced:

- The schema is validated once, in the constructor, before any record.
- Every write runs the record validator and appends one encoded line.
- The identity key set always equals the identity values stored in the
  file. On construction over an existing file the set is rebuilt from the
  stored lines; a failed append rolls back the key registered by
  validation.

Validate-then-append (and validate-then-rewrite for updates) runs under a
per-table lock, so concurrent writers within one process cannot register
the same identity twice or interleave the key set and the file.

Identity values are chosen by callers; the table never generates them.
"""

from __future__ import annotations

import threading
import time
from typing import Iterator, Sequence

from record_store.domain.entities import Record, RecordCodec, Schema, validate_schema
from record_store.domain.exceptions import DataError, NotFoundError, StorageError
from record_store.domain.services import RecordValidator
from record_store.infrastructure.logging import get_logger
from record_store.infrastructure.metrics import MetricsRegistry, get_metrics
from record_store.ports.outbound import RecordFile


class Table:
    """A named collection enforcing one schema.

    Attributes:
        name: Collection name.
        schema: The immutable schema.
    """

    def __init__(
        self,
        name: str,
        schema: Schema,
        record_file: RecordFile,
        sanitize_scripts: bool = True,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the table and load existing identity keys.

        Args:
            name: Collection name.
            schema: Table schema; validated here.
            record_file: Backing line store, owned by the table from now on.
            sanitize_scripts: Reject values containing script tags.
            metrics: Metrics registry (global registry if None).

        Raises:
            SchemaError: If the schema is malformed.
            StorageError: If existing records cannot be loaded.
        """
        validate_schema(schema)

        self._name = name
        self._schema = schema
        self._file = record_file
        self._codec = RecordCodec()
        self._validator = RecordValidator(schema, self._codec, sanitize_scripts)
        self._identity_index = schema.identity_index
        self._metrics = metrics or get_metrics()
        self._lock = threading.Lock()
        self._log = get_logger(__name__, collection=name)

        self._keys: set[str] = set()
        self._load_keys()

    @property
    def name(self) -> str:
        return self._name

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def location(self) -> str:
        return self._file.location

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, identity: object) -> bool:
        return identity in self._keys

    def _load_keys(self) -> None:
        """Rebuild the identity key set from the stored lines."""
        try:
            for line_no, record in enumerate(self._scan(), start=1):
                if len(record) != len(self._schema):
                    raise StorageError(
                        "corrupt store",
                        f"{self._file.location}:{line_no} has {len(record)} fields, "
                        f"schema has {len(self._schema)}",
                    )
                identity = record[self._identity_index]
                if not identity or identity in self._keys:
                    raise StorageError(
                        "corrupt store",
                        f"{self._file.location}:{line_no} has "
                        f"{'an empty' if not identity else 'a duplicate'} identity",
                    )
                self._keys.add(identity)
        except OSError as e:
            raise StorageError("read failed", f"cannot load {self._file.location}: {e}") from e

        if self._keys:
            self._log.info("table_loaded", records=len(self._keys))

    def write(self, candidate: Sequence[str]) -> str:
        """Validate a record and append it to the store.

        Args:
            candidate: Values in schema field order.

        Returns:
            The record's identity value.

        Raises:
            DataError: If the record is rejected; nothing is stored.
            StorageError: If the append fails; the identity stays free.
        """
        values = list(candidate)
        start = time.perf_counter()

        with self._lock:
            try:
                identity = self._validator.validate(values, self._keys)
            except DataError as e:
                self._metrics.records_written_total.labels(status="rejected").inc()
                self._metrics.records_rejected_total.labels(reason=e.reason).inc()
                self._log.info("record_rejected", reason=e.reason, field=e.field)
                raise

            try:
                self._file.append(self._codec.encode(values))
            except OSError as e:
                self._keys.discard(identity)
                self._metrics.records_written_total.labels(status="error").inc()
                self._log.error("record_append_failed", identity=identity, error=str(e))
                raise StorageError("write failed", f"cannot append to {self._file.location}: {e}") from e

        self._metrics.records_written_total.labels(status="success").inc()
        self._metrics.write_latency_seconds.observe(time.perf_counter() - start)
        self._log.debug("record_written", identity=identity)
        return identity

    def read(self, identity: str) -> Record:
        """Return the record with the given identity value, or ``[]``.

        Unknown identities are answered from the key set without touching
        the store. Known ones are found by a linear scan.
        """
        if identity not in self._keys:
            self._metrics.record_reads_total.labels(result="miss").inc()
            return []

        with self._lock:
            try:
                for record in self._scan():
                    if record[self._identity_index] == identity:
                        self._metrics.record_reads_total.labels(result="hit").inc()
                        return record
            except OSError as e:
                raise StorageError("read failed", f"cannot read {self._file.location}: {e}") from e

        # Key set and store disagree; report as not found
        self._log.warning("identity_missing_from_store", identity=identity)
        self._metrics.record_reads_total.labels(result="miss").inc()
        return []

    def update(self, identity: str, candidate: Sequence[str]) -> Record:
        """Replace the stored record ``identity`` with ``candidate``.

        The replacement must keep the same identity value and pass every
        other record rule. The store is rewritten atomically.

        Raises:
            NotFoundError: If no record has that identity.
            DataError: If the replacement is rejected.
            StorageError: If the store cannot be rewritten.
        """
        values = list(candidate)

        with self._lock:
            if identity not in self._keys:
                raise NotFoundError("record", identity)

            try:
                self._validator.validate_replacement(identity, values)
            except DataError as e:
                self._metrics.records_rejected_total.labels(reason=e.reason).inc()
                self._log.info("record_update_rejected", identity=identity, reason=e.reason)
                raise

            new_line = self._codec.encode(values)
            try:
                lines = [
                    new_line if self._codec.decode(line)[self._identity_index] == identity else line
                    for line in self._file.read_lines()
                ]
                self._file.replace_all(lines)
            except OSError as e:
                raise StorageError("write failed", f"cannot rewrite {self._file.location}: {e}") from e

        self._log.debug("record_updated", identity=identity)
        return values

    def read_all(self) -> list[Record]:
        """Return every stored record in insertion order."""
        with self._lock:
            try:
                return list(self._scan())
            except OSError as e:
                raise StorageError("read failed", f"cannot read {self._file.location}: {e}") from e

    def close(self) -> None:
        """Release the record file."""
        with self._lock:
            self._file.close()

    def _scan(self) -> Iterator[Record]:
        for line in self._file.read_lines():
            yield self._codec.decode(line)
