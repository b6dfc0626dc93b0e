"""Error taxonomy of the record store.

Every error carries a short ``reason`` string that names the failed rule,
e.g. ``DataError("duplicate identity")``. Callers match on ``reason``;
the longer message is for humans.
"""

from __future__ import annotations


class RecordStoreError(Exception):
    """Base class for all record store errors."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


class SchemaError(RecordStoreError):
    """Raised when a schema is malformed. Fatal to table construction."""

    pass


class DataError(RecordStoreError):
    """Raised when a candidate record is rejected.

    Attributes:
        reason: The failed rule ("shape mismatch", "type mismatch", ...)
        field: Name of the offending field, when a single field is at fault
    """

    def __init__(self, reason: str, field: str | None = None) -> None:
        message = reason if field is None else f"{reason}: field {field!r}"
        super().__init__(reason, message)
        self.field = field


class NotFoundError(RecordStoreError):
    """Raised when a database, collection or record name is unknown."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(kind, f"{kind} {name!r} does not exist")
        self.kind = kind
        self.name = name


class ConflictError(RecordStoreError):
    """Raised when creating a database or collection whose name is taken."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} exists", f"{kind} {name!r} already exists")
        self.kind = kind
        self.name = name


class InvalidNameError(RecordStoreError):
    """Raised when a database or collection name is not path-safe."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(
            "invalid name",
            f"{kind} name {name!r} must match [A-Za-z0-9_-]+",
        )
        self.kind = kind
        self.name = name


class StorageError(RecordStoreError):
    """Raised when the backing record file cannot be read or written."""

    pass
