"""Record File port for line-oriented table storage.

This outbound port defines the contract for the persisted store behind a
single table: an ordered sequence of text lines, one per record.

The record file is responsible for:
- Appending one line per accepted record
- Replaying all lines in insertion order
- Atomically replacing the whole content (used by record updates)

It knows nothing about schemas or the line format; the table encodes and
decodes lines through the record codec.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Iterator, Literal, Protocol, Sequence

SyncMode = Literal["fsync", "none"]


class RecordFile(Protocol):
    """Protocol for a table's append-only line store.

    Thread Safety:
        Implementations need not be thread-safe. The owning table
        serializes every call under its own lock.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the store, for logs and stats."""
        ...

    @abstractmethod
    def append(self, line: str) -> None:
        """Append one line.

        The line must not contain a line break. When this returns, the
        line is visible to subsequent read_lines() calls.

        Raises:
            OSError: If the write fails.
        """
        ...

    @abstractmethod
    def read_lines(self) -> Iterator[str]:
        """Yield stored lines in insertion order, without line breaks.

        Raises:
            OSError: If the store cannot be read.
        """
        ...

    @abstractmethod
    def replace_all(self, lines: Sequence[str]) -> None:
        """Atomically replace the whole content with ``lines``.

        Either every line is replaced or the previous content stays.

        Raises:
            OSError: If the replacement fails.
        """
        ...

    @abstractmethod
    def close(self) -> None:
        """Release resources. Further calls are undefined."""
        ...
