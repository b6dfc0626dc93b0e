"""In-memory Record File implementation.

Keeps lines in a Python list. Used when ``storage.backend`` is "memory"
and in tests that need to inject write failures.
"""

from __future__ import annotations

from typing import Iterator, Sequence


class MemoryRecordFile:
    """List-backed implementation of the RecordFile protocol."""

    def __init__(self, name: str = "memory", lines: Sequence[str] | None = None) -> None:
        self._name = name
        self._lines: list[str] = list(lines or [])
        self._closed = False

    @property
    def location(self) -> str:
        return f"memory://{self._name}"

    @property
    def lines(self) -> list[str]:
        """Copy of the stored lines."""
        return list(self._lines)

    def append(self, line: str) -> None:
        self._check_open()
        self._lines.append(line)

    def read_lines(self) -> Iterator[str]:
        self._check_open()
        # Iterate over a snapshot so appends during a scan are not observed
        yield from list(self._lines)

    def replace_all(self, lines: Sequence[str]) -> None:
        self._check_open()
        self._lines = list(lines)

    def close(self) -> None:
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise IOError(f"Record file is closed: {self.location}")
