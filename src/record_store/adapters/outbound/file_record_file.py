"""File-based Record File implementation.

This adapter implements the RecordFile protocol on a plain UTF-8 text file,
one record per line.

File Format:
    - No header
    - One line per record, terminated by "\\n"

The file is created on the first write, not on construction. Appends open
the file for each call inside a ``with`` block, so no handle outlives an
operation. Full replacement writes a temporary sibling and renames it over
the existing file, which is atomic on POSIX filesystems.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterator, Sequence

from record_store.ports.outbound import SyncMode


class FileRecordFile:
    """File-backed implementation of the RecordFile protocol.

    Attributes:
        path: Path to the backing file.
        sync_mode: "fsync" to force each write to stable storage.
    """

    def __init__(
        self,
        path: str | Path,
        sync_mode: SyncMode = "fsync",
        create: bool = True,
    ) -> None:
        """Initialize the record file.

        Args:
            path: Path to the backing file.
            sync_mode: Whether appends and replacements are fsynced.
            create: If True, a missing file (and its parent directories)
                is created by the first write. If False, the file must exist.

        Raises:
            FileNotFoundError: If file doesn't exist and create=False.
        """
        self._path = Path(path)
        self._sync_mode = sync_mode
        self._closed = False

        if not create and not self._path.exists():
            raise FileNotFoundError(f"Record file not found: {self._path}")

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def append(self, line: str) -> None:
        """Append one line to the file.

        Raises:
            IOError: If the record file is closed or the write fails.
        """
        self._check_open()
        self._path.parent.mkdir(parents=True, exist_ok=True)

        with open(self._path, "a", encoding="utf-8", newline="\n") as f:
            f.write(line + "\n")
            self._sync(f)

    def read_lines(self) -> Iterator[str]:
        """Yield stored lines in file order.

        Blank lines are skipped. A file not yet written yields nothing.
        """
        self._check_open()
        if not self._path.exists():
            return

        with open(self._path, "r", encoding="utf-8", newline="\n") as f:
            for line in f:
                line = line.rstrip("\n")
                if line:
                    yield line

    def replace_all(self, lines: Sequence[str]) -> None:
        """Atomically replace the file content."""
        self._check_open()
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                for line in lines:
                    f.write(line + "\n")
                self._sync(f)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def close(self) -> None:
        """Mark the record file closed. No handle is held between calls."""
        self._closed = True

    def _check_open(self) -> None:
        if self._closed:
            raise IOError(f"Record file is closed: {self._path}")

    def _sync(self, f) -> None:
        f.flush()
        if self._sync_mode == "fsync":
            os.fsync(f.fileno())

    def __enter__(self) -> FileRecordFile:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
