"""Record codec: one record per line, fields joined by a delimiter.

Line format:
    value_1;value_2;...;value_n

There is no header row and no escaping. A value therefore may not contain
the field delimiter or a line break; the record validator rejects such
values before they reach the codec.

Example:
    >>> codec = RecordCodec()
    >>> codec.encode(["u1", "30", "true"])
    'u1;30;true'
    >>> codec.decode("u1;30;true")
    ['u1', '30', 'true']
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

FIELD_DELIMITER = ";"
RECORD_DELIMITERS = ("\n", "\r")

Record = list[str]
"""A schema-aligned sequence of text values. ``[]`` means "not found"."""


@dataclass(frozen=True)
class RecordCodec:
    """Joins and splits records on a single delimiter character."""

    delimiter: str = FIELD_DELIMITER

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1 or self.delimiter in RECORD_DELIMITERS:
            raise ValueError(f"delimiter must be one non-newline character, got {self.delimiter!r}")

    def conflicts(self, value: str) -> bool:
        """True if a value cannot be stored without breaking the line format."""
        return self.delimiter in value or any(d in value for d in RECORD_DELIMITERS)

    def encode(self, values: Sequence[str]) -> str:
        """Serialize a record to a line (without the trailing newline).

        Raises:
            ValueError: If any value contains the delimiter or a line break.
        """
        for value in values:
            if self.conflicts(value):
                raise ValueError(f"value {value!r} conflicts with the line format")
        return self.delimiter.join(values)

    def decode(self, line: str) -> Record:
        """Parse a line back into its values. A trailing newline is ignored."""
        return line.rstrip("\r\n").split(self.delimiter)
