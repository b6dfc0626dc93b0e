"""Catalog name rules.

Database and collection names double as path components of the backing
files, so they are restricted to a filesystem-safe alphabet.
"""

from __future__ import annotations

import re

_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def is_valid_name(name: str) -> bool:
    """Check whether a database or collection name is usable as a path component.

    Example:
        >>> is_valid_name("users_2024")
        True
        >>> is_valid_name("../etc")
        False
    """
    return _NAME_PATTERN.fullmatch(name) is not None
