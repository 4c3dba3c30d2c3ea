"""Configuration utilities for modeldef.

This module centralizes the column ignore list used by the completeness
sweep of the column check. The list is a plain configuration value: callers
may pass their own pattern, set ``MODELDEF_IGNORED_COLUMNS``, or configure the
``modeldef_ignored_columns`` pytest ini option.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

IGNORED_COLUMNS_ENV = "MODELDEF_IGNORED_COLUMNS"  # pragma: no mutate

#: Bookkeeping columns that never need a model test.
DEFAULT_IGNORED_COLUMNS: tuple[str, ...] = (
    "id",
    "created_at",
    "created_on",
    "updated_at",
    "updated_on",
    "created_by",
    "updated_by",
)


class EmptyIgnoreListError(ValueError):
    """Raised when an ignore list contains no usable column names."""


def split_names(value: str | Iterable[str]) -> list[str]:
    """Split comma/space separated names into a flat list.

    Args:
        value: A single string (e.g. from an env var) or a sequence of strings
            (e.g. an ini ``linelist``), each of which may hold several names.

    Returns:
        list[str]: Non-empty names in input order.
    """
    chunks = [value] if isinstance(value, str) else list(value)
    return [name for chunk in chunks for name in re.split(r"[,\s]+", chunk) if name]


def build_ignore_pattern(names: Iterable[str]) -> re.Pattern[str]:
    """Compile a case-insensitive, exact-match pattern for ``names``.

    Args:
        names: Column names to ignore.

    Returns:
        A compiled regex matching any of ``names`` in full.

    Raises:
        EmptyIgnoreListError: If ``names`` is empty.
    """
    names = list(names)
    if not names:
        raise EmptyIgnoreListError("the ignored column list is empty")
    alternatives = "|".join(re.escape(name) for name in names)
    return re.compile(f"^(?:{alternatives})$", re.IGNORECASE)


#: Compiled form of `DEFAULT_IGNORED_COLUMNS`.
DEFAULT_IGNORE_PATTERN = build_ignore_pattern(DEFAULT_IGNORED_COLUMNS)


def get_ignore_pattern() -> re.Pattern[str]:
    """Get the ignore pattern from the environment.

    Returns:
        The pattern built from ``MODELDEF_IGNORED_COLUMNS`` when it names at
        least one column, otherwise `DEFAULT_IGNORE_PATTERN`.
    """
    if names := split_names(os.environ.get(IGNORED_COLUMNS_ENV, "")):
        return build_ignore_pattern(names)
    return DEFAULT_IGNORE_PATTERN
