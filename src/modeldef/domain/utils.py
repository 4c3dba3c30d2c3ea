"""Domain layer utilities."""

from collections.abc import Sized
from typing import Any


def is_blank(value: Any) -> bool:
    """Return True if ``value`` carries no meaningful content.

    Blank values are ``None``, ``False``, strings that are empty once
    whitespace is stripped, and empty sized containers. Numbers (including
    ``0``) are never blank.

    Args:
        value: Any attribute value read from a model.

    Returns:
        bool: True when ``value`` is blank.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (bytes, bytearray)):
        return not value.strip()
    if isinstance(value, Sized):
        return len(value) == 0
    return False


def display(value: Any) -> str:
    """Render a value for failure messages (``None`` shows as ``None``)."""
    return "None" if value is None else repr(value)
