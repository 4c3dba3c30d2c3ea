"""Declarative column and relationship specs.

A test describes the contract of one model with two plain mappings:

```py
COLUMNS = {
    "status": {
        "required": True,
        "default": "pending",
        "valid": ["pending", "shipped"],
        "invalid": [("", "can't be blank")],
    },
    "notes": "def_only",
}

RELATIONS = {
    "belongs_to": "customer",
    "has_and_belongs_to_many": ["tags"],
    "suppress_loopback": {"tags"},
}
```

This module turns those mappings into frozen value objects. Parsing is
strict: unknown keys and unknown relationship kinds raise
`InvalidSpecError` instead of being silently ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final

from .errors import InvalidSpecError

__all__ = [
    "DEF_ONLY",
    "SUPPRESS_LOOPBACK",
    "ColumnSpec",
    "InvalidValue",
    "RelationKind",
    "RelationshipSpec",
    "parse_column_specs",
]

#: Marks a column whose presence is the only thing checked.
DEF_ONLY: Final = "def_only"

#: Key of a relationship spec holding names exempt from mirror checks.
SUPPRESS_LOOPBACK: Final = "suppress_loopback"

_COLUMN_KEYS = frozenset({"required", "default", "valid", "invalid"})


def _snake_case(raw: str) -> str:
    """Turn ``"hasMany"`` or ``"HAS_MANY"`` into ``"has_many"``."""
    raw = raw.strip()
    if "_" in raw or raw.isupper():
        return raw.lower()
    return "".join(f"_{c}" if c.isupper() else c for c in raw).lstrip("_").lower()


# ============================================================================
#                               Columns
# ============================================================================


@dataclass(frozen=True, slots=True)
class InvalidValue:
    """A value a column must reject, with an optional expected message.

    Attributes:
        value: The value to assign.
        message: Substring expected in the column's error messages, if any.
    """

    value: Any
    message: str | None = None

    @classmethod
    def parse(cls, entry: Any) -> InvalidValue:
        """Build an `InvalidValue` from a bare value or a ``(value, message)`` pair.

        Any 2-item tuple or list is read as a pair. Wrap a value that is itself
        a 2-item sequence in `InvalidValue` explicitly to avoid that reading.
        """
        if isinstance(entry, InvalidValue):
            return entry
        if isinstance(entry, (tuple, list)) and len(entry) == 2:
            value, message = entry
            return cls(value, None if message is None else str(message))
        return cls(entry)


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """The expected behaviour of a single column.

    Attributes:
        required: Assigning ``None`` must produce a validation error.
        default: Value a fresh instance must hold. A blank default means the
            fresh value must be blank too.
        valid: Values that must round-trip unchanged and validate cleanly.
        invalid: Values that must produce a validation error.
        def_only: Only check that the column exists.
    """

    required: bool = False
    default: Any = None
    valid: tuple[Any, ...] = ()
    invalid: tuple[InvalidValue, ...] = ()
    def_only: bool = False

    @classmethod
    def definition_only(cls) -> ColumnSpec:
        """Return a spec that only checks the column is defined."""
        return cls(def_only=True)

    @classmethod
    def parse(cls, name: str, raw: Any) -> ColumnSpec:
        """Build a `ColumnSpec` from its declarative form.

        Args:
            name: Column name (used in error messages).
            raw: A `ColumnSpec`, the ``"def_only"`` (or ``"defOnly"``) marker, or a
                mapping with any of the keys ``required``, ``default``,
                ``valid`` and ``invalid``.

        Returns:
            ColumnSpec: The parsed spec.

        Raises:
            InvalidSpecError: If ``raw`` has an unsupported shape or unknown keys.
        """
        if isinstance(raw, ColumnSpec):
            return raw
        if isinstance(raw, str):
            if _snake_case(raw) == DEF_ONLY:
                return cls.definition_only()
            raise InvalidSpecError(name, f"unknown column marker {raw!r}")
        if not isinstance(raw, Mapping):
            raise InvalidSpecError(
                name, f"expected a mapping or {DEF_ONLY!r}, got {type(raw).__name__}"
            )
        if unknown := set(raw) - _COLUMN_KEYS:
            raise InvalidSpecError(name, f"unknown keys {sorted(map(str, unknown))}")
        return cls(
            required=bool(raw.get("required", False)),
            default=raw.get("default"),
            valid=_as_tuple(name, "valid", raw.get("valid")),
            invalid=tuple(
                InvalidValue.parse(entry)
                for entry in _as_tuple(name, "invalid", raw.get("invalid"))
            ),
        )


def _as_tuple(name: str, key: str, values: Any) -> tuple[Any, ...]:
    if values is None:
        return ()
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise InvalidSpecError(name, f"'{key}' must be a list of values")
    return tuple(values)


def parse_column_specs(columns: Mapping[str, Any]) -> dict[str, ColumnSpec]:
    """Parse a ``name -> spec`` mapping, preserving its order."""
    return {str(name): ColumnSpec.parse(str(name), raw) for name, raw in columns.items()}


# ============================================================================
#                             Relationships
# ============================================================================


class RelationKind(str, Enum):
    """Kinds of association a model can declare.

    Attributes:
        BELONGS_TO: Many-to-one; this model holds the foreign key.
        HAS_MANY: One-to-many; the related model holds the foreign key.
        HAS_ONE: One-to-one; the related model holds the foreign key.
        HAS_AND_BELONGS_TO_MANY: Many-to-many through a join table.
    """

    BELONGS_TO = "belongs_to"
    HAS_MANY = "has_many"
    HAS_ONE = "has_one"
    HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many"

    @classmethod
    def from_string(cls, kind: str | RelationKind) -> RelationKind:
        """Normalize a kind name to a `RelationKind`.

        Accepts snake_case (``"has_many"``) and camelCase (``"hasMany"``) in
        any letter case.

        Raises:
            InvalidSpecError: If the kind is not recognized.
        """
        if isinstance(kind, RelationKind):
            return kind
        snake = _snake_case(str(kind or ""))
        for member in cls:
            if member.value == snake:
                return member
        raise InvalidSpecError(None, f"unknown relationship kind {kind!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RelationshipSpec:
    """The relationships a model must declare.

    Attributes:
        relations: ``(kind, names)`` pairs in declaration order.
        suppress_loopback: Relationship names exempt from mirror checks.
    """

    relations: tuple[tuple[RelationKind, tuple[str, ...]], ...] = ()
    suppress_loopback: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def parse(cls, raw: RelationshipSpec | Mapping[Any, Any]) -> RelationshipSpec:
        """Build a `RelationshipSpec` from ``kind -> name(s)`` mapping.

        A single name may be given instead of a list. The ``suppress_loopback``
        (or ``suppressLoopback``) key holds a name or collection of names.

        Raises:
            InvalidSpecError: If a kind is unknown or names are malformed.
        """
        if isinstance(raw, RelationshipSpec):
            return raw
        if not isinstance(raw, Mapping):
            raise InvalidSpecError(
                None, f"expected a mapping of relationships, got {type(raw).__name__}"
            )
        relations: list[tuple[RelationKind, tuple[str, ...]]] = []
        suppressed: frozenset[str] = frozenset()
        for key, names in raw.items():
            if isinstance(key, str) and _snake_case(key) == SUPPRESS_LOOPBACK:
                suppressed = frozenset(_names(SUPPRESS_LOOPBACK, names))
                continue
            kind = RelationKind.from_string(key)
            relations.append((kind, _names(kind.value, names)))
        return cls(relations=tuple(relations), suppress_loopback=suppressed)


def _names(key: str, names: Any) -> tuple[str, ...]:
    if names is None:
        return ()
    if isinstance(names, str):
        return (names,)
    if not isinstance(names, Iterable):
        raise InvalidSpecError(key, "expected a relationship name or list of names")
    return tuple(str(name) for name in names)
