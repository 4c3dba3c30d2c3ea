"""Model introspection port for modeldef.

This module defines:
- `RelationshipDescriptor`, the adapter-neutral view of one declared association.
- `ModelClass`, the class-level reflection surface (columns, relationships,
  construction, lookup of related classes).
- `ModelHandle`, the instance-level surface (attribute access by name and
  validation).

Layering & dependency rules:
- Lives under `modeldef.interfaces`. Do NOT import from adapters or entrypoints.
- The checkers in `modeldef.service_layer` talk to models only through here.

Contract overview
-----------------
Attributes:
- `get`/`set` address attributes by name. Adapters must not evaluate code.
- `set` never raises for a rejected value; the rejection is reported by the
  next `run_validations` call, exactly like any other validation error.

Validation:
- `run_validations()` recomputes the error state and returns True when clean.
- Afterwards `error_fields()` lists the attributes carrying errors and
  `errors_on(field)` their human-readable messages (empty when clean).

Reflection:
- `column_names()` follows declaration order.
- `relationships()` maps relationship name to its descriptor.
- `resolve(class_name)` finds a related class in the same model registry and
  raises `UnknownModelError` when none matches.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from modeldef.domain.specs import RelationKind

__all__ = ["ModelClass", "ModelHandle", "RelationshipDescriptor"]


@dataclass(frozen=True)
class RelationshipDescriptor:
    """Reflection metadata for one declared relationship.

    Attributes:
        name: Attribute name of the relationship on the declaring model.
        kind: The association kind.
        class_name: Name of the related model class, if known.
        table_name: Table the related model is stored in.
        foreign_key: Attribute holding the parent's identifier. For
            ``belongs_to`` it lives on the declaring model, for ``has_many``
            and ``has_one`` on the related model, and for many-to-many it is
            the join-table column pointing back at the declaring model.
        options: Explicit overrides (``foreign_key``, ``class_name``,
            ``table_name``) supplied by the model author.
    """

    name: str
    kind: RelationKind
    class_name: str | None
    table_name: str
    foreign_key: str | None = None
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


class ModelClass(abc.ABC):
    """Class-level reflection over a mapped model."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Name of the model class (e.g. ``"Order"``)."""

    @property
    @abc.abstractmethod
    def table_name(self) -> str:
        """Name of the table the model is stored in (e.g. ``"orders"``)."""

    @abc.abstractmethod
    def column_names(self) -> list[str]:
        """Return the declared column attribute names in declaration order."""

    @abc.abstractmethod
    def relationships(self) -> Mapping[str, RelationshipDescriptor]:
        """Return the declared relationships keyed by name."""

    @abc.abstractmethod
    def new(self) -> ModelHandle:
        """Return a fresh instance with column defaults applied."""

    @abc.abstractmethod
    def resolve(self, class_name: str) -> ModelClass:
        """Look up another model class by name.

        Args:
            class_name: The class name to look for.

        Returns:
            The matching model class.

        Raises:
            UnknownModelError: If no class with that name is mapped.
        """


class ModelHandle(abc.ABC):
    """A live model instance under test."""

    @property
    @abc.abstractmethod
    def model_class(self) -> ModelClass:
        """The reflection surface of this instance's class."""

    @property
    def identity(self) -> Any:
        """Identifier shown in failure messages (None while transient)."""
        return None

    @abc.abstractmethod
    def responds_to(self, field_name: str) -> bool:
        """Return True if the instance exposes an attribute ``field_name``."""

    @abc.abstractmethod
    def get(self, field_name: str) -> Any:
        """Read attribute ``field_name``."""

    @abc.abstractmethod
    def set(self, field_name: str, value: Any) -> None:
        """Assign ``value`` to attribute ``field_name``."""

    @abc.abstractmethod
    def run_validations(self) -> bool:
        """Validate the instance, returning True when no errors were found."""

    @abc.abstractmethod
    def error_fields(self) -> set[str]:
        """Attributes carrying errors after the last `run_validations` call."""

    @abc.abstractmethod
    def errors_on(self, field_name: str) -> list[str]:
        """Messages for ``field_name`` after the last `run_validations` call."""
