"""In-memory implementation of the model introspection port.

Lets the checkers be exercised against shapes SQLAlchemy cannot express
(e.g. a has_many whose target lacks the foreign key attribute, or a
descriptor without a class name) and serves as the second implementation in
the port contract tests.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from modeldef.domain.errors import UnknownModelError
from modeldef.interfaces.model import ModelClass, ModelHandle, RelationshipDescriptor

#: field value -> error message, or None when the value is acceptable
Validator = Callable[[Any], str | None]


@dataclass
class FakeRegistry:
    """Registry of fake model classes, looked up by name."""

    classes: dict[str, FakeModelClass] = field(default_factory=dict)

    def define(
        self,
        name: str,
        table_name: str,
        columns: Mapping[str, Any],
        *,
        relationships: tuple[RelationshipDescriptor, ...] = (),
        validators: Mapping[str, Validator] | None = None,
        extra_attributes: tuple[str, ...] = (),
    ) -> FakeModelClass:
        """Declare a model class.

        Args:
            name: Class name.
            table_name: Table name.
            columns: Column name -> default value (``None`` for no default).
            relationships: Declared relationship descriptors.
            validators: Column name -> validator.
            extra_attributes: Non-column attributes instances respond to.
        """
        klass = FakeModelClass(
            registry=self,
            class_name=name,
            table=table_name,
            columns=dict(columns),
            declared=tuple(relationships),
            validators=dict(validators or {}),
            extra_attributes=extra_attributes,
        )
        self.classes[name] = klass
        return klass


@dataclass
class FakeModelClass(ModelClass):
    """A fake model class."""

    registry: FakeRegistry = field(repr=False, compare=False)
    class_name: str
    table: str
    columns: dict[str, Any]
    declared: tuple[RelationshipDescriptor, ...] = ()
    validators: dict[str, Validator] = field(default_factory=dict)
    extra_attributes: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return self.class_name

    @property
    def table_name(self) -> str:
        return self.table

    def column_names(self) -> list[str]:
        return list(self.columns)

    def relationships(self) -> Mapping[str, RelationshipDescriptor]:
        return {r.name: r for r in self.declared}

    def new(self) -> FakeModel:
        return FakeModel(self)

    def resolve(self, class_name: str) -> FakeModelClass:
        try:
            return self.registry.classes[class_name]
        except KeyError as e:
            raise UnknownModelError(self.class_name, class_name) from e


class FakeModel(ModelHandle):
    """A fake model instance backed by a dict."""

    def __init__(self, model_class: FakeModelClass) -> None:
        self._model_class = model_class
        self.values: dict[str, Any] = dict(model_class.columns)
        for relation in model_class.declared:
            self.values[relation.name] = None
        for attribute in model_class.extra_attributes:
            self.values[attribute] = None
        self._errors: dict[str, list[str]] = {}
        self.validation_runs = 0
        self.assignments: list[tuple[str, Any]] = []

    @property
    def model_class(self) -> FakeModelClass:
        return self._model_class

    def responds_to(self, field_name: str) -> bool:
        return field_name in self.values

    def get(self, field_name: str) -> Any:
        return self.values[field_name]

    def set(self, field_name: str, value: Any) -> None:
        self.assignments.append((field_name, value))
        self.values[field_name] = value

    def run_validations(self) -> bool:
        self.validation_runs += 1
        self._errors = {}
        for field_name, validator in self._model_class.validators.items():
            if (message := validator(self.values.get(field_name))) is not None:
                self._errors[field_name] = [message]
        return not self._errors

    def error_fields(self) -> set[str]:
        return set(self._errors)

    def errors_on(self, field_name: str) -> list[str]:
        return list(self._errors.get(field_name, []))


def present(value: Any) -> str | None:
    """Validator rejecting ``None`` and empty strings."""
    return "can't be blank" if value in (None, "") else None


def one_of(*allowed: Any) -> Validator:
    """Validator rejecting blanks and values outside ``allowed``."""

    def _validator(value: Any) -> str | None:
        if value in (None, ""):
            return "can't be blank"
        return None if value in allowed else "is not included in the list"

    return _validator
