"""SQLAlchemy implementation of the model introspection port.

`SQLAlchemyModelClass` wraps a mapped class and `SQLAlchemyModel` wraps one of
its instances. Nothing here touches a database: defaults and validations are
evaluated in-process on transient objects.

Relationship kinds
    | SQLAlchemy direction | uselist | kind                      |
    |----------------------|---------|---------------------------|
    | MANYTOONE            | any     | belongs_to                |
    | ONETOMANY            | True    | has_many                  |
    | ONETOMANY            | False   | has_one                   |
    | MANYTOMANY           | any     | has_and_belongs_to_many   |

Validation sources (merged per attribute)
    1. ``@validates`` hooks that raise ``ValueError``/``TypeError`` while a
       value is assigned. The message becomes the attribute's error and the
       attribute keeps its previous value.
    2. Schema rules: ``nullable=False`` non-key columns holding ``None`` report
       ``"can't be blank"``; ``String(n)`` values longer than ``n`` report
       ``"is too long (maximum is n characters)"``.
    3. An optional ``validate()`` method on the model returning a mapping of
       attribute name to message(s).

Overrides
    ``relationship(..., info={...})`` entries are exposed as descriptor
    options, so authors can set ``foreign_key``, ``class_name`` or
    ``table_name`` for associations that break naming conventions.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from sqlalchemy import String, inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Mapper, RelationshipDirection
from sqlalchemy.orm.exc import UnmappedColumnError

from modeldef.domain.errors import UnknownModelError
from modeldef.domain.specs import RelationKind
from modeldef.interfaces.model import ModelClass, ModelHandle, RelationshipDescriptor

if TYPE_CHECKING:
    from sqlalchemy import Column
    from sqlalchemy.orm import RelationshipProperty

__all__ = ["BLANK_MESSAGE", "SQLAlchemyModel", "SQLAlchemyModelClass"]

logger = logging.getLogger(__name__)

BLANK_MESSAGE = "can't be blank"
INVALID_MESSAGE = "is invalid"
TOO_LONG_MESSAGE = "is too long (maximum is {length} characters)"
VALIDATE_HOOK = "validate"


def _kind_of(rel: RelationshipProperty[Any]) -> RelationKind:
    match rel.direction:
        case RelationshipDirection.MANYTOONE:
            return RelationKind.BELONGS_TO
        case RelationshipDirection.MANYTOMANY:
            return RelationKind.HAS_AND_BELONGS_TO_MANY
        case _:
            return RelationKind.HAS_MANY if rel.uselist else RelationKind.HAS_ONE


def _attribute_for(mapper: Mapper[Any], column: Column[Any]) -> str:
    try:
        return mapper.get_property_by_column(column).key
    except UnmappedColumnError:
        return column.key


class SQLAlchemyModelClass(ModelClass):
    """Reflection over a SQLAlchemy mapped class."""

    def __init__(self, cls: type[Any]) -> None:
        try:
            mapper = inspect(cls)
        except NoInspectionAvailable as e:
            raise TypeError(f"{cls!r} is not a SQLAlchemy mapped class") from e
        if not isinstance(mapper, Mapper):
            raise TypeError(f"{cls!r} is not a SQLAlchemy mapped class")
        self._cls = cls
        self._mapper: Mapper[Any] = mapper

    def __repr__(self) -> str:
        return f"SQLAlchemyModelClass({self._cls.__name__})"

    @property
    def mapped_class(self) -> type[Any]:
        """The wrapped mapped class."""
        return self._cls

    @property
    def mapper(self) -> Mapper[Any]:
        """The SQLAlchemy mapper of the wrapped class."""
        return self._mapper

    @property
    def name(self) -> str:
        return self._cls.__name__

    @property
    def table_name(self) -> str:
        return self._mapper.local_table.name  # type: ignore[attr-defined]

    def column_names(self) -> list[str]:
        return [prop.key for prop in self._mapper.column_attrs]

    def relationships(self) -> Mapping[str, RelationshipDescriptor]:
        # accessing .relationships configures pending mappers
        return {rel.key: self._describe(rel) for rel in self._mapper.relationships}

    def new(self) -> SQLAlchemyModel:
        return SQLAlchemyModel(self._cls())

    def resolve(self, class_name: str) -> SQLAlchemyModelClass:
        short_name = class_name.rsplit(".", 1)[-1]
        for mapper in self._mapper.registry.mappers:
            if mapper.class_.__name__ == short_name:
                return SQLAlchemyModelClass(mapper.class_)
        raise UnknownModelError(self.name, class_name)

    def _describe(self, rel: RelationshipProperty[Any]) -> RelationshipDescriptor:
        kind = _kind_of(rel)
        target: Mapper[Any] = rel.mapper
        return RelationshipDescriptor(
            name=rel.key,
            kind=kind,
            class_name=target.class_.__name__,
            table_name=target.local_table.name,  # type: ignore[attr-defined]
            foreign_key=self._foreign_key(rel, kind, target),
            options=MappingProxyType(dict(rel.info)),
        )

    def _foreign_key(
        self, rel: RelationshipProperty[Any], kind: RelationKind, target: Mapper[Any]
    ) -> str | None:
        if kind is RelationKind.HAS_AND_BELONGS_TO_MANY:
            # (parent column, join table column)
            pairs = rel.synchronize_pairs
            return pairs[0][1].key if pairs else None
        pairs = rel.local_remote_pairs or []
        if not pairs:
            return None
        local, remote = pairs[0]
        if kind is RelationKind.BELONGS_TO:
            return _attribute_for(self._mapper, local)
        return _attribute_for(target, remote)


class SQLAlchemyModel(ModelHandle):
    """A SQLAlchemy mapped instance seen through the introspection port.

    Args:
        instance: The mapped instance to wrap.
        apply_defaults: When True and the instance is transient, scalar column
            defaults are assigned to attributes that were never set, matching
            what an INSERT would store. Callable and SQL-expression defaults
            are left alone.

    Raises:
        TypeError: If ``instance`` is not a SQLAlchemy mapped instance.
    """

    def __init__(self, instance: Any, *, apply_defaults: bool = True) -> None:
        self._instance = instance
        self._model_class = SQLAlchemyModelClass(type(instance))
        self._assignment_errors: dict[str, list[str]] = {}
        self._errors: dict[str, list[str]] = {}
        if apply_defaults and inspect(instance).transient:
            self._apply_defaults()

    def __repr__(self) -> str:
        return f"SQLAlchemyModel({self._instance!r})"

    @property
    def instance(self) -> Any:
        """The wrapped mapped instance."""
        return self._instance

    @property
    def model_class(self) -> SQLAlchemyModelClass:
        return self._model_class

    @property
    def identity(self) -> Any:
        key = inspect(self._instance).identity
        if key is None:
            return None
        return key[0] if len(key) == 1 else key

    def responds_to(self, field_name: str) -> bool:
        return hasattr(self._instance, field_name)

    def get(self, field_name: str) -> Any:
        return getattr(self._instance, field_name)

    def set(self, field_name: str, value: Any) -> None:
        try:
            setattr(self._instance, field_name, value)
        except (ValueError, TypeError, AssertionError) as e:
            logger.debug(
                "%s.%s rejected %r on assignment: %s",
                self._model_class.name,
                field_name,
                value,
                e,
            )
            self._assignment_errors[field_name] = [str(e) or INVALID_MESSAGE]
        else:
            self._assignment_errors.pop(field_name, None)

    def run_validations(self) -> bool:
        errors: defaultdict[str, list[str]] = defaultdict(list)
        for field_name, messages in self._assignment_errors.items():
            errors[field_name].extend(messages)

        for prop in self._model_class.mapper.column_attrs:
            if prop.key in errors:
                continue
            value = getattr(self._instance, prop.key)
            if message := self._schema_error(prop.columns[0], value):
                errors[prop.key].append(message)

        hook = getattr(self._instance, VALIDATE_HOOK, None)
        if callable(hook):
            for field_name, messages in (hook() or {}).items():
                errors[field_name].extend(_as_messages(messages))

        self._errors = dict(errors)
        return not self._errors

    def error_fields(self) -> set[str]:
        return set(self._errors)

    def errors_on(self, field_name: str) -> list[str]:
        return list(self._errors.get(field_name, []))

    def _apply_defaults(self) -> None:
        state = self._instance.__dict__
        for prop in self._model_class.mapper.column_attrs:
            if prop.key in state:
                continue
            default = getattr(prop.columns[0], "default", None)
            if default is not None and getattr(default, "is_scalar", False):
                setattr(self._instance, prop.key, default.arg)  # type: ignore[attr-defined]

    @staticmethod
    def _schema_error(column: Any, value: Any) -> str | None:
        if value is None:
            required = not getattr(column, "nullable", True)
            if required and not getattr(column, "primary_key", False):
                return BLANK_MESSAGE
            return None
        column_type = getattr(column, "type", None)
        length = getattr(column_type, "length", None)
        if (
            isinstance(column_type, String)
            and length
            and isinstance(value, str)
            and len(value) > length
        ):
            return TOO_LONG_MESSAGE.format(length=length)
        return None


def _as_messages(messages: str | Iterable[str]) -> list[str]:
    if isinstance(messages, str):
        return [messages]
    return [str(m) for m in messages]
