"""Adapters binding host ORMs to the model introspection port."""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import InstanceState, Mapper

from modeldef.interfaces.model import ModelHandle

from .sqlalchemy_model import SQLAlchemyModel, SQLAlchemyModelClass

__all__ = ["SQLAlchemyModel", "SQLAlchemyModelClass", "as_model_handle"]


def as_model_handle(obj: Any) -> ModelHandle:
    """Return a `ModelHandle` for ``obj``.

    Args:
        obj: A `ModelHandle` (returned unchanged), a SQLAlchemy mapped instance
            (wrapped with defaults applied if transient), or a mapped class
            (a fresh instance is built).

    Returns:
        ModelHandle: The handle the checkers operate on.

    Raises:
        TypeError: If ``obj`` is none of the above.
    """
    if isinstance(obj, ModelHandle):
        return obj
    match inspect(obj, raiseerr=False):
        case InstanceState():
            return SQLAlchemyModel(obj)
        case Mapper():
            return SQLAlchemyModelClass(obj).new()
        case _:
            raise TypeError(
                f"Cannot check {type(obj).__name__!r}: expected a ModelHandle "
                "or a SQLAlchemy mapped instance"
            )
