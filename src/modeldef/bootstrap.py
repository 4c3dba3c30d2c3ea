"""Wiring between callers and the contract checks.

The service layer only speaks the introspection port. These wrappers accept
whatever a test has at hand (a SQLAlchemy instance, a mapped class, or a
`ModelHandle`), adapt it, and delegate.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from modeldef.adapters import as_model_handle
from modeldef.service_layer import columns, relationships

if TYPE_CHECKING:
    import re

    from modeldef.domain.specs import RelationshipSpec


def check_columns(
    model: Any,
    column_specs: Mapping[str, Any],
    *,
    ignore: re.Pattern[str] | None = None,
) -> list[str]:
    """Run the column contract check against ``model``.

    See `modeldef.service_layer.columns.check_columns` for the semantics.

    Example:
        ```py
        def test_order_columns():
            check_columns(Order(), {"status": {"default": "pending"}, ...})
        ```
    """
    return columns.check_columns(
        as_model_handle(model), column_specs, ignore=ignore
    )


def check_relationships(
    model: Any,
    relation_specs: RelationshipSpec | Mapping[Any, Any],
    fail_untested: bool = True,
) -> list[str]:
    """Run the relationship contract check against ``model``.

    See `modeldef.service_layer.relationships.check_relationships` for the
    semantics.
    """
    return relationships.check_relationships(
        as_model_handle(model), relation_specs, fail_untested
    )
