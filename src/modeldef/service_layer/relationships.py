"""Relationship contract check.

`check_relationships` asserts that a model declares the associations listed
in its spec, with the right kinds, and that each one is mirrored on the
related model. Mirror ("loopback") checks go exactly one hop: the related
model is inspected, but its own relationships are not followed further.

Per kind:
    belongs_to
        The foreign key attribute exists, and the parent model declares some
        relationship pointing back at this model's table.
    has_many / has_one
        The related model declares ``belongs_to`` under the singularized name
        of this model's table, and its instances expose the foreign key.
    has_and_belongs_to_many
        The related model declares ``has_and_belongs_to_many`` under the name
        of this model's table.

Names listed under ``suppress_loopback`` skip the mirror checks (the
``belongs_to`` foreign key and back-reference checks still run).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NoReturn

from modeldef.domain.errors import ContractViolation
from modeldef.domain.inflector import classify, singularize
from modeldef.domain.specs import RelationKind, RelationshipSpec

if TYPE_CHECKING:
    from modeldef.interfaces.model import (
        ModelClass,
        ModelHandle,
        RelationshipDescriptor,
    )

__all__ = ["check_relationships"]

logger = logging.getLogger(__name__)

_CHILD_KINDS = frozenset({RelationKind.HAS_MANY, RelationKind.HAS_ONE})


def _fail(klass: ModelClass, subject: str | None, message: str) -> NoReturn:
    logger.info("Relationship contract violated: %s", message)
    raise ContractViolation(klass.name, subject, message)


def _foreign_key(reflection: RelationshipDescriptor) -> str | None:
    return reflection.options.get("foreign_key") or reflection.foreign_key


def _table_name(reflection: RelationshipDescriptor) -> str:
    return reflection.options.get("table_name") or reflection.table_name


def _target_class(klass: ModelClass, reflection: RelationshipDescriptor) -> ModelClass:
    class_name = (
        reflection.options.get("class_name")
        or reflection.class_name
        or classify(_table_name(reflection))
    )
    return klass.resolve(class_name)


def _check_foreign_key(model: ModelHandle, reflection: RelationshipDescriptor) -> None:
    fk_name = _foreign_key(reflection)
    if fk_name is None or not model.responds_to(fk_name):
        klass = model.model_class
        _fail(
            klass,
            reflection.name,
            f"{klass.name} is missing the '{fk_name}' field which maps to "
            f"{reflection.name}",
        )


def _check_parent_points_back(
    klass: ModelClass, reflection: RelationshipDescriptor
) -> None:
    parent = _target_class(klass, reflection)
    tables = {_table_name(r) for r in parent.relationships().values()}
    if klass.table_name not in tables:
        _fail(
            klass,
            reflection.name,
            f"{parent.name} is missing a relationship that points to "
            f"{klass.table_name}",
        )


def _check_child_belongs_to(
    klass: ModelClass, reflection: RelationshipDescriptor
) -> None:
    child_attr = singularize(klass.table_name.lower())
    child = _target_class(klass, reflection)
    child_reflection = child.relationships().get(child_attr)
    if child_reflection is None or child_reflection.kind is not RelationKind.BELONGS_TO:
        _fail(
            klass,
            reflection.name,
            f"{child.name} is missing the {RelationKind.BELONGS_TO} relationship "
            f"to {child_attr}",
        )

    fk_name = _foreign_key(reflection)
    if fk_name is None or not child.new().responds_to(fk_name):
        _fail(
            klass,
            reflection.name,
            f"{child.name} is missing the '{fk_name}' field which maps to {child_attr}",
        )


def _check_peer_has_and_belongs_to_many(
    klass: ModelClass, reflection: RelationshipDescriptor
) -> None:
    peer_attr = klass.table_name.lower()
    peer = _target_class(klass, reflection)
    peer_reflection = peer.relationships().get(peer_attr)
    kind = RelationKind.HAS_AND_BELONGS_TO_MANY
    if peer_reflection is None or peer_reflection.kind is not kind:
        _fail(
            klass,
            reflection.name,
            f"{peer.name} is missing the {kind} relationship to {peer_attr}",
        )


def check_relationships(
    model: ModelHandle,
    relations: RelationshipSpec | Mapping[Any, Any],
    fail_untested: bool = True,
) -> list[str]:
    """Assert that ``model`` declares and mirrors the relationships in ``relations``.

    Args:
        model: An instance of the model under test.
        relations: Mapping of relationship kind (``"belongs_to"``,
            ``"has_many"``, ``"has_one"``, ``"has_and_belongs_to_many"``) to a
            name or list of names. The optional ``"suppress_loopback"`` key
            lists names exempt from mirror checks.
        fail_untested: When True, fail if the model declares a relationship
            that ``relations`` does not mention.

    Returns:
        list[str]: The tested relationship names, in the order checked.

    Raises:
        ContractViolation: On the first unmet expectation.
        InvalidSpecError: If ``relations`` is malformed.
        UnknownModelError: If a related model class cannot be resolved.
    """
    spec = RelationshipSpec.parse(relations)
    klass = model.model_class
    reflections = klass.relationships()

    tested: list[str] = []
    for kind, names in spec.relations:
        for name in names:
            tested.append(name)
            logger.debug("Checking relationship %s %s.%s", kind, klass.name, name)

            reflection = reflections.get(name)
            if reflection is None or reflection.kind is not kind:
                _fail(klass, name, f"{klass.name} is missing the {kind} relationship to {name}")  # fmt: skip # pylint: disable=line-too-long

            if kind is RelationKind.BELONGS_TO:
                _check_foreign_key(model, reflection)
                _check_parent_points_back(klass, reflection)

            if name in spec.suppress_loopback:
                logger.debug("Loopback check suppressed for %s.%s", klass.name, name)
                continue
            if kind in _CHILD_KINDS:
                _check_child_belongs_to(klass, reflection)
            elif kind is RelationKind.HAS_AND_BELONGS_TO_MANY:
                _check_peer_has_and_belongs_to_many(klass, reflection)

    if fail_untested:
        for name, reflection in reflections.items():
            if name not in tested:
                _fail(
                    klass,
                    name,
                    f"{klass.name} is missing a relationship test for: "
                    f"{reflection.kind} {name}",
                )

    logger.debug("%s: %d relationships checked", klass.name, len(tested))
    return tested
