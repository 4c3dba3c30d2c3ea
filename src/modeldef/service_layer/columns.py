"""Column contract check.

`check_columns` walks a ``column name -> spec`` mapping and asserts, column by
column and in mapping order:

1. the model exposes the column;
2. a fresh instance holds the expected default;
3. required columns reject ``None``;
4. valid values round-trip unchanged and validate cleanly;
5. invalid values are flagged, optionally with an expected message.

A final sweep fails if the model declares a column the spec does not cover
(bookkeeping columns matching the ignore pattern excepted).

The first violation raises `ContractViolation`; nothing is accumulated. The
instance is mutated along the way and should be discarded afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NoReturn

from modeldef import config
from modeldef.domain.errors import ContractViolation
from modeldef.domain.specs import ColumnSpec, InvalidValue, parse_column_specs
from modeldef.domain.utils import display, is_blank

if TYPE_CHECKING:
    import re

    from modeldef.interfaces.model import ModelHandle

__all__ = ["check_columns"]

logger = logging.getLogger(__name__)


def _fail(model: ModelHandle, subject: str | None, message: str) -> NoReturn:
    logger.info("Column contract violated: %s", message)
    raise ContractViolation(model.model_class.name, subject, message)


def _label(model: ModelHandle) -> str:
    if (identity := model.identity) is None:
        return model.model_class.name
    return f"{model.model_class.name} #{identity}"


def _check_defined(model: ModelHandle, name: str) -> None:
    if not model.responds_to(name):
        cls = model.model_class.name
        _fail(model, name, f"The {cls} model doesn't support the '{name}' field!")


def _check_default(model: ModelHandle, name: str, spec: ColumnSpec) -> None:
    cls = model.model_class.name
    actual = model.get(name)
    if is_blank(spec.default):
        if not is_blank(actual):
            _fail(
                model,
                name,
                f"{cls}.{name} has a value when it should be blank!\n"
                f"actual: {display(actual)}",
            )
        return
    if actual is None:
        _fail(model, name, f"The {cls}.{name} field doesn't have a default value!")
    if actual != spec.default:
        _fail(
            model,
            name,
            f"Invalid default value for {cls}.{name}!\n"
            f"expected: {display(spec.default)}\nactual: {display(actual)}",
        )


def _check_required(model: ModelHandle, name: str) -> None:
    model.set(name, None)
    model.run_validations()
    if name not in model.error_fields():
        _fail(
            model,
            name,
            f"{model.model_class.name}.{name} is required but passed "
            "validations with a None value",
        )


def _check_valid(model: ModelHandle, name: str, value: Any) -> None:
    cls = model.model_class.name
    model.set(name, value)
    actual = model.get(name)
    if actual != value:
        _fail(
            model,
            name,
            f"{cls}.{name} field value assignment is incorrect!\n"
            f"expected: {display(value)}\nactual: {display(actual)}",
        )

    model.run_validations()
    if name in model.error_fields():
        _fail(
            model,
            name,
            f"{_label(model)} '{name}' field has errors when it shouldn't! "
            f"assigned value: {display(value)}\n" + "; ".join(model.errors_on(name)),
        )


def _check_invalid(model: ModelHandle, name: str, entry: InvalidValue) -> None:
    cls = model.model_class.name
    model.set(name, entry.value)
    model.run_validations()
    if name not in model.error_fields():
        _fail(
            model,
            name,
            f"{cls}.{name} field should have errors! "
            f"assigned value: {display(entry.value)}",
        )
    if entry.message is None:
        return
    errors = "; ".join(model.errors_on(name))
    if entry.message not in errors:
        _fail(
            model,
            name,
            f"The expected error message for {cls}.{name} is not present\n"
            f"expected: {entry.message!r}\nactual: {errors!r}",
        )


def check_columns(
    model: ModelHandle,
    columns: Mapping[str, Any],
    *,
    ignore: re.Pattern[str] | None = None,
) -> list[str]:
    """Assert that ``model`` honours the column contract in ``columns``.

    Args:
        model: A fresh instance of the model under test. Its attributes are
            overwritten during the check.
        columns: Mapping of column name to spec. Each spec is a `ColumnSpec`,
            the ``"def_only"`` marker, or a mapping with the keys ``required``,
            ``default``, ``valid`` and ``invalid``.
        ignore: Pattern of column names exempt from the completeness sweep.
            Defaults to `modeldef.config.get_ignore_pattern()`.

    Returns:
        list[str]: The tested column names, in the order they were checked.

    Raises:
        ContractViolation: On the first unmet expectation.
        InvalidSpecError: If ``columns`` is malformed.
    """
    specs = parse_column_specs(columns)
    if ignore is None:
        ignore = config.get_ignore_pattern()

    tested: list[str] = []
    for name, spec in specs.items():
        tested.append(name)
        logger.debug("Checking column %s.%s", model.model_class.name, name)

        _check_defined(model, name)
        if spec.def_only:
            continue

        _check_default(model, name, spec)
        if spec.required:
            _check_required(model, name)
        for value in spec.valid:
            _check_valid(model, name, value)
        for entry in spec.invalid:
            _check_invalid(model, name, entry)

    for column in model.model_class.column_names():
        if ignore.search(column):
            continue
        if column not in tested:
            _fail(
                model,
                column,
                f"The {model.model_class.name} is missing a model test for "
                f"the '{column}' column",
            )

    logger.debug("%s: %d columns checked", model.model_class.name, len(tested))
    return tested
