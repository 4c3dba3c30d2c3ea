"""``modeldef scaffold``: print a starter spec for a mapped class.

Writing a complete column spec by hand is tedious because the column check
fails on every column the spec leaves out. This command introspects a
SQLAlchemy mapped class and emits Python source for ``COLUMNS`` and
``RELATIONS`` mappings that pass the completeness sweeps:

- non-nullable, non-key columns are marked ``required``;
- scalar column defaults are copied into ``default``;
- columns with nothing to assert become ``"def_only"``;
- relationships are grouped by kind.

The output is a starting point: add ``valid``/``invalid`` values by hand.

Examples
    $ modeldef scaffold shop.models:Order
    $ modeldef scaffold shop.models:Order --output tests/specs/order_spec.py
"""

from __future__ import annotations

import importlib
import logging
from collections import defaultdict
from pathlib import Path
from pprint import pformat
from typing import TYPE_CHECKING, Any

import click

from modeldef import config
from modeldef.adapters import SQLAlchemyModelClass
from modeldef.domain.specs import DEF_ONLY, RelationKind

from .helpers import success

if TYPE_CHECKING:
    import re

logger = logging.getLogger(__name__)


def load_class(target: str) -> type[Any]:
    """Import ``package.module:ClassName`` and return the class.

    Raises:
        click.BadParameter: If the target is malformed or cannot be imported.
    """
    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise click.BadParameter(f"Expected MODULE:CLASS, got {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"Cannot import module {module_name!r}: {e}") from e
    try:
        return getattr(module, class_name)
    except AttributeError as e:
        raise click.BadParameter(
            f"Module {module_name!r} has no attribute {class_name!r}"
        ) from e


def column_specs(
    model_class: SQLAlchemyModelClass, ignore: re.Pattern[str]
) -> dict[str, Any]:
    """Build a starter column spec from the mapped columns of ``model_class``."""
    specs: dict[str, Any] = {}
    for prop in model_class.mapper.column_attrs:
        if ignore.search(prop.key):
            continue
        column = prop.columns[0]
        spec: dict[str, Any] = {}
        if not getattr(column, "nullable", True) and not getattr(column, "primary_key", False):  # fmt: skip # pylint: disable=line-too-long
            spec["required"] = True
        default = getattr(column, "default", None)
        if default is not None and getattr(default, "is_scalar", False):
            spec["default"] = default.arg
        specs[prop.key] = spec or DEF_ONLY
    return specs


def relationship_specs(model_class: SQLAlchemyModelClass) -> dict[str, list[str]]:
    """Group the relationships of ``model_class`` by kind."""
    grouped: defaultdict[RelationKind, list[str]] = defaultdict(list)
    for name, reflection in model_class.relationships().items():
        grouped[reflection.kind].append(name)
    return {kind.value: grouped[kind] for kind in RelationKind if kind in grouped}


def render(model_class: SQLAlchemyModelClass, ignore: re.Pattern[str]) -> str:
    """Render the starter spec module for ``model_class`` as Python source."""
    columns = pformat(column_specs(model_class, ignore), sort_dicts=False, width=80)
    relations = pformat(relationship_specs(model_class), sort_dicts=False, width=80)
    return (
        f'"""Model definition spec for {model_class.name}."""\n\n'
        f"COLUMNS = {columns}\n\n"
        f"RELATIONS = {relations}\n"
    )


@click.command()
@click.argument("target", metavar="MODULE:CLASS")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write the spec to this file instead of stdout.",
)
def scaffold(target: str, output: Path | None) -> None:
    """Print a starter COLUMNS/RELATIONS spec for a SQLAlchemy mapped class."""
    cls = load_class(target)
    try:
        model_class = SQLAlchemyModelClass(cls)
    except TypeError as e:
        raise click.ClickException(str(e)) from e

    logger.debug("Scaffolding spec for %s (table %s)", model_class.name, model_class.table_name)  # fmt: skip # pylint: disable=line-too-long
    source = render(model_class, config.get_ignore_pattern())

    if output is None:
        click.echo(source, nl=False)
        return
    output.write_text(source, encoding="utf-8")
    success(f"Wrote spec for {model_class.name} to {output}")
