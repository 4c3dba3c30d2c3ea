"""pytest plugin exposing the contract checks as fixtures.

Registered through the ``pytest11`` entry point, so installing modeldef is
enough:

```py
def test_order_definition(check_columns):
    check_columns(Order(), ORDER_COLUMNS)
```

The ignore list of the column completeness sweep can be set per project in
the pytest configuration:

```toml
[tool.pytest.ini_options]
modeldef_ignored_columns = ["id", "created_at", "updated_at", "version"]
```

Without it, ``MODELDEF_IGNORED_COLUMNS`` or the built-in defaults apply.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

import pytest

from modeldef import bootstrap, config

INI_IGNORED_COLUMNS = "modeldef_ignored_columns"  # pragma: no mutate


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the ``modeldef_ignored_columns`` ini option."""
    parser.addini(
        INI_IGNORED_COLUMNS,
        type="linelist",
        help=(
            "Column names skipped by the completeness sweep of check_columns "
            f"(comma/space/line separated). Overrides ${config.IGNORED_COLUMNS_ENV}."
        ),
    )


@pytest.fixture
def modeldef_ignore_pattern(pytestconfig: pytest.Config) -> re.Pattern[str]:
    """Ignore pattern resolved from ini option, environment, then defaults."""
    if names := config.split_names(pytestconfig.getini(INI_IGNORED_COLUMNS)):
        return config.build_ignore_pattern(names)
    return config.get_ignore_pattern()


@pytest.fixture
def check_columns(
    modeldef_ignore_pattern: re.Pattern[str],
) -> Callable[..., list[str]]:
    """Return `modeldef.check_columns` bound to the configured ignore pattern."""

    def _check_columns(
        model: Any,
        columns: Any,
        *,
        ignore: re.Pattern[str] | None = None,
    ) -> list[str]:
        return bootstrap.check_columns(
            model, columns, ignore=ignore or modeldef_ignore_pattern
        )

    return _check_columns


@pytest.fixture
def check_relationships() -> Callable[..., list[str]]:
    """Return `modeldef.check_relationships`."""
    return bootstrap.check_relationships
