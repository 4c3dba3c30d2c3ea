"""Global pytest fixtures for modeldef."""

from __future__ import annotations

import pytest

from modeldef.config import IGNORED_COLUMNS_ENV

pytest_plugins = [
    "pytester",
    "tests.fixtures.models",
    "tests.fixtures.fakes",
]


@pytest.fixture(autouse=True)
def default_ignore_list(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against the built-in column ignore list.

    Tests that exercise ``MODELDEF_IGNORED_COLUMNS`` set it explicitly with
    ``monkeypatch.setenv``.
    """
    monkeypatch.delenv(IGNORED_COLUMNS_ENV, raising=False)
