"""Fixtures for end-to-end CLI tests: a CliRunner and an isolated filesystem."""

import logging

import pytest
from click.testing import CliRunner

# pylint: disable=redefined-outer-name


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside an isolated working directory."""
    with runner.isolated_filesystem():
        yield


@pytest.fixture(autouse=True)
def restore_logger_levels():
    """Undo the per-logger levels the ``-L`` option sets."""
    names = ("modeldef", "sqlalchemy")
    saved = {name: logging.getLogger(name).level for name in names}
    root = logging.getLogger()
    root_level, root_handlers = root.level, root.handlers[:]
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)
    root.setLevel(root_level)
    root.handlers[:] = root_handlers
