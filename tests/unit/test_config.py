"""Unit tests for modeldef.config."""

import pytest

from modeldef import config

# pylint: disable=magic-value-comparison


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("id", ["id"]),
        ("id,created_at", ["id", "created_at"]),
        ("id, created_at  updated_at\nversion", ["id", "created_at", "updated_at", "version"]),
        (" , ", []),
        (["id created_at", "version"], ["id", "created_at", "version"]),
        ([], []),
    ],
)
def test_split_names(raw, expected):
    """Names may be separated by commas, spaces or newlines."""
    assert config.split_names(raw) == expected


def test_ignore_pattern_matches_whole_names_only():
    """Patterns match complete names, case-insensitively."""
    pattern = config.build_ignore_pattern(["id", "created_at"])
    assert pattern.search("id")
    assert pattern.search("ID")
    assert pattern.search("created_at")
    assert not pattern.search("customer_id")
    assert not pattern.search("idx")


def test_ignore_pattern_escapes_names():
    """Names are literal, not regular expressions."""
    pattern = config.build_ignore_pattern(["a.b"])
    assert pattern.search("a.b")
    assert not pattern.search("axb")


def test_empty_ignore_list_is_rejected():
    """An empty pattern would silently ignore nothing or everything."""
    with pytest.raises(config.EmptyIgnoreListError):
        config.build_ignore_pattern([])


def test_default_ignore_pattern():
    """Bookkeeping columns are ignored by default."""
    pattern = config.get_ignore_pattern()
    assert pattern is config.DEFAULT_IGNORE_PATTERN
    for name in config.DEFAULT_IGNORED_COLUMNS:
        assert pattern.search(name)
    assert not pattern.search("status")


def test_ignore_pattern_from_environment(monkeypatch):
    """MODELDEF_IGNORED_COLUMNS replaces the defaults."""
    monkeypatch.setenv(config.IGNORED_COLUMNS_ENV, "uuid, version")
    pattern = config.get_ignore_pattern()
    assert pattern.search("uuid")
    assert pattern.search("version")
    assert not pattern.search("id")


def test_blank_environment_falls_back_to_defaults(monkeypatch):
    """A blank variable counts as unset."""
    monkeypatch.setenv(config.IGNORED_COLUMNS_ENV, "   ")
    assert config.get_ignore_pattern() is config.DEFAULT_IGNORE_PATTERN


@pytest.mark.parametrize("raw", [",", " , ,", "\n"])
def test_separator_only_environment_falls_back_to_defaults(monkeypatch, raw):
    """A variable holding only separators names no columns."""
    monkeypatch.setenv(config.IGNORED_COLUMNS_ENV, raw)
    assert config.get_ignore_pattern() is config.DEFAULT_IGNORE_PATTERN
