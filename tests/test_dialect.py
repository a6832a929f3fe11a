"""Tests for dialect presets and settings."""

from datetime import datetime

import pytest

from todomd.dialect import DEFAULT_DIALECT, DIALECTS, Dialect, get_dialect
from todomd.errors import DialectError


def test_get_dialect_defaults():
    assert get_dialect(None) is DEFAULT_DIALECT
    assert get_dialect("") is DEFAULT_DIALECT
    assert get_dialect("Strict") is DIALECTS["strict"]


def test_get_dialect_unknown():
    with pytest.raises(DialectError):
        get_dialect("yaml")


def test_invalid_settings():
    with pytest.raises(DialectError):
        Dialect(indent_unit=0)
    with pytest.raises(DialectError):
        Dialect(id_kind="uuid")
    with pytest.raises(DialectError):
        Dialect(recognized_fields=frozenset({"priority"}))


def test_coerce_id():
    assert DEFAULT_DIALECT.coerce_id("42") == 42
    assert DIALECTS["named"].coerce_id("setup-db") == "setup-db"
    with pytest.raises(ValueError):
        DEFAULT_DIALECT.coerce_id("abc")


def test_parse_timestamp_formats():
    d = DEFAULT_DIALECT
    assert d.parse_timestamp("2024-01-02") == datetime(2024, 1, 2)
    assert d.parse_timestamp(" 2024-01-02 08:30 ") == datetime(2024, 1, 2, 8, 30)
    assert d.parse_timestamp("2024-01-02T08:30") == datetime(2024, 1, 2, 8, 30)
    with pytest.raises(ValueError):
        d.parse_timestamp("02/01/2024")
