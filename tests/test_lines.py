"""Tests for the line classifier and cursor."""

from todomd.dialect import DEFAULT_DIALECT, DIALECTS
from todomd.lines import LineClassifier, LineCursor, LineKind, indent_depth

classifier = LineClassifier(DEFAULT_DIALECT)


def test_classify_shapes():
    assert classifier.classify("* [ ] [link](#1) Write docs") == LineKind.LIST_ITEM
    assert classifier.classify("# 12") == LineKind.HEADER
    assert classifier.classify("## comment") == LineKind.FIELD
    assert classifier.classify("   ") == LineKind.BLANK
    assert classifier.classify("") == LineKind.BLANK
    assert classifier.classify("some prose") == LineKind.UNKNOWN


def test_list_item_parts():
    item = classifier.list_item("    * [X] [link](#42)   Ship the release  ")
    assert item is not None
    assert item.is_completed is True
    assert item.id_token == "42"
    assert item.name == "Ship the release"


def test_list_item_lowercase_x_is_completed():
    item = classifier.list_item("* [x] [link](#3) done")
    assert item.is_completed is True


def test_list_item_without_name():
    item = classifier.list_item("* [ ] [link](#5)")
    assert item.name == ""
    assert item.is_completed is False


def test_list_item_rejects_other_markup():
    assert classifier.list_item("- [ ] plain checkbox") is None
    assert classifier.list_item("* [ ] [link](#abc) non-numeric id") is None


def test_header_is_single_hash_only():
    assert classifier.header_id("# 7") == "7"
    assert classifier.header_id("#7  ") == "7"
    assert classifier.header_id("## 7") is None
    assert classifier.header_id("# Tasks") is None


def test_string_id_dialect_accepts_words():
    named = LineClassifier(DIALECTS["named"])
    assert named.header_id("# setup-db") == "setup-db"
    assert named.list_item("* [ ] [link](#setup-db) Set up").id_token == "setup-db"


def test_field_key_and_inline_value():
    assert classifier.field("## start-time") == ("start-time", "")
    assert classifier.field("##comment ") == ("comment", "")
    assert classifier.field("## comment  hello there ") == ("comment", "hello there")
    assert classifier.field("## start-time 2024-01-02") == ("start-time", "2024-01-02")
    assert classifier.field("# 7") is None
    assert classifier.classify("## comment inline") == LineKind.FIELD


def test_indent_depth():
    assert indent_depth("* x", 2) == 0
    assert indent_depth("  * x", 2) == 1
    assert indent_depth("   * x", 2) == 1
    assert indent_depth("    * x", 2) == 2
    assert indent_depth("    * x", 4) == 1
    assert indent_depth("\t* x", 2) == 1


def test_cursor_line_numbers_include_offset():
    cursor = LineCursor(["", "", "a", "b"], offset=10)
    cursor.skip_blank()
    assert cursor.line_number == 13
    assert cursor.peek() == "a"
    assert cursor.peek() == "a"
    assert cursor.advance() == "a"
    assert cursor.advance() == "b"
    assert cursor.at_end
    assert cursor.peek() is None
