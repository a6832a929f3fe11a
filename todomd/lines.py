"""Line shapes of the TODO.md grammar and a cursor over a line buffer."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from .dialect import Dialect


class LineKind(enum.Enum):
    LIST_ITEM = "list-item"
    HEADER = "header"
    FIELD = "field"
    BLANK = "blank"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ListItem:
    """The parts of a `* [X] [link](#id) name` line."""

    is_completed: bool
    id_token: str
    name: str


class LineClassifier:
    """Recognizes the four line shapes for one dialect."""

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect
        id_re = dialect.id_pattern
        self.re_list_item = re.compile(
            r"^\s*\*\s*\[(?P<state>[Xx ])\]\s*\[link\]\s*\(#(?P<id>" + id_re + r")\)\s*(?P<name>.*?)\s*$"
        )
        self.re_header = re.compile(r"^#(?!#)\s*(?P<id>" + id_re + r")\s*$")
        self.re_field = re.compile(r"^##\s*(?P<key>\S+)(?:\s+(?P<value>.*?))?\s*$")

    def classify(self, line: str) -> LineKind:
        if not line.strip():
            return LineKind.BLANK
        if self.re_list_item.match(line):
            return LineKind.LIST_ITEM
        if self.re_header.match(line):
            return LineKind.HEADER
        if self.re_field.match(line):
            return LineKind.FIELD
        return LineKind.UNKNOWN

    def list_item(self, line: str) -> ListItem | None:
        m = self.re_list_item.match(line)
        if not m:
            return None
        return ListItem(
            is_completed=m.group("state") in ("X", "x"),
            id_token=m.group("id"),
            name=m.group("name"),
        )

    def header_id(self, line: str) -> str | None:
        m = self.re_header.match(line)
        return m.group("id") if m else None

    def field(self, line: str) -> tuple[str, str] | None:
        """Key and inline value (empty when the value starts on the next line)."""
        m = self.re_field.match(line)
        if not m:
            return None
        return m.group("key"), m.group("value") or ""


def indent_depth(line: str, indent_unit: int) -> int:
    """Hierarchy depth from the leading whitespace; a tab counts as one unit."""
    expanded = line.expandtabs(indent_unit)
    spaces = len(expanded) - len(expanded.lstrip(" "))
    return spaces // indent_unit


def is_blank(line: str) -> bool:
    return not line.strip()


class LineCursor:
    """A read position over a materialized list of lines.

    `offset` is the number of document lines before `lines[0]`, so
    `line_number` always reports positions in the whole document.
    """

    def __init__(self, lines: list[str], offset: int = 0) -> None:
        self.lines = lines
        self.offset = offset
        self.position = 0

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.lines)

    @property
    def line_number(self) -> int:
        return self.offset + self.position + 1

    def peek(self) -> str | None:
        if self.at_end:
            return None
        return self.lines[self.position]

    def advance(self) -> str:
        line = self.lines[self.position]
        self.position += 1
        return line

    def skip_blank(self) -> None:
        while not self.at_end and is_blank(self.lines[self.position]):
            self.position += 1
