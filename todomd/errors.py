"""Errors raised while reading TODO.md documents."""

from __future__ import annotations

from typing import Hashable


class TodoMdError(Exception):
    """Base class for every todomd error."""


class DialectError(TodoMdError, ValueError):
    """An unknown dialect name or an invalid dialect setting."""


class ParseError(TodoMdError, ValueError):
    """A document does not follow the grammar.

    Attributes:
        line_number: 1-based line number of the offending line (None when the
            error concerns the document as a whole)
        line: Raw text of the offending line
        task_id: Id of the task the line belongs to, where known
    """

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        line: str | None = None,
        task_id: Hashable | None = None,
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        self.task_id = task_id
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.line_number is not None:
            text = f"line {self.line_number}: {text}"
        if self.line is not None:
            text = f"{text}: {self.line!r}"
        return text


class MissingListOrHeaderRegion(ParseError):
    """No detail header was found in a dialect that requires one."""


class UnrecognizedLineShape(ParseError):
    """A line matches none of the productions allowed in its region."""


class InvalidIndentJump(ParseError):
    """A list item is nested more than one level below its parent."""


class NestingTooDeep(ParseError):
    """A list nests deeper than the builder supports."""


class DuplicateId(ParseError):
    """Two headers or two list items share an id."""


class UnknownDetailField(ParseError):
    """A `##` field key is outside the dialect's closed set."""

    def __init__(self, key: str, task_id: Hashable, line_number: int, line: str) -> None:
        self.key = key
        super().__init__(
            f"Invalid detail key {key!r} in header {task_id}",
            line_number=line_number,
            line=line,
            task_id=task_id,
        )


class UnresolvedReference(ParseError):
    """A list item refers to an id with no detail header."""


class MalformedTimestamp(ParseError):
    """A start-time or end-time value could not be parsed."""
