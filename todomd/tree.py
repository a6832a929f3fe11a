"""Recursive-descent builder for the indented task list."""

from __future__ import annotations

import logging
from typing import Hashable, Mapping

from .dialect import Dialect
from .errors import (
    DuplicateId,
    InvalidIndentJump,
    NestingTooDeep,
    UnrecognizedLineShape,
    UnresolvedReference,
)
from .lines import LineClassifier, LineCursor, indent_depth
from .models import DetailRecord, Task

logger = logging.getLogger(__name__)

# The builder recurses once per level; deeper lists are rejected
MAX_NESTING = 500


def build_task_tree(
    cursor: LineCursor,
    details: Mapping[Hashable, DetailRecord],
    dialect: Dialect,
    classifier: LineClassifier | None = None,
) -> list[Task]:
    """Build the task forest from the list region under the cursor.

    Returns:
        The root-level tasks, in source order
    """
    builder = _TreeBuilder(cursor, details, dialect, classifier or LineClassifier(dialect))
    return builder.build()


class _TreeBuilder:
    """Holds the shared cursor and read-only detail map for one parse."""

    def __init__(
        self,
        cursor: LineCursor,
        details: Mapping[Hashable, DetailRecord],
        dialect: Dialect,
        classifier: LineClassifier,
    ) -> None:
        self.cursor = cursor
        self.details = details
        self.dialect = dialect
        self.classifier = classifier
        self._seen: dict[Hashable, int] = {}

    def build(self) -> list[Task]:
        root = Task.root()
        self._build_children(root)
        return root.children

    def _build_children(self, parent: Task) -> None:
        expected = parent.level + 1
        while True:
            self.cursor.skip_blank()
            line = self.cursor.peek()
            if line is None:
                return
            depth = indent_depth(line, self.dialect.indent_unit)
            if depth < expected:
                # Belongs to an ancestor's scope; leave it for the caller
                return
            if depth > expected:
                raise InvalidIndentJump(
                    f"Invalid task list level {depth} (expected at most {expected})",
                    line_number=self.cursor.line_number,
                    line=line,
                    task_id=parent.id if parent.level >= 0 else None,
                )
            if depth >= MAX_NESTING:
                raise NestingTooDeep(
                    f"Task list nests deeper than {MAX_NESTING} levels",
                    line_number=self.cursor.line_number,
                    line=line,
                )
            task = self._open_task()
            parent.add_child(task)
            self._build_children(task)

    def _open_task(self) -> Task:
        line_number = self.cursor.line_number
        line = self.cursor.advance()
        item = self.classifier.list_item(line)
        if item is None:
            raise UnrecognizedLineShape(
                "Invalid task list item", line_number=line_number, line=line
            )
        try:
            task_id = self.dialect.coerce_id(item.id_token)
        except ValueError:
            raise UnrecognizedLineShape(
                f"Invalid {self.dialect.id_kind} id {item.id_token!r}",
                line_number=line_number,
                line=line,
            ) from None
        if task_id in self._seen:
            raise DuplicateId(
                f"Task ID {task_id} already listed on line {self._seen[task_id]}",
                line_number=line_number,
                line=line,
                task_id=task_id,
            )
        self._seen[task_id] = line_number

        task = Task(id=task_id, name=item.name, is_completed=item.is_completed)
        record = self.details.get(task_id)
        if record is not None:
            record.apply_to(task)
        elif self.dialect.requires_cross_reference:
            raise UnresolvedReference(
                f"Task ID {task_id} has no detail header",
                line_number=line_number,
                line=line,
                task_id=task_id,
            )
        else:
            logger.debug("[PARSE] task %s has no detail header", task_id)
        return task
