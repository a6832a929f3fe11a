"""Serialize a task forest back to the TODO.md dialect."""

from __future__ import annotations

import logging
from typing import Iterable, TextIO

from .dialect import (
    DEFAULT_DIALECT,
    FIELD_COMMENT,
    FIELD_END_TIME,
    FIELD_START_TIME,
    Dialect,
)
from .models import Task

logger = logging.getLogger(__name__)


def list_item_line(task: Task, dialect: Dialect = DEFAULT_DIALECT) -> str:
    indent = " " * (task.level * dialect.indent_unit)
    state = "X" if task.is_completed else " "
    line = f"{indent}* [{state}] [link](#{task.id})"
    return f"{line} {task.name}" if task.name else line


def detail_lines(task: Task, dialect: Dialect = DEFAULT_DIALECT) -> list[str]:
    """Header and fields for one task; empty when it has nothing to record.

    Dialects that require cross reference always get at least a header.
    """
    if not task.has_details and not dialect.requires_cross_reference:
        return []
    lines = [f"# {task.id}"]
    if task.start_time is not None:
        lines += [f"## {FIELD_START_TIME}", dialect.format_timestamp(task.start_time)]
    if task.end_time is not None:
        lines += [f"## {FIELD_END_TIME}", dialect.format_timestamp(task.end_time)]
    if task.comment:
        lines.append(f"## {FIELD_COMMENT}")
        lines.extend(task.comment.split("\n"))
    return lines


def _walk(tasks: Iterable[Task]):
    for task in tasks:
        yield from task.walk()


def render_lines(tasks: list[Task], dialect: Dialect = DEFAULT_DIALECT) -> list[str]:
    """Render the list region, a blank line, then the detail blocks."""
    # First pass: list items only
    out = [list_item_line(task, dialect) for task in _walk(tasks)]
    task_count = len(out)

    # Second pass: detail blocks, separated by blank lines
    blocks = [b for b in (detail_lines(task, dialect) for task in _walk(tasks)) if b]
    for block in blocks:
        out.append("")
        out.extend(block)
    logger.debug("[WRITE] %d task(s), %d detail block(s)", task_count, len(blocks))
    return out


def render_todo_md(tasks: list[Task], dialect: Dialect = DEFAULT_DIALECT) -> str:
    lines = render_lines(tasks, dialect)
    return "\n".join(lines) + "\n" if lines else ""


def write_todo_md(tasks: list[Task], stream: TextIO, dialect: Dialect = DEFAULT_DIALECT) -> None:
    """Write the rendered document to a text stream."""
    stream.write(render_todo_md(tasks, dialect))
