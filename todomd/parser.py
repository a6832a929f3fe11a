"""Parser for TODO.md documents."""

from __future__ import annotations

import logging
from pathlib import Path

from .details import collect_details
from .dialect import DEFAULT_DIALECT, Dialect
from .errors import MissingListOrHeaderRegion
from .lines import LineClassifier, LineCursor
from .models import TaskDocument
from .tree import build_task_tree

logger = logging.getLogger(__name__)


def find_first_header(lines: list[str], classifier: LineClassifier) -> int | None:
    """Index of the first detail header line, or None."""
    for i, line in enumerate(lines):
        if classifier.header_id(line) is not None:
            return i
    return None


def parse_todo_lines(
    lines: list[str],
    dialect: Dialect = DEFAULT_DIALECT,
    source_path: str = "",
) -> TaskDocument:
    """Parse a list of document lines into a TaskDocument.

    Everything before the first `# <id>` header is the list region; the rest
    of the document is the detail region.
    """
    classifier = LineClassifier(dialect)
    header_index = find_first_header(lines, classifier)
    if header_index is None:
        if dialect.requires_cross_reference:
            raise MissingListOrHeaderRegion(
                "Invalid TODO.md format: no detail header found"
                + (f" in {source_path}" if source_path else "")
            )
        header_index = len(lines)

    details = collect_details(
        LineCursor(lines[header_index:], offset=header_index), dialect, classifier
    )
    tasks = build_task_tree(LineCursor(lines[:header_index]), details, dialect, classifier)
    doc = TaskDocument(tasks=tasks, source_path=source_path)

    listed = doc.by_id
    doc.orphan_ids = [task_id for task_id in details if task_id not in listed]
    for task_id in doc.orphan_ids:
        logger.warning(
            "[PARSE] header %s (line %d) is not referenced by any list item",
            task_id, details[task_id].line_number,
        )
    logger.debug(
        "[PARSE] %d root task(s), %d detail header(s) using dialect '%s'",
        len(tasks), len(details), dialect.name,
    )
    return doc


def parse_todo_md(
    content: str,
    dialect: Dialect = DEFAULT_DIALECT,
    source_path: str = "",
) -> TaskDocument:
    """Parse a TODO.md string into a TaskDocument."""
    return parse_todo_lines(content.splitlines(), dialect=dialect, source_path=source_path)


def parse_todo_file(path: str | Path, dialect: Dialect = DEFAULT_DIALECT) -> TaskDocument:
    """Parse a TODO.md file from disk."""
    p = Path(path)
    content = p.read_text(encoding="utf-8")
    return parse_todo_md(content, dialect=dialect, source_path=str(p))
