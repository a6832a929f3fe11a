"""Rewrite a TODO.md file in normalized form."""

from __future__ import annotations

import logging
from pathlib import Path

from .dialect import DEFAULT_DIALECT, Dialect
from .parser import parse_todo_md
from .writer import render_todo_md

logger = logging.getLogger(__name__)


def normalize_text(content: str, dialect: Dialect = DEFAULT_DIALECT) -> str:
    """Parse and re-render a document, keeping its line ending style."""
    doc = parse_todo_md(content, dialect=dialect)
    rendered = render_todo_md(doc.tasks, dialect)

    # Determine line ending from original content
    lines = content.splitlines(keepends=True)
    if lines and lines[0].endswith("\r\n"):
        rendered = rendered.replace("\n", "\r\n")
    return rendered


def normalize_file(tasks_path: str | Path, dialect: Dialect = DEFAULT_DIALECT) -> bool:
    """Rewrite a TODO.md file in normalized form.

    Args:
        tasks_path: Path to the TODO.md file
        dialect: Grammar used to read and write the file

    Returns:
        True if the file was modified, False if it was already normalized.
    """
    path = Path(tasks_path)
    content = path.read_bytes().decode("utf-8")
    rendered = normalize_text(content, dialect)
    if rendered == content:
        logger.debug("[WRITEBACK] %s already normalized", path)
        return False
    path.write_bytes(rendered.encode("utf-8"))
    logger.debug("[WRITEBACK] rewrote %s", path)
    return True
