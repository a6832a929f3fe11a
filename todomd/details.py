"""Collector for the `# <id>` detail blocks at the end of a document."""

from __future__ import annotations

import logging
from typing import Hashable

from .dialect import (
    FIELD_COMMENT,
    FIELD_END_TIME,
    FIELD_NAME,
    FIELD_START_TIME,
    FREE_TEXT_FIELDS,
    Dialect,
)
from .errors import DuplicateId, MalformedTimestamp, UnknownDetailField, UnrecognizedLineShape
from .lines import LineClassifier, LineCursor, is_blank
from .models import DetailRecord

logger = logging.getLogger(__name__)


def collect_details(
    cursor: LineCursor,
    dialect: Dialect,
    classifier: LineClassifier | None = None,
) -> dict[Hashable, DetailRecord]:
    """Read every header block from the cursor to the end of its buffer.

    Returns:
        Mapping of task id -> DetailRecord

    Raises:
        UnrecognizedLineShape: A non-blank line outside a field value is not a header
        DuplicateId: Two headers share an id
        UnknownDetailField: A field key is outside the dialect's set
        MalformedTimestamp: A time field value does not parse
    """
    classifier = classifier or LineClassifier(dialect)
    records: dict[Hashable, DetailRecord] = {}

    while True:
        cursor.skip_blank()
        if cursor.at_end:
            break
        line_number = cursor.line_number
        line = cursor.advance()
        token = classifier.header_id(line)
        if token is None:
            raise UnrecognizedLineShape(
                "Expected a detail header", line_number=line_number, line=line
            )
        try:
            task_id = dialect.coerce_id(token)
        except ValueError:
            raise UnrecognizedLineShape(
                f"Invalid {dialect.id_kind} id {token!r}", line_number=line_number, line=line
            ) from None
        if task_id in records:
            raise DuplicateId(
                f"Duplicate header ID {task_id} (first seen on line {records[task_id].line_number})",
                line_number=line_number,
                line=line,
                task_id=task_id,
            )
        record = DetailRecord(id=task_id, line_number=line_number)
        _collect_fields(cursor, record, dialect, classifier)
        records[task_id] = record
        logger.debug("[DETAILS] header %s at line %d", task_id, line_number)

    return records


def _collect_fields(
    cursor: LineCursor,
    record: DetailRecord,
    dialect: Dialect,
    classifier: LineClassifier,
) -> None:
    seen: set[str] = set()
    while not cursor.at_end:
        line = cursor.peek()
        parts = classifier.field(line)
        if parts is None:
            return
        key, inline = parts
        line_number = cursor.line_number
        cursor.advance()
        if key not in dialect.recognized_fields:
            raise UnknownDetailField(key, record.id, line_number, line)
        if key in seen:
            logger.warning(
                "[DETAILS] field '%s' repeated in header %s (line %d); keeping the last value",
                key, record.id, line_number,
            )
        seen.add(key)
        value = _collect_value(cursor, inline, trim_trailing_blank=key in FREE_TEXT_FIELDS)
        _apply_field(record, key, value, dialect, line_number, line)


def _collect_value(cursor: LineCursor, inline: str, trim_trailing_blank: bool) -> str:
    """Consume lines up to (not including) the next `#`-prefixed line.

    A non-empty inline value from the field line becomes the first line.
    """
    lines: list[str] = [inline] if inline else []
    while not cursor.at_end and not cursor.peek().startswith("#"):
        lines.append(cursor.advance())
    if trim_trailing_blank:
        while lines and is_blank(lines[-1]):
            lines.pop()
    return "\n".join(lines)


def _apply_field(
    record: DetailRecord,
    key: str,
    value: str,
    dialect: Dialect,
    line_number: int,
    line: str,
) -> None:
    if key == FIELD_COMMENT:
        record.comment = value or None
    elif key == FIELD_NAME:
        record.name = value.strip() or None
    elif key in (FIELD_START_TIME, FIELD_END_TIME):
        try:
            stamp = dialect.parse_timestamp(value)
        except ValueError:
            raise MalformedTimestamp(
                f"Invalid {key} value {value.strip()!r} in header {record.id}",
                line_number=line_number,
                line=line,
                task_id=record.id,
            ) from None
        if key == FIELD_START_TIME:
            record.start_time = stamp
        else:
            record.end_time = stamp
