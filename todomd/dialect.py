"""Grammar settings shared by the parser and the writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Hashable

from .errors import DialectError

FIELD_START_TIME = "start-time"
FIELD_END_TIME = "end-time"
FIELD_COMMENT = "comment"
FIELD_NAME = "name"

# Fields whose values are free text rather than timestamps
FREE_TEXT_FIELDS = frozenset({FIELD_COMMENT, FIELD_NAME})
TIMESTAMP_FIELDS = frozenset({FIELD_START_TIME, FIELD_END_TIME})
KNOWN_FIELDS = FREE_TEXT_FIELDS | TIMESTAMP_FIELDS

# Formats accepted when reading a timestamp, most precise first
TIMESTAMP_READ_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d")

ID_KINDS = ("integer", "string")

# Regex fragments matching one id token
_ID_TOKEN_PATTERNS = {
    "integer": r"\d+",
    "string": r"[\w.\-]+",
}


@dataclass(frozen=True)
class Dialect:
    """One variant of the TODO.md grammar.

    Attributes:
        name: Preset name, used in logs and on the command line
        indent_unit: Leading spaces per hierarchy level
        id_kind: "integer" or "string"; decides how id tokens are coerced
        requires_cross_reference: Every list item must have a detail header
        recognized_fields: Closed set of `##` field keys
        timestamp_format: strftime format used when writing timestamps
    """

    name: str = "default"
    indent_unit: int = 2
    id_kind: str = "integer"
    requires_cross_reference: bool = False
    recognized_fields: frozenset[str] = field(
        default_factory=lambda: frozenset({FIELD_START_TIME, FIELD_END_TIME, FIELD_COMMENT})
    )
    timestamp_format: str = "%Y-%m-%d"

    def __post_init__(self) -> None:
        if self.indent_unit < 1:
            raise DialectError(f"indent_unit must be positive, got {self.indent_unit}")
        if self.id_kind not in ID_KINDS:
            raise DialectError(f"id_kind must be one of {ID_KINDS}, got {self.id_kind!r}")
        unknown = set(self.recognized_fields) - KNOWN_FIELDS
        if unknown:
            raise DialectError(f"Unsupported detail fields: {', '.join(sorted(unknown))}")

    @property
    def id_pattern(self) -> str:
        return _ID_TOKEN_PATTERNS[self.id_kind]

    def coerce_id(self, token: str) -> Hashable:
        """Turn an id token into the dialect's id type.

        Raises:
            ValueError: If the token is not a valid id for this dialect
        """
        token = token.strip()
        if self.id_kind == "integer":
            return int(token)
        if not token:
            raise ValueError("empty id")
        return token

    def parse_timestamp(self, value: str) -> datetime:
        """Parse a timestamp value using the accepted read formats.

        Raises:
            ValueError: If no format matches
        """
        text = value.strip()
        for fmt in TIMESTAMP_READ_FORMATS:
            try:
                return datetime.strptime(text, fmt)
            except ValueError:
                continue
        raise ValueError(f"unrecognized timestamp {value!r}")

    def format_timestamp(self, value: datetime) -> str:
        return value.strftime(self.timestamp_format)


DEFAULT_DIALECT = Dialect()

DIALECTS: dict[str, Dialect] = {
    "default": DEFAULT_DIALECT,
    "strict": Dialect(name="strict", requires_cross_reference=True),
    "named": Dialect(
        name="named",
        indent_unit=4,
        id_kind="string",
        recognized_fields=KNOWN_FIELDS,
        timestamp_format="%Y-%m-%d %H:%M",
    ),
}


def get_dialect(name: str | None) -> Dialect:
    """Look up a preset by name; None gives the default dialect."""
    if not name:
        return DEFAULT_DIALECT
    try:
        return DIALECTS[name.strip().lower()]
    except KeyError:
        raise DialectError(
            f"Unknown dialect {name!r} (choose from {', '.join(sorted(DIALECTS))})"
        ) from None
