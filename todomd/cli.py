"""CLI entry point for todomd."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

import httpx

from .dialect import DIALECTS, get_dialect
from .errors import TodoMdError
from .parser import parse_todo_md
from .sources import is_url, read_document
from .writeback import normalize_file
from .writer import render_todo_md


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="todomd",
        description="Parse a TODO.md task list and write it back in normalized form.",
    )
    parser.add_argument(
        "source",
        type=str,
        help="Path to the TODO.md file, '-' for stdin, or an http(s) URL",
    )
    parser.add_argument(
        "--dialect",
        type=str,
        default=None,
        help=f"Grammar variant: {', '.join(sorted(DIALECTS))} "
        "(or set TODOMD_DIALECT env var; default 'default')",
    )
    out_group = parser.add_mutually_exclusive_group()
    out_group.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the normalized document to this path instead of stdout",
    )
    out_group.add_argument(
        "--in-place",
        action="store_true",
        help="Rewrite SOURCE with the normalized document",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 if SOURCE is not already normalized; write nothing",
    )
    parser.add_argument(
        "--output-json",
        type=str,
        default=None,
        help="Write the parsed task tree to a JSON file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(message)s",
    )

    # Resolve dialect
    try:
        dialect = get_dialect(args.dialect or os.environ.get("TODOMD_DIALECT"))
    except TodoMdError as exc:
        logging.error("%s", exc)
        return 1

    source = args.source
    if args.in_place and (source == "-" or is_url(source)):
        logging.error("--in-place needs a local file, got %s", source)
        return 1
    if source != "-" and not is_url(source) and not Path(source).is_file():
        logging.error("TODO.md file not found: %s", source)
        return 1

    # Parse
    try:
        content = read_document(source)
    except httpx.HTTPError as exc:
        logging.error("Could not fetch %s: %s", source, exc)
        return 1
    try:
        doc = parse_todo_md(content, dialect=dialect, source_path=source)
    except TodoMdError as exc:
        logging.error("%s: %s", source, exc)
        return 1
    logging.debug("Found %d tasks", len(list(doc.iter_tasks())))

    rendered = render_todo_md(doc.tasks, dialect)

    if args.output_json:
        out = {
            "source": source,
            "dialect": dialect.name,
            "tasks": [t.to_dict() for t in doc.tasks],
            "orphan_ids": doc.orphan_ids,
        }
        Path(args.output_json).write_text(json.dumps(out, indent=2))
        logging.info("Task tree written to %s", args.output_json)

    if args.check:
        if rendered != content.replace("\r\n", "\n"):
            logging.warning("%s is not normalized", source)
            return 1
        logging.info("%s is normalized", source)
        return 0

    if args.in_place:
        if normalize_file(source, dialect):
            logging.info("Rewrote %s", source)
        else:
            logging.info("%s already normalized", source)
    elif args.output:
        Path(args.output).write_text(rendered, encoding="utf-8")
        logging.info("Normalized document written to %s", args.output)
    else:
        sys.stdout.write(rendered)

    return 0


if __name__ == "__main__":
    sys.exit(main())
