"""Read TODO.md documents from files, stdin, or HTTP(S) URLs."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def fetch_document(url: str, client: httpx.Client | None = None) -> str:
    """Download a document over HTTP(S) and return its text."""
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=DEFAULT_TIMEOUT, follow_redirects=True)
    try:
        resp = client.get(url)
        resp.raise_for_status()
        logger.debug("[FETCH] %s -> %d bytes", url, len(resp.content))
        return resp.text
    finally:
        if owns_client:
            client.close()


def read_document(location: str | Path, client: httpx.Client | None = None) -> str:
    """Return the text of a document from a path, '-' (stdin), or a URL."""
    location = str(location)
    if location == "-":
        return sys.stdin.read()
    if is_url(location):
        return fetch_document(location, client=client)
    return Path(location).read_text(encoding="utf-8")
