"""Obtain the raw text to convert: a file, stdin, or an HTTP(S) URL."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

import requests

from config import fetch_timeout
from document_assembler import MissingInputError


class SourceError(Exception):
    """Raised when a text source cannot be read."""
    pass


STDIN_MARKER = "-"


def fetch_url(url: str, timeout: float | None = None) -> str:
    """Download text from a URL; the body is decoded as UTF-8."""
    try:
        resp = requests.get(url, timeout=timeout or fetch_timeout())
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise SourceError(f"Fetching {url} failed: {e}") from e
    resp.encoding = "utf-8"
    return resp.text


def read_file(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Cannot read {path}: {e}") from e


def read_text(
    path: Path | str | None = None,
    url: str | None = None,
    stdin: TextIO | None = None,
) -> str:
    """Read raw text from exactly one source.

    ``path`` may be ``"-"`` to read from ``stdin`` (defaults to ``sys.stdin``).
    Raises :class:`MissingInputError` if no source is given or it is empty.
    """
    if path is not None and url is not None:
        raise SourceError("Give either a file or a URL, not both")

    if url is not None:
        text = fetch_url(url)
    elif path is None:
        raise MissingInputError("No input file or URL given")
    elif str(path) == STDIN_MARKER:
        text = (stdin or sys.stdin).read()
    else:
        text = read_file(Path(path).expanduser())

    if not text.strip():
        raise MissingInputError("Input text is empty")
    return text


def compose_text(content: str, title: str | None = None) -> str:
    """Prepend a level-1 heading for ``title`` when one is given."""
    if title and title.strip():
        return f"# {title.strip()}\n{content}"
    return content
