"""Convert mixed Persian/Latin plain text into a DOCX document.

Plain text with light markup (``**bold**``, ``x^2``, ``H_{2}O``), ``#``
headings and ``$$`` math lines becomes a right-to-left aware Word document.

Usage:
    persian-docx notes.txt                       # → notes.docx
    persian-docx notes.txt -o out.docx --footnotes
    cat notes.txt | persian-docx - -o out.docx
    persian-docx --url https://example.org/notes.txt -o out.docx
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from config import footnotes_enabled, load_render_settings, log_level
from document_assembler import ConversionOptions, MissingInputError, convert
from docx_renderer import render_document
from text_sources import STDIN_MARKER, SourceError, compose_text, read_text

DEFAULT_OUTPUT = Path("document.docx")


def resolve_output(args: argparse.Namespace) -> Path:
    """Pick the output path: explicit, next to the input file, or the default."""
    if args.output:
        return args.output.expanduser().resolve()
    if args.input and args.input != STDIN_MARKER:
        return Path(args.input).expanduser().resolve().with_suffix(".docx")
    return DEFAULT_OUTPUT.resolve()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert mixed Persian/Latin text to DOCX.")
    parser.add_argument("input", nargs="?", default=None, help="Input text file, or '-' for stdin.")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output DOCX path. Defaults to input with .docx extension.")
    parser.add_argument("-u", "--url", default=None, help="Fetch the input text from this URL instead of a file.")
    parser.add_argument("-t", "--title", default=None, help="Optional title, inserted as a level-1 heading.")
    parser.add_argument(
        "-f", "--footnotes",
        action="store_true",
        default=footnotes_enabled(),
        help="Add a footnote for each Latin term that follows Persian text (env: FOOTNOTES).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = read_text(path=args.input, url=args.url)
    except (MissingInputError, SourceError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    document = convert(compose_text(text, args.title), ConversionOptions(footnotes=args.footnotes))
    out = resolve_output(args)

    try:
        render_document(document, out, load_render_settings())
    except (OSError, ValueError) as e:
        print(f"ERROR: Could not write {out}: {e}", file=sys.stderr)
        return 1

    print(f"OK -> {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
