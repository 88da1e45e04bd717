"""Convert raw mixed Persian/Latin text into a :class:`Document`.

Usage:
    from document_assembler import convert, ConversionOptions

    doc = convert("سلام world\\n\\n# Title")
    doc = convert(text, ConversionOptions(footnotes=True))

Each call builds its own state (footnote counter, run builder state), so
concurrent calls never interfere and repeated calls on the same input give
identical documents.
"""

from __future__ import annotations

import itertools
import logging
import re
from dataclasses import dataclass, replace
from typing import Iterator

from document_model import (
    DEFAULT_DIRECTION_TABLE,
    DirectionTable,
    Document,
    FootnoteEntry,
    Paragraph,
    ParagraphKind,
    StyledRun,
)
from line_classifier import FormulaCheck, check_formula, classify_line
from script_classifier import Script, has_latin_letter

log = logging.getLogger(__name__)


class MissingInputError(ValueError):
    """Raised when no text was supplied for conversion."""
    pass


@dataclass(frozen=True)
class ConversionOptions:
    footnotes: bool = False
    direction_table: DirectionTable = DEFAULT_DIRECTION_TABLE
    formula_check: FormulaCheck = check_formula


EMPTY_DOCUMENT = Document(paragraphs=(), footnotes=())

# Latin term without surrounding punctuation or whitespace
_TERM_RE = re.compile(r"^([^A-Za-z0-9]*)(.*[A-Za-z0-9])(.*)$", re.DOTALL)


# ═══════════════════════════════════════════
# Footnotes for Latin terms
# ═══════════════════════════════════════════

def _is_footnote_term(run: StyledRun, previous: StyledRun | None) -> bool:
    return (
        previous is not None
        and previous.script is Script.PERSIAN
        and run.script is Script.OTHER
        and not (run.superscript or run.subscript)
        and has_latin_letter(run.text)
    )


def _last_word(text: str) -> str:
    words = text.split()
    return words[-1] if words else ""


def _split_term(text: str) -> tuple[str, str, str]:
    """Split a Latin run into (leading punctuation, term, trailing rest)."""
    m = _TERM_RE.match(text)
    return m.group(1), m.group(2), m.group(3)


def attach_footnotes(
    paragraph: Paragraph,
    counter: Iterator[int],
) -> tuple[Paragraph, list[FootnoteEntry]]:
    """Add a footnote reference after each Latin term that follows Persian text.

    The Latin run is split into the term (with any leading punctuation), a
    reference run (empty text, superscript, carrying the footnote index) and
    whatever follows the term. Whitespace-only runs are skipped when looking
    for the Persian word before a term.
    """
    runs: list[StyledRun] = []
    entries: list[FootnoteEntry] = []
    previous: StyledRun | None = None

    for run in paragraph.runs:
        if not _is_footnote_term(run, previous):
            runs.append(run)
            if run.text.strip():
                previous = run
            continue

        leading, term, trailing = _split_term(run.text)
        index = next(counter)
        entries.append(FootnoteEntry(index, _last_word(previous.text), term))

        runs.append(replace(run, text=leading + term))
        runs.append(replace(run, text="", superscript=True, subscript=False, footnote=index))
        if trailing:
            runs.append(replace(run, text=trailing))
        previous = run

    if not entries:
        return paragraph, entries
    return replace(paragraph, runs=tuple(runs)), entries


# ═══════════════════════════════════════════
# Conversion
# ═══════════════════════════════════════════

def split_lines(raw_text: str) -> list[str]:
    return raw_text.split("\n")


def convert(raw_text: str, options: ConversionOptions | None = None) -> Document:
    """Convert raw text into a document. Any string is accepted."""
    if raw_text is None:
        raise MissingInputError("No text supplied for conversion")
    options = options or ConversionOptions()

    if not raw_text.strip():
        return EMPTY_DOCUMENT

    counter = itertools.count(1)
    paragraphs: list[Paragraph] = []
    footnotes: list[FootnoteEntry] = []

    for line in split_lines(raw_text):
        paragraph = classify_line(line, options.direction_table, options.formula_check)
        if options.footnotes and paragraph.kind is ParagraphKind.BODY:
            paragraph, entries = attach_footnotes(paragraph, counter)
            footnotes.extend(entries)
        paragraphs.append(paragraph)

    log.debug("Converted %d paragraphs, %d footnotes", len(paragraphs), len(footnotes))
    return Document(paragraphs=tuple(paragraphs), footnotes=tuple(footnotes))
