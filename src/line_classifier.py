"""Decide what kind of paragraph a single input line becomes.

Priority on the trimmed line: blank, ``$$`` math block, ``#`` heading,
body. Body and heading paragraphs take their base direction from a
Persian-vs-Latin character count over the whole line.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from document_model import (
    DEFAULT_DIRECTION_TABLE,
    MAX_HEADING_LEVEL,
    Alignment,
    Direction,
    DirectionTable,
    Paragraph,
    ParagraphKind,
    StyledRun,
)
from run_builder import runs_from_line
from script_classifier import Script, is_rtl_text

log = logging.getLogger(__name__)


MATH_DELIMITER = "$$"
HEADING_RE = re.compile(r"^(#+)\s*(.*?)\s*#*$")
# "جدول 3 -" / "شکل ۲ -" captions are centred
CAPTION_RE = re.compile(r"^(?:جدول|شکل)\s+[0-9۰-۹]+\s*-")

_BRACKETS = {")": "(", "]": "[", "}": "{"}


class FormulaError(ValueError):
    """Raised when a math block cannot be used as a formula."""
    pass


FormulaCheck = Callable[[str], None]


# ═══════════════════════════════════════════
# Math formulas
# ═══════════════════════════════════════════

def check_formula(formula: str) -> None:
    """Reject empty formulas and unbalanced brackets."""
    if not formula:
        raise FormulaError("Empty formula")
    stack: list[str] = []
    for pos, ch in enumerate(formula):
        if ch in "([{":
            stack.append(ch)
        elif ch in _BRACKETS:
            if not stack or stack.pop() != _BRACKETS[ch]:
                raise FormulaError(f"Unbalanced '{ch}' at position {pos} in {formula!r}")
    if stack:
        raise FormulaError(f"Unclosed '{stack[-1]}' in {formula!r}")


def extract_formula(line: str) -> str:
    """Strip the ``$$`` opener (and an optional ``$$`` closer) from a math line."""
    formula = line[len(MATH_DELIMITER):].strip()
    if formula.endswith(MATH_DELIMITER):
        formula = formula[:-len(MATH_DELIMITER)].rstrip()
    return formula


def math_paragraph(formula: str, table: DirectionTable) -> Paragraph:
    profile = table.profile(Script.OTHER)
    run = StyledRun(text=formula, script=Script.OTHER, direction=profile.direction, mark=profile.mark)
    return Paragraph(
        kind=ParagraphKind.MATH,
        runs=(run,),
        alignment=Alignment.CENTER,
        base_direction=Direction.LTR,
        formula=formula,
    )


# ═══════════════════════════════════════════
# Headings & body
# ═══════════════════════════════════════════

def heading_level(marker: str) -> int:
    return min(len(marker), MAX_HEADING_LEVEL)


def is_caption(line: str) -> bool:
    return CAPTION_RE.match(line) is not None


def _direction_layout(text: str) -> dict:
    if is_rtl_text(text):
        return {"alignment": Alignment.JUSTIFIED, "base_direction": Direction.RTL, "first_line_indent": True}
    return {"alignment": Alignment.LEFT, "base_direction": Direction.LTR, "first_line_indent": False}


def heading_paragraph(line: str, table: DirectionTable) -> Paragraph:
    m = HEADING_RE.match(line)
    level = heading_level(m.group(1))
    text = m.group(2)
    return Paragraph(
        kind=ParagraphKind.HEADING,
        runs=runs_from_line(text, table, force_bold=True),
        level=level,
        **_direction_layout(text),
    )


def body_paragraph(line: str, table: DirectionTable) -> Paragraph:
    layout = _direction_layout(line)
    if is_caption(line):
        layout["alignment"] = Alignment.CENTER
        layout["first_line_indent"] = False
    return Paragraph(kind=ParagraphKind.BODY, runs=runs_from_line(line, table), **layout)


BLANK_PARAGRAPH = Paragraph(kind=ParagraphKind.BLANK)


# ═══════════════════════════════════════════
# Dispatch
# ═══════════════════════════════════════════

def classify_line(
    raw_line: str,
    table: DirectionTable = DEFAULT_DIRECTION_TABLE,
    formula_check: FormulaCheck = check_formula,
) -> Paragraph:
    """Classify one raw input line and build its paragraph."""
    line = raw_line.strip()

    if not line:
        return BLANK_PARAGRAPH

    if line.startswith(MATH_DELIMITER):
        formula = extract_formula(line)
        try:
            formula_check(formula)
        except FormulaError as e:
            log.warning("Math block rendered as text: %s", e)
            if not formula:
                return BLANK_PARAGRAPH
            return body_paragraph(formula, table)
        return math_paragraph(formula, table)

    if line.startswith("#"):
        return heading_paragraph(line, table)

    return body_paragraph(line, table)
