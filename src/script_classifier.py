"""Classify characters as Persian (Arabic block) or other script.

The classification is a plain code-point range check. Digits, punctuation
and whitespace are all OTHER; callers that need whitespace to be neutral
handle that themselves.
"""

from __future__ import annotations

import re
from enum import Enum


class Script(Enum):
    PERSIAN = "fa"
    OTHER = "lat"


# Arabic, Arabic Supplement, Presentation Forms-A and -B
PERSIAN_RANGES = (
    (0x0600, 0x06FF),
    (0x0750, 0x077F),
    (0xFB50, 0xFDFF),
    (0xFE70, 0xFEFF),
)

_LATIN_RE = re.compile(r"[A-Za-z0-9]")


def classify_char(ch: str) -> Script:
    """Return the script of a single character."""
    code = ord(ch)
    for low, high in PERSIAN_RANGES:
        if low <= code <= high:
            return Script.PERSIAN
    return Script.OTHER


def count_persian(text: str) -> int:
    return sum(1 for ch in text if classify_char(ch) is Script.PERSIAN)


def count_latin(text: str) -> int:
    return len(_LATIN_RE.findall(text))


def is_rtl_text(text: str) -> bool:
    """Majority vote for the paragraph base direction (ties go to RTL)."""
    return count_persian(text) >= count_latin(text)


def has_latin_letter(text: str) -> bool:
    return any("A" <= ch <= "Z" or "a" <= ch <= "z" for ch in text)
