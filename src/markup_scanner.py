"""Tokenize one line of lightweight inline markup.

Recognised markup:
  - ``**`` (two or more stars) toggles bold; a lone ``*`` is literal
  - ``^x`` / ``_x`` superscript / subscript of one character
  - ``^{...}`` / ``_{...}`` superscript / subscript of a braced operand;
    a missing ``}`` closes at end of line

The scanner is total: malformed markup degrades to literal text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


BOLD_CHAR = "*"
SPAN_KINDS = {"^": "super", "_": "sub"}


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class BoldToggle:
    pass


@dataclass(frozen=True)
class ScriptSpan:
    text: str
    kind: str  # 'super' or 'sub'


Token = Union[Literal, BoldToggle, ScriptSpan]


def _read_operand(line: str, i: int) -> tuple[str, int]:
    """Read a span operand starting at ``line[i]``; return (text, next index)."""
    if line[i] == "{":
        close = line.find("}", i + 1)
        if close == -1:
            return line[i + 1:], len(line)
        return line[i + 1:close], close + 1
    return line[i], i + 1


def scan_line(line: str) -> list[Token]:
    """Split a line into literal, bold-toggle and scripted-span tokens."""
    tokens: list[Token] = []
    buffer: list[str] = []

    def flush() -> None:
        if buffer:
            tokens.append(Literal("".join(buffer)))
            buffer.clear()

    i = 0
    n = len(line)
    while i < n:
        ch = line[i]

        if ch == BOLD_CHAR:
            j = i
            while j < n and line[j] == BOLD_CHAR:
                j += 1
            if j - i >= 2:
                flush()
                tokens.append(BoldToggle())
            else:
                buffer.append(ch)
            i = j
            continue

        if ch in SPAN_KINDS:
            if i + 1 >= n:
                # No operand left on the line
                buffer.append(ch)
                i += 1
                continue
            text, i = _read_operand(line, i + 1)
            if text:
                flush()
                tokens.append(ScriptSpan(text, SPAN_KINDS[ch]))
            continue

        buffer.append(ch)
        i += 1

    flush()
    return tokens
