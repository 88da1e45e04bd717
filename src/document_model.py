"""Abstract rich-text document produced by the converter.

A :class:`Document` is a sequence of :class:`Paragraph` objects, each made of
:class:`StyledRun` objects, plus the footnote entries collected while
scanning. Everything here is immutable; a renderer only ever reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from script_classifier import Script


# ═══════════════════════════════════════════
# Enumerations
# ═══════════════════════════════════════════

class Direction(Enum):
    RTL = "rtl"
    LTR = "ltr"


class Alignment(Enum):
    JUSTIFIED = "justified"
    LEFT = "left"
    CENTER = "center"


class ParagraphKind(Enum):
    BODY = "body"
    HEADING = "heading"
    MATH = "math"
    BLANK = "blank"


LRM = "\u200e"  # Left-to-right mark
RLM = "\u200f"  # Right-to-left mark

MAX_HEADING_LEVEL = 6


# ═══════════════════════════════════════════
# Direction table
# ═══════════════════════════════════════════

@dataclass(frozen=True)
class ScriptProfile:
    direction: Direction
    mark: str


@dataclass(frozen=True)
class DirectionTable:
    """Maps each script to the direction and mark its runs carry."""

    profiles: Mapping[Script, ScriptProfile]

    def __post_init__(self) -> None:
        missing = [s for s in Script if s not in self.profiles]
        if missing:
            raise ValueError(f"DirectionTable has no profile for: {missing}")
        object.__setattr__(self, "profiles", MappingProxyType(dict(self.profiles)))

    def profile(self, script: Script) -> ScriptProfile:
        return self.profiles[script]


DEFAULT_DIRECTION_TABLE = DirectionTable({
    Script.PERSIAN: ScriptProfile(Direction.RTL, RLM),
    Script.OTHER: ScriptProfile(Direction.LTR, LRM),
})


# ═══════════════════════════════════════════
# Runs, paragraphs, footnotes
# ═══════════════════════════════════════════

@dataclass(frozen=True)
class StyledRun:
    text: str
    script: Script
    direction: Direction
    mark: str = ""
    bold: bool = False
    superscript: bool = False
    subscript: bool = False
    footnote: int | None = None

    @property
    def marked_text(self) -> str:
        """Run text with its directional mark in front."""
        return self.mark + self.text

    @property
    def signature(self) -> tuple:
        return (self.script, self.bold, self.superscript, self.subscript)

    @property
    def is_footnote_ref(self) -> bool:
        return self.footnote is not None


@dataclass(frozen=True)
class Paragraph:
    kind: ParagraphKind
    runs: tuple[StyledRun, ...] = ()
    alignment: Alignment = Alignment.JUSTIFIED
    base_direction: Direction = Direction.RTL
    first_line_indent: bool = False
    level: int | None = None
    formula: str | None = None

    @property
    def text(self) -> str:
        """Concatenated run text, without directional marks."""
        return "".join(run.text for run in self.runs)

    @property
    def is_rtl(self) -> bool:
        return self.base_direction is Direction.RTL


@dataclass(frozen=True)
class FootnoteEntry:
    index: int
    source_term_persian: str
    source_term_latin: str

    @property
    def text(self) -> str:
        return f"{self.source_term_persian} = {self.source_term_latin}"


@dataclass(frozen=True)
class Document:
    paragraphs: tuple[Paragraph, ...] = ()
    footnotes: tuple[FootnoteEntry, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.paragraphs
