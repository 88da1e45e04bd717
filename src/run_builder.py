"""Turn scanner tokens into a minimal sequence of styled runs.

The builder is a fold over the token stream. Its state (active script, bold
flag, pending literal buffer, runs emitted so far) lives in an immutable
:class:`BuilderState`; each token produces a new state. Nothing survives
between lines.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable

from document_model import DEFAULT_DIRECTION_TABLE, DirectionTable, StyledRun
from markup_scanner import BoldToggle, Literal, ScriptSpan, Token, scan_line
from script_classifier import Script, classify_char


@dataclass(frozen=True)
class BuilderState:
    active_script: Script | None = None
    bold: bool = False
    bold_locked: bool = False
    buffer: str = ""
    runs: tuple[StyledRun, ...] = ()


def _make_run(text: str, script: Script, bold: bool, table: DirectionTable, kind: str | None = None) -> StyledRun:
    profile = table.profile(script)
    return StyledRun(
        text=text,
        script=script,
        direction=profile.direction,
        mark=profile.mark,
        bold=bold,
        superscript=kind == "super",
        subscript=kind == "sub",
    )


def flush(state: BuilderState, table: DirectionTable) -> BuilderState:
    """Emit the pending buffer as a run tagged with the active script."""
    if not state.buffer:
        return state
    run = _make_run(state.buffer, state.active_script, state.bold, table)
    return replace(state, buffer="", runs=state.runs + (run,))


def _feed_literal(state: BuilderState, text: str, table: DirectionTable) -> BuilderState:
    active = state.active_script
    buffer = state.buffer
    runs = state.runs

    for ch in text:
        # Whitespace stays with whatever script is already running
        if active is not None and ch.isspace():
            script = active
        else:
            script = classify_char(ch)

        if script is not active:
            if buffer:
                runs += (_make_run(buffer, active, state.bold, table),)
            buffer = ""
            active = script
        buffer += ch

    return replace(state, active_script=active, buffer=buffer, runs=runs)


def step(state: BuilderState, token: Token, table: DirectionTable = DEFAULT_DIRECTION_TABLE) -> BuilderState:
    """Apply one token to the builder state."""
    if isinstance(token, Literal):
        return _feed_literal(state, token.text, table)

    if isinstance(token, BoldToggle):
        if state.bold_locked:
            return state
        state = flush(state, table)
        return replace(state, bold=not state.bold)

    if isinstance(token, ScriptSpan):
        state = flush(state, table)
        run = _make_run(token.text, classify_char(token.text[0]), state.bold, table, kind=token.kind)
        return replace(state, runs=state.runs + (run,))

    raise TypeError(f"Unknown token: {token!r}")


def build_runs(
    tokens: Iterable[Token],
    table: DirectionTable = DEFAULT_DIRECTION_TABLE,
    force_bold: bool = False,
) -> tuple[StyledRun, ...]:
    """Fold tokens into runs. ``force_bold`` locks bold on and ignores toggles."""
    initial = BuilderState(bold=force_bold, bold_locked=force_bold)
    final = reduce(lambda state, token: step(state, token, table), tokens, initial)
    return flush(final, table).runs


def runs_from_line(
    line: str,
    table: DirectionTable = DEFAULT_DIRECTION_TABLE,
    force_bold: bool = False,
) -> tuple[StyledRun, ...]:
    return build_runs(scan_line(line), table, force_bold=force_bold)
