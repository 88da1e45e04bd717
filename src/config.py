"""Runtime configuration read from the environment / .env file."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


# ═══════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════

load_dotenv()

DEFAULT_PERSIAN_FONT = "B Nazanin"
DEFAULT_LATIN_FONT = "Times New Roman"
DEFAULT_MATH_FONT = "Cambria Math"
DEFAULT_FONT_SIZE_PT = 14.0  # 28 half-points
DEFAULT_FETCH_TIMEOUT_S = 60.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class RenderSettings:
    persian_font: str = DEFAULT_PERSIAN_FONT
    latin_font: str = DEFAULT_LATIN_FONT
    math_font: str = DEFAULT_MATH_FONT
    font_size_pt: float = DEFAULT_FONT_SIZE_PT


def load_render_settings() -> RenderSettings:
    """Build renderer defaults, letting the environment override fonts and size."""
    return RenderSettings(
        persian_font=os.getenv("PERSIAN_FONT", "").strip() or DEFAULT_PERSIAN_FONT,
        latin_font=os.getenv("LATIN_FONT", "").strip() or DEFAULT_LATIN_FONT,
        math_font=os.getenv("MATH_FONT", "").strip() or DEFAULT_MATH_FONT,
        font_size_pt=_env_float("FONT_SIZE_PT", DEFAULT_FONT_SIZE_PT),
    )


def fetch_timeout() -> float:
    return _env_float("FETCH_TIMEOUT_S", DEFAULT_FETCH_TIMEOUT_S)


def footnotes_enabled() -> bool:
    return _env_flag("FOOTNOTES")


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "WARNING").strip().upper() or "WARNING"
