"""Menu appearance and behaviour settings."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Scheme(enum.Enum):
    """Colour schemes used when drawing."""

    NORM = 0
    SEL = 1
    OUT = 2


def _default_colors() -> dict[Scheme, tuple[str, str]]:
    return {
        Scheme.NORM: ("#bbbbbb", "#222222"),
        Scheme.SEL: ("#eeeeee", "#005577"),
        Scheme.OUT: ("#000000", "#00ffff"),
    }


@dataclass
class Config:
    """Settings; each colour entry is a ``(foreground, background)`` pair."""

    topbar: bool = True
    fuzzy: bool = True
    fonts: list[str] = field(default_factory=lambda: ["monospace:size=10"])
    user_bh: int = 1
    prompt: str | None = None
    colors: dict[Scheme, tuple[str, str]] = field(default_factory=_default_colors)
    lines: int = 0
    word_delimiters: str = " "


def default_config() -> Config:
    """Return the settings the menu starts with before options apply."""
    return Config(
        topbar=True,
        fuzzy=True,
        fonts=["VictorMono Nerd Font Mono:size=13"],
        user_bh=5,
        prompt="Search...",
        lines=0,
        word_delimiters=" ",
    )