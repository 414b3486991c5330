"""ANSI palettes used by the text views."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    header: str
    folder: str
    file: str
    dim: str
    size: str
    error: str
    busy: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    header="\033[1;38;5;81m",
    folder="\033[1;34m",
    file="\033[38;5;252m",
    dim="\033[2;38;5;250m",
    size="\033[38;5;109m",
    error="\033[1;31m",
    busy="\033[38;5;214m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    header="",
    folder="",
    file="",
    dim="",
    size="",
    error="",
    busy="",
)


def theme_for(no_color: bool) -> UITheme:
    return PLAIN_THEME if no_color else DEFAULT_THEME


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "theme_for",
]
