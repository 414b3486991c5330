"""Plain-text presentation of published index snapshots."""

from __future__ import annotations

from .theme import DEFAULT_THEME, PLAIN_THEME, UITheme, theme_for
from .views import (
    AppView,
    format_byte_count,
    format_modified,
    format_size,
    render_state,
    render_status,
    render_table,
    render_tree,
)

__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "PLAIN_THEME",
    "theme_for",
    "AppView",
    "format_byte_count",
    "format_modified",
    "format_size",
    "render_state",
    "render_status",
    "render_table",
    "render_tree",
]
