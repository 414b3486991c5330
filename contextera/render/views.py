"""Text renderings of a published index: table rows, tree rows, status line."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from ..file_index import Entry, EntryKind
from ..runtime import IndexState
from .theme import DEFAULT_THEME, UITheme

MISSING_VALUE = "-"
TABLE_COLUMNS = ("Type", "Name", "Modified", "Size", "Path")
_BYTE_UNITS = ("KB", "MB", "GB", "TB", "PB")


class AppView(str, Enum):
    """Presentation modes for the entry list."""

    TABLE = "table"
    TREE = "tree"

    @classmethod
    def from_name(cls, name: str) -> AppView:
        return cls(name.strip().lower())


def format_byte_count(size_bytes: int) -> str:
    """Format a byte count with decimal units, e.g. ``12.3 KB``."""
    if size_bytes == 1:
        return "1 byte"
    if abs(size_bytes) < 1000:
        return f"{size_bytes} bytes"
    value = float(size_bytes)
    for unit in _BYTE_UNITS:
        value /= 1000.0
        if abs(value) < 999.95 or unit == _BYTE_UNITS[-1]:
            return f"{value:.1f} {unit}"
    raise AssertionError("unreachable")


def format_modified(modified_at: datetime | None) -> str:
    """Render a modification time in local time, ``-`` when unknown."""
    if modified_at is None:
        return MISSING_VALUE
    return modified_at.astimezone().strftime("%Y-%m-%d %H:%M")


def format_size(entry: Entry) -> str:
    """Sizes are only shown for files."""
    if entry.kind is not EntryKind.FILE or entry.size_bytes is None:
        return MISSING_VALUE
    return format_byte_count(entry.size_bytes)


def table_cells(entry: Entry) -> tuple[str, str, str, str, str]:
    kind = "dir" if entry.is_folder else "file"
    return (kind, entry.name, format_modified(entry.modified_at), format_size(entry), entry.path)


def render_table(entries: tuple[Entry, ...] | list[Entry], theme: UITheme | None = None) -> list[str]:
    """Render a header row plus one aligned row per entry.

    Column widths are computed on plain text so color codes never shift
    alignment. The trailing path column is not padded.
    """
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    rows = [table_cells(entry) for entry in entries]
    widths = [len(title) for title in TABLE_COLUMNS]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))

    def join(cells: tuple[str, ...], colors: tuple[str, ...]) -> str:
        parts: list[str] = []
        last = len(cells) - 1
        for idx, (cell, color) in enumerate(zip(cells, colors)):
            padded = cell if idx == last else cell.ljust(widths[idx])
            parts.append(f"{color}{padded}{reset}" if color else padded)
        return "  ".join(parts).rstrip()

    header_colors = (active_theme.header,) * len(TABLE_COLUMNS)
    out = [join(TABLE_COLUMNS, header_colors)]
    for entry, row in zip(entries, rows):
        name_color = active_theme.folder if entry.is_folder else active_theme.file
        size_color = active_theme.dim if row[3] == MISSING_VALUE else active_theme.size
        modified_color = active_theme.dim if row[2] == MISSING_VALUE else ""
        out.append(join(row, ("", name_color, modified_color, size_color, active_theme.dim)))
    return out


def _tree_children(entries: tuple[Entry, ...] | list[Entry], root_path: str) -> dict[str, list[Entry]]:
    """Group entries by parent path; entries with no indexed parent hang off root."""
    known = {entry.path for entry in entries}
    children: dict[str, list[Entry]] = {}
    for entry in entries:
        if entry.path == root_path:
            continue
        parent = str(Path(entry.path).parent)
        if parent not in known:
            parent = root_path
        children.setdefault(parent, []).append(entry)
    return children


def render_tree(
    entries: tuple[Entry, ...] | list[Entry],
    root: Path,
    theme: UITheme | None = None,
) -> list[str]:
    """Render entries as an indented outline under ``root``.

    Sibling order is taken from ``entries``, which already lists folders
    before files in natural order.
    """
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    root_path = str(root)
    by_parent = _tree_children(entries, root_path)
    root_entry = next((entry for entry in entries if entry.path == root_path), None)
    if root_entry is None:
        return []

    out: list[str] = []
    stack: list[tuple[Entry, int]] = [(root_entry, 0)]
    while stack:
        entry, depth = stack.pop()
        indent = "  " * depth
        if entry.is_folder:
            label = f"{active_theme.folder}{entry.name}/{reset}"
        else:
            label = f"{active_theme.file}{entry.name}{reset}"
            if entry.size_bytes is not None:
                label += f" {active_theme.size}[{format_byte_count(entry.size_bytes)}]{reset}"
        out.append(f"{indent}{label}")
        for child in reversed(by_parent.get(entry.path, [])):
            stack.append((child, depth + 1))
    return out


def render_status(state: IndexState, theme: UITheme | None = None) -> str:
    """Summarize the busy flag, error, or entry count for one snapshot."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    if state.root is None:
        return f"{active_theme.dim}No folder selected{reset}"
    if state.is_indexing:
        return f"{active_theme.busy}Indexing {state.root}...{reset}"
    if state.last_error is not None:
        return f"{active_theme.error}{state.last_error}{reset}"
    count = len(state.entries)
    noun = "entry" if count == 1 else "entries"
    return f"{active_theme.dim}{state.root}: {count} {noun}{reset}"


def render_state(state: IndexState, view: AppView, theme: UITheme | None = None) -> list[str]:
    """Render the status line followed by the selected view."""
    lines = [render_status(state, theme)]
    if state.root is None or not state.entries:
        return lines
    if view is AppView.TREE:
        lines.extend(render_tree(state.entries, state.root, theme))
    else:
        lines.extend(render_table(state.entries, theme))
    return lines


__all__ = [
    "AppView",
    "MISSING_VALUE",
    "TABLE_COLUMNS",
    "format_byte_count",
    "format_modified",
    "format_size",
    "table_cells",
    "render_table",
    "render_tree",
    "render_status",
    "render_state",
]
