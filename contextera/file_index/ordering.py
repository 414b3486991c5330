"""Root-entry synthesis and the canonical display order for entries."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from .types import Entry, EntryKind

_TOKEN_RE = re.compile(r"\d+|.", re.DOTALL)

_PUNCTUATION_RANK = 0
_NUMBER_RANK = 1
_LETTER_RANK = 2


def natural_sort_key(text: str) -> tuple[tuple[int, int, str], ...]:
    """Return a case-insensitive key in file-listing order.

    Runs of digits compare by numeric value, and separators and punctuation
    sort before numbers, which sort before letters, so ``a/b`` comes before
    ``a1`` and ``file.txt`` before ``file1.txt``. Numbers that tie by value
    (``"007"`` vs ``"7"``) fall back to their digit string.

    Case folding uses ``str.casefold`` and letters compare by code point, so
    the order does not follow the collation rules of the current locale.
    """
    key: list[tuple[int, int, str]] = []
    for token in _TOKEN_RE.findall(text.casefold()):
        if token.isdecimal():
            key.append((_NUMBER_RANK, int(token), token))
        elif token.isalpha():
            key.append((_LETTER_RANK, 0, token))
        else:
            key.append((_PUNCTUATION_RANK, 0, token))
    return tuple(key)


def root_entry_for(root: Path) -> Entry:
    """Synthesize the folder entry standing for ``root`` itself."""
    return Entry.for_path(Path(root), EntryKind.FOLDER)


def ensure_root_entry(entries: Iterable[Entry], root: Path) -> list[Entry]:
    """Return ``entries`` with exactly one entry per path, root included.

    The first entry seen for a path wins. A synthesized root folder is
    prepended when no entry carries the root path.
    """
    root_path = str(root)
    seen: set[str] = set()
    out: list[Entry] = []
    for entry in entries:
        if entry.path in seen:
            continue
        seen.add(entry.path)
        out.append(entry)
    if root_path not in seen:
        out.insert(0, root_entry_for(root))
    return out


def entry_sort_key(entry: Entry, root_path: str) -> tuple[object, ...]:
    """Sort key: root first, folders before files, natural path order."""
    if entry.path == root_path:
        return (0,)
    kind_rank = 0 if entry.kind is EntryKind.FOLDER else 1
    return (1, kind_rank, natural_sort_key(entry.path), entry.path)


def sort_entries(entries: Iterable[Entry], root: Path) -> list[Entry]:
    """Return ``entries`` in canonical display order for ``root``."""
    root_path = str(root)
    return sorted(entries, key=lambda entry: entry_sort_key(entry, root_path))


def normalize_entries(entries: Iterable[Entry], root: Path) -> list[Entry]:
    """Add the root entry if missing and apply the canonical order."""
    return sort_entries(ensure_root_entry(entries, root), root)


__all__ = [
    "natural_sort_key",
    "root_entry_for",
    "ensure_root_entry",
    "entry_sort_key",
    "sort_entries",
    "normalize_entries",
]
