"""Filesystem scanning into flat entry lists.

The scanner walks every descendant of a root folder and reports folders and
regular files. The root itself is not part of the result; callers add it.
Symlinks are never followed and are not reported, and bundle-style
directories are descended into like any other folder.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from ..gitignore import IgnoredPaths, load_ignored_paths
from .types import Entry, EntryKind, ScanError

LOGGER = logging.getLogger(__name__)


class Scanner(Protocol):
    """Callable that turns a root folder into entries or raises."""

    def __call__(self, root: Path) -> list[Entry]: ...


def safe_modified_at(stat_result: os.stat_result) -> datetime | None:
    """Return ``st_mtime`` as an aware UTC datetime, ``None`` when unusable."""
    try:
        return datetime.fromtimestamp(stat_result.st_mtime, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def entry_from_dir_entry(child: os.DirEntry[str]) -> Entry | None:
    """Classify one directory child and read its metadata.

    Returns ``None`` for anything that is not a folder or a regular file, and
    for children whose kind cannot be determined at all.
    """
    try:
        is_dir = child.is_dir(follow_symlinks=False)
        is_file = not is_dir and child.is_file(follow_symlinks=False)
    except OSError:
        return None
    if not (is_dir or is_file):
        return None

    modified_at: datetime | None = None
    size_bytes: int | None = None
    try:
        stat = child.stat(follow_symlinks=False)
    except OSError:
        stat = None
    if stat is not None:
        modified_at = safe_modified_at(stat)
        if is_file:
            size_bytes = int(stat.st_size)

    return Entry.for_path(
        Path(child.path),
        EntryKind.FOLDER if is_dir else EntryKind.FILE,
        modified_at=modified_at,
        size_bytes=size_bytes,
    )


def _open_root(root: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(root) as entries:
            return list(entries)
    except OSError as exc:
        raise ScanError(root, exc.strerror or str(exc)) from exc


def _list_children(directory: Path) -> list[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as entries:
            return list(entries)
    except OSError as exc:
        LOGGER.debug("skipping unreadable folder %s: %s", directory, exc)
        return []


def scan(
    root: Path,
    *,
    show_hidden: bool = True,
    skip_gitignored: bool = False,
) -> list[Entry]:
    """Return every folder and regular file below ``root``.

    Raises ``ScanError`` when ``root`` cannot be enumerated. Subfolders that
    cannot be read are still reported but contribute no children. Ignore
    rules are matched on each child's path relative to ``root``.
    """
    root = Path(root)
    top_level = _open_root(root)
    ignored: IgnoredPaths | None = load_ignored_paths(root) if skip_gitignored else None

    results: list[Entry] = []
    stack: list[tuple[str, list[os.DirEntry[str]]]] = [("", top_level)]
    while stack:
        prefix, children = stack.pop()
        for child in children:
            if not show_hidden and child.name.startswith("."):
                continue
            # Classify first: symlinks and special files are dropped here,
            # before any ignore lookup.
            entry = entry_from_dir_entry(child)
            if entry is None:
                continue
            relative_path = prefix + child.name
            if ignored is not None and ignored.is_ignored(relative_path):
                continue
            results.append(entry)
            if entry.is_folder:
                stack.append((relative_path + "/", _list_children(entry.location)))

    LOGGER.debug("scanned %s: %d entries", root, len(results))
    return results


def make_scanner(*, show_hidden: bool = True, skip_gitignored: bool = False) -> Callable[[Path], list[Entry]]:
    """Bind scan options into a ``Scanner`` suitable for ``Indexer``."""

    def _scan(root: Path) -> list[Entry]:
        return scan(root, show_hidden=show_hidden, skip_gitignored=skip_gitignored)

    return _scan


__all__ = [
    "Scanner",
    "safe_modified_at",
    "entry_from_dir_entry",
    "scan",
    "make_scanner",
]
