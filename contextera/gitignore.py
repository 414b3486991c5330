"""Git-ignore filtering for folder scans.

One ``git ls-files`` call run inside the scan root lists the ignored paths
relative to that root. The scanner then checks each child by the relative
path it already tracks, so no filesystem lookups happen per child.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

LOGGER = logging.getLogger(__name__)

IGNORED_LISTING_ARGS = ("ls-files", "-z", "--others", "--ignored", "--exclude-standard", "--directory")


@dataclass(frozen=True)
class IgnoredPaths:
    """Ignored paths under one scan root, as ``/``-separated relative strings.

    ``directories`` are whole ignored subtrees; git reports them once instead
    of listing their contents.
    """

    files: frozenset[str]
    directories: frozenset[str]

    def is_ignored(self, relative_path: str) -> bool:
        if relative_path in self.files or relative_path in self.directories:
            return True
        parts = relative_path.split("/")
        return any("/".join(parts[:depth]) in self.directories for depth in range(1, len(parts)))


def parse_ignored_listing(listing: bytes) -> IgnoredPaths:
    """Split NUL-separated ``git ls-files --directory`` output into files and folders."""
    files: set[str] = set()
    directories: set[str] = set()
    for raw in listing.split(b"\x00"):
        relative = raw.decode("utf-8", errors="surrogateescape")
        if not relative:
            continue
        if relative.endswith("/"):
            directories.add(relative.rstrip("/"))
        else:
            files.add(relative)
    return IgnoredPaths(files=frozenset(files), directories=frozenset(directories))


def load_ignored_paths(root: Path) -> IgnoredPaths | None:
    """Ask git which paths under ``root`` are ignored.

    Returns ``None`` when git is not installed, ``root`` is outside a work
    tree, or the command fails; callers then filter nothing.
    """
    if shutil.which("git") is None:
        LOGGER.debug("git not found; not filtering ignored paths")
        return None
    try:
        proc = subprocess.run(
            ["git", "-C", str(root), *IGNORED_LISTING_ARGS],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        LOGGER.debug("no ignore listing for %s: %s", root, exc)
        return None

    ignored = parse_ignored_listing(proc.stdout)
    LOGGER.debug(
        "%s: %d ignored files, %d ignored folders",
        root,
        len(ignored.files),
        len(ignored.directories),
    )
    return ignored


__all__ = [
    "IgnoredPaths",
    "parse_ignored_listing",
    "load_ignored_paths",
]
