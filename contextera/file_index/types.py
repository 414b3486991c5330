"""Domain datatypes for indexed filesystem entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path


class EntryKind(str, Enum):
    """Classification of one indexed filesystem object."""

    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True)
class Entry:
    """One discovered file or folder with the metadata observed at scan time.

    ``identity`` is the filesystem path, so it does not survive renames or
    moves.
    """

    identity: str
    location: Path
    kind: EntryKind
    name: str
    path: str
    modified_at: datetime | None = None
    size_bytes: int | None = None

    @property
    def is_folder(self) -> bool:
        return self.kind is EntryKind.FOLDER

    @classmethod
    def for_path(
        cls,
        location: Path,
        kind: EntryKind,
        *,
        modified_at: datetime | None = None,
        size_bytes: int | None = None,
    ) -> Entry:
        """Build an entry keyed by ``location``; folders never carry a size."""
        path = str(location)
        return cls(
            identity=path,
            location=location,
            kind=kind,
            name=location.name or path,
            path=path,
            modified_at=modified_at,
            size_bytes=None if kind is EntryKind.FOLDER else size_bytes,
        )


class ScanError(Exception):
    """Raised when the root folder itself cannot be enumerated."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read folder {path}: {reason}")


__all__ = [
    "EntryKind",
    "Entry",
    "ScanError",
]
