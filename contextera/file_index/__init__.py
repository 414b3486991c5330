"""Domain model for flat folder indexes.

This package contains non-UI index primitives:
- entry datatypes and the scan error
- filesystem scanning into flat entry lists
- root synthesis and canonical ordering
"""

from __future__ import annotations

from .types import Entry, EntryKind, ScanError
from .scanner import Scanner, entry_from_dir_entry, make_scanner, safe_modified_at, scan
from .ordering import (
    ensure_root_entry,
    entry_sort_key,
    natural_sort_key,
    normalize_entries,
    root_entry_for,
    sort_entries,
)

__all__ = [
    "Entry",
    "EntryKind",
    "ScanError",
    "Scanner",
    "entry_from_dir_entry",
    "make_scanner",
    "safe_modified_at",
    "scan",
    "natural_sort_key",
    "root_entry_for",
    "ensure_root_entry",
    "entry_sort_key",
    "sort_entries",
    "normalize_entries",
]
