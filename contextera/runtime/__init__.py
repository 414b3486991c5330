"""Runtime orchestration: the background indexer and persisted preferences."""

from __future__ import annotations

from .indexer import IndexState, Indexer, StateListener, describe_error

__all__ = [
    "IndexState",
    "Indexer",
    "StateListener",
    "describe_error",
]
