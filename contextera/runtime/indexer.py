"""Background folder indexer with atomically published state snapshots."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, replace
from pathlib import Path

from ..file_index import Entry, Scanner, make_scanner, normalize_entries

LOGGER = logging.getLogger(__name__)

StateListener = Callable[["IndexState"], None]


@dataclass(frozen=True)
class IndexState:
    """Immutable view of the index published after every transition."""

    root: Path | None = None
    entries: tuple[Entry, ...] = ()
    is_indexing: bool = False
    last_error: str | None = None
    selection: Path | None = None
    generation: int = 0


def describe_error(exc: BaseException) -> str:
    """Return a human-readable one-line description of ``exc``."""
    message = str(exc).strip()
    return message or exc.__class__.__name__


class Indexer:
    """Own the current root and its ordered entries.

    Scans run on one daemon worker thread at a time. Refresh requests made
    while a scan is running collapse into the newest pending request, and a
    scan whose request has been superseded is dropped without publishing.
    Every state change goes through ``_publish`` under one lock, so
    listeners observe transitions in order.
    """

    def __init__(
        self,
        scanner: Scanner | None = None,
        *,
        thread_name: str = "contextera-index",
    ) -> None:
        self._scanner = scanner if scanner is not None else make_scanner()
        self._thread_name = thread_name
        self._lock = threading.RLock()
        self._idle = threading.Condition(self._lock)
        self._state = IndexState()
        self._listeners: list[StateListener] = []
        self._waiters: list[Future[IndexState]] = []
        self._pending: tuple[int, Path] | None = None
        self._latest_request_id = 0
        self._running = False

    @property
    def state(self) -> IndexState:
        with self._lock:
            return self._state

    @property
    def root(self) -> Path | None:
        return self.state.root

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self.state.entries

    @property
    def is_indexing(self) -> bool:
        return self.state.is_indexing

    @property
    def last_error(self) -> str | None:
        return self.state.last_error

    @property
    def selection(self) -> Path | None:
        return self.state.selection

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for new snapshots and return an unsubscribe hook."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, **changes: object) -> None:
        """Swap in a new snapshot and notify listeners. Caller holds the lock."""
        updated = replace(self._state, **changes)
        if updated == self._state:
            return
        self._state = replace(updated, generation=self._state.generation + 1)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                LOGGER.exception("index state listener failed")

    def _take_waiters(self) -> list[Future[IndexState]]:
        waiters = self._waiters
        self._waiters = []
        return waiters

    @staticmethod
    def _resolve(waiters: list[Future[IndexState]], state: IndexState) -> None:
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(state)

    def set_root(self, location: Path | str | None) -> Future[IndexState] | None:
        """Replace root and selection, then refresh.

        Returns ``None`` without refreshing when ``location`` equals the
        current root.
        """
        new_root = Path(location) if location is not None else None
        with self._lock:
            if new_root == self._state.root:
                return None
            LOGGER.info("root changed to %s", new_root)
            if new_root is None:
                self._publish(root=None, selection=None, entries=(), is_indexing=False)
            else:
                # The new root must never be visible as idle next to the old entries.
                self._publish(root=new_root, selection=new_root, is_indexing=True, last_error=None)
            return self.refresh()

    def select(self, location: Path | str | None) -> None:
        """Update the selected entry reference without touching the index."""
        with self._lock:
            self._publish(selection=Path(location) if location is not None else None)

    def refresh(self) -> Future[IndexState]:
        """Start a refresh without blocking the caller.

        The returned future resolves with the snapshot published when the
        refresh cycle that served this request finished.
        """
        future: Future[IndexState] = Future()
        with self._lock:
            self._latest_request_id += 1
            root = self._state.root
            if root is None:
                # Nothing to scan: clear entries, keep any previous error.
                self._pending = None
                self._publish(entries=(), is_indexing=False)
                waiters = self._take_waiters()
                waiters.append(future)
                state = self._state
            else:
                self._publish(is_indexing=True, last_error=None)
                self._waiters.append(future)
                self._pending = (self._latest_request_id, root)
                if self._running:
                    return future
                self._running = True

        if root is None:
            self._resolve(waiters, state)
            return future

        worker = threading.Thread(target=self._worker, name=self._thread_name, daemon=True)
        worker.start()
        return future

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no scan is running or pending; ``False`` on timeout."""
        with self._idle:
            return self._idle.wait_for(lambda: not self._running, timeout=timeout)

    def _scan(self, root: Path) -> tuple[tuple[Entry, ...], str | None]:
        """Scan and order ``root``; any failure becomes an error description."""
        try:
            return tuple(normalize_entries(self._scanner(root), root)), None
        except Exception as exc:
            LOGGER.warning("indexing %s failed: %s", root, exc)
            return (), describe_error(exc)

    def _worker(self) -> None:
        """Run queued refreshes; the indexer is left idle however this exits."""
        try:
            self._drain_pending()
        except Exception as exc:
            LOGGER.exception("index worker stopped unexpectedly")
            self._abandon(describe_error(exc))

    def _drain_pending(self) -> None:
        """Drain pending refresh requests until none is left."""
        while True:
            with self._lock:
                request = self._pending
                self._pending = None
                if request is None:
                    self._running = False
                    self._idle.notify_all()
                    return

            request_id, root = request
            entries, error = self._scan(root)

            with self._lock:
                if request_id != self._latest_request_id:
                    LOGGER.debug("discarding superseded scan of %s", root)
                    continue
                if error is None:
                    self._publish(entries=entries)
                    LOGGER.info("indexed %s: %d entries", root, len(entries))
                else:
                    self._publish(entries=(), last_error=error)
                self._publish(is_indexing=False)
                waiters = self._take_waiters()
                state = self._state

            self._resolve(waiters, state)

    def _abandon(self, error: str) -> None:
        """Fail the in-flight refresh and release its waiters."""
        with self._lock:
            self._pending = None
            self._running = False
            if self._state.is_indexing:
                self._publish(entries=(), last_error=error)
                self._publish(is_indexing=False)
            waiters = self._take_waiters()
            state = self._state
            self._idle.notify_all()
        self._resolve(waiters, state)


__all__ = [
    "IndexState",
    "StateListener",
    "describe_error",
    "Indexer",
]
