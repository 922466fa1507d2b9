"""Open-document tracking.

Stands in for the note app's workspace: which notes are open, and which one
is active. Listeners are notified after every change.
"""

import logging
from collections.abc import Callable

from ..vault import VaultFile

logger = logging.getLogger(__name__)

WorkspaceListener = Callable[["Workspace"], None]


class Workspace:
    """Ordered set of open documents with at most one active document."""

    def __init__(self) -> None:
        self._open: dict[str, VaultFile] = {}
        self._active: str | None = None
        self._listeners: list[WorkspaceListener] = []

    @property
    def open_documents(self) -> list[VaultFile]:
        """Open documents in the order they were opened."""
        return list(self._open.values())

    @property
    def active_document(self) -> VaultFile | None:
        if self._active is None:
            return None
        return self._open.get(self._active)

    def subscribe(self, listener: WorkspaceListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def open(self, file: VaultFile, activate: bool = True) -> None:
        """Open a document (no-op if already open) and optionally activate it."""
        self._open.setdefault(file.path, file)
        if activate:
            self._active = file.path
        self._notify()

    def close(self, path: str) -> None:
        """Close a document; the last remaining one becomes active."""
        if path not in self._open:
            return
        del self._open[path]
        if self._active == path:
            self._active = next(reversed(self._open), None)
        self._notify()

    def activate(self, path: str | None) -> None:
        """Make an open document active, or clear the active document."""
        if path is not None and path not in self._open:
            raise KeyError(f"Document is not open: {path}")
        self._active = path
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
