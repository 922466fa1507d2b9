"""Selection of context files attached to the next message.

The selection is derived from two inputs:
- automatically tracked notes (the active note, or every open note when
  "include all open files" is on)
- notes the user added or removed by hand

:func:`reconcile` is the pure merge rule; :class:`ContextSelector` keeps the
state between workspace changes.
"""

import logging
from collections.abc import Iterable

from ..settings import SettingsStore
from ..vault import VaultFile
from .workspace import Workspace

logger = logging.getLogger(__name__)

CONTEXT_EXTENSIONS = {"md"}


def reconcile(
    auto_files: Iterable[VaultFile],
    manual_files: Iterable[VaultFile],
    previous: Iterable[VaultFile],
    open_paths: Iterable[str] | None = None,
) -> list[VaultFile]:
    """Merge auto-tracked and manual files into a new selection.

    Previous entries survive if they were added by hand, are auto-tracked now,
    or are still open. Auto-tracked entries whose documents were closed are
    dropped. The result holds each path once, in first-seen order; for a
    path present in several inputs the auto-tracked file wins.

    Args:
        auto_files: Files tracked from the workspace right now
        manual_files: Files the user attached by hand
        previous: The current selection
        open_paths: Paths of all open documents (defaults to the auto paths)

    Returns:
        The new selection
    """
    auto = {f.path: f for f in auto_files}
    manual = {f.path: f for f in manual_files}
    still_open = set(open_paths) if open_paths is not None else set(auto)

    merged: dict[str, VaultFile] = {}
    for file in previous:
        if file.path in manual or file.path in auto or file.path in still_open:
            merged.setdefault(file.path, file)

    for path, file in auto.items():
        merged[path] = file

    for path, file in manual.items():
        merged.setdefault(path, file)

    return list(merged.values())


class ContextSelector:
    """Tracks the files attached as context for the next message."""

    def __init__(self, settings_store: SettingsStore):
        self._settings_store = settings_store
        self._selected: list[VaultFile] = []
        self._manual: dict[str, VaultFile] = {}

    @property
    def selected(self) -> list[VaultFile]:
        """Selected files in insertion order."""
        return list(self._selected)

    @property
    def selected_paths(self) -> list[str]:
        return [f.path for f in self._selected]

    def is_trackable(self, file: VaultFile) -> bool:
        """Markdown notes outside the conversation folder can be auto-tracked."""
        folder = self._settings_store.settings.conversation_folder.strip("/")
        return (
            file.extension in CONTEXT_EXTENSIONS
            and not file.path.startswith(f"{folder}/")
        )

    def on_workspace_change(self, workspace: Workspace) -> list[VaultFile]:
        """Recompute the selection after the open documents changed."""
        open_docs = workspace.open_documents
        if self._settings_store.settings.include_all_open_files:
            candidates = open_docs
        else:
            active = workspace.active_document
            candidates = [active] if active is not None else []

        auto_files = [f for f in candidates if self.is_trackable(f)]
        self._selected = reconcile(
            auto_files,
            self._manual.values(),
            self._selected,
            open_paths=[f.path for f in open_docs],
        )
        logger.debug("Context selection: %s", self.selected_paths)
        return self.selected

    def add_manual(self, file: VaultFile) -> None:
        """Attach a file by hand (idempotent by path)."""
        self._manual[file.path] = file
        if file.path not in self.selected_paths:
            self._selected.append(file)

    def remove(self, file: VaultFile | str) -> None:
        """Detach a file by path, whatever added it."""
        path = file if isinstance(file, str) else file.path
        self._manual.pop(path, None)
        self._selected = [f for f in self._selected if f.path != path]

    def clear(self) -> None:
        """Detach everything (after a message was sent)."""
        self._manual.clear()
        self._selected = []
