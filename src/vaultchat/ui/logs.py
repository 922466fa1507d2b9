"""Routing of ``logging`` records into the TUI log panel."""

import logging
import threading
from typing import TYPE_CHECKING

from .config import LOG_MAX_MESSAGE_LENGTH
from .formatting import truncate

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import DebugPanel


class DebugPanelHandler(logging.Handler):
    """Logging handler that writes records to a :class:`DebugPanel`.

    The component label is the second part of the logger name
    (``vaultchat.chat.dispatcher`` -> ``CHAT``). Records emitted from worker
    threads are handed to the app thread.
    """

    def __init__(self, app: "App", panel: "DebugPanel", level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self._app = app
        self._panel = panel
        self._thread = threading.current_thread()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            parts = record.name.split(".")
            component = (parts[1] if len(parts) > 1 else parts[0]).upper()
            message = truncate(self.format(record), LOG_MAX_MESSAGE_LENGTH)
            if threading.current_thread() is self._thread:
                self._panel.add_entry(component, message, record.levelno)
            else:
                self._app.call_from_thread(self._panel.add_entry, component, message, record.levelno)
        except Exception:
            self.handleError(record)
