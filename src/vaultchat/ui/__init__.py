"""Terminal UI module for vaultchat.

Provides a Textual-based TUI: open notes on the left, chat on the right.

Module structure (Parnas principle - each module hides a design decision):
- config.py: Constants (log levels, messages, shortcut actions)
- formatting.py: Markdown rendering passed to widgets as a callable
- logs.py: Routing of logging records into the log panel
- widgets.py: Custom widgets (input history, messages, context chips, note tabs)
- screens.py: Modal dialogs (note picker)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (user interaction flow)
"""

from .app import VaultChatApp, run_tui
from .config import LogLevel
from .formatting import render_markdown
from .widgets import ChatHistoryWidget, ChatInputBar, ContextBar, DebugPanel, NotesPane

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ContextBar",
    "DebugPanel",
    "LogLevel",
    "NotesPane",
    "VaultChatApp",
    "render_markdown",
    "run_tui",
]
