"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering
- Context file chips and search results
- Open-note tabs
- Log rendering and level filtering
"""

import logging
from datetime import datetime

from rich.console import Group
from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import (
    Button,
    Checkbox,
    Input,
    Markdown,
    OptionList,
    RichLog,
    Select,
    Static,
    TabbedContent,
    TabPane,
    TextArea,
)
from textual.widgets.option_list import Option

from ..conversations import ConversationRecord
from ..transcript import Message, Role
from ..vault import VaultFile
from .config import INPUT_HISTORY_MAX_SIZE, LOG_TIMESTAMP_FORMAT, LogLevel
from .formatting import Renderer, render_markdown

logger = logging.getLogger(__name__)


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:  # Up
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:  # Down
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        if self.disabled:
            return
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text.strip()
        if value:
            if not self._history or self._history[-1] != value:
                self._history.append(value)
                del self._history[:-INPUT_HISTORY_MAX_SIZE]
            self._history_index = -1
            text_area.text = ""
            self.post_message(self.Submitted(value))

    def set_busy(self, busy: bool) -> None:
        """Disable input while a message is being sent."""
        self.disabled = busy
        button = self.query_one("#send-btn", Button)
        button.label = "Sending..." if busy else "Send"

    def restore(self, value: str) -> None:
        """Put text back into the input (after a failed send)."""
        self.query_one("#chat-input", TextArea).text = value

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history; message content goes through an injected renderer."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "No conversation"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, render: Renderer = render_markdown, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._renderer = render
        self._messages: list[Message] = []

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def set_messages(self, messages: list[Message]) -> None:
        """Replace the displayed conversation."""
        self._messages = []
        self.remove_children()
        for msg in messages:
            self.add_message(msg.role, msg.content)

    def add_message(self, role: Role, content: str) -> None:
        """Append a message and scroll to it."""
        msg = Message(role=role, content=content)
        self._messages.append(msg)
        self._render_message(msg)
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def remove_last_message(self) -> None:
        """Drop the newest message (an optimistic user message after a failure)."""
        if not self._messages:
            return
        self._messages.pop()
        children = self.query(".chat-message")
        if children:
            children.last().remove()
        self.border_subtitle = f"{len(self._messages)} messages"

    def _render_message(self, msg: Message) -> None:
        if msg.role == Role.USER:
            header, css_class = "> You", "user-message"
        else:
            header, css_class = "< Claude", "assistant-message"

        try:
            body = self._renderer(msg.content)
        except Exception as e:
            logger.error("Error rendering message: %s", e)
            body = Text(msg.content)

        container = Vertical(classes=f"chat-message {css_class}")
        container.compose_add_child(Static(header, classes="message-header"))
        container.compose_add_child(Static(body, classes="message-content"))
        self.mount(container)


class ConversationBar(Horizontal):
    """Conversation picker plus the "include all open files" toggle."""

    class Switched(TextualMessage):
        """The user picked another conversation."""

        def __init__(self, path: str) -> None:
            super().__init__()
            self.path = path

    class IncludeAllToggled(TextualMessage):
        def __init__(self, value: bool) -> None:
            super().__init__()
            self.value = value

    def __init__(self, include_all: bool = False, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._include_all = include_all
        self._current: str | None = None

    def compose(self):
        yield Select([], prompt="Select a conversation...", id="conversation-select")
        yield Checkbox(
            "Include all open files as context",
            value=self._include_all,
            id="include-all-toggle",
        )

    def set_conversations(self, records: list[ConversationRecord], current: str | None) -> None:
        """Refresh the picker options and selection."""
        select = self.query_one("#conversation-select", Select)
        self._current = current
        select.set_options([(record.display_label(), record.path) for record in records])
        if current is not None and any(record.path == current for record in records):
            select.value = current
        else:
            select.clear()

    def on_select_changed(self, event: Select.Changed) -> None:
        event.stop()
        value = event.value
        if not isinstance(value, str) or value == self._current:
            return
        self._current = value
        self.post_message(self.Switched(value))

    def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        event.stop()
        self.post_message(self.IncludeAllToggled(event.value))


class ContextChip(Button):
    """A selected context file; pressing it detaches the file."""

    def __init__(self, file: VaultFile) -> None:
        label = f"{file.basename}  x"
        super().__init__(label, classes="context-chip")
        self.file = file
        self.tooltip = f"Remove {file.path} from context"


class ContextBar(Vertical):
    """Selected context files and the fuzzy search for adding more."""

    class SearchChanged(TextualMessage):
        def __init__(self, query: str) -> None:
            super().__init__()
            self.query = query

    class FileChosen(TextualMessage):
        def __init__(self, file: VaultFile) -> None:
            super().__init__()
            self.file = file

    class FileRemoved(TextualMessage):
        def __init__(self, file: VaultFile) -> None:
            super().__init__()
            self.file = file

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._results: dict[str, VaultFile] = {}

    def compose(self):
        yield Horizontal(id="selected-contexts")
        yield Input(placeholder="Search for context files...", id="context-search")
        yield OptionList(id="context-results")

    def on_mount(self) -> None:
        self.query_one("#context-results", OptionList).display = False

    def set_selected(self, files: list[VaultFile]) -> None:
        """Show one chip per selected file."""
        chips = self.query_one("#selected-contexts", Horizontal)
        chips.remove_children()
        chips.mount_all([ContextChip(file) for file in files])
        chips.display = bool(files)

    def set_results(self, results: list[tuple[VaultFile, object]]) -> None:
        """Show search results as (file, preview renderable) pairs."""
        option_list = self.query_one("#context-results", OptionList)
        option_list.clear_options()
        self._results = {}
        for idx, (file, preview) in enumerate(results):
            option_id = f"result-{idx}"
            self._results[option_id] = file
            prompt = Group(Text(file.path, style="bold"), preview)
            option_list.add_option(Option(prompt, id=option_id))
        option_list.display = bool(results)

    def clear_search(self) -> None:
        self.query_one("#context-search", Input).value = ""
        self.set_results([])

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "context-search":
            event.stop()
            self.post_message(self.SearchChanged(event.value))

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        file = self._results.get(event.option.id or "")
        if file is not None:
            self.post_message(self.FileChosen(file))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if isinstance(event.button, ContextChip):
            event.stop()
            self.post_message(self.FileRemoved(event.button.file))


class NotesPane(TabbedContent):
    """Tabs of open notes. The active tab is the workspace's active document."""

    BORDER_TITLE = "Notes"

    class NoteActivated(TextualMessage):
        def __init__(self, path: str) -> None:
            super().__init__()
            self.path = path

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._pane_ids: dict[str, str] = {}
        self._counter = 0

    def pane_id_for(self, path: str) -> str | None:
        return self._pane_ids.get(path)

    def path_for(self, pane_id: str) -> str | None:
        for path, candidate in self._pane_ids.items():
            if candidate == pane_id:
                return path
        return None

    async def open_note(self, file: VaultFile, content: str) -> None:
        """Show a note in a new tab, or focus its existing tab."""
        pane_id = self._pane_ids.get(file.path)
        if pane_id is None:
            self._counter += 1
            pane_id = f"note-{self._counter}"
            self._pane_ids[file.path] = pane_id
            pane = TabPane(file.basename, VerticalScroll(Markdown(content)), id=pane_id)
            await self.add_pane(pane)
        self.active = pane_id

    async def close_note(self, path: str) -> None:
        pane_id = self._pane_ids.pop(path, None)
        if pane_id is not None:
            await self.remove_pane(pane_id)

    def on_tabbed_content_tab_activated(self, event: TabbedContent.TabActivated) -> None:
        if event.tabbed_content is not self:
            return
        path = self.path_for(event.pane.id or "")
        if path is not None:
            self.post_message(self.NoteActivated(path))


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log records from all components.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    def __init__(self, *args, log_level: int = LogLevel.INFO, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def add_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (UI, CHAT, LLM, VAULT, ...)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        level_name = LogLevel.name(level)
        level_color = level_colors.get(LogLevel.from_string(level_name), "white")

        component_colors = {
            "UI": "cyan",
            "CHAT": "green",
            "LLM": "magenta",
            "VAULT": "blue",
            "CONTEXT": "bright_yellow",
            "CONVERSATIONS": "bright_green",
            "SETTINGS": "bright_cyan",
        }
        comp_color = component_colors.get(component, "white")

        line = Text.assemble(
            (timestamp, "dim"),
            " ",
            (f"{level_name:<7}", level_color),
            " ",
            (f"[{component}]", comp_color),
            " ",
            message,
        )
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True

    def on_click(self, event: Click) -> None:
        """Copy log content to clipboard when clicked."""
        event.stop()
        text = "\n".join(line.text for line in self.lines)
        if not text.strip():
            self.app.notify("Log is empty", timeout=2)
            return
        self.app.copy_to_clipboard(text)
        self.app.notify("Log copied", timeout=2)
