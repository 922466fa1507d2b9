"""Main Textual TUI application.

Orchestrates the UI components: open notes drive the context selection,
submitted messages go through the MessageDispatcher, and the conversation
picker switches the current transcript.
"""

import asyncio
import logging
from collections.abc import Sequence

from textual import work
from textual.app import App, ComposeResult, SystemCommand
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ..chat import MessageDispatcher
from ..context import ContextSelector, Workspace, load_preview
from ..conversations import ConversationError, ConversationStore
from ..llm import LLMProvider
from ..search import rank_candidates
from ..settings import SettingsStore, to_textual_keys
from ..transcript import Role
from ..vault import Vault, VaultError, VaultFile
from .config import (
    CONTEXT_PREVIEW_CHARS,
    NO_API_KEY_MESSAGE,
    SEND_FAILED_MESSAGE,
    SHORTCUT_ACTIONS,
    LogLevel,
)
from .formatting import Renderer, render_markdown
from .logs import DebugPanelHandler
from .screens import NotePickerScreen
from .styles import APP_CSS
from .themes import VAULT_NIGHT
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    ContextBar,
    ConversationBar,
    DebugPanel,
    NotesPane,
)

logger = logging.getLogger(__name__)


class VaultChatApp(App):
    """Textual TUI for chatting with Claude about vault notes."""

    CSS = APP_CSS
    TITLE = "VaultChat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "open_note", "Open Note"),
        Binding("ctrl+w", "close_note", "Close Note", priority=True),
        Binding("ctrl+d", "toggle_debug", "Debug", priority=True),
    ]

    def __init__(
        self,
        vault: Vault,
        settings_store: SettingsStore,
        llm: LLMProvider | None = None,
        render: Renderer = render_markdown,
        log_level: str | None = None,
        open_notes: Sequence[str] = (),
    ) -> None:
        super().__init__()
        self._vault = vault
        self._settings_store = settings_store
        self._renderer = render
        self._log_level = log_level
        self._initial_notes = list(open_notes)

        self._workspace = Workspace()
        self._selector = ContextSelector(settings_store)
        self._conversations = ConversationStore(vault, settings_store)
        self._dispatcher = (
            MessageDispatcher(vault, self._conversations, llm) if llm is not None else None
        )
        self._sending = False
        self._log_handler: DebugPanelHandler | None = None
        self._unsubscribe = None
        self._chat_hidden = False

    @property
    def workspace(self) -> Workspace:
        return self._workspace

    @property
    def selector(self) -> ContextSelector:
        return self._selector

    @property
    def is_sending(self) -> bool:
        return self._sending

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Horizontal(id="main"):
            yield NotesPane(id="notes")
            with Vertical(id="chat-pane"):
                yield ConversationBar(
                    include_all=self._settings_store.settings.include_all_open_files,
                    id="conversation-bar",
                )
                yield ChatHistoryWidget(render=self._renderer, id="chat-history")
                yield Static("", id="error-message", classes="-empty")
                yield ContextBar(id="context-bar")
                yield ChatInputBar(id="chat-input-bar")

        yield DebugPanel(id="debug-panel")
        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(VAULT_NIGHT)
        self.theme = "vault-night"

        self._attach_log_panel()
        self._bind_shortcuts()
        self.sub_title = f"{self._vault.backend_type} vault"

        try:
            await self._conversations.ensure_folder()
        except VaultError as e:
            logger.error("Error creating conversation folder: %s", e)

        await self._refresh_conversations()
        await self._load_current()
        self._unsubscribe = self._workspace.subscribe(self._on_workspace_changed)

        for path in self._initial_notes:
            file = await self._vault.get_file(path)
            if file is None:
                logger.warning("Note not found: %s", path)
                continue
            await self._open_note(file)

        if self._dispatcher is None:
            self._set_error(NO_API_KEY_MESSAGE)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach listeners and the log handler."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self._log_handler is not None:
            package_logger = logging.getLogger("vaultchat")
            package_logger.removeHandler(self._log_handler)
            package_logger.propagate = True
            self._log_handler = None

    def _attach_log_panel(self) -> None:
        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()

        self._log_handler = DebugPanelHandler(self, log_panel)
        package_logger = logging.getLogger("vaultchat")
        package_logger.addHandler(self._log_handler)
        package_logger.setLevel(logging.DEBUG)
        # Console handlers would draw over the TUI
        package_logger.propagate = False

        if self._log_level is not None:
            logger.info("Log panel enabled with level: %s", self._log_level.upper())

    def _bind_shortcuts(self) -> None:
        """Bind the named actions to the keys stored in the settings."""
        shortcuts = self._settings_store.settings.shortcuts
        for field, (action, description) in SHORTCUT_ACTIONS.items():
            try:
                keys = to_textual_keys(getattr(shortcuts, field))
            except ValueError as e:
                logger.warning("Ignoring shortcut for %s: %s", field, e)
                continue
            if keys:
                self.bind(keys, action, description=description, show=False)
                logger.debug("Bound %s to %s", keys, action)

    # ------------------------------------------------------------------
    # Command palette
    # ------------------------------------------------------------------

    def get_system_commands(self, screen: Screen):
        yield from super().get_system_commands(screen)
        yield SystemCommand("Open Chat", "Show the chat pane", self.action_open_interface)
        yield SystemCommand(
            "Open Last Conversation",
            "Reload the most recent conversation",
            self.action_open_last_conversation,
        )
        yield SystemCommand(
            "New Conversation", "Start a new conversation", self.action_new_conversation
        )
        if not self._chat_hidden:
            yield SystemCommand("Hide Chat", "Hide the chat pane", self.action_hide_interface)

    # ------------------------------------------------------------------
    # Named actions
    # ------------------------------------------------------------------

    def action_open_interface(self) -> None:
        """Show the chat pane."""
        self._chat_hidden = False
        self.query_one("#chat-pane", Vertical).remove_class("-hidden")
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def action_hide_interface(self) -> None:
        """Hide the chat pane."""
        self._chat_hidden = True
        self.query_one("#chat-pane", Vertical).add_class("-hidden")

    async def action_open_last_conversation(self) -> None:
        """Show the chat pane with the current conversation reloaded.

        Starts a new conversation when none is current.
        """
        if await self._conversations.current_path() is None:
            await self.action_new_conversation()
            return
        self.action_open_interface()
        await self._refresh_conversations()
        await self._load_current()

    async def action_new_conversation(self) -> None:
        """Create a conversation and make it current."""
        self.action_open_interface()
        try:
            record = await self._conversations.create_conversation()
        except ConversationError as e:
            logger.error("%s", e)
            self.notify("Failed to create conversation", severity="error", timeout=5)
            return
        self.query_one("#chat-history", ChatHistoryWidget).set_messages([])
        self._set_error(None)
        await self._refresh_conversations()
        self.notify(f"Started {record.name}", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    # ------------------------------------------------------------------
    # Notes
    # ------------------------------------------------------------------

    @work(exclusive=True, group="picker")
    async def action_open_note(self) -> None:
        """Pick a note with the fuzzy picker and open it."""
        try:
            files = [f for f in await self._vault.list_files() if f.extension == "md"]
        except VaultError as e:
            logger.error("Error listing notes: %s", e)
            self.notify("Cannot list notes", severity="error", timeout=5)
            return
        file = await self.push_screen_wait(NotePickerScreen(files))
        if file is not None:
            await self._open_note(file)

    async def action_close_note(self) -> None:
        """Close the active note."""
        active = self._workspace.active_document
        if active is None:
            self.notify("No note open", severity="warning", timeout=2)
            return
        await self.query_one("#notes", NotesPane).close_note(active.path)
        self._workspace.close(active.path)

    async def _open_note(self, file: VaultFile) -> None:
        try:
            content = await self._vault.read(file.path)
        except VaultError as e:
            logger.error("Error opening note %s: %s", file.path, e)
            self.notify(f"Cannot open {file.path}", severity="error", timeout=5)
            return
        await self.query_one("#notes", NotesPane).open_note(file, content)
        self._workspace.open(file)

    def on_notes_pane_note_activated(self, event: NotesPane.NoteActivated) -> None:
        if event.path in {f.path for f in self._workspace.open_documents}:
            active = self._workspace.active_document
            if active is None or active.path != event.path:
                self._workspace.activate(event.path)

    def _on_workspace_changed(self, workspace: Workspace) -> None:
        self._selector.on_workspace_change(workspace)
        self._show_selection()

    # ------------------------------------------------------------------
    # Conversations
    # ------------------------------------------------------------------

    async def _refresh_conversations(self) -> None:
        try:
            records = await self._conversations.list_conversations()
        except VaultError as e:
            logger.error("Error listing conversations: %s", e)
            records = []
        current = await self._conversations.current_path()
        self.query_one("#conversation-bar", ConversationBar).set_conversations(records, current)

    async def _load_current(self) -> None:
        messages = await self._conversations.load_current()
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.set_messages(messages)
        current = await self._conversations.current_path()
        chat.border_title = current or "Chat"

    async def on_conversation_bar_switched(self, event: ConversationBar.Switched) -> None:
        try:
            await self._conversations.switch_to(event.path)
        except ConversationError as e:
            logger.error("%s", e)
            self.notify("Failed to switch conversation", severity="error", timeout=5)
            return
        self._set_error(None)
        await self._load_current()

    def on_conversation_bar_include_all_toggled(
        self, event: ConversationBar.IncludeAllToggled
    ) -> None:
        try:
            self._settings_store.update(include_all_open_files=event.value)
        except RuntimeError as e:
            logger.error("%s", e)
            self.notify("Failed to save settings", severity="error", timeout=5)
        self._on_workspace_changed(self._workspace)

    # ------------------------------------------------------------------
    # Context selection
    # ------------------------------------------------------------------

    def _show_selection(self) -> None:
        self.query_one("#context-bar", ContextBar).set_selected(self._selector.selected)

    def on_context_bar_search_changed(self, event: ContextBar.SearchChanged) -> None:
        self._search_context(event.query)

    @work(exclusive=True, group="context-search")
    async def _search_context(self, query: str) -> None:
        context_bar = self.query_one("#context-bar", ContextBar)
        if not query.strip():
            context_bar.set_results([])
            return

        try:
            files = [f for f in await self._vault.list_files() if self._selector.is_trackable(f)]
        except VaultError as e:
            logger.error("Error searching notes: %s", e)
            context_bar.set_results([])
            return
        matches = rank_candidates(
            query,
            files,
            key=lambda f: f.path,
            exclude=self._selector.selected_paths,
        )
        previews = await asyncio.gather(
            *(load_preview(self._vault, f, max_chars=CONTEXT_PREVIEW_CHARS) for f in matches)
        )
        context_bar.set_results(list(zip(matches, previews)))

    def on_context_bar_file_chosen(self, event: ContextBar.FileChosen) -> None:
        self._selector.add_manual(event.file)
        self.query_one("#context-bar", ContextBar).clear_search()
        self._show_selection()

    def on_context_bar_file_removed(self, event: ContextBar.FileRemoved) -> None:
        self._selector.remove(event.file)
        self._show_selection()

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    def _set_error(self, message: str | None) -> None:
        error = self.query_one("#error-message", Static)
        error.update(message or "")
        error.set_class(not message, "-empty")

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        if self._sending:
            input_bar.restore(event.value)
            return
        if self._dispatcher is None:
            self._set_error(NO_API_KEY_MESSAGE)
            input_bar.restore(event.value)
            return

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.add_message(Role.USER, event.value)
        self._set_error(None)

        self._sending = True
        input_bar.set_busy(True)
        self._send_message(event.value, self._selector.selected)

    @work(exclusive=True, group="send")
    async def _send_message(self, user_text: str, context_files: list[VaultFile]) -> None:
        """Run the dispatcher as a background async worker."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        try:
            reply = await self._dispatcher.send(user_text, context_files)
        except Exception as e:
            logger.error("Error sending message: %s", e)
            chat.remove_last_message()
            self._set_error(SEND_FAILED_MESSAGE)
            input_bar.restore(user_text)
        else:
            chat.add_message(Role.ASSISTANT, reply)
            self._selector.clear()
            self._show_selection()
            await self._refresh_conversations()
            current = await self._conversations.current_path()
            chat.border_title = current or "Chat"
        finally:
            self._sending = False
            input_bar.set_busy(False)
            input_bar.focus_input()


async def run_tui(
    vault: Vault,
    settings_store: SettingsStore,
    llm: LLMProvider | None = None,
    log_level: str | None = None,
    open_notes: Sequence[str] = (),
) -> None:
    """Run the Textual TUI.

    Args:
        vault: Vault holding notes and conversations
        settings_store: Loaded settings for the vault
        llm: LLM provider instance, None when no API key is configured
        log_level: Log level for panel (debug/info/warning/error), None to hide
        open_notes: Vault paths of notes to open at startup
    """
    app = VaultChatApp(
        vault=vault,
        settings_store=settings_store,
        llm=llm,
        log_level=log_level,
        open_notes=open_notes,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        if llm is not None:
            await llm.close()
