"""Modal screens for the TUI.

This module hides the design decisions about:
- How a note is picked for opening (fuzzy search over vault paths)
- Keyboard shortcuts for dialogs
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, OptionList, Static
from textual.widgets.option_list import Option

from ..search import rank_candidates
from ..vault import VaultFile

PICKER_MAX_RESULTS = 15


class NotePickerScreen(ModalScreen[VaultFile | None]):
    """Fuzzy picker over the vault's notes. Dismisses with the chosen file or None."""

    CSS = """
    NotePickerScreen {
        align: center middle;
        background: $background 70%;
    }

    #picker-dialog {
        width: 70;
        height: auto;
        max-height: 24;
        border: tall $accent;
        background: $surface;
        padding: 1 2;
    }

    #picker-title {
        width: 100%;
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 0 0 1 0;
    }

    #picker-results {
        height: auto;
        max-height: 16;
    }
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    def __init__(self, files: list[VaultFile]) -> None:
        super().__init__()
        self._files = files
        self._shown: list[VaultFile] = []

    def compose(self) -> ComposeResult:
        with Vertical(id="picker-dialog"):
            yield Static("Open note", id="picker-title")
            yield Input(placeholder="Type to search notes...", id="picker-input")
            yield OptionList(id="picker-results")

    def on_mount(self) -> None:
        self._show(self._files[:PICKER_MAX_RESULTS])
        self.query_one("#picker-input", Input).focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if not event.value.strip():
            self._show(self._files[:PICKER_MAX_RESULTS])
            return
        self._show(
            rank_candidates(
                event.value,
                self._files,
                key=lambda f: f.path,
                threshold=0.0,
                limit=PICKER_MAX_RESULTS,
            )
        )

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self._shown:
            self.dismiss(self._shown[0])

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(self._shown[event.option_index])

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _show(self, files: list[VaultFile]) -> None:
        self._shown = list(files)
        results = self.query_one("#picker-results", OptionList)
        results.clear_options()
        results.add_options([Option(f.path) for f in self._shown])
