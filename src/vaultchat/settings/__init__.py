"""Settings model, hotkey helpers and persistence."""

from .hotkeys import format_hotkey, parse_hotkey, to_textual_key, to_textual_keys
from .models import DEFAULT_CONVERSATION_FOLDER, Hotkey, Settings, Shortcuts
from .store import SettingsStore

__all__ = [
    "DEFAULT_CONVERSATION_FOLDER",
    "Hotkey",
    "Settings",
    "SettingsStore",
    "Shortcuts",
    "format_hotkey",
    "parse_hotkey",
    "to_textual_key",
    "to_textual_keys",
]
