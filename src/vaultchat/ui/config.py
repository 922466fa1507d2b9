"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""

import logging


class LogLevel:
    """Log level constants, numerically equal to the ``logging`` levels.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level (levels between steps round down)."""
        for threshold in (cls.ERROR, cls.WARNING, cls.INFO, cls.DEBUG):
            if level >= threshold:
                return cls._names[threshold]
        return "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Context picker configuration
CONTEXT_PREVIEW_CHARS = 160  # Characters of note text shown under a search result

# User-facing messages
SEND_FAILED_MESSAGE = "Failed to send message. Please try again."
NO_API_KEY_MESSAGE = "No API key configured. Run: vaultchat config set api_key <key>"

# Named actions bound from the settings shortcuts: settings field -> (action, description)
SHORTCUT_ACTIONS = {
    "open_interface": ("open_interface", "Open Chat"),
    "open_last_conversation": ("open_last_conversation", "Last Conversation"),
    "new_conversation": ("new_conversation", "New Conversation"),
    "hide_interface": ("hide_interface", "Hide Chat"),
}
