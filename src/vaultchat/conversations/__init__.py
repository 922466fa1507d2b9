"""Persisted conversations and the current-conversation pointer."""

from .models import ConversationRecord
from .store import ConversationError, ConversationStore

__all__ = [
    "ConversationError",
    "ConversationRecord",
    "ConversationStore",
]
