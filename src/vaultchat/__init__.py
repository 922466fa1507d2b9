"""
VaultChat: chat with Claude about the notes in a markdown vault.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import MessageDispatcher
from .context import ContextSelector, Workspace
from .conversations import ConversationError, ConversationRecord, ConversationStore
from .settings import Settings, SettingsStore
from .transcript import Message, Role, decode, encode
from .vault import Vault, VaultError, VaultFile, create_vault

__all__ = [
    "ContextSelector",
    "ConversationError",
    "ConversationRecord",
    "ConversationStore",
    "Message",
    "MessageDispatcher",
    "Role",
    "Settings",
    "SettingsStore",
    "Vault",
    "VaultError",
    "VaultFile",
    "Workspace",
    "create_vault",
    "decode",
    "encode",
]
