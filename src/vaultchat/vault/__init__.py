"""Vault abstraction layer for vaultchat.

The vault is the tree of notes the chat reads context from and writes
conversation transcripts into.
"""

from .base import Vault, VaultError, normalize_path
from .factory import create_vault
from .in_memory import InMemoryVault
from .local import LocalVault
from .models import VaultFile

__all__ = [
    "InMemoryVault",
    "LocalVault",
    "Vault",
    "VaultError",
    "VaultFile",
    "create_vault",
    "normalize_path",
]
