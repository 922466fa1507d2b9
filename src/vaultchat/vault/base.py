"""Abstract base class for vault backends.

This module hides the design decision of where notes are stored.
Implementations must handle:
- Path normalization (vault-relative, forward slashes)
- File enumeration and metadata
- Reading, creating and modifying text files
"""

from abc import ABC, abstractmethod

from .models import VaultFile


class VaultError(Exception):
    """Raised when a vault operation (create, read, write) fails."""


class Vault(ABC):
    """A tree of text documents addressed by vault-relative paths."""

    @abstractmethod
    async def list_files(self) -> list[VaultFile]:
        """Enumerate every file in the vault.

        Returns:
            Files in backend enumeration order (not guaranteed chronological)

        Raises:
            VaultError: If the vault cannot be enumerated
        """

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Check whether a file or folder exists at ``path``."""

    @abstractmethod
    async def get_file(self, path: str) -> VaultFile | None:
        """Return the file at ``path``, or None if there is no such file."""

    @abstractmethod
    async def read(self, path: str) -> str:
        """Read a file's text.

        Raises:
            VaultError: If the file is missing or cannot be read
        """

    @abstractmethod
    async def create(self, path: str, content: str) -> VaultFile:
        """Create a new file.

        Raises:
            VaultError: If the file already exists or cannot be written
        """

    @abstractmethod
    async def modify(self, path: str, content: str) -> None:
        """Replace the content of an existing file.

        Raises:
            VaultError: If the file is missing or cannot be written
        """

    @abstractmethod
    async def create_folder(self, path: str) -> None:
        """Create a folder (and its parents).

        Raises:
            VaultError: If the folder cannot be created
        """

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""


def normalize_path(path: str) -> str:
    """Normalize a user supplied path to the vault-relative form."""
    parts = [p for p in path.replace("\\", "/").split("/") if p not in ("", ".")]
    if any(p == ".." for p in parts):
        raise VaultError(f"Path escapes the vault: {path}")
    return "/".join(parts)
