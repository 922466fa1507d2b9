"""In-memory vault backend.

Simple dict-based storage; data is lost when the process exits.
Suitable for testing and for previewing the UI without touching disk.
"""

from datetime import datetime

from .base import Vault, VaultError, normalize_path
from .models import VaultFile


class InMemoryVault(Vault):
    """Vault that keeps every file in a dict (insertion order = enumeration order)."""

    def __init__(self, files: dict[str, str] | None = None):
        self._files: dict[str, tuple[VaultFile, str]] = {}
        self._folders: set[str] = set()
        for path, content in (files or {}).items():
            self._store(normalize_path(path), content)

    def _store(self, path: str, content: str) -> VaultFile:
        existing = self._files.get(path)
        file = existing[0] if existing else VaultFile(path=path, ctime=datetime.now())
        self._files[path] = (file, content)
        parent = path.rpartition("/")[0]
        while parent:
            self._folders.add(parent)
            parent = parent.rpartition("/")[0]
        return file

    async def list_files(self) -> list[VaultFile]:
        return [file for file, _ in self._files.values()]

    async def exists(self, path: str) -> bool:
        path = normalize_path(path)
        return path in self._files or path in self._folders

    async def get_file(self, path: str) -> VaultFile | None:
        entry = self._files.get(normalize_path(path))
        return entry[0] if entry else None

    async def read(self, path: str) -> str:
        entry = self._files.get(normalize_path(path))
        if entry is None:
            raise VaultError(f"File not found: {path}")
        return entry[1]

    async def create(self, path: str, content: str) -> VaultFile:
        path = normalize_path(path)
        if path in self._files:
            raise VaultError(f"File already exists: {path}")
        return self._store(path, content)

    async def modify(self, path: str, content: str) -> None:
        path = normalize_path(path)
        if path not in self._files:
            raise VaultError(f"File not found: {path}")
        self._store(path, content)

    async def create_folder(self, path: str) -> None:
        path = normalize_path(path)
        while path:
            self._folders.add(path)
            path = path.rpartition("/")[0]

    @property
    def backend_type(self) -> str:
        return "memory"
