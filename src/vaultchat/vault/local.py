"""Filesystem vault backend.

Stores notes as plain UTF-8 files below a root directory.
Blocking filesystem calls run in a worker thread so the UI stays responsive.
"""

import asyncio
import logging
from datetime import datetime
from pathlib import Path

from .base import Vault, VaultError, normalize_path
from .models import VaultFile

logger = logging.getLogger(__name__)


class LocalVault(Vault):
    """Vault backed by a directory on disk.

    Hidden entries (names starting with a dot, e.g. ``.vaultchat``) are
    skipped during enumeration; they hold application data, not notes.
    """

    def __init__(self, root: str | Path):
        self._root = Path(root).expanduser().resolve()

    @property
    def root(self) -> Path:
        """Absolute path of the vault directory."""
        return self._root

    def resolve(self, path: str) -> Path:
        """Map a vault-relative path to an absolute filesystem path."""
        return self._root / normalize_path(path)

    def _to_vault_file(self, full_path: Path) -> VaultFile:
        stat = full_path.stat()
        return VaultFile(
            path=full_path.relative_to(self._root).as_posix(),
            ctime=datetime.fromtimestamp(stat.st_ctime),
        )

    def _scan(self) -> list[VaultFile]:
        if not self._root.is_dir():
            return []

        files = []
        for full_path in sorted(self._root.rglob("*")):
            relative = full_path.relative_to(self._root)
            if any(part.startswith(".") for part in relative.parts):
                continue
            if not full_path.is_file():
                continue
            try:
                files.append(self._to_vault_file(full_path))
            except FileNotFoundError:
                # Deleted between listing and stat.
                continue
        return files

    async def list_files(self) -> list[VaultFile]:
        try:
            return await asyncio.to_thread(self._scan)
        except OSError as e:
            raise VaultError(f"Failed to list {self._root}: {e}") from e

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(self.resolve(path).exists)

    async def get_file(self, path: str) -> VaultFile | None:
        full_path = self.resolve(path)
        if not await asyncio.to_thread(full_path.is_file):
            return None
        try:
            return await asyncio.to_thread(self._to_vault_file, full_path)
        except FileNotFoundError:
            return None

    async def read(self, path: str) -> str:
        full_path = self.resolve(path)
        try:
            return await asyncio.to_thread(full_path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise VaultError(f"Failed to read {path}: {e}") from e

    async def create(self, path: str, content: str) -> VaultFile:
        full_path = self.resolve(path)

        def _create() -> VaultFile:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            with open(full_path, "x", encoding="utf-8") as f:
                f.write(content)
            return self._to_vault_file(full_path)

        try:
            created = await asyncio.to_thread(_create)
        except FileExistsError as e:
            raise VaultError(f"File already exists: {path}") from e
        except OSError as e:
            raise VaultError(f"Failed to create {path}: {e}") from e

        logger.debug("Created %s", created.path)
        return created

    async def modify(self, path: str, content: str) -> None:
        full_path = self.resolve(path)
        if not await asyncio.to_thread(full_path.is_file):
            raise VaultError(f"File not found: {path}")
        try:
            await asyncio.to_thread(full_path.write_text, content, encoding="utf-8")
        except OSError as e:
            raise VaultError(f"Failed to write {path}: {e}") from e

    async def create_folder(self, path: str) -> None:
        full_path = self.resolve(path)
        try:
            await asyncio.to_thread(full_path.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise VaultError(f"Failed to create folder {path}: {e}") from e
        logger.debug("Ensured folder %s", path)

    @property
    def backend_type(self) -> str:
        return "local"
