"""Conversation storage.

Hides how conversations map onto vault files:
- One markdown file per conversation below the configured folder
- Timestamp-derived file names
- The "current conversation" pointer kept in the settings record
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from ..settings import SettingsStore
from ..transcript import Message, conversation_header, decode
from ..vault import Vault, VaultError, VaultFile
from .models import ConversationRecord

logger = logging.getLogger(__name__)

CONVERSATION_EXTENSION = ".md"
FILENAME_PREFIX = "convo-"
FILENAME_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


class ConversationError(Exception):
    """Raised when a conversation cannot be created."""


class ConversationStore:
    """Enumerates, creates and switches between conversations."""

    def __init__(
        self,
        vault: Vault,
        settings_store: SettingsStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._vault = vault
        self._settings_store = settings_store
        self._clock = clock
        self._last_timestamp: datetime | None = None

    @property
    def folder(self) -> str:
        return self._settings_store.settings.conversation_folder.strip("/")

    def is_conversation(self, file: VaultFile) -> bool:
        return (
            file.path.startswith(f"{self.folder}/")
            and file.path.endswith(CONVERSATION_EXTENSION)
        )

    async def ensure_folder(self) -> None:
        """Create the conversation folder if it does not exist yet."""
        if not await self._vault.exists(self.folder):
            logger.info("Creating conversation folder: %s", self.folder)
            await self._vault.create_folder(self.folder)

    async def list_conversations(self) -> list[ConversationRecord]:
        """Conversations in vault enumeration order."""
        files = await self._vault.list_files()
        conversations = [
            ConversationRecord(path=f.path, name=f.basename, created=f.ctime)
            for f in files
            if self.is_conversation(f)
        ]
        logger.debug("Found %d conversations", len(conversations))
        return conversations

    async def create_conversation(self) -> ConversationRecord:
        """Create a conversation file and make it current.

        Raises:
            ConversationError: If the folder or file cannot be created, or
                the new path cannot be saved as current
        """
        try:
            await self.ensure_folder()
            timestamp = await self._next_timestamp()
            path = self._path_for(timestamp)
            file = await self._vault.create(path, conversation_header(timestamp))
        except VaultError as e:
            logger.error("Error creating new conversation: %s", e)
            raise ConversationError(f"Failed to create conversation: {e}") from e

        self._last_timestamp = timestamp
        self._make_current(file.path)
        logger.info("Created conversation %s", file.path)
        return ConversationRecord(path=file.path, name=file.basename, created=file.ctime)

    async def switch_to(self, path: str) -> None:
        """Point the current conversation at ``path`` (not validated).

        Raises:
            ConversationError: If the settings cannot be saved
        """
        self._make_current(path)
        logger.info("Switched to conversation %s", path)

    async def current_path(self) -> str | None:
        """The current conversation path, or None if unset or missing."""
        path = self._settings_store.settings.current_conversation_path
        if not path:
            return None
        if await self._vault.get_file(path) is None:
            logger.warning("Current conversation not found: %s", path)
            return None
        return path

    async def load_current(self) -> list[Message]:
        """Decode the current conversation; empty if there is none or it is unreadable."""
        path = await self.current_path()
        if path is None:
            return []
        try:
            content = await self._vault.read(path)
        except VaultError as e:
            logger.error("Error loading conversation %s: %s", path, e)
            return []
        return decode(content)

    def _make_current(self, path: str) -> None:
        try:
            self._settings_store.update(current_conversation_path=path)
        except RuntimeError as e:
            logger.error("Error saving current conversation: %s", e)
            raise ConversationError(f"Failed to make {path} current: {e}") from e

    def _path_for(self, timestamp: datetime) -> str:
        name = f"{FILENAME_PREFIX}{timestamp.strftime(FILENAME_TIMESTAMP_FORMAT)}{CONVERSATION_EXTENSION}"
        return f"{self.folder}/{name}"

    async def _next_timestamp(self) -> datetime:
        # File names have one-second resolution; bump past collisions.
        timestamp = self._clock().replace(microsecond=0)
        if self._last_timestamp is not None and timestamp <= self._last_timestamp:
            timestamp = self._last_timestamp + timedelta(seconds=1)
        while await self._vault.exists(self._path_for(timestamp)):
            timestamp += timedelta(seconds=1)
        return timestamp
