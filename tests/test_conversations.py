"""Tests for the conversation store."""
import pytest

from vaultchat.conversations import ConversationError, ConversationRecord, ConversationStore
from vaultchat.transcript import Message, Role, append_turn
from vaultchat.vault import InMemoryVault, VaultError


class FailingCreateVault(InMemoryVault):
    """Vault whose file creation always fails."""

    async def create(self, path, content):
        raise VaultError("disk full")


class TestCreateConversation:
    """Tests for ConversationStore.create_conversation."""

    @pytest.mark.asyncio
    async def test_path_and_header(self, settings_store, clock):
        """Test the timestamped file name and initial content."""
        vault = InMemoryVault()
        store = ConversationStore(vault, settings_store, clock=clock)

        record = await store.create_conversation()

        assert record.path == "convos/convo-20240304101500.md"
        assert record.name == "convo-20240304101500"
        assert await vault.read(record.path) == "# Claude Chat\n\n_Started on 2024-03-04 10:15:00_\n"

    @pytest.mark.asyncio
    async def test_becomes_current_and_persists(self, settings_store, clock):
        """Test that the new conversation is current and the pointer is saved."""
        store = ConversationStore(InMemoryVault(), settings_store, clock=clock)
        record = await store.create_conversation()

        assert settings_store.settings.current_conversation_path == record.path
        assert record.path in settings_store.path.read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_sequential_paths_strictly_increase(self, settings_store, clock):
        """Test that calls within one second still get distinct, increasing names."""
        store = ConversationStore(InMemoryVault(), settings_store, clock=clock)

        paths = [(await store.create_conversation()).path for _ in range(3)]

        assert paths == sorted(paths)
        assert len(set(paths)) == 3
        assert all(p.startswith("convos/") and p.endswith(".md") for p in paths)

    @pytest.mark.asyncio
    async def test_skips_existing_file(self, settings_store, clock):
        """Test that an existing file with the same name is never overwritten."""
        vault = InMemoryVault({"convos/convo-20240304101500.md": "old"})
        store = ConversationStore(vault, settings_store, clock=clock)

        record = await store.create_conversation()

        assert record.path == "convos/convo-20240304101501.md"
        assert await vault.read("convos/convo-20240304101500.md") == "old"

    @pytest.mark.asyncio
    async def test_custom_folder(self, settings_store, clock):
        """Test that the configured folder is used as prefix."""
        settings_store.update(conversation_folder="chats/claude")
        store = ConversationStore(InMemoryVault(), settings_store, clock=clock)

        record = await store.create_conversation()

        assert record.path.startswith("chats/claude/convo-")

    @pytest.mark.asyncio
    async def test_storage_failure_raises(self, settings_store, clock):
        """Test that a failed write surfaces as ConversationError and leaves the pointer alone."""
        store = ConversationStore(FailingCreateVault(), settings_store, clock=clock)

        with pytest.raises(ConversationError):
            await store.create_conversation()
        assert settings_store.settings.current_conversation_path is None

    @pytest.mark.asyncio
    async def test_settings_save_failure_raises(self, unwritable_settings_store, clock):
        """Test that a settings write failure surfaces as ConversationError."""
        store = ConversationStore(InMemoryVault(), unwritable_settings_store, clock=clock)

        with pytest.raises(ConversationError):
            await store.create_conversation()


class TestListConversations:
    """Tests for ConversationStore.list_conversations."""

    @pytest.mark.asyncio
    async def test_only_markdown_in_folder(self, settings_store):
        """Test filtering by folder and extension, in enumeration order."""
        vault = InMemoryVault({
            "convos/convo-2.md": "",
            "notes/alpha.md": "",
            "convos/image.png": "",
            "convos/convo-1.md": "",
        })
        store = ConversationStore(vault, settings_store)

        records = await store.list_conversations()

        assert [r.path for r in records] == ["convos/convo-2.md", "convos/convo-1.md"]
        assert all(isinstance(r, ConversationRecord) for r in records)

    @pytest.mark.asyncio
    async def test_ensure_folder(self, settings_store):
        """Test that the folder is created on startup."""
        vault = InMemoryVault()
        store = ConversationStore(vault, settings_store)

        await store.ensure_folder()

        assert await vault.exists("convos")


class TestCurrentConversation:
    """Tests for switching and loading the current conversation."""

    @pytest.mark.asyncio
    async def test_switch_does_not_validate(self, settings_store):
        """Test that switching stores any path but a missing file is not current."""
        store = ConversationStore(InMemoryVault(), settings_store)

        await store.switch_to("convos/missing.md")

        assert settings_store.settings.current_conversation_path == "convos/missing.md"
        assert await store.current_path() is None
        assert await store.load_current() == []

    @pytest.mark.asyncio
    async def test_switch_save_failure_raises(self, unwritable_settings_store):
        """Test that switching reports a settings write failure as ConversationError."""
        store = ConversationStore(InMemoryVault(), unwritable_settings_store)

        with pytest.raises(ConversationError):
            await store.switch_to("convos/other.md")

    @pytest.mark.asyncio
    async def test_load_current_decodes(self, settings_store):
        """Test that the current transcript is decoded into messages."""
        vault = InMemoryVault({"convos/c.md": append_turn("# Claude Chat\n", "hi", "hello")})
        store = ConversationStore(vault, settings_store)
        await store.switch_to("convos/c.md")

        assert await store.load_current() == [
            Message(role=Role.USER, content="hi"),
            Message(role=Role.ASSISTANT, content="hello"),
        ]

    @pytest.mark.asyncio
    async def test_no_current(self, settings_store):
        """Test that an unset pointer yields no messages."""
        store = ConversationStore(InMemoryVault(), settings_store)
        assert await store.current_path() is None
        assert await store.load_current() == []
