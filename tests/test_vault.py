"""Tests for the vault backends."""
import pytest

from vaultchat.vault import (
    InMemoryVault,
    LocalVault,
    Vault,
    VaultError,
    VaultFile,
    create_vault,
    normalize_path,
)


class TestVaultFile:
    """Tests for VaultFile path helpers."""

    def test_name_parts(self):
        """Test name, basename, extension and parent."""
        file = VaultFile(path="notes/Deep Work.MD")
        assert file.name == "Deep Work.MD"
        assert file.basename == "Deep Work"
        assert file.extension == "md"
        assert file.parent == "notes"

    def test_root_file_parent(self):
        """Test that files at the root have an empty parent."""
        assert VaultFile(path="todo.md").parent == ""


class TestNormalizePath:
    """Tests for normalize_path."""

    def test_separators_and_dots(self):
        """Test that slashes are unified and redundant parts removed."""
        assert normalize_path("./notes\\sub//a.md") == "notes/sub/a.md"

    def test_parent_reference_rejected(self):
        """Test that paths leaving the vault are refused."""
        with pytest.raises(VaultError):
            normalize_path("../secrets.md")


class TestFactory:
    """Tests for create_vault."""

    def test_vault_is_abstract(self):
        """Test that Vault cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Vault()  # type: ignore

    def test_create_backends(self, tmp_path):
        """Test both backend types."""
        assert create_vault("local", root=tmp_path).backend_type == "local"
        assert create_vault("memory").backend_type == "memory"

    def test_local_requires_root(self):
        """Test that the local backend needs a root directory."""
        with pytest.raises(TypeError):
            create_vault("local")

    def test_unknown_backend(self):
        """Test that unsupported backends raise ValueError."""
        with pytest.raises(ValueError):
            create_vault("s3")


class TestInMemoryVault:
    """Tests for InMemoryVault."""

    @pytest.mark.asyncio
    async def test_enumeration_order(self, memory_vault):
        """Test that files are listed in insertion order."""
        paths = [f.path for f in await memory_vault.list_files()]
        assert paths == ["notes/alpha.md", "notes/beta.md", "projects/gamma.md", "images/diagram.png"]

    @pytest.mark.asyncio
    async def test_create_then_modify(self):
        """Test creating and replacing content."""
        vault = InMemoryVault()
        file = await vault.create("a/b.md", "one")
        await vault.modify("a/b.md", "two")
        assert await vault.read("a/b.md") == "two"
        assert await vault.get_file("a/b.md") == file
        assert await vault.exists("a")

    @pytest.mark.asyncio
    async def test_create_existing_fails(self, memory_vault):
        """Test that create never overwrites."""
        with pytest.raises(VaultError):
            await memory_vault.create("notes/alpha.md", "x")

    @pytest.mark.asyncio
    async def test_missing_file_errors(self):
        """Test reading or modifying a missing file."""
        vault = InMemoryVault()
        with pytest.raises(VaultError):
            await vault.read("nope.md")
        with pytest.raises(VaultError):
            await vault.modify("nope.md", "x")
        assert await vault.get_file("nope.md") is None


class TestLocalVault:
    """Tests for LocalVault."""

    @pytest.mark.asyncio
    async def test_list_skips_hidden(self, local_vault):
        """Test that dot-directories such as the settings folder are not listed."""
        (local_vault.root / ".vaultchat").mkdir()
        (local_vault.root / ".vaultchat" / "settings.json").write_text("{}", encoding="utf-8")

        paths = [f.path for f in await local_vault.list_files()]

        assert paths == ["notes/alpha.md", "todo.md"]

    @pytest.mark.asyncio
    async def test_read(self, local_vault):
        """Test reading a note."""
        assert await local_vault.read("notes/alpha.md") == "# Alpha\n\nFirst note."

    @pytest.mark.asyncio
    async def test_create_makes_parents(self, local_vault):
        """Test that create adds missing folders and records ctime."""
        file = await local_vault.create("convos/convo-1.md", "# Claude Chat\n")
        assert file.path == "convos/convo-1.md"
        assert file.ctime is not None
        assert (local_vault.root / "convos" / "convo-1.md").read_text(encoding="utf-8") == "# Claude Chat\n"

    @pytest.mark.asyncio
    async def test_create_existing_fails(self, local_vault):
        """Test that create refuses to overwrite."""
        with pytest.raises(VaultError):
            await local_vault.create("todo.md", "x")
        assert await local_vault.read("todo.md") == "- [ ] write tests"

    @pytest.mark.asyncio
    async def test_modify_requires_existing(self, local_vault):
        """Test that modify only replaces existing files."""
        await local_vault.modify("todo.md", "- [x] write tests")
        assert await local_vault.read("todo.md") == "- [x] write tests"
        with pytest.raises(VaultError):
            await local_vault.modify("new.md", "x")

    @pytest.mark.asyncio
    async def test_folders(self, local_vault):
        """Test folder creation and existence checks."""
        assert not await local_vault.exists("convos")
        await local_vault.create_folder("convos")
        assert await local_vault.exists("convos")
        assert await local_vault.get_file("convos") is None

    @pytest.mark.asyncio
    async def test_read_missing(self, local_vault):
        """Test that reading a missing file raises VaultError."""
        with pytest.raises(VaultError):
            await local_vault.read("missing.md")

    @pytest.mark.asyncio
    async def test_file_removed_during_scan_skipped(self, local_vault, monkeypatch):
        """Test that a file deleted between listing and stat is left out."""
        to_vault_file = local_vault._to_vault_file

        def vanishing(full_path):
            if full_path.name == "todo.md":
                raise FileNotFoundError(full_path)
            return to_vault_file(full_path)

        monkeypatch.setattr(local_vault, "_to_vault_file", vanishing)

        assert [f.path for f in await local_vault.list_files()] == ["notes/alpha.md"]

    @pytest.mark.asyncio
    async def test_scan_failure_raises_vault_error(self, local_vault, monkeypatch):
        """Test that an unreadable vault surfaces as VaultError."""
        def denied():
            raise PermissionError("denied")

        monkeypatch.setattr(local_vault, "_scan", denied)

        with pytest.raises(VaultError):
            await local_vault.list_files()
