"""Pytest configuration and shared fixtures."""
from datetime import datetime, timedelta

import pytest

from vaultchat.llm import ChatMessage, LLMProvider, LLMResponse
from vaultchat.settings import SettingsStore
from vaultchat.vault import InMemoryVault, LocalVault


class FakeLLMProvider(LLMProvider):
    """LLM provider that records requests and replies from a script."""

    def __init__(self, reply: str = "Hello from Claude", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.requests: list[list[ChatMessage]] = []
        self.closed = False

    async def chat_completion(self, messages, model=None, temperature=None, max_tokens=None, **kwargs):
        self.requests.append(list(messages))
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model="fake-model")

    async def close(self) -> None:
        self.closed = True


class StepClock:
    """Clock returning a fixed instant, advanced by hand."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def settings_store(tmp_path):
    """Settings store writing into a temporary directory."""
    store = SettingsStore(tmp_path / ".vaultchat" / "settings.json")
    store.load()
    return store


@pytest.fixture
def unwritable_settings_store(tmp_path):
    """Settings store whose parent directory is a regular file, so saves fail."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = SettingsStore(blocker / "settings.json")
    store.load()
    return store


@pytest.fixture
def memory_vault():
    """In-memory vault with a few notes."""
    return InMemoryVault({
        "notes/alpha.md": "# Alpha\n\nFirst note.",
        "notes/beta.md": "---\ntags: [b]\n---\nBeta body",
        "projects/gamma.md": "Gamma plans",
        "images/diagram.png": "binary",
    })


@pytest.fixture
def local_vault(tmp_path):
    """Local vault rooted in a temporary directory."""
    root = tmp_path / "vault"
    (root / "notes").mkdir(parents=True)
    (root / "notes" / "alpha.md").write_text("# Alpha\n\nFirst note.", encoding="utf-8")
    (root / "todo.md").write_text("- [ ] write tests", encoding="utf-8")
    return LocalVault(root)


@pytest.fixture
def clock():
    """Clock frozen at a known instant."""
    return StepClock(datetime(2024, 3, 4, 10, 15, 0))


@pytest.fixture
def fake_llm():
    """Fake LLM provider with a canned reply."""
    return FakeLLMProvider()


@pytest.fixture
def make_llm():
    """Factory for fake LLM providers with custom replies or errors."""
    return FakeLLMProvider
