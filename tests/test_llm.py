"""Tests for the LLM provider layer."""
from types import SimpleNamespace
from unittest.mock import AsyncMock

import anthropic
import httpx
import pytest

from vaultchat.llm import (
    AnthropicProvider,
    ChatMessage,
    LLMError,
    LLMProvider,
    LLMRequestError,
    LLMResponseFormatError,
    TokenUsage,
    create_llm_provider,
)
from vaultchat.prompts import PROMPTS_DIR_ENV, clear_cache, get_system_prompt, load_prompt


def _response(content):
    return SimpleNamespace(
        content=content,
        model="claude-3-5-sonnet-20241022",
        usage=SimpleNamespace(input_tokens=10, output_tokens=5),
    )


class TestFactory:
    """Tests for create_llm_provider."""

    def test_provider_is_abstract(self):
        """Test that LLMProvider cannot be instantiated directly."""
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore

    def test_create_anthropic(self):
        """Test creating the provider by name and alias."""
        assert isinstance(create_llm_provider("anthropic", api_key="k"), AnthropicProvider)
        assert isinstance(create_llm_provider("Claude", api_key="k"), AnthropicProvider)

    def test_missing_api_key(self):
        """Test that an API key is required."""
        with pytest.raises(TypeError):
            create_llm_provider("anthropic")

    def test_unknown_provider(self):
        """Test that unsupported providers raise ValueError."""
        with pytest.raises(ValueError):
            create_llm_provider("gpt", api_key="k")

    def test_errors_share_base(self):
        """Test the error hierarchy."""
        assert issubclass(LLMRequestError, LLMError)
        assert issubclass(LLMResponseFormatError, LLMError)


class TestAnthropicProvider:
    """Tests for AnthropicProvider with a mocked SDK client."""

    @pytest.fixture
    def provider(self):
        return AnthropicProvider(api_key="sk-ant-test")

    @pytest.fixture
    def messages(self):
        return [
            ChatMessage(role="system", content="be brief"),
            ChatMessage(role="user", content="prompt text"),
        ]

    @pytest.mark.asyncio
    async def test_request_shape(self, provider, messages):
        """Test model, temperature, token budget, system and single user turn."""
        create = AsyncMock(return_value=_response([SimpleNamespace(type="text", text="answer")]))
        provider._client.messages.create = create

        result = await provider.chat_completion(messages)

        assert result.content == "answer"
        assert result.usage == TokenUsage(input_tokens=10, output_tokens=5)
        assert result.usage.total_tokens == 15
        kwargs = create.call_args.kwargs
        assert kwargs["model"] == "claude-3-5-sonnet-20241022"
        assert kwargs["temperature"] == 0.5
        assert kwargs["max_tokens"] == 4096
        assert kwargs["system"] == "be brief"
        assert kwargs["messages"] == [
            {"role": "user", "content": [{"type": "text", "text": "prompt text"}]}
        ]

    @pytest.mark.asyncio
    async def test_empty_content_is_format_error(self, provider, messages):
        """Test that a response without content blocks is rejected."""
        provider._client.messages.create = AsyncMock(return_value=_response([]))
        with pytest.raises(LLMResponseFormatError):
            await provider.chat_completion(messages)

    @pytest.mark.asyncio
    async def test_block_without_text_is_format_error(self, provider, messages):
        """Test that a first block lacking text is rejected."""
        provider._client.messages.create = AsyncMock(
            return_value=_response([SimpleNamespace(type="tool_use", id="t1")])
        )
        with pytest.raises(LLMResponseFormatError):
            await provider.chat_completion(messages)

    @pytest.mark.asyncio
    async def test_transport_error_is_request_error(self, provider, messages):
        """Test that SDK connection failures become LLMRequestError."""
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        provider._client.messages.create = AsyncMock(
            side_effect=anthropic.APIConnectionError(request=request)
        )
        with pytest.raises(LLMRequestError):
            await provider.chat_completion(messages)

    @pytest.mark.asyncio
    async def test_status_error_is_request_error(self, provider, messages):
        """Test that non-success statuses become LLMRequestError."""
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        response = httpx.Response(401, request=request, json={"error": {"message": "bad key"}})
        provider._client.messages.create = AsyncMock(
            side_effect=anthropic.AuthenticationError("bad key", response=response, body=None)
        )
        with pytest.raises(LLMRequestError):
            await provider.chat_completion(messages)

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, provider):
        """Test that leaving the async context closes the client."""
        provider._client.close = AsyncMock()
        async with provider:
            pass
        provider._client.close.assert_awaited_once()


class TestPrompts:
    """Tests for the packaged system instruction."""

    def test_system_prompt_loaded(self):
        """Test that the system instruction is available and trimmed."""
        clear_cache()
        prompt = get_system_prompt()
        assert prompt
        assert prompt == prompt.strip()

    def test_override_directory(self, tmp_path, monkeypatch):
        """Test that a system.txt in the override directory wins."""
        (tmp_path / "system.txt").write_text("  be terse  \n", encoding="utf-8")
        monkeypatch.setenv(PROMPTS_DIR_ENV, str(tmp_path))
        clear_cache()
        try:
            assert get_system_prompt() == "be terse"
        finally:
            clear_cache()

    def test_missing_prompt(self):
        """Test that an unknown prompt name raises FileNotFoundError."""
        clear_cache()
        with pytest.raises(FileNotFoundError):
            load_prompt("does-not-exist")
