"""Anthropic Claude LLM provider implementation.

Uses the official Anthropic Python SDK for async chat completions.
The SDK sends the ``x-api-key`` and ``anthropic-version`` headers.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

import logging
from typing import Any

import anthropic
from anthropic import AsyncAnthropic

from ..base import LLMProvider
from ..errors import LLMRequestError, LLMResponseFormatError
from ..models import ChatMessage, LLMResponse, TokenUsage

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_TEMPERATURE = 0.5
DEFAULT_MAX_TOKENS = 4096


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider implementation.

    Hidden design decisions:
    - Anthropic API client initialization
    - Message format conversion (system message handling)
    - Error mapping (request failures vs. unexpected response shape)
    - Authentication mechanism
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        """Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key
            model: Default model to use
            temperature: Default sampling temperature
            max_tokens: Default token budget
            base_url: Optional custom API base URL
            **client_kwargs: Additional kwargs for AsyncAnthropic client
                (timeout, max_retries, ...)
        """
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Generate a chat completion using Anthropic Claude.

        Args:
            messages: Conversation messages
            model: Model to use (overrides default)
            temperature: Sampling temperature (overrides default)
            max_tokens: Maximum tokens to generate (overrides default)
            **kwargs: Additional Anthropic-specific parameters

        Returns:
            LLMResponse with the text of the first content block
        """
        # Extract system message and convert to Anthropic format
        system_message = None
        anthropic_messages = []

        for msg in messages:
            if msg.role == "system":
                system_message = msg.content
            else:
                anthropic_messages.append({
                    "role": msg.role,
                    "content": [{"type": "text", "text": msg.content}],
                })

        request_params: dict[str, Any] = {
            "model": model or self._model,
            "messages": anthropic_messages,
            "temperature": self._temperature if temperature is None else temperature,
            "max_tokens": max_tokens or self._max_tokens,
            **kwargs
        }

        if system_message:
            request_params["system"] = system_message

        logger.debug("Sending request to %s", request_params["model"])
        try:
            response = await self._client.messages.create(**request_params)
        except anthropic.APIStatusError as e:
            raise LLMRequestError(f"Request failed ({e.status_code}): {e.message}") from e
        except anthropic.APIError as e:
            raise LLMRequestError(f"Request failed: {e}") from e

        content = getattr(response, "content", None)
        if not content or not getattr(content[0], "text", None):
            logger.error("Unexpected API response format: %r", response)
            raise LLMResponseFormatError("Invalid API response format")

        usage = None
        if response.usage:
            usage = TokenUsage(
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
            )
            logger.debug("Token usage: %d in, %d out", usage.input_tokens, usage.output_tokens)

        return LLMResponse(
            content=content[0].text,
            model=response.model,
            stop_reason=getattr(response, "stop_reason", None),
            usage=usage,
        )

    async def close(self) -> None:
        """Close the Anthropic client."""
        await self._client.close()
