from .base import LLMProvider
from .errors import LLMError, LLMRequestError, LLMResponseFormatError
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse, TokenUsage
from .providers import AnthropicProvider

__all__ = [
    "LLMProvider",
    "LLMError",
    "LLMRequestError",
    "LLMResponseFormatError",
    "create_llm_provider",
    "ChatMessage",
    "LLMResponse",
    "TokenUsage",
    "AnthropicProvider",
]
