from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ChatRole = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """One entry of a completion request.

    A request is a system instruction followed by a single user turn;
    earlier turns travel inside the user text, not as separate entries.
    """

    model_config = ConfigDict(frozen=True)

    role: ChatRole
    content: str

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)


class TokenUsage(BaseModel):
    """Token counts reported for one completion."""

    model_config = ConfigDict(frozen=True)

    input_tokens: int = Field(ge=0)
    output_tokens: int = Field(ge=0)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class LLMResponse(BaseModel):
    """Text of a completion plus what the endpoint said about it."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Text of the first content block")
    model: str = Field(description="Model that produced the reply")
    stop_reason: str | None = None
    usage: TokenUsage | None = None
