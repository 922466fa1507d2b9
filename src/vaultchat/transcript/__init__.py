"""Conversation transcript models and text codec."""

from .codec import (
    ASSISTANT_MARKER,
    USER_MARKER,
    append_turn,
    conversation_header,
    decode,
    encode,
)
from .models import Message, Role

__all__ = [
    "ASSISTANT_MARKER",
    "USER_MARKER",
    "Message",
    "Role",
    "append_turn",
    "conversation_header",
    "decode",
    "encode",
]
