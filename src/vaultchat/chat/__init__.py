"""Composing prompts and dispatching messages to the completion endpoint."""

from .dispatcher import MessageDispatcher
from .prompt import (
    HISTORY_DELIMITER,
    NEW_CONTEXT_DELIMITER,
    NEW_MESSAGE_DELIMITER,
    build_context_block,
    compose_prompt,
)

__all__ = [
    "HISTORY_DELIMITER",
    "NEW_CONTEXT_DELIMITER",
    "NEW_MESSAGE_DELIMITER",
    "MessageDispatcher",
    "build_context_block",
    "compose_prompt",
]
