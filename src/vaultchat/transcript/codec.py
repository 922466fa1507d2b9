"""Plain-text transcript format.

A conversation file is markdown: a header followed by one block per message,
each message starting on a line that begins with a role marker::

    # Claude Chat

    _Started on 2024-03-04 10:15:00_

    **User**: hello

    **Claude**: hi there

Decoding is best-effort and never fails: text before the first marker is
ignored, and content without markers yields no messages.
"""

from collections.abc import Iterable
from datetime import datetime

from .models import Message, Role

USER_MARKER = "**User**:"
ASSISTANT_MARKER = "**Claude**:"

HEADER_TITLE = "# Claude Chat"
HEADER_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_MARKERS = {
    USER_MARKER: Role.USER,
    ASSISTANT_MARKER: Role.ASSISTANT,
}


def conversation_header(started_at: datetime) -> str:
    """Initial content of a new conversation file."""
    return f"{HEADER_TITLE}\n\n_Started on {started_at.strftime(HEADER_TIMESTAMP_FORMAT)}_\n"


def encode(text: str, messages: Iterable[Message]) -> str:
    """Append messages to existing transcript text.

    Args:
        text: Current transcript (header and earlier turns)
        messages: Messages to append, in order

    Returns:
        The new transcript text
    """
    parts = [text]
    for message in messages:
        if message.role == Role.USER:
            parts.append(f"\n\n{USER_MARKER} {message.content}")
        else:
            parts.append(f"\n\n{ASSISTANT_MARKER} {message.content}\n")
    return "".join(parts)


def append_turn(text: str, user_text: str, assistant_text: str) -> str:
    """Append one user/assistant exchange to a transcript."""
    return encode(text, [
        Message(role=Role.USER, content=user_text),
        Message(role=Role.ASSISTANT, content=assistant_text),
    ])


def decode(text: str) -> list[Message]:
    """Parse transcript text into messages.

    A line starting with a role marker opens a new message; every other line
    is appended to the open message. Lines before the first marker are dropped.
    Trailing whitespace of each message (the blank separator lines) is removed.
    """
    messages: list[Message] = []
    role: Role | None = None
    lines: list[str] = []

    def _commit() -> None:
        if role is not None:
            messages.append(Message(role=role, content="\n".join(lines).rstrip()))

    for line in text.split("\n"):
        marker = _match_marker(line)
        if marker is not None:
            _commit()
            role = _MARKERS[marker]
            lines = [line[len(marker):].strip()]
        elif role is not None:
            lines.append(line)

    _commit()
    return messages


def _match_marker(line: str) -> str | None:
    for marker in _MARKERS:
        if line.startswith(marker):
            return marker
    return None
