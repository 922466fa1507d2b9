"""Outbound prompt layout.

The endpoint receives one user turn holding, in order: the new message,
the attached context (if any) and the whole previous transcript.
"""

from collections.abc import Iterable

NEW_MESSAGE_DELIMITER = "!! !! NEW MESSAGE !! !!"
NEW_CONTEXT_DELIMITER = "++ ++ NEW CONTEXT ++ ++"
HISTORY_DELIMITER = "@@ PREVIOUS DISCUSSION HISTORY @@"


def build_context_block(entries: Iterable[tuple[str, str]]) -> str:
    """Label each (display name, content) pair as a numbered context section."""
    return "".join(
        f"\nContext {i}: {name}\n{content}\n"
        for i, (name, content) in enumerate(entries, 1)
    )


def compose_prompt(message: str, context_block: str, history: str) -> str:
    """Concatenate message, optional context and history into one prompt."""
    parts = [f"{NEW_MESSAGE_DELIMITER}\n{message}\n\n"]
    if context_block:
        parts.append(f"{NEW_CONTEXT_DELIMITER}\n{context_block}\n\n")
    parts.append(f"{HISTORY_DELIMITER}\n{history}")
    return "".join(parts)
