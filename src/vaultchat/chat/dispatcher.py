"""Message dispatch: prompt composition, completion and transcript update.

Sends are not serialized here. Two overlapping sends read the same history
and the later write wins, so callers must not submit while a send is pending.
"""

import logging
from collections.abc import Sequence

from ..conversations import ConversationStore
from ..llm import ChatMessage, LLMProvider
from ..prompts import get_system_prompt
from ..transcript import append_turn
from ..vault import Vault, VaultFile
from .prompt import build_context_block, compose_prompt

logger = logging.getLogger(__name__)


class MessageDispatcher:
    """Sends a user message with context and records the exchange."""

    def __init__(
        self,
        vault: Vault,
        conversations: ConversationStore,
        llm: LLMProvider,
        system_prompt: str | None = None,
    ):
        self._vault = vault
        self._conversations = conversations
        self._llm = llm
        self._system_prompt = system_prompt

    @property
    def system_prompt(self) -> str:
        if self._system_prompt is None:
            self._system_prompt = get_system_prompt()
        return self._system_prompt

    async def send(self, user_text: str, context_files: Sequence[VaultFile] = ()) -> str:
        """Send a message and append the exchange to the current conversation.

        A new conversation is created first if there is no current one. The
        transcript is written only after the completion succeeded.

        Args:
            user_text: The user's message
            context_files: Notes to attach, in the order given

        Returns:
            The assistant's reply

        Raises:
            ConversationError: No conversation could be created
            VaultError: A transcript or context file could not be read or written
            LLMError: The completion request failed or returned no text
        """
        path = await self._conversations.current_path()
        if path is None:
            logger.info("No valid conversation file found, creating new one")
            record = await self._conversations.create_conversation()
            path = record.path

        history = await self._vault.read(path)

        entries = []
        for file in context_files:
            logger.debug("Reading context file: %s", file.path)
            entries.append((file.basename, await self._vault.read(file.path)))

        prompt = compose_prompt(user_text, build_context_block(entries), history)
        logger.debug("Prepared prompt (%d chars, %d context files)", len(prompt), len(entries))

        response = await self._llm.chat_completion([
            ChatMessage.system(self.system_prompt),
            ChatMessage.user(prompt),
        ])
        assistant_text = response.content

        # Re-read so the append lands on the latest transcript text.
        current = await self._vault.read(path)
        await self._vault.modify(path, append_turn(current, user_text, assistant_text))
        logger.info("Conversation %s updated", path)
        return assistant_text
