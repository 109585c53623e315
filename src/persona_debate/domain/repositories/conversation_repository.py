"""Conversation repository protocol."""

from typing import Protocol

from persona_debate.domain.entities import Conversation, Message


class ConversationRepository(Protocol):
    """Key-value store for conversation records.

    Only single-key atomicity is expected from implementations.
    Storage errors are raised as ``StoreFailure``.
    """

    async def get(self, conversation_id: str) -> Conversation | None:
        """Load a conversation.

        Args:
            conversation_id: Conversation ID.

        Returns:
            The conversation, or None if it does not exist.
        """
        ...

    async def put(self, conversation: Conversation) -> None:
        """Store a conversation, replacing any record with the same ID.

        Args:
            conversation: Conversation to store.
        """
        ...

    async def list_ids(self) -> list[str]:
        """List the IDs of all stored conversations."""
        ...

    async def save_messages(
        self, conversation_id: str, messages: list[Message]
    ) -> None:
        """Replace the message list of a conversation in one write.

        Args:
            conversation_id: Conversation ID.
            messages: Complete, updated message list.
        """
        ...

    async def save_summary(self, conversation_id: str, summary: str) -> None:
        """Set the summary of a conversation, leaving other fields as stored.

        Args:
            conversation_id: Conversation ID.
            summary: Summary text.
        """
        ...
