"""Helper functions for use cases."""

from persona_debate.domain.entities import Conversation
from persona_debate.domain.exceptions import ConversationNotFoundError
from persona_debate.domain.repositories import ConversationRepository


async def load_conversation(
    repository: ConversationRepository, conversation_id: str
) -> Conversation:
    """Load a conversation or fail.

    Args:
        repository: Conversation store.
        conversation_id: Conversation ID.

    Returns:
        The stored conversation.

    Raises:
        ConversationNotFoundError: No conversation with this ID.
    """
    conversation = await repository.get(conversation_id)
    if conversation is None:
        raise ConversationNotFoundError(conversation_id)
    return conversation
