"""Conversation read use cases."""

from persona_debate.application.use_cases.helpers import load_conversation
from persona_debate.domain.entities import Conversation
from persona_debate.domain.repositories import ConversationRepository


class GetConversationUseCase:
    """Loads one conversation."""

    def __init__(self, conversation_repository: ConversationRepository) -> None:
        self._conversation_repository = conversation_repository

    async def execute(self, conversation_id: str) -> Conversation:
        """Execute the use case.

        Raises:
            ConversationNotFoundError: Unknown conversation.
        """
        return await load_conversation(self._conversation_repository, conversation_id)


class ListConversationsUseCase:
    """Lists conversation IDs."""

    def __init__(self, conversation_repository: ConversationRepository) -> None:
        self._conversation_repository = conversation_repository

    async def execute(self) -> list[str]:
        return await self._conversation_repository.list_ids()
