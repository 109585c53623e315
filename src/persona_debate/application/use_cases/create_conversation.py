"""Create conversation use case."""

import logging
import uuid

from persona_debate.domain.entities import Conversation, Personas
from persona_debate.domain.exceptions import ValidationError
from persona_debate.domain.repositories import ConversationRepository

logger = logging.getLogger(__name__)


class CreateConversationUseCase:
    """Creates a conversation seeded with the initiator's opening message."""

    def __init__(self, conversation_repository: ConversationRepository) -> None:
        self._conversation_repository = conversation_repository

    async def execute(self, initial_message: str, personas: Personas) -> str:
        """Execute the use case.

        Args:
            initial_message: Opening message from the initiator.
            personas: Both personas.

        Returns:
            New conversation ID.

        Raises:
            ValidationError: Blank opening message or missing persona.
        """
        if not initial_message or not initial_message.strip():
            raise ValidationError("initialMessage cannot be empty")
        if not personas.is_complete():
            raise ValidationError(
                "personas.initiator and personas.responder are required"
            )

        conversation = Conversation.start(
            conversation_id=str(uuid.uuid4()),
            personas=personas,
            initial_message=initial_message,
        )
        await self._conversation_repository.put(conversation)

        logger.info("Created conversation %s", conversation.id)
        return conversation.id
