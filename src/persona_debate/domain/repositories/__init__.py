"""Domain repositories."""

from persona_debate.domain.repositories.conversation_repository import (
    ConversationRepository,
)

__all__ = ["ConversationRepository"]
