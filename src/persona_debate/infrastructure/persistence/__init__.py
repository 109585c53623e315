"""Persistence infrastructure."""

from persona_debate.infrastructure.persistence.conversation_repository import (
    SQLiteConversationRepository,
)
from persona_debate.infrastructure.persistence.database import DatabaseManager
from persona_debate.infrastructure.persistence.exceptions import (
    DatabaseError,
    PersistenceError,
)
from persona_debate.infrastructure.persistence.models import ConversationModel

__all__ = [
    "ConversationModel",
    "DatabaseError",
    "DatabaseManager",
    "PersistenceError",
    "SQLiteConversationRepository",
]
