"""Domain entities."""

from persona_debate.domain.entities.conversation import Conversation, Personas
from persona_debate.domain.entities.message import Message, Turn
from persona_debate.domain.entities.persona import Persona

__all__ = ["Conversation", "Message", "Persona", "Personas", "Turn"]
