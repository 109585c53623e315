"""Conversation entity."""

from dataclasses import dataclass, field, replace
from typing import Any

from persona_debate.domain.entities.message import Message, Turn
from persona_debate.domain.entities.persona import Persona


@dataclass(frozen=True)
class Personas:
    """The two personas of a conversation.

    Attributes:
        initiator: Persona that opened the debate.
        responder: Persona answering it.
    """

    initiator: Persona | None = None
    responder: Persona | None = None

    def is_complete(self) -> bool:
        """Check that both sides have a persona."""
        return self.initiator is not None and self.responder is not None

    def for_turn(self, turn: Turn) -> Persona | None:
        """Get the persona speaking for a turn."""
        if turn is Turn.INITIATOR:
            return self.initiator
        return self.responder

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.initiator is not None:
            result["initiator"] = self.initiator.to_dict()
        if self.responder is not None:
            result["responder"] = self.responder.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Personas":
        data = data or {}
        initiator = data.get("initiator")
        responder = data.get("responder")
        return cls(
            initiator=Persona.from_dict(initiator) if initiator else None,
            responder=Persona.from_dict(responder) if responder else None,
        )


@dataclass(frozen=True)
class Conversation:
    """Debate between two personas.

    Messages are in turn order. ``summary`` is derived from the messages
    and can be recomputed at any time.

    Attributes:
        id: Opaque conversation ID.
        personas: Initiator and responder personas.
        messages: Messages in turn order.
        summary: Latest summary, if one was generated.
    """

    id: str
    personas: Personas
    messages: tuple[Message, ...] = field(default_factory=tuple)
    summary: str | None = None

    @classmethod
    def start(
        cls, conversation_id: str, personas: Personas, initial_message: str
    ) -> "Conversation":
        """Create a conversation seeded with the initiator's opening message.

        Args:
            conversation_id: New conversation ID.
            personas: Both personas.
            initial_message: Opening message text.

        Returns:
            Conversation with exactly one message.
        """
        return cls(
            id=conversation_id,
            personas=personas,
            messages=(Message(speaker=Turn.INITIATOR, message=initial_message),),
        )

    def with_message(self, message: Message) -> "Conversation":
        """Return a copy with one message appended."""
        return replace(self, messages=(*self.messages, message))

    def with_summary(self, summary: str) -> "Conversation":
        """Return a copy with the summary set."""
        return replace(self, summary=summary)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "conversation-id": self.id,
            "personas": self.personas.to_dict(),
            "messages": [message.to_dict() for message in self.messages],
        }
        if self.summary is not None:
            result["summary"] = self.summary
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conversation":
        return cls(
            id=data["conversation-id"],
            personas=Personas.from_dict(data.get("personas")),
            messages=tuple(Message.from_dict(m) for m in data.get("messages") or ()),
            summary=data.get("summary"),
        )
