"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, Field

from persona_debate.domain.entities import Persona, Personas


class PersonaPayload(BaseModel):
    """Persona as sent by clients."""

    id: str
    job_title: str
    traits: list[str] | None = None
    communication_style: str | None = None
    motivations: list[str] | None = None
    frustrations: list[str] | None = None
    values: list[str] | None = None

    def to_entity(self) -> Persona:
        return Persona.from_dict(self.model_dump())


class PersonasPayload(BaseModel):
    initiator: PersonaPayload
    responder: PersonaPayload

    def to_entity(self) -> Personas:
        return Personas(
            initiator=self.initiator.to_entity(),
            responder=self.responder.to_entity(),
        )


class CreateConversationRequest(BaseModel):
    """Body of POST /conversations."""

    initial_message: str = Field(
        alias="initialMessage",
        min_length=1,
        description="Opening message from the initiator",
    )
    personas: PersonasPayload


class GenerateResponseRequest(BaseModel):
    """Body of POST /generate-response.

    ``turn`` is checked by the use case, not here.
    """

    conversation_id: str = Field(alias="conversationId", min_length=1)
    turn: str = Field(min_length=1, description="initiator or responder")


class SummarizeRequest(BaseModel):
    """Body of POST /summarize."""

    conversation_id: str = Field(alias="conversationId", min_length=1)
