"""Message entity."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from persona_debate.domain.exceptions import InvalidTurnError


class Turn(str, Enum):
    """Side of the debate that speaks."""

    INITIATOR = "initiator"
    RESPONDER = "responder"

    @classmethod
    def parse(cls, value: "Turn | str") -> "Turn":
        """Parse a turn value.

        Args:
            value: Turn or its string form.

        Returns:
            Turn member.

        Raises:
            InvalidTurnError: Value is not a known turn.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidTurnError(value) from e


@dataclass(frozen=True)
class Message:
    """One utterance in a conversation.

    Attributes:
        speaker: Side that produced the message (serialized as ``from``).
        message: Message text.
    """

    speaker: Turn
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"from": self.speaker.value, "message": self.message}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        return cls(speaker=Turn.parse(data["from"]), message=data["message"])
