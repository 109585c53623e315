"""Persona entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Persona:
    """Role profile that shapes a speaker's generated text.

    Attributes:
        id: Persona identifier chosen by the client.
        job_title: Job title the speaker argues as.
        traits: Personality traits, in order.
        communication_style: Free-form description of tone.
        motivations: What drives the persona.
        frustrations: What annoys the persona.
        values: What the persona cares about.
    """

    id: str
    job_title: str
    traits: tuple[str, ...] = ()
    communication_style: str = ""
    motivations: tuple[str, ...] = ()
    frustrations: tuple[str, ...] = ()
    values: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "job_title": self.job_title,
            "traits": list(self.traits),
            "communication_style": self.communication_style,
            "motivations": list(self.motivations),
            "frustrations": list(self.frustrations),
            "values": list(self.values),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Persona":
        """Build a Persona from its dict form.

        Optional list fields may be missing or null and become empty.

        Args:
            data: Persona dict.

        Returns:
            Persona instance.
        """
        return cls(
            id=str(data.get("id", "")),
            job_title=data.get("job_title", ""),
            traits=tuple(data.get("traits") or ()),
            communication_style=data.get("communication_style") or "",
            motivations=tuple(data.get("motivations") or ()),
            frustrations=tuple(data.get("frustrations") or ()),
            values=tuple(data.get("values") or ()),
        )
