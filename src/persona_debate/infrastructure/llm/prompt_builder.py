"""Persona-aware prompt construction."""

from persona_debate.domain.entities import Conversation, Turn
from persona_debate.domain.exceptions import InvalidPersonaStateError
from persona_debate.domain.services.message_formatter import format_transcript
from persona_debate.infrastructure.llm.templates import create_jinja_env


class JinjaPromptBuilder:
    """PromptBuilder implementation backed by Jinja2 templates.

    Pure: the same conversation and turn always produce the same prompt.
    """

    def __init__(self, max_response_chars: int = 200) -> None:
        """Initialize the builder.

        Args:
            max_response_chars: Length cap stated in the turn directive.
        """
        self._max_response_chars = max_response_chars
        self._jinja_env = create_jinja_env()
        self._turn_system_template = self._jinja_env.get_template("turn_system.j2")
        self._turn_directive_template = self._jinja_env.get_template(
            "turn_directive.j2"
        )
        self._summary_system_template = self._jinja_env.get_template(
            "summary_system.j2"
        )
        self._summary_query_template = self._jinja_env.get_template(
            "summary_query.j2"
        )

    def build_turn_prompt(
        self, conversation: Conversation, turn: Turn
    ) -> list[dict[str, str]]:
        """Build the prompt for the next message of ``turn``.

        History is written from the speaker's point of view: its own earlier
        messages are ``assistant`` entries, the other side's are ``user``.

        Args:
            conversation: Conversation with history and personas.
            turn: Side that speaks next.

        Returns:
            System entry, one entry per prior message, closing directive.

        Raises:
            InvalidPersonaStateError: No persona for ``turn``.
        """
        persona = conversation.personas.for_turn(turn)
        if persona is None:
            raise InvalidPersonaStateError(turn.value)

        prompt = [
            {
                "role": "system",
                "content": self._turn_system_template.render(persona=persona).strip(),
            }
        ]
        prompt.extend(
            {
                "role": "assistant" if message.speaker is turn else "user",
                "content": message.message,
            }
            for message in conversation.messages
        )
        prompt.append(
            {
                "role": "user",
                "content": self._turn_directive_template.render(
                    turn=turn.value,
                    max_response_chars=self._max_response_chars,
                ).strip(),
            }
        )
        return prompt

    def build_summary_prompt(
        self, conversation: Conversation
    ) -> list[dict[str, str]]:
        """Build the single-shot summary prompt.

        Args:
            conversation: Conversation to summarize.

        Returns:
            System entry naming both job titles, user entry with the transcript.
        """
        system_prompt = self._summary_system_template.render(
            initiator=conversation.personas.initiator,
            responder=conversation.personas.responder,
        ).strip()
        query_prompt = self._summary_query_template.render(
            transcript=format_transcript(conversation.messages),
        ).strip()
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": query_prompt},
        ]
