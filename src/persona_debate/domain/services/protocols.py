"""Domain service protocols."""

from typing import Protocol

from persona_debate.domain.entities import Conversation, Turn


class CompletionClient(Protocol):
    """Text-generation abstraction.

    Implementations raise ``CompletionFailure`` when no text can be produced.
    """

    async def complete(
        self,
        messages: list[dict[str, str]],
        correlation_id: str | None = None,
    ) -> str:
        """Generate text for a prompt.

        Args:
            messages: OpenAI-format message list.
            correlation_id: Trace ID forwarded to the endpoint.

        Returns:
            Generated text.
        """
        ...


class PromptBuilder(Protocol):
    """Builds role-tagged prompts from a conversation."""

    def build_turn_prompt(
        self, conversation: Conversation, turn: Turn
    ) -> list[dict[str, str]]:
        """Build the prompt for the next message of ``turn``.

        Args:
            conversation: Conversation with history and personas.
            turn: Side that speaks next.

        Returns:
            System entry, one entry per prior message, closing directive.
        """
        ...

    def build_summary_prompt(
        self, conversation: Conversation
    ) -> list[dict[str, str]]:
        """Build the prompt that summarizes the whole conversation.

        Args:
            conversation: Conversation to summarize.

        Returns:
            System entry and a user entry holding the transcript.
        """
        ...
