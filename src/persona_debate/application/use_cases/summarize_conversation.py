"""Summarize conversation use case."""

import logging

from persona_debate.application.use_cases.helpers import load_conversation
from persona_debate.domain.exceptions import (
    CompletionFailure,
    EmptyConversationError,
    StoreFailure,
    SummaryGenerationError,
)
from persona_debate.domain.repositories import ConversationRepository
from persona_debate.domain.services import CompletionClient, PromptBuilder

logger = logging.getLogger(__name__)


class SummarizeConversationUseCase:
    """Summarizes a conversation and stores the summary on its record.

    Messages are never modified. The summary is written to its own column,
    so summarizing does not take the conversation lock and never blocks a
    turn while the completion call is retrying.
    """

    def __init__(
        self,
        conversation_repository: ConversationRepository,
        prompt_builder: PromptBuilder,
        completion_client: CompletionClient,
    ) -> None:
        self._conversation_repository = conversation_repository
        self._prompt_builder = prompt_builder
        self._completion_client = completion_client

    async def execute(
        self,
        conversation_id: str,
        correlation_id: str | None = None,
    ) -> str:
        """Execute the use case.

        Args:
            conversation_id: Conversation ID.
            correlation_id: Trace ID forwarded to the completion endpoint.

        Returns:
            Summary text.

        Raises:
            ConversationNotFoundError: Unknown conversation.
            EmptyConversationError: Nothing to summarize.
            SummaryGenerationError: Completion or store failure.
        """
        try:
            conversation = await load_conversation(
                self._conversation_repository, conversation_id
            )
        except StoreFailure as e:
            raise SummaryGenerationError(conversation_id, e) from e

        if not conversation.messages:
            raise EmptyConversationError(conversation_id)

        prompt = self._prompt_builder.build_summary_prompt(conversation)
        try:
            summary = await self._completion_client.complete(
                prompt, correlation_id=correlation_id
            )
        except CompletionFailure as e:
            logger.error("Summary failed for conversation %s: %s", conversation_id, e)
            raise SummaryGenerationError(conversation_id, e) from e

        summary = summary.strip()
        try:
            await self._conversation_repository.save_summary(conversation_id, summary)
        except StoreFailure as e:
            raise SummaryGenerationError(conversation_id, e) from e

        logger.info(
            "Summarized conversation %s (messages=%d, correlation_id=%s)",
            conversation_id,
            len(conversation.messages),
            correlation_id,
        )
        return summary
