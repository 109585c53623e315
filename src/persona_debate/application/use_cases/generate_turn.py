"""Generate turn use case."""

import logging

from persona_debate.application.use_cases.helpers import load_conversation
from persona_debate.domain.entities import Conversation, Message, Turn
from persona_debate.domain.exceptions import (
    CompletionFailure,
    EmptyConversationError,
    MissingPersonasError,
    StoreFailure,
    TurnGenerationError,
)
from persona_debate.domain.repositories import ConversationRepository
from persona_debate.domain.services import (
    CompletionClient,
    ConversationLocks,
    PromptBuilder,
)

logger = logging.getLogger(__name__)


class GenerateTurnUseCase:
    """Generates the next message of a conversation for the requested side.

    The caller decides whose turn it is; the use case never infers it.
    Load, prompt, completion and the message-list write run under the
    conversation's lock so concurrent turns in this process cannot drop
    each other's messages.
    """

    def __init__(
        self,
        conversation_repository: ConversationRepository,
        prompt_builder: PromptBuilder,
        completion_client: CompletionClient,
        locks: ConversationLocks | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            conversation_repository: Conversation store.
            prompt_builder: Builds the persona-aware prompt.
            completion_client: Generates the message text.
            locks: Per-conversation locks, shared by every turn writer.
        """
        self._conversation_repository = conversation_repository
        self._prompt_builder = prompt_builder
        self._completion_client = completion_client
        self._locks = locks if locks is not None else ConversationLocks()

    async def execute(
        self,
        conversation_id: str,
        turn: Turn | str,
        correlation_id: str | None = None,
    ) -> Message:
        """Execute the use case.

        Processing flow:
        1. Load the conversation
        2. Validate personas, messages and turn
        3. Build the prompt and call the completion client
        4. Append the message and write back the whole message list

        Args:
            conversation_id: Conversation ID.
            turn: Side that speaks next.
            correlation_id: Trace ID forwarded to the completion endpoint.

        Returns:
            The newly appended message.

        Raises:
            ConversationNotFoundError: Unknown conversation.
            MissingPersonasError: A persona is missing.
            EmptyConversationError: The conversation has no messages.
            InvalidTurnError: ``turn`` is not initiator or responder.
            TurnGenerationError: Completion or store failure; ``__cause__``
                is the original error. Nothing is written in that case.
        """
        async with self._locks.get(conversation_id):
            try:
                conversation = await load_conversation(
                    self._conversation_repository, conversation_id
                )
            except StoreFailure as e:
                raise TurnGenerationError(conversation_id, e) from e

            speaker = self._validate(conversation, turn)
            prompt = self._prompt_builder.build_turn_prompt(conversation, speaker)

            try:
                text = await self._completion_client.complete(
                    prompt, correlation_id=correlation_id
                )
            except CompletionFailure as e:
                logger.error(
                    "Completion failed for conversation %s (turn=%s): %s",
                    conversation_id,
                    speaker.value,
                    e,
                )
                raise TurnGenerationError(conversation_id, e) from e

            message = Message(speaker=speaker, message=text)
            try:
                await self._conversation_repository.save_messages(
                    conversation_id, [*conversation.messages, message]
                )
            except StoreFailure as e:
                raise TurnGenerationError(conversation_id, e) from e

        logger.info(
            "Generated %s turn for conversation %s (messages=%d, correlation_id=%s)",
            speaker.value,
            conversation_id,
            len(conversation.messages) + 1,
            correlation_id,
        )
        return message

    @staticmethod
    def _validate(conversation: Conversation, turn: Turn | str) -> Turn:
        """Validate that the conversation can take a turn.

        Returns:
            Parsed turn.
        """
        if not conversation.personas.is_complete():
            raise MissingPersonasError(conversation.id)
        if not conversation.messages:
            raise EmptyConversationError(conversation.id)
        return Turn.parse(turn)
