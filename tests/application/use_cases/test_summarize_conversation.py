"""Tests for SummarizeConversationUseCase."""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from persona_debate.application.use_cases import (
    GenerateTurnUseCase,
    SummarizeConversationUseCase,
)
from persona_debate.domain.entities import Conversation, Personas
from persona_debate.domain.exceptions import (
    CompletionFailure,
    ConversationNotFoundError,
    EmptyConversationError,
    StoreFailure,
    SummaryGenerationError,
)
from persona_debate.domain.services import ConversationLocks
from persona_debate.infrastructure.llm import JinjaPromptBuilder
from persona_debate.infrastructure.persistence import SQLiteConversationRepository


@pytest.fixture
def use_case(
    mock_repository: Mock,
    prompt_builder: JinjaPromptBuilder,
    mock_completion_client: Mock,
) -> SummarizeConversationUseCase:
    return SummarizeConversationUseCase(
        mock_repository, prompt_builder, mock_completion_client
    )


class TestSummarizeConversation:
    """execute() tests."""

    async def test_saves_stripped_summary(
        self,
        use_case: SummarizeConversationUseCase,
        mock_repository: Mock,
        mock_completion_client: Mock,
    ) -> None:
        mock_completion_client.complete.return_value = "\n  Both sides disagree.  \n"

        summary = await use_case.execute("conv-1")

        assert summary == "Both sides disagree."
        mock_repository.save_summary.assert_awaited_once_with(
            "conv-1", "Both sides disagree."
        )
        mock_repository.save_messages.assert_not_called()
        mock_repository.put.assert_not_called()

    async def test_sends_summary_prompt(
        self,
        use_case: SummarizeConversationUseCase,
        mock_completion_client: Mock,
    ) -> None:
        await use_case.execute("conv-1", correlation_id="req-9")

        prompt = mock_completion_client.complete.call_args.args[0]
        assert [entry["role"] for entry in prompt] == ["system", "user"]
        assert "Technical Architect" in prompt[0]["content"]
        assert "initiator: Microservices or monolith?" in prompt[1]["content"]
        assert mock_completion_client.complete.call_args.kwargs == {
            "correlation_id": "req-9"
        }

    async def test_conversation_not_found(
        self,
        use_case: SummarizeConversationUseCase,
        mock_repository: Mock,
    ) -> None:
        mock_repository.get.return_value = None

        with pytest.raises(ConversationNotFoundError):
            await use_case.execute("missing")

    async def test_empty_conversation(
        self,
        use_case: SummarizeConversationUseCase,
        mock_repository: Mock,
        mock_completion_client: Mock,
        personas: Personas,
    ) -> None:
        mock_repository.get.return_value = Conversation(id="conv-1", personas=personas)

        with pytest.raises(EmptyConversationError):
            await use_case.execute("conv-1")

        mock_completion_client.complete.assert_not_called()

    async def test_completion_failure(
        self,
        use_case: SummarizeConversationUseCase,
        mock_repository: Mock,
        mock_completion_client: Mock,
    ) -> None:
        cause = CompletionFailure("AI service rate limit exceeded after 10 attempts")
        mock_completion_client.complete.side_effect = cause

        with pytest.raises(SummaryGenerationError) as exc_info:
            await use_case.execute("conv-1")

        assert exc_info.value.__cause__ is cause
        mock_repository.save_summary.assert_not_called()

    async def test_store_failure(
        self,
        use_case: SummarizeConversationUseCase,
        mock_repository: Mock,
    ) -> None:
        mock_repository.save_summary.side_effect = StoreFailure("disk full")

        with pytest.raises(SummaryGenerationError):
            await use_case.execute("conv-1")


async def test_summary_leaves_messages_unchanged(
    repository: SQLiteConversationRepository,
    prompt_builder: JinjaPromptBuilder,
    mock_completion_client: Mock,
    conversation: Conversation,
) -> None:
    """Test that summarizing only sets the summary."""
    await repository.put(conversation)
    mock_completion_client.complete.return_value = "A summary."
    use_case = SummarizeConversationUseCase(
        repository, prompt_builder, mock_completion_client
    )

    await use_case.execute(conversation.id)

    stored = await repository.get(conversation.id)
    assert stored is not None
    assert stored.messages == conversation.messages
    assert stored.summary == "A summary."


async def test_summary_runs_while_turn_holds_lock(
    repository: SQLiteConversationRepository,
    prompt_builder: JinjaPromptBuilder,
    conversation: Conversation,
) -> None:
    """Test that a summary is not blocked by a turn waiting on completion."""
    await repository.put(conversation)
    turn_may_finish = asyncio.Event()

    async def complete(prompt, correlation_id=None):
        if prompt[0]["content"].startswith("Summarize"):
            return "Quick summary."
        await turn_may_finish.wait()
        return "Slow reply."

    client = Mock()
    client.complete = AsyncMock(side_effect=complete)
    locks = ConversationLocks()
    generate = GenerateTurnUseCase(repository, prompt_builder, client, locks)
    summarize = SummarizeConversationUseCase(repository, prompt_builder, client)

    turn_task = asyncio.create_task(generate.execute(conversation.id, "responder"))
    while client.complete.await_count == 0:
        await asyncio.sleep(0)
    assert locks.get(conversation.id).locked()

    summary = await summarize.execute(conversation.id)

    assert summary == "Quick summary."
    assert not turn_task.done()
    turn_may_finish.set()
    await turn_task
    stored = await repository.get(conversation.id)
    assert stored is not None
    assert stored.summary == "Quick summary."
    assert stored.messages[-1].message == "Slow reply."
