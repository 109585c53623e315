"""Fixtures for use case tests."""

from unittest.mock import AsyncMock, Mock

import pytest

from persona_debate.domain.entities import Conversation
from persona_debate.infrastructure.llm import JinjaPromptBuilder


@pytest.fixture
def mock_repository(conversation: Conversation) -> Mock:
    """Create mock conversation repository holding ``conversation``."""
    repo = Mock()
    repo.get = AsyncMock(return_value=conversation)
    repo.put = AsyncMock()
    repo.list_ids = AsyncMock(return_value=[conversation.id])
    repo.save_messages = AsyncMock()
    repo.save_summary = AsyncMock()
    return repo


@pytest.fixture
def mock_completion_client() -> Mock:
    """Create mock completion client."""
    client = Mock()
    client.complete = AsyncMock(return_value="counter-argument")
    return client


@pytest.fixture
def prompt_builder() -> JinjaPromptBuilder:
    return JinjaPromptBuilder()
