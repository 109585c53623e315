"""Fixtures for LLM tests."""

import pytest

from persona_debate.config import CompletionConfig


@pytest.fixture
def completion_config() -> CompletionConfig:
    """Create completion config."""
    return CompletionConfig(
        endpoint_url="http://llm.test/v1/chat/completions",
        temperature=0.5,
        max_tokens=300,
    )
