"""Tests for create_transport."""

import pytest

from persona_debate.config import CompletionConfig
from persona_debate.infrastructure.llm import (
    HttpxCompletionTransport,
    LiteLLMCompletionTransport,
    create_transport,
)


async def test_http_backend() -> None:
    transport = create_transport(
        CompletionConfig(backend="http", endpoint_url="http://llm.test/v1")
    )

    assert isinstance(transport, HttpxCompletionTransport)
    await transport.close()


def test_litellm_backend() -> None:
    transport = create_transport(CompletionConfig(backend="litellm"))

    assert isinstance(transport, LiteLLMCompletionTransport)


def test_http_backend_requires_endpoint() -> None:
    with pytest.raises(ValueError, match="endpoint_url"):
        create_transport(CompletionConfig(backend="http"))


def test_unknown_backend() -> None:
    with pytest.raises(ValueError, match="Unknown completion backend"):
        create_transport(CompletionConfig(backend="grpc"))
