"""LLM integration."""

from persona_debate.infrastructure.llm.client import (
    CORRELATION_HEADER,
    ResilientCompletionClient,
)
from persona_debate.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMResponseFormatError,
    LLMTimeoutError,
)
from persona_debate.infrastructure.llm.factory import create_transport
from persona_debate.infrastructure.llm.prompt_builder import JinjaPromptBuilder
from persona_debate.infrastructure.llm.retry import (
    RATE_LIMIT_STATUS,
    CallState,
    RetryPolicy,
    StatusClass,
)
from persona_debate.infrastructure.llm.transports import (
    CompletionTransport,
    HttpxCompletionTransport,
    LiteLLMCompletionTransport,
    TransportResponse,
)

__all__ = [
    "CORRELATION_HEADER",
    "CallState",
    "CompletionTransport",
    "HttpxCompletionTransport",
    "JinjaPromptBuilder",
    "LLMAuthenticationError",
    "LLMResponseFormatError",
    "LLMTimeoutError",
    "LiteLLMCompletionTransport",
    "RATE_LIMIT_STATUS",
    "ResilientCompletionClient",
    "RetryPolicy",
    "StatusClass",
    "TransportResponse",
    "create_transport",
]
