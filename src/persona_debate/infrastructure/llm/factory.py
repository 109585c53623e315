"""Completion transport factory."""

from persona_debate.config import CompletionConfig
from persona_debate.infrastructure.llm.transports import (
    CompletionTransport,
    HttpxCompletionTransport,
    LiteLLMCompletionTransport,
)


def create_transport(config: CompletionConfig) -> CompletionTransport:
    """Create the transport selected by ``config.backend``.

    Args:
        config: Completion configuration.

    Returns:
        HttpxCompletionTransport for ``http``, LiteLLMCompletionTransport
        for ``litellm``.

    Raises:
        ValueError: Unknown backend, or ``http`` without an endpoint URL.
    """
    if config.backend == "http":
        if not config.endpoint_url:
            raise ValueError("endpoint_url is required for the http backend")
        return HttpxCompletionTransport(
            config.endpoint_url,
            api_key=config.api_key,
            timeout_seconds=config.timeout_seconds,
        )
    if config.backend == "litellm":
        return LiteLLMCompletionTransport(
            config.model,
            api_base=config.endpoint_url,
            api_key=config.api_key,
            timeout_seconds=config.timeout_seconds,
        )
    raise ValueError(f"Unknown completion backend: {config.backend}")
