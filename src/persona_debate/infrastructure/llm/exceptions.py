"""LLM-related exceptions."""

from persona_debate.domain.exceptions import CompletionFailure


class LLMTimeoutError(CompletionFailure):
    """Completion request timed out."""


class LLMAuthenticationError(CompletionFailure):
    """Authentication error (invalid API key, etc.)."""


class LLMResponseFormatError(CompletionFailure):
    """Successful response without a usable text payload."""
