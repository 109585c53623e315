"""Domain exceptions.

Every error raised by the debate engine derives from ``DebateError`` and
carries the HTTP status class it maps to, so callers can tell a caller
error (4xx) from a dependency failure (5xx) without inspecting types.
"""

from typing import Any


class DebateError(Exception):
    """Base exception for the debate engine."""

    http_status: int = 500

    def __init__(self, message: str = "", details: Any = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable message.
            details: Optional structured details reported to the caller.
        """
        self.details = details
        super().__init__(message)

    @property
    def is_client_error(self) -> bool:
        """Whether the failure was caused by the caller."""
        return 400 <= self.http_status < 500


class ValidationError(DebateError):
    """Bad or missing required input."""

    http_status = 400


class InvalidTurnError(ValidationError):
    """Turn is not one of ``initiator`` / ``responder``."""

    def __init__(self, turn: object) -> None:
        self.turn = turn
        super().__init__("turn must be either 'initiator' or 'responder'")


class ConversationNotFoundError(DebateError):
    """Unknown conversation ID."""

    http_status = 404

    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        super().__init__("Conversation not found")


class InvalidConversationStateError(DebateError):
    """Conversation is in a state that does not allow the operation."""

    http_status = 400


class MissingPersonasError(InvalidConversationStateError):
    """Conversation lacks one or both personas."""

    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        super().__init__("Conversation is missing personas data")


class EmptyConversationError(InvalidConversationStateError):
    """Conversation has no messages."""

    def __init__(self, conversation_id: str) -> None:
        self.conversation_id = conversation_id
        super().__init__("Conversation has no messages")


class InvalidPersonaStateError(InvalidConversationStateError):
    """No persona is attached for the speaking side."""

    def __init__(self, turn: str) -> None:
        self.turn = turn
        super().__init__(f"No persona configured for {turn}")


class RateLimitedError(DebateError):
    """Completion endpoint signalled rate limiting (transient)."""

    http_status = 503

    def __init__(self, status_code: int, attempt: int) -> None:
        self.status_code = status_code
        self.attempt = attempt
        super().__init__(
            f"Completion endpoint rate limited (status {status_code}, "
            f"attempt {attempt})"
        )


class CompletionFailure(DebateError):
    """Permanent failure of the external text-generation call."""

    http_status = 502

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize the error.

        Args:
            message: Error message.
            status_code: Upstream HTTP status, if one was received.
        """
        self.status_code = status_code
        super().__init__(message)


class StoreFailure(DebateError):
    """Conversation store error."""

    http_status = 500


class _WrappedFailure(DebateError):
    """Failure of a use case, attached to the original cause."""

    action = "operation"

    def __init__(self, conversation_id: str, cause: DebateError) -> None:
        self.conversation_id = conversation_id
        self.cause = cause
        self.http_status = cause.http_status
        super().__init__(f"Failed to {self.action}: {cause}")


class TurnGenerationError(_WrappedFailure):
    """Turn generation failed; ``__cause__`` holds the original error."""

    action = "generate response"


class SummaryGenerationError(_WrappedFailure):
    """Summarization failed; ``__cause__`` holds the original error."""

    action = "summarize conversation"
