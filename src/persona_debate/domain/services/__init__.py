"""Domain services."""

from persona_debate.domain.services.conversation_locks import ConversationLocks
from persona_debate.domain.services.message_formatter import (
    format_message,
    format_transcript,
)
from persona_debate.domain.services.protocols import CompletionClient, PromptBuilder

__all__ = [
    "CompletionClient",
    "ConversationLocks",
    "PromptBuilder",
    "format_message",
    "format_transcript",
]
