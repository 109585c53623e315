"""Use cases."""

from persona_debate.application.use_cases.create_conversation import (
    CreateConversationUseCase,
)
from persona_debate.application.use_cases.generate_turn import GenerateTurnUseCase
from persona_debate.application.use_cases.get_conversation import (
    GetConversationUseCase,
    ListConversationsUseCase,
)
from persona_debate.application.use_cases.summarize_conversation import (
    SummarizeConversationUseCase,
)

__all__ = [
    "CreateConversationUseCase",
    "GenerateTurnUseCase",
    "GetConversationUseCase",
    "ListConversationsUseCase",
    "SummarizeConversationUseCase",
]
