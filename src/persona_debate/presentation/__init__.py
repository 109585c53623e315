"""Presentation layer."""

from persona_debate.presentation.http_api import ConversationHandlers, create_app

__all__ = ["ConversationHandlers", "create_app"]
