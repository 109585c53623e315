"""Persistence-related exceptions."""

from persona_debate.domain.exceptions import StoreFailure


class PersistenceError(StoreFailure):
    """Base exception for persistence-related errors."""


class DatabaseError(PersistenceError):
    """Database operation error."""
