"""SQLModel table definitions."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class ConversationModel(SQLModel, table=True):
    """Conversation table, one row per conversation record."""

    __tablename__ = "conversations"

    conversation_id: str = Field(primary_key=True)
    personas: dict[str, Any] = Field(
        default_factory=dict, sa_column=Column(JSON, nullable=False)
    )
    # JSON format: [{"from": "initiator", "message": "..."}, ...]
    messages: list[dict[str, Any]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    summary: str | None = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
