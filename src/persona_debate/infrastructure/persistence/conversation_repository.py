"""SQLite implementation of ConversationRepository."""

import logging
from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from persona_debate.domain.entities import Conversation, Message, Personas
from persona_debate.domain.exceptions import ConversationNotFoundError
from persona_debate.infrastructure.persistence.exceptions import DatabaseError
from persona_debate.infrastructure.persistence.models import ConversationModel

logger = logging.getLogger(__name__)


class SQLiteConversationRepository:
    """SQLite ConversationRepository.

    Personas and messages are stored as JSON columns. Each method runs in
    its own session, so every write is atomic for its single row.
    """

    def __init__(
        self,
        session_factory: Callable[[], AbstractAsyncContextManager[AsyncSession]],
    ) -> None:
        """Initialize the repository.

        Args:
            session_factory: Async session factory.
        """
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession, None]:
        """Open a session, converting SQLAlchemy errors into DatabaseError."""
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("Database error during %s: %s", operation, e)
            raise DatabaseError(f"Database error during {operation}: {e}") from e

    async def get(self, conversation_id: str) -> Conversation | None:
        async with self._session("get") as session:
            model = await session.get(ConversationModel, conversation_id)
            if model is None:
                return None
            return self._to_entity(model)

    async def put(self, conversation: Conversation) -> None:
        """Store a conversation (upsert).

        Args:
            conversation: Conversation to store.
        """
        async with self._session("put") as session:
            existing = await session.get(ConversationModel, conversation.id)
            model = ConversationModel(
                conversation_id=conversation.id,
                personas=conversation.personas.to_dict(),
                messages=[m.to_dict() for m in conversation.messages],
                summary=conversation.summary,
                created_at=(
                    existing.created_at
                    if existing is not None
                    else datetime.now(timezone.utc)
                ),
                updated_at=datetime.now(timezone.utc),
            )
            await session.merge(model)
            await session.commit()

    async def list_ids(self) -> list[str]:
        """List conversation IDs, oldest first."""
        async with self._session("list_ids") as session:
            stmt = select(ConversationModel.conversation_id).order_by(
                ConversationModel.created_at  # type: ignore[arg-type]
            )
            result = await session.exec(stmt)
            return list(result.all())

    async def save_messages(
        self, conversation_id: str, messages: list[Message]
    ) -> None:
        """Replace the message list in one UPDATE.

        Args:
            conversation_id: Conversation ID.
            messages: Complete, updated message list.

        Raises:
            ConversationNotFoundError: No row with this ID.
        """
        await self._update(
            "save_messages",
            conversation_id,
            messages=[m.to_dict() for m in messages],
        )

    async def save_summary(self, conversation_id: str, summary: str) -> None:
        """Set only the summary column.

        Args:
            conversation_id: Conversation ID.
            summary: Summary text.

        Raises:
            ConversationNotFoundError: No row with this ID.
        """
        await self._update("save_summary", conversation_id, summary=summary)

    async def _update(self, operation: str, conversation_id: str, **values) -> None:
        async with self._session(operation) as session:
            stmt = (
                update(ConversationModel)
                .where(col(ConversationModel.conversation_id) == conversation_id)
                .values(**values, updated_at=datetime.now(timezone.utc))
            )
            result = await session.execute(stmt)
            await session.commit()
            if result.rowcount == 0:  # type: ignore[union-attr]
                raise ConversationNotFoundError(conversation_id)

    @staticmethod
    def _to_entity(model: ConversationModel) -> Conversation:
        """Convert a ConversationModel to a Conversation entity."""
        return Conversation(
            id=model.conversation_id,
            personas=Personas.from_dict(model.personas),
            messages=tuple(Message.from_dict(m) for m in model.messages),
            summary=model.summary,
        )
