"""Common fixtures."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from persona_debate.domain.entities import (
    Conversation,
    Message,
    Persona,
    Personas,
    Turn,
)
from persona_debate.infrastructure.persistence import SQLiteConversationRepository


@pytest.fixture
def architect() -> Persona:
    """Create the initiator persona."""
    return Persona(
        id="technical_architect",
        job_title="Technical Architect",
        traits=("analytical", "pragmatic", "systematic"),
        communication_style="logical and structured",
        values=("efficiency", "best practices", "scalability"),
    )


@pytest.fixture
def product_manager() -> Persona:
    """Create the responder persona."""
    return Persona(
        id="product_manager",
        job_title="Product Manager",
        traits=("strategic", "customer-focused", "decisive"),
        communication_style="persuasive and goal-oriented",
        motivations=("ship on time",),
        frustrations=("scope creep",),
        values=("business value", "user needs", "data-driven decisions"),
    )


@pytest.fixture
def personas(architect: Persona, product_manager: Persona) -> Personas:
    return Personas(initiator=architect, responder=product_manager)


@pytest.fixture
def conversation(personas: Personas) -> Conversation:
    """Create a conversation with three messages."""
    return Conversation(
        id="conv-1",
        personas=personas,
        messages=(
            Message(speaker=Turn.INITIATOR, message="Microservices or monolith?"),
            Message(speaker=Turn.RESPONDER, message="Whatever ships faster."),
            Message(speaker=Turn.INITIATOR, message="Speed now costs us later."),
        ),
    )


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create in-memory SQLite async engine."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    """Create async session factory."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def get_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            yield session

    return get_session


@pytest.fixture
def repository(session_factory) -> SQLiteConversationRepository:
    """Create SQLite conversation repository."""
    return SQLiteConversationRepository(session_factory)
