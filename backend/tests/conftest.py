"""
Noteful Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── db_engine:       file-backed SQLite (aiosqlite) with all tables created
    ├── db_session:      AsyncSession on db_engine
    ├── seeded:          two folders, three tags, three notes (ids returned)
    └── api_client:      HTTPX AsyncClient on the app, sessions bound to db_engine
"""

import os
import tempfile

# Settings are read at import time; point them at a throwaway SQLite file
# BEFORE anything from noteful is imported.
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='noteful_test_')}/noteful.db"
)
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Dict  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import insert  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from noteful.database import Base, get_db_session  # noqa: E402
from noteful.models import Folder, Note, Tag, notes_tags  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession; services only pass it through to note_queries, which
    the unit tests patch.
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Database fixtures (SQLite via aiosqlite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Fresh database file per test with every table created from the models."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'noteful.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session) -> Dict[str, int]:
    """
    Committed sample data:

        folders: work, personal
        tags:    urgent, ideas, later
        notes:
            groceries  "Groceries list"  personal  [urgent, ideas]
            meeting    "Meeting notes"   work      [ideas]   (content mentions groceries)
            thought    "Random thought"  —         []
    """
    work, personal = Folder(name="Work"), Folder(name="Personal")
    urgent, ideas, later = Tag(name="urgent"), Tag(name="ideas"), Tag(name="later")
    db_session.add_all([work, personal, urgent, ideas, later])
    await db_session.flush()

    groceries = Note(title="Groceries list", content="milk, eggs", folder_id=personal.id)
    meeting = Note(title="Meeting notes", content="remember the groceries", folder_id=work.id)
    thought = Note(title="Random thought", content=None)
    db_session.add_all([groceries, meeting, thought])
    await db_session.flush()

    await db_session.execute(
        insert(notes_tags),
        [
            {"note_id": groceries.id, "tag_id": urgent.id},
            {"note_id": groceries.id, "tag_id": ideas.id},
            {"note_id": meeting.id, "tag_id": ideas.id},
        ],
    )
    await db_session.commit()

    return {
        "work": work.id,
        "personal": personal.id,
        "urgent": urgent.id,
        "ideas": ideas.id,
        "later": later.id,
        "groceries": groceries.id,
        "meeting": meeting.id,
        "thought": thought.id,
    }


@pytest_asyncio.fixture
async def api_client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is overridden so each request gets a session on the test
    engine, with the same commit-or-rollback behaviour as production.
    """
    from noteful.main import app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
