# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)

from murmur.config import Settings
from murmur.db.session import build_engine
from murmur.models.base import Base
from murmur.models.block import Block
from murmur.models.user import User


def _get_test_database_url() -> str:
    """Return the test database URL from env, falling back to in-memory SQLite."""
    return os.environ.get(
        "TEST_DATABASE_URL",
        "sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
async def async_engine() -> AsyncIterator[AsyncEngine]:
    """Create an async engine for the test database."""
    engine = build_engine(_get_test_database_url(), pool_size=5)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Provide a database session that rolls back after each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


class FakeClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url=_get_test_database_url())


# ---------------------------------------------------------------------------
# Factory helpers for creating model instances in tests
# ---------------------------------------------------------------------------


def make_user(
    *,
    id: str,
    name: str | None = None,
    slug: str | None = None,
) -> dict[str, object]:
    """Return kwargs suitable for constructing a User model instance."""
    return {
        "id": id,
        "name": name or id.replace("-", " ").title(),
        "slug": slug or id.lower(),
    }


async def add_users(session: AsyncSession, *users: dict[str, object]) -> list[User]:
    created = [User(**kwargs) for kwargs in users]
    session.add_all(created)
    await session.flush()
    return created


async def add_block(session: AsyncSession, blocker_id: str, blocked_id: str) -> Block:
    block = Block(blocker_id=blocker_id, blocked_id=blocked_id)
    session.add(block)
    await session.flush()
    return block


def mention(user_id: str, slug: str | None = None) -> str:
    """Return mention markup for ``user_id`` as the editor produces it."""
    return (
        f'<a class="mention" data-mention-id="{user_id}" '
        f'href="/profile/{user_id}">@{slug or user_id}</a>'
    )


# Post edit from the editor: three mentions of the same user, with the
# indentation and line breaks the editor leaves behind.
EDITED_CONTENT = (
    "\n"
    "              One more mention to\n"
    '              <a data-mention-id="you" class="mention" href="/profile/you">\n'
    "                @al-capone\n"
    "              </a>\n"
    "              and again:\n"
    '              <a data-mention-id="you" class="mention" href="/profile/you">\n'
    "                @al-capone\n"
    "              </a>\n"
    "              and again\n"
    '              <a data-mention-id="you" class="mention" href="/profile/you">\n'
    "                @al-capone\n"
    "              </a>\n"
    "            "
)

EDITED_CONTENT_REWRITTEN = (
    "<br>One more mention to<br>"
    '<a data-mention-id="you" class="mention" href="/profile/you" target="_blank">'
    "<br>@al-capone<br></a><br>and again:<br>"
    '<a data-mention-id="you" class="mention" href="/profile/you" target="_blank">'
    "<br>@al-capone<br></a><br>and again<br>"
    '<a data-mention-id="you" class="mention" href="/profile/you" target="_blank">'
    "<br>@al-capone<br></a><br>"
)
