# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.errors import NotFoundError, ValidationError
from murmur.services.block_registry import BlockRegistry
from tests.conftest import add_block, add_users, make_user


@pytest.fixture
async def users(db_session: AsyncSession) -> None:
    await add_users(
        db_session,
        make_user(id="you"),
        make_user(id="mrs-comment"),
        make_user(id="bystander"),
    )


@pytest.mark.usefixtures("users")
class TestIsBlocked:
    async def test_not_blocked_by_default(self, db_session: AsyncSession) -> None:
        registry = BlockRegistry(db_session)
        assert await registry.is_blocked("you", "mrs-comment") is False

    async def test_blocked_in_both_directions(self, db_session: AsyncSession) -> None:
        await add_block(db_session, "you", "mrs-comment")
        registry = BlockRegistry(db_session)
        assert await registry.is_blocked("you", "mrs-comment") is True
        assert await registry.is_blocked("mrs-comment", "you") is True
        assert await registry.is_blocked("you", "bystander") is False

    async def test_self_is_never_blocked(self, db_session: AsyncSession) -> None:
        assert await BlockRegistry(db_session).is_blocked("you", "you") is False

    async def test_unknown_user_fails_open(self, db_session: AsyncSession) -> None:
        assert await BlockRegistry(db_session).is_blocked("you", "ghost") is False

    async def test_unknown_user_in_strict_mode(self, db_session: AsyncSession) -> None:
        registry = BlockRegistry(db_session, strict=True)
        with pytest.raises(NotFoundError) as exc_info:
            await registry.is_blocked("you", "ghost")
        assert exc_info.value.resource_id == "ghost"

    async def test_blocked_among(self, db_session: AsyncSession) -> None:
        await add_block(db_session, "you", "mrs-comment")
        await add_block(db_session, "bystander", "you")
        registry = BlockRegistry(db_session)
        assert await registry.blocked_among("you", ["mrs-comment", "bystander", "you"]) == {
            "mrs-comment",
            "bystander",
        }
        assert await registry.blocked_among("mrs-comment", ["bystander"]) == set()


@pytest.mark.usefixtures("users")
class TestBlockManagement:
    async def test_block_is_idempotent(self, db_session: AsyncSession) -> None:
        registry = BlockRegistry(db_session)
        first = await registry.block("you", "mrs-comment")
        second = await registry.block("you", "mrs-comment")
        assert first is second
        assert await registry.list_blocked("you") == ["mrs-comment"]

    async def test_cannot_block_yourself(self, db_session: AsyncSession) -> None:
        with pytest.raises(ValidationError, match="Cannot block yourself"):
            await BlockRegistry(db_session).block("you", "you")

    async def test_cannot_block_unknown_user(self, db_session: AsyncSession) -> None:
        with pytest.raises(NotFoundError):
            await BlockRegistry(db_session).block("you", "ghost")

    async def test_unblock_removes_only_own_edge(self, db_session: AsyncSession) -> None:
        registry = BlockRegistry(db_session)
        await registry.block("you", "mrs-comment")
        await registry.block("mrs-comment", "you")

        assert await registry.unblock("you", "mrs-comment") is True
        assert await registry.unblock("you", "mrs-comment") is False
        # The block made by the other user still hides both from each other
        assert await registry.is_blocked("you", "mrs-comment") is True
        assert await registry.list_blocked("mrs-comment") == ["you"]
