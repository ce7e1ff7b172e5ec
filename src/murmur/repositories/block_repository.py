# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.models.block import Block


class BlockRepository:
    """Directed block edges. Visibility checks query both directions."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_edge(self, blocker_id: str, blocked_id: str) -> Block | None:
        return await self.session.get(Block, (blocker_id, blocked_id))

    async def has_edge(self, blocker_id: str, blocked_id: str) -> bool:
        result = await self.session.execute(
            select(Block.blocker_id).where(
                Block.blocker_id == blocker_id,
                Block.blocked_id == blocked_id,
            )
        )
        return result.first() is not None

    async def create(self, blocker_id: str, blocked_id: str) -> Block:
        block = Block(blocker_id=blocker_id, blocked_id=blocked_id)
        self.session.add(block)
        await self.session.flush()
        return block

    async def delete(self, block: Block) -> None:
        await self.session.delete(block)
        await self.session.flush()

    async def blocked_counterparts(
        self, user_id: str, candidate_ids: set[str]
    ) -> set[str]:
        """Return the candidates that share a block edge with ``user_id`` in
        either direction."""
        if not candidate_ids:
            return set()
        result = await self.session.execute(
            select(Block.blocker_id, Block.blocked_id).where(
                or_(
                    and_(
                        Block.blocker_id == user_id,
                        Block.blocked_id.in_(candidate_ids),
                    ),
                    and_(
                        Block.blocked_id == user_id,
                        Block.blocker_id.in_(candidate_ids),
                    ),
                )
            )
        )
        counterparts: set[str] = set()
        for blocker_id, blocked_id in result.all():
            counterparts.add(blocked_id if blocker_id == user_id else blocker_id)
        return counterparts

    async def list_blocked_by(self, user_id: str) -> list[str]:
        result = await self.session.execute(
            select(Block.blocked_id)
            .where(Block.blocker_id == user_id)
            .order_by(Block.created_at)
        )
        return list(result.scalars().all())
