# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Block Registry: who may not be notified about whom.

Each block action is stored as one directed edge (blocker -> blocked) so the
provenance of a block survives. Every visibility check looks at both
directions: if either user blocked the other, neither is notified about the
other's actions.

Unknown user ids are "not blocked" unless the registry runs in strict mode,
in which case they raise NotFoundError.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from murmur.errors import NotFoundError, ValidationError
from murmur.models.block import Block
from murmur.repositories.block_repository import BlockRepository
from murmur.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class BlockRegistry:
    def __init__(self, session: AsyncSession, *, strict: bool = False) -> None:
        self.session = session
        self._strict = strict
        self._blocks = BlockRepository(session)
        self._users = UserRepository(session)

    async def _require_users(self, *user_ids: str) -> None:
        known = await self._users.existing_ids(user_ids)
        for user_id in user_ids:
            if user_id not in known:
                raise NotFoundError("User", user_id)

    async def is_blocked(self, viewer_id: str, actor_id: str) -> bool:
        """True iff either user has a block edge towards the other."""
        if self._strict:
            await self._require_users(viewer_id, actor_id)
        if viewer_id == actor_id:
            return False
        if await self._blocks.has_edge(viewer_id, actor_id):
            return True
        return await self._blocks.has_edge(actor_id, viewer_id)

    async def blocked_among(self, user_id: str, candidate_ids: Iterable[str]) -> set[str]:
        """Return the candidates that block, or are blocked by, ``user_id``."""
        candidates = {c for c in candidate_ids if c != user_id}
        if self._strict:
            await self._require_users(user_id, *sorted(candidates))
        return await self._blocks.blocked_counterparts(user_id, candidates)

    async def block(self, blocker_id: str, blocked_id: str) -> Block:
        """Record that ``blocker_id`` blocks ``blocked_id``. Idempotent."""
        if blocker_id == blocked_id:
            raise ValidationError("Cannot block yourself")
        await self._require_users(blocker_id, blocked_id)

        existing = await self._blocks.get_edge(blocker_id, blocked_id)
        if existing is not None:
            return existing

        block = await self._blocks.create(blocker_id, blocked_id)
        logger.info("User %s blocked user %s", blocker_id, blocked_id)
        return block

    async def unblock(self, blocker_id: str, blocked_id: str) -> bool:
        """Remove the edge created by ``blocker_id``. Returns False if none existed.

        A block made in the other direction is left in place.
        """
        existing = await self._blocks.get_edge(blocker_id, blocked_id)
        if existing is None:
            return False
        await self._blocks.delete(existing)
        logger.info("User %s unblocked user %s", blocker_id, blocked_id)
        return True

    async def list_blocked(self, user_id: str) -> list[str]:
        return await self._blocks.list_blocked_by(user_id)
