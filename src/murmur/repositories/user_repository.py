# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.models.user import User
from murmur.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def existing_ids(self, user_ids: Iterable[str]) -> set[str]:
        ids = set(user_ids)
        if not ids:
            return set()
        result = await self.session.execute(select(User.id).where(User.id.in_(ids)))
        return set(result.scalars().all())
