# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.models.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    def __init__(self, session: AsyncSession, model: type[T]) -> None:
        self.session = session
        self.model = model

    async def get_by_id(self, entity_id: str) -> T | None:
        return await self.session.get(self.model, entity_id)

    async def get_many(self, entity_ids: Iterable[str]) -> dict[str, T]:
        ids = set(entity_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(self.model).where(self.model.id.in_(ids))  # type: ignore[attr-defined]
        )
        return {entity.id: entity for entity in result.scalars().all()}  # type: ignore[attr-defined]

    async def create(self, entity: T) -> T:
        self.session.add(entity)
        await self.session.flush()
        return entity

