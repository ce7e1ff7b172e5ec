# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.db.session import get_db
from murmur.repositories.user_repository import UserRepository


async def get_current_actor(
    x_actor_id: str | None = Header(default=None),
    db: AsyncSession = Depends(get_db),
) -> str:
    """Return the acting user's id as forwarded by the authenticating gateway."""
    if x_actor_id is None or not x_actor_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not Authorised",
        )
    actor_id = x_actor_id.strip()
    if await UserRepository(db).get_by_id(actor_id) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not Authorised",
        )
    return actor_id
