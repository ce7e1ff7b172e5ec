# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.api.dependencies import get_current_actor
from murmur.db.session import get_db
from murmur.schemas.content import BlockResponse
from murmur.services.block_registry import BlockRegistry

router = APIRouter(prefix="/blocks", tags=["blocks"])


@router.get("", response_model=list[str])
async def list_blocked(
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> list[str]:
    return await BlockRegistry(db).list_blocked(actor_id)


@router.put("/{user_id}", response_model=BlockResponse)
async def block_user(
    user_id: str,
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> BlockResponse:
    block = await BlockRegistry(db).block(actor_id, user_id)
    await db.commit()
    return BlockResponse.model_validate(block)


@router.delete("/{user_id}", status_code=204)
async def unblock_user(
    user_id: str,
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> None:
    removed = await BlockRegistry(db).unblock(actor_id, user_id)
    if not removed:
        raise HTTPException(status_code=404, detail="Block not found")
    await db.commit()
