# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.api.dependencies import get_current_actor
from murmur.db.session import get_db
from murmur.schemas.common import PaginatedResponse
from murmur.schemas.notification import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from murmur.services.feed import NotificationFeed

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=PaginatedResponse[NotificationResponse])
async def list_notifications(
    read: bool | None = Query(None),
    order_by: str = Query(
        "updated_at_desc", pattern="^(updated_at_desc|updated_at_asc|created_at_desc)$"
    ),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[NotificationResponse]:
    feed = NotificationFeed(db)
    items = await feed.list_notifications(
        actor_id, read=read, order_by=order_by, limit=limit, offset=offset
    )
    total = await feed.count(actor_id, read=read)
    return PaginatedResponse(items=items, total=total, limit=limit, offset=offset)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread=await NotificationFeed(db).count_unread(actor_id))


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_as_read(
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> MarkAllReadResponse:
    updated = await NotificationFeed(db).mark_all_as_read(actor_id)
    await db.commit()
    return MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_as_read(
    notification_id: str,
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> NotificationResponse:
    notification = await NotificationFeed(db).mark_as_read(actor_id, notification_id)
    await db.commit()
    return notification
