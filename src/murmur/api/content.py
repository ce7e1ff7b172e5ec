# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.api.dependencies import get_current_actor
from murmur.db.session import get_db
from murmur.schemas.content import (
    CommentCreate,
    CommentResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    ReportCreate,
)
from murmur.schemas.notification import ReportRef
from murmur.services.content import ContentService
from murmur.services.feed import NotificationFeed
from murmur.services.report_filer import ReportFiler

router = APIRouter(tags=["content"])


@router.post("/posts", response_model=PostResponse, status_code=201)
async def create_post(
    body: PostCreate,
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> PostResponse:
    post = await ContentService(db).create_post(
        actor_id, body.content, title=body.title, post_id=body.id
    )
    await db.commit()
    return PostResponse.model_validate(post)


@router.patch("/posts/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    body: PostUpdate,
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> PostResponse:
    post = await ContentService(db).update_post(
        actor_id, post_id, body.content, title=body.title
    )
    await db.commit()
    return PostResponse.model_validate(post)


@router.post("/comments", response_model=CommentResponse, status_code=201)
async def create_comment(
    body: CommentCreate,
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> CommentResponse:
    comment = await ContentService(db).create_comment(
        actor_id, body.post_id, body.content, comment_id=body.id
    )
    await db.commit()
    return CommentResponse.model_validate(comment)


@router.post("/reports", response_model=ReportRef, status_code=201)
async def file_report(
    body: ReportCreate,
    actor_id: str = Depends(get_current_actor),
    db: AsyncSession = Depends(get_db),
) -> ReportRef:
    report = await ReportFiler(db).file_report(
        actor_id, body.resource_id, body.reason_category, body.reason_description
    )
    await db.commit()
    return await NotificationFeed(db).describe_report(report)
