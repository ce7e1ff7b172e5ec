# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ColumnElement, and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.models.comment import Comment
from murmur.models.notification import Notification, SourceKind
from murmur.models.post import Post
from murmur.models.report import Report
from murmur.repositories.base import BaseRepository

_ORDERINGS = {
    "updated_at_desc": (Notification.updated_at.desc(), Notification.id.desc()),
    "updated_at_asc": (Notification.updated_at.asc(), Notification.id.asc()),
    "created_at_desc": (Notification.created_at.desc(), Notification.id.desc()),
}

_SOURCE_TABLES = (
    (SourceKind.POST, Post),
    (SourceKind.COMMENT, Comment),
    (SourceKind.REPORT, Report),
)


def _visible_to(recipient_id: str, read: bool | None) -> list[ColumnElement[bool]]:
    """Filters for the notifications of ``recipient_id`` whose source still exists."""
    clauses: list[ColumnElement[bool]] = [
        Notification.recipient_id == recipient_id,
        or_(
            *(
                and_(
                    Notification.from_kind == kind.value,
                    select(model.id).where(model.id == Notification.from_id).exists(),
                )
                for kind, model in _SOURCE_TABLES
            )
        ),
    ]
    if read is not None:
        clauses.append(Notification.read.is_(read))
    return clauses


class NotificationRepository(BaseRepository[Notification]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Notification)

    async def get_by_key(
        self,
        recipient_id: str,
        from_kind: str,
        from_id: str,
        reason: str,
    ) -> Notification | None:
        result = await self.session.execute(
            select(Notification).where(
                Notification.recipient_id == recipient_id,
                Notification.from_kind == from_kind,
                Notification.from_id == from_id,
                Notification.reason == reason,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_recipient(
        self,
        recipient_id: str,
        *,
        read: bool | None = None,
        order_by: str = "updated_at_desc",
        limit: int = 50,
        offset: int = 0,
    ) -> list[Notification]:
        if order_by not in _ORDERINGS:
            raise ValueError(f"Unsupported ordering: {order_by}")
        stmt = (
            select(Notification)
            .where(*_visible_to(recipient_id, read))
            .order_by(*_ORDERINGS[order_by])
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_for_recipient(
        self, recipient_id: str, *, read: bool | None = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(Notification)
            .where(*_visible_to(recipient_id, read))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def mark_all_read(self, recipient_id: str) -> int:
        """Flip every unread notification of ``recipient_id`` to read.

        ``updated_at`` is left alone: only re-triggering events move it.
        """
        result = await self.session.execute(
            update(Notification)
            .where(
                Notification.recipient_id == recipient_id,
                Notification.read.is_(False),
            )
            .values(read=True)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.flush()
        return result.rowcount

    async def touch(self, notification: Notification, now: datetime) -> Notification:
        notification.read = False
        notification.updated_at = now
        await self.session.flush()
        return notification
