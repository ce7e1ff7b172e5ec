# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Report Filer: files immutable reports and routes their notifications."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from murmur.config import Settings, get_settings
from murmur.errors import NotFoundError, ValidationError
from murmur.models.base import utcnow
from murmur.models.comment import Comment
from murmur.models.post import Post
from murmur.models.report import ReasonCategory, Report, ReportedKind
from murmur.models.user import User
from murmur.repositories.comment_repository import CommentRepository
from murmur.repositories.post_repository import PostRepository
from murmur.repositories.report_repository import ReportRepository
from murmur.repositories.user_repository import UserRepository
from murmur.services.deduplicator import Clock
from murmur.services.dispatcher import NotificationDispatcher

logger = logging.getLogger(__name__)

ReportedEntity = User | Post | Comment


class ReportFiler:
    def __init__(
        self,
        session: AsyncSession,
        *,
        settings: Settings | None = None,
        clock: Clock = utcnow,
        dispatcher: NotificationDispatcher | None = None,
    ) -> None:
        self.session = session
        self._clock = clock
        self._reports = ReportRepository(session)
        self._users = UserRepository(session)
        self._posts = PostRepository(session)
        self._comments = CommentRepository(session)
        self._dispatcher = dispatcher or NotificationDispatcher(
            session, settings=settings or get_settings(), clock=clock
        )

    async def resolve(self, resource_id: str) -> tuple[ReportedKind, ReportedEntity]:
        """Find the reportable resource with ``resource_id``.

        Comments are tried first, then posts, then users.
        """
        comment = await self._comments.get_by_id(resource_id)
        if comment is not None:
            return ReportedKind.COMMENT, comment
        post = await self._posts.get_by_id(resource_id)
        if post is not None:
            return ReportedKind.POST, post
        user = await self._users.get_by_id(resource_id)
        if user is not None:
            return ReportedKind.USER, user
        raise NotFoundError("Resource", resource_id)

    async def file_report(
        self,
        actor_id: str,
        resource_id: str,
        reason_category: ReasonCategory | str,
        reason_description: str,
    ) -> Report:
        try:
            category = ReasonCategory(reason_category)
        except ValueError as exc:
            raise ValidationError(f"Unknown reason category: {reason_category!r}") from exc
        description = reason_description.strip()
        if not description:
            raise ValidationError("Reason description must not be empty")
        if await self._users.get_by_id(actor_id) is None:
            raise NotFoundError("User", actor_id)

        kind, _ = await self.resolve(resource_id.strip())

        async with self.session.begin_nested():
            report = await self._reports.create(
                Report(
                    reporter_id=actor_id,
                    resource_kind=kind.value,
                    resource_id=resource_id.strip(),
                    reason_category=category.value,
                    reason_description=description,
                    created_at=self._clock(),
                )
            )
            await self._dispatcher.on_report_filed(report, actor_id)

        logger.info(
            "User %s filed report %s on %s %s", actor_id, report.id, kind.value, report.resource_id
        )
        return report
