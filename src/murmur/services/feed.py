# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Read side of notifications: listing with resolved sources and read state."""

from __future__ import annotations

import logging
from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from murmur.errors import AuthorizationError, NotFoundError
from murmur.models.notification import Notification, SourceKind
from murmur.models.report import Report, ReportedKind
from murmur.repositories.comment_repository import CommentRepository
from murmur.repositories.notification_repository import NotificationRepository
from murmur.repositories.post_repository import PostRepository
from murmur.repositories.report_repository import ReportRepository
from murmur.repositories.user_repository import UserRepository
from murmur.schemas.notification import (
    CommentRef,
    FiledReport,
    NotificationResponse,
    PostRef,
    ReportRef,
    UserRef,
)

logger = logging.getLogger(__name__)


class NotificationFeed:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._notifications = NotificationRepository(session)
        self._users = UserRepository(session)
        self._posts = PostRepository(session)
        self._comments = CommentRepository(session)
        self._reports = ReportRepository(session)

    async def list_notifications(
        self,
        recipient_id: str,
        *,
        read: bool | None = None,
        order_by: str = "updated_at_desc",
        limit: int = 50,
        offset: int = 0,
    ) -> list[NotificationResponse]:
        notifications = await self._notifications.list_for_recipient(
            recipient_id, read=read, order_by=order_by, limit=limit, offset=offset
        )
        return await self._resolve(notifications)

    async def count(self, recipient_id: str, *, read: bool | None = None) -> int:
        return await self._notifications.count_for_recipient(recipient_id, read=read)

    async def count_unread(self, recipient_id: str) -> int:
        return await self.count(recipient_id, read=False)

    async def mark_as_read(self, actor_id: str, notification_id: str) -> NotificationResponse:
        """Flip ``read`` to true. ``created_at`` and ``updated_at`` are untouched."""
        notification = await self._notifications.get_by_id(notification_id)
        if notification is None:
            raise NotFoundError("Notification", notification_id)
        if notification.recipient_id != actor_id:
            raise AuthorizationError("Only the recipient can mark a notification as read")
        notification.read = True
        await self.session.flush()
        resolved = await self._resolve([notification])
        if not resolved:
            raise NotFoundError(notification.from_kind, notification.from_id)
        return resolved[0]

    async def mark_all_as_read(self, actor_id: str) -> int:
        return await self._notifications.mark_all_read(actor_id)

    async def describe_report(self, report: Report) -> ReportRef:
        """Project ``report`` with its reported resource resolved to its kind."""
        filed = await self._project_reports([report])
        if report.id not in filed:
            raise NotFoundError(report.resource_kind, report.resource_id)
        return ReportRef(id=report.id, filed=[filed[report.id]])

    # -- source resolution --------------------------------------------------

    async def _resolve(
        self, notifications: list[Notification]
    ) -> list[NotificationResponse]:
        ids_by_kind: dict[str, set[str]] = defaultdict(set)
        for notification in notifications:
            ids_by_kind[notification.from_kind].add(notification.from_id)

        reports = await self._reports.get_many(ids_by_kind[SourceKind.REPORT.value])
        filed = await self._project_reports(list(reports.values()))
        sources: dict[tuple[str, str], PostRef | CommentRef | ReportRef] = {}
        for post in (await self._posts.get_many(ids_by_kind[SourceKind.POST.value])).values():
            sources[(SourceKind.POST.value, post.id)] = PostRef.model_validate(post)
        for comment in (
            await self._comments.get_many(ids_by_kind[SourceKind.COMMENT.value])
        ).values():
            sources[(SourceKind.COMMENT.value, comment.id)] = CommentRef.model_validate(comment)
        for report_id, entry in filed.items():
            sources[(SourceKind.REPORT.value, report_id)] = ReportRef(id=report_id, filed=[entry])

        responses: list[NotificationResponse] = []
        for notification in notifications:
            source = sources.get((notification.from_kind, notification.from_id))
            if source is None:
                logger.debug(
                    "Skipping notification %s: %s %s no longer exists",
                    notification.id,
                    notification.from_kind,
                    notification.from_id,
                )
                continue
            responses.append(
                NotificationResponse(
                    id=notification.id,
                    reason=notification.reason,
                    read=notification.read,
                    created_at=notification.created_at,
                    updated_at=notification.updated_at,
                    source=source,
                )
            )
        return responses

    async def _project_reports(self, reports: list[Report]) -> dict[str, FiledReport]:
        ids_by_kind: dict[str, set[str]] = defaultdict(set)
        for report in reports:
            ids_by_kind[report.resource_kind].add(report.resource_id)

        resources: dict[tuple[str, str], UserRef | PostRef | CommentRef] = {}
        for user in (await self._users.get_many(ids_by_kind[ReportedKind.USER.value])).values():
            resources[(ReportedKind.USER.value, user.id)] = UserRef.model_validate(user)
        for post in (await self._posts.get_many(ids_by_kind[ReportedKind.POST.value])).values():
            resources[(ReportedKind.POST.value, post.id)] = PostRef.model_validate(post)
        for comment in (
            await self._comments.get_many(ids_by_kind[ReportedKind.COMMENT.value])
        ).values():
            resources[(ReportedKind.COMMENT.value, comment.id)] = CommentRef.model_validate(
                comment
            )

        filed: dict[str, FiledReport] = {}
        for report in reports:
            resource = resources.get((report.resource_kind, report.resource_id))
            if resource is None:
                continue
            filed[report.id] = FiledReport(
                reporter_id=report.reporter_id,
                reason_category=report.reason_category,
                reason_description=report.reason_description,
                created_at=report.created_at,
                reported_resource=resource,
            )
        return filed
