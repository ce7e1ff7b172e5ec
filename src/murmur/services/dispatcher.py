# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Notification Dispatcher: fan-out of content events to recipients.

For each event the dispatcher plans a list of deliveries, at most one per
recipient, then writes them through the deduplicator inside one savepoint.
If any write fails the savepoint is rolled back and the error propagates, so
an event never leaves a partial set of notifications behind.

Precedence within a comment event: the post author's ``commented_on_post``
wins over ``mentioned_in_comment`` for the same comment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from murmur.config import Settings, get_settings
from murmur.errors import NotFoundError
from murmur.models.base import utcnow
from murmur.models.comment import Comment
from murmur.models.notification import Notification, NotificationReason, SourceKind
from murmur.models.post import Post
from murmur.models.report import Report
from murmur.repositories.post_repository import PostRepository
from murmur.repositories.user_repository import UserRepository
from murmur.services.block_registry import BlockRegistry
from murmur.services.deduplicator import Clock, NotificationDeduplicator, SourceRef
from murmur.services.mentions import extract_mentioned_user_ids

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Delivery:
    recipient_id: str
    reason: NotificationReason
    source: SourceRef


class _Plan:
    """Deliveries for one event; the first claim on a recipient wins."""

    def __init__(self) -> None:
        self.deliveries: list[Delivery] = []
        self._claimed: set[str] = set()

    def claimed(self, recipient_id: str) -> bool:
        return recipient_id in self._claimed

    def add(self, recipient_id: str, reason: NotificationReason, source: SourceRef) -> None:
        if recipient_id in self._claimed:
            return
        self._claimed.add(recipient_id)
        self.deliveries.append(Delivery(recipient_id, reason, source))


class NotificationDispatcher:
    def __init__(
        self,
        session: AsyncSession,
        *,
        settings: Settings | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self.session = session
        self._settings = settings or get_settings()
        self._users = UserRepository(session)
        self._posts = PostRepository(session)
        self._blocks = BlockRegistry(session, strict=self._settings.strict_block_lookup)
        self._dedup = NotificationDeduplicator(session, clock=clock)

    # -- inbound events -----------------------------------------------------

    async def on_post_created(self, post: Post, actor_id: str) -> list[Notification]:
        await self._require_user(actor_id)
        plan = _Plan()
        await self._plan_post_mentions(plan, post)
        return await self._deliver("post.created", plan)

    async def on_post_updated(
        self,
        post: Post,
        actor_id: str,
        previous_content: str | None = None,
    ) -> list[Notification]:
        """Upsert ``mentioned_in_post`` for everyone mentioned in the new content.

        Users only mentioned in ``previous_content`` keep their notification.
        """
        await self._require_user(actor_id)
        if previous_content is not None:
            current = set(extract_mentioned_user_ids(post.content))
            dropped = [
                u for u in extract_mentioned_user_ids(previous_content) if u not in current
            ]
            if dropped:
                logger.debug(
                    "Post %s no longer mentions %s; existing notifications kept",
                    post.id,
                    dropped,
                )
        plan = _Plan()
        await self._plan_post_mentions(plan, post)
        return await self._deliver("post.updated", plan)

    async def on_comment_created(
        self, comment: Comment, actor_id: str
    ) -> list[Notification]:
        await self._require_user(actor_id)
        post = await self._posts.get_by_id(comment.post_id)
        if post is None:
            raise NotFoundError("Post", comment.post_id)

        plan = _Plan()
        source = SourceRef(SourceKind.COMMENT, comment.id)

        if comment.author_id == post.author_id:
            logger.debug("Comment %s is by the post author; no comment notice", comment.id)
        elif await self._blocks.is_blocked(post.author_id, comment.author_id):
            logger.debug(
                "Post author %s and commenter %s are blocked; no comment notice",
                post.author_id,
                comment.author_id,
            )
        else:
            plan.add(post.author_id, NotificationReason.COMMENTED_ON_POST, source)

        mentioned = await self._mention_candidates(
            comment.content, author_id=comment.author_id
        )
        mentioned = [u for u in mentioned if not plan.claimed(u)]
        blocked = await self._blocks.blocked_among(comment.author_id, mentioned)
        blocked |= await self._blocks.blocked_among(post.author_id, mentioned)
        for user_id in mentioned:
            if user_id in blocked:
                logger.debug("Mention of %s in comment %s suppressed by block", user_id, comment.id)
                continue
            plan.add(user_id, NotificationReason.MENTIONED_IN_COMMENT, source)

        return await self._deliver("comment.created", plan)

    async def on_report_filed(self, report: Report, actor_id: str) -> list[Notification]:
        """Notify the filer and the configured moderators about a new report."""
        await self._require_user(actor_id)
        wanted = [report.reporter_id, *self._settings.report_moderator_ids]
        known = await self._users.existing_ids(wanted)

        plan = _Plan()
        source = SourceRef(SourceKind.REPORT, report.id)
        for user_id in wanted:
            if user_id not in known:
                logger.warning("Report recipient %s does not exist; skipped", user_id)
                continue
            plan.add(user_id, NotificationReason.FILED_REPORT_ON_RESOURCE, source)
        return await self._deliver("report.filed", plan)

    # -- planning -----------------------------------------------------------

    async def _require_user(self, user_id: str) -> None:
        if await self._users.get_by_id(user_id) is None:
            raise NotFoundError("User", user_id)

    async def _mention_candidates(self, content: str, *, author_id: str) -> list[str]:
        """Mentioned users other than the author that exist, in document order."""
        mentioned = [u for u in extract_mentioned_user_ids(content) if u != author_id]
        known = await self._users.existing_ids(mentioned)
        unknown = [u for u in mentioned if u not in known]
        if unknown:
            logger.debug("Ignoring mentions of unknown users %s", unknown)
        return [u for u in mentioned if u in known]

    async def _plan_post_mentions(self, plan: _Plan, post: Post) -> None:
        mentioned = await self._mention_candidates(post.content, author_id=post.author_id)
        blocked = await self._blocks.blocked_among(post.author_id, mentioned)
        source = SourceRef(SourceKind.POST, post.id)
        for user_id in mentioned:
            if user_id in blocked:
                logger.debug("Mention of %s in post %s suppressed by block", user_id, post.id)
                continue
            plan.add(user_id, NotificationReason.MENTIONED_IN_POST, source)

    # -- delivery -----------------------------------------------------------

    async def _deliver(self, event: str, plan: _Plan) -> list[Notification]:
        if not plan.deliveries:
            logger.debug("No recipients for %s", event)
            return []
        notifications: list[Notification] = []
        async with self.session.begin_nested():
            for delivery in plan.deliveries:
                notifications.append(
                    await self._dedup.upsert(
                        delivery.recipient_id, delivery.source, delivery.reason
                    )
                )
        logger.info("Dispatched %s to %d recipient(s)", event, len(notifications))
        return notifications
