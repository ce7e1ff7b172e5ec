# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Post and comment creation with validation, rewriting and notification.

Validation happens before anything is written. Persisting the resource and
dispatching its notifications share one savepoint.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from murmur.config import Settings, get_settings
from murmur.errors import AuthorizationError, NotFoundError, ValidationError
from murmur.models.base import new_id, utcnow
from murmur.models.comment import Comment
from murmur.models.post import Post
from murmur.repositories.comment_repository import CommentRepository
from murmur.repositories.post_repository import PostRepository
from murmur.repositories.user_repository import UserRepository
from murmur.services.deduplicator import Clock
from murmur.services.dispatcher import NotificationDispatcher
from murmur.services.rewriter import rewrite_content, visible_text

logger = logging.getLogger(__name__)


class ContentService:
    def __init__(
        self,
        session: AsyncSession,
        *,
        settings: Settings | None = None,
        clock: Clock = utcnow,
        dispatcher: NotificationDispatcher | None = None,
    ) -> None:
        self.session = session
        self._settings = settings or get_settings()
        self._clock = clock
        self._users = UserRepository(session)
        self._posts = PostRepository(session)
        self._comments = CommentRepository(session)
        self._dispatcher = dispatcher or NotificationDispatcher(
            session, settings=self._settings, clock=clock
        )

    def _prepare(self, content: str | None, label: str) -> str:
        if len(content or "") > self._settings.max_content_length:
            raise ValidationError(
                f"{label} exceeds maximum length of {self._settings.max_content_length}"
            )
        if not visible_text(content):
            raise ValidationError(f"{label} must be at least 1 character long!")
        return rewrite_content(content or "", link_target=self._settings.mention_link_target)

    async def _require_actor(self, actor_id: str) -> None:
        if await self._users.get_by_id(actor_id) is None:
            raise NotFoundError("User", actor_id)

    async def create_post(
        self,
        actor_id: str,
        content: str,
        *,
        title: str = "",
        post_id: str | None = None,
    ) -> Post:
        rewritten = self._prepare(content, "Post")
        await self._require_actor(actor_id)
        if post_id is not None and await self._posts.get_by_id(post_id) is not None:
            raise ValidationError(f"Post id already in use: {post_id!r}")

        now = self._clock()
        async with self.session.begin_nested():
            post = await self._posts.create(
                Post(
                    id=post_id or new_id(),
                    author_id=actor_id,
                    title=title,
                    content=rewritten,
                    created_at=now,
                    updated_at=now,
                )
            )
            await self._dispatcher.on_post_created(post, actor_id)
        logger.info("User %s created post %s", actor_id, post.id)
        return post

    async def update_post(
        self,
        actor_id: str,
        post_id: str,
        content: str,
        *,
        title: str | None = None,
    ) -> Post:
        rewritten = self._prepare(content, "Post")
        post = await self._posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        if post.author_id != actor_id:
            raise AuthorizationError("Only the author can edit this post")

        previous_content = post.content
        async with self.session.begin_nested():
            post.content = rewritten
            if title is not None:
                post.title = title
            post.updated_at = self._clock()
            await self.session.flush()
            await self._dispatcher.on_post_updated(post, actor_id, previous_content)
        logger.info("User %s updated post %s", actor_id, post.id)
        return post

    async def create_comment(
        self,
        actor_id: str,
        post_id: str | None,
        content: str,
        *,
        comment_id: str | None = None,
    ) -> Comment:
        rewritten = self._prepare(content, "Comment")
        if post_id is None or not post_id.strip():
            raise ValidationError("Comment cannot be created without a post!")
        post = await self._posts.get_by_id(post_id.strip())
        if post is None:
            raise NotFoundError("Post", post_id)
        await self._require_actor(actor_id)
        if comment_id is not None and await self._comments.get_by_id(comment_id) is not None:
            raise ValidationError(f"Comment id already in use: {comment_id!r}")

        now = self._clock()
        async with self.session.begin_nested():
            comment = await self._comments.create(
                Comment(
                    id=comment_id or new_id(),
                    post_id=post.id,
                    author_id=actor_id,
                    content=rewritten,
                    created_at=now,
                    updated_at=now,
                )
            )
            await self._dispatcher.on_comment_created(comment, actor_id)
        logger.info("User %s commented %s on post %s", actor_id, comment.id, post.id)
        return comment
