# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.models.comment import Comment
from murmur.models.notification import Notification
from murmur.models.post import Post
from murmur.models.report import Report
from murmur.models.user import User
from murmur.repositories.base import BaseRepository
from murmur.repositories.block_repository import BlockRepository
from murmur.repositories.comment_repository import CommentRepository
from murmur.repositories.notification_repository import NotificationRepository
from murmur.repositories.post_repository import PostRepository
from murmur.repositories.report_repository import ReportRepository
from murmur.repositories.user_repository import UserRepository


class TestBaseRepositoryInstantiation:
    def test_base_repository_stores_session_and_model(self) -> None:
        mock_session = MagicMock(spec=AsyncSession)
        repo = BaseRepository(mock_session, Post)
        assert repo.session is mock_session
        assert repo.model is Post


class TestRepositoryModels:
    @pytest.mark.parametrize(
        ("repo_cls", "model"),
        [
            (UserRepository, User),
            (PostRepository, Post),
            (CommentRepository, Comment),
            (ReportRepository, Report),
            (NotificationRepository, Notification),
        ],
    )
    def test_repository_sets_model(self, repo_cls: type, model: type) -> None:
        repo = repo_cls(MagicMock(spec=AsyncSession))
        assert repo.model is model
        assert callable(getattr(repo, "get_by_id", None))
        assert callable(getattr(repo, "get_many", None))
        assert callable(getattr(repo, "create", None))


class TestNotificationRepository:
    def test_has_custom_methods(self) -> None:
        repo = NotificationRepository(MagicMock(spec=AsyncSession))
        assert callable(getattr(repo, "get_by_key", None))
        assert callable(getattr(repo, "list_for_recipient", None))
        assert callable(getattr(repo, "mark_all_read", None))
        assert callable(getattr(repo, "touch", None))

    async def test_rejects_unknown_ordering(self) -> None:
        repo = NotificationRepository(MagicMock(spec=AsyncSession))
        with pytest.raises(ValueError, match="Unsupported ordering"):
            await repo.list_for_recipient("you", order_by="random")


class TestBlockRepository:
    async def test_no_candidates_skips_query(self) -> None:
        mock_session = MagicMock(spec=AsyncSession)
        repo = BlockRepository(mock_session)
        assert await repo.blocked_counterparts("you", set()) == set()
        mock_session.execute.assert_not_called()
