# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from murmur.repositories.base import BaseRepository
from murmur.repositories.block_repository import BlockRepository
from murmur.repositories.comment_repository import CommentRepository
from murmur.repositories.notification_repository import NotificationRepository
from murmur.repositories.post_repository import PostRepository
from murmur.repositories.report_repository import ReportRepository
from murmur.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BlockRepository",
    "CommentRepository",
    "NotificationRepository",
    "PostRepository",
    "ReportRepository",
    "UserRepository",
]
