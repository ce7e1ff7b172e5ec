# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from murmur.models.base import Base, IdMixin, TimestampMixin
from murmur.models.block import Block
from murmur.models.comment import Comment
from murmur.models.notification import Notification, NotificationReason, SourceKind
from murmur.models.post import Post
from murmur.models.report import ReasonCategory, Report, ReportedKind
from murmur.models.user import User

__all__ = [
    "Base",
    "Block",
    "Comment",
    "IdMixin",
    "Notification",
    "NotificationReason",
    "Post",
    "ReasonCategory",
    "Report",
    "ReportedKind",
    "SourceKind",
    "TimestampMixin",
    "User",
]
