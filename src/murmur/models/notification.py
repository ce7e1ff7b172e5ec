# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from murmur.models.base import Base, IdMixin, TimestampMixin


class NotificationReason(str, enum.Enum):
    COMMENTED_ON_POST = "commented_on_post"
    MENTIONED_IN_POST = "mentioned_in_post"
    MENTIONED_IN_COMMENT = "mentioned_in_comment"
    FILED_REPORT_ON_RESOURCE = "filed_report_on_resource"


class SourceKind(str, enum.Enum):
    POST = "Post"
    COMMENT = "Comment"
    REPORT = "Report"


class Notification(IdMixin, TimestampMixin, Base):
    __tablename__ = "notifications"

    recipient_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    reason: Mapped[str] = mapped_column(String, nullable=False)
    # Polymorphic ``from`` reference, resolved through from_kind
    from_kind: Mapped[str] = mapped_column(String, nullable=False)
    from_id: Mapped[str] = mapped_column(String(64), nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    recipient: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[Notification.recipient_id]",
    )

    __table_args__ = (
        CheckConstraint(
            "reason IN ("
            + ", ".join(f"'{r.value}'" for r in NotificationReason)
            + ")",
            name="ck_notifications_reason",
        ),
        CheckConstraint(
            "from_kind IN ('Post', 'Comment', 'Report')",
            name="ck_notifications_from_kind",
        ),
        UniqueConstraint(
            "recipient_id",
            "from_kind",
            "from_id",
            "reason",
            name="uq_notifications_recipient_source_reason",
        ),
        Index("idx_notifications_recipient_updated", "recipient_id", "updated_at"),
        Index(
            "idx_notifications_recipient_unread",
            "recipient_id",
            postgresql_where=text("read = false"),
        ),
    )
