# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from murmur.models.base import Base, IdMixin, TimestampMixin


class Comment(IdMixin, TimestampMixin, Base):
    __tablename__ = "comments"

    post_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    post: Mapped[Post] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="comments",
    )
    author: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[Comment.author_id]",
    )

    __table_args__ = (
        Index("idx_comments_post", "post_id"),
        Index("idx_comments_author", "author_id"),
    )
