# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from murmur.models.base import Base, IdMixin, TimestampMixin


class Post(IdMixin, TimestampMixin, Base):
    __tablename__ = "posts"

    author_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String, nullable=False, default="")
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    author: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[Post.author_id]",
    )
    comments: Mapped[list[Comment]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="post",
    )

    __table_args__ = (Index("idx_posts_author", "author_id"),)
