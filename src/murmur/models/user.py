# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from murmur.models.base import Base, IdMixin, TimestampMixin


class User(IdMixin, TimestampMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String, nullable=False)
    slug: Mapped[str] = mapped_column(String, nullable=False)

    # Relationships
    blocks_made: Mapped[list[Block]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[Block.blocker_id]",
        back_populates="blocker",
    )
    blocks_received: Mapped[list[Block]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[Block.blocked_id]",
        back_populates="blocked",
    )

    __table_args__ = (Index("uq_users_slug", "slug", unique=True),)
