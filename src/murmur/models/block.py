# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from murmur.models.base import Base, utcnow


class Block(Base):
    """One directed edge per block action: ``blocker`` blocked ``blocked``."""

    __tablename__ = "blocks"

    blocker_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    blocked_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Relationships
    blocker: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys=[blocker_id],
        back_populates="blocks_made",
    )
    blocked: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys=[blocked_id],
        back_populates="blocks_received",
    )

    __table_args__ = (
        CheckConstraint("blocker_id <> blocked_id", name="ck_blocks_no_self_block"),
        Index("idx_blocks_blocked_blocker", "blocked_id", "blocker_id"),
    )

    def __repr__(self) -> str:
        return f"<Block {self.blocker_id} -> {self.blocked_id}>"
