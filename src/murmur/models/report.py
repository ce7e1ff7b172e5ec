# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from murmur.models.base import Base, IdMixin, utcnow


class ReportedKind(str, enum.Enum):
    USER = "User"
    POST = "Post"
    COMMENT = "Comment"


class ReasonCategory(str, enum.Enum):
    OTHER = "other"
    DISCRIMINATION_ETC = "discrimination_etc"
    PORNOGRAPHIC_CONTENT_LINKS = "pornographic_content_links"
    GLORIFIC_TRIVIA_OF_CRUEL_INHUMAN_ACTS = "glorific_trivia_of_cruel_inhuman_acts"
    DOXING = "doxing"
    INTENTIONAL_INTIMIDATION_STALKING_PERSECUTION = (
        "intentional_intimidation_stalking_persecution"
    )
    ADVERT_PRODUCTS_SERVICES_COMMERCIAL = "advert_products_services_commercial"
    CRIMINAL_BEHAVIOR_VIOLATION_GERMAN_LAW = "criminal_behavior_violation_german_law"


class Report(IdMixin, Base):
    """A filed report. Rows are never updated after insert."""

    __tablename__ = "reports"

    reporter_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("users.id"),
        nullable=False,
    )
    # Polymorphic reference, resolved through resource_kind
    resource_kind: Mapped[str] = mapped_column(String, nullable=False)
    resource_id: Mapped[str] = mapped_column(String(64), nullable=False)
    reason_category: Mapped[str] = mapped_column(String, nullable=False)
    reason_description: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Relationships
    reporter: Mapped[User] = relationship(  # type: ignore[name-defined]  # noqa: F821
        foreign_keys="[Report.reporter_id]",
    )

    __table_args__ = (
        CheckConstraint(
            "resource_kind IN ('User', 'Post', 'Comment')",
            name="ck_reports_resource_kind",
        ),
        CheckConstraint(
            "reason_category IN ("
            + ", ".join(f"'{c.value}'" for c in ReasonCategory)
            + ")",
            name="ck_reports_reason_category",
        ),
        Index("idx_reports_resource", "resource_kind", "resource_id"),
        Index("idx_reports_reporter", "reporter_id"),
    )
