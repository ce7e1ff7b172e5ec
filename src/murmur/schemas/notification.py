# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from murmur.models.notification import NotificationReason


# ---------------------------------------------------------------------------
# Resource projections, tagged by ``typename``
# ---------------------------------------------------------------------------


class UserRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    typename: Literal["User"] = "User"
    id: str
    name: str


class PostRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    typename: Literal["Post"] = "Post"
    id: str
    content: str


class CommentRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    typename: Literal["Comment"] = "Comment"
    id: str
    content: str


ReportedResource = Annotated[
    Annotated[UserRef, Tag("User")]
    | Annotated[PostRef, Tag("Post")]
    | Annotated[CommentRef, Tag("Comment")],
    Discriminator("typename"),
]


class FiledReport(BaseModel):
    reporter_id: str
    reason_category: str
    reason_description: str
    created_at: datetime
    reported_resource: ReportedResource


class ReportRef(BaseModel):
    typename: Literal["Report"] = "Report"
    id: str
    filed: list[FiledReport]


NotificationSource = Annotated[
    Annotated[PostRef, Tag("Post")]
    | Annotated[CommentRef, Tag("Comment")]
    | Annotated[ReportRef, Tag("Report")],
    Discriminator("typename"),
]


# ---------------------------------------------------------------------------
# Notification responses
# ---------------------------------------------------------------------------


class NotificationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    reason: NotificationReason
    read: bool
    created_at: datetime
    updated_at: datetime
    source: NotificationSource = Field(alias="from")


class UnreadCountResponse(BaseModel):
    unread: int


class MarkAllReadResponse(BaseModel):
    updated: int
