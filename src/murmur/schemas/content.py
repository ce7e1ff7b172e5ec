# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from murmur.models.report import ReasonCategory

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
# Emptiness of content and post ids is checked by the services, so the same
# rules hold for callers that bypass HTTP.


class PostCreate(BaseModel):
    id: str | None = Field(default=None, max_length=64)
    title: str = Field(default="", max_length=500)
    content: str


class PostUpdate(BaseModel):
    title: str | None = Field(default=None, max_length=500)
    content: str


class CommentCreate(BaseModel):
    id: str | None = Field(default=None, max_length=64)
    post_id: str | None = None
    content: str


class ReportCreate(BaseModel):
    resource_id: str
    reason_category: ReasonCategory
    reason_description: str = Field(max_length=5_000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    author_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    post_id: str
    author_id: str
    content: str
    created_at: datetime


class BlockResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    blocker_id: str
    blocked_id: str
    created_at: datetime
