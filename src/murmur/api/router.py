# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from fastapi import APIRouter

from murmur.api.blocks import router as blocks_router
from murmur.api.content import router as content_router
from murmur.api.notifications import router as notifications_router

v1_router = APIRouter()
v1_router.include_router(content_router)
v1_router.include_router(notifications_router)
v1_router.include_router(blocks_router)
