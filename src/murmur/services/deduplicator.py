# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Notification Deduplicator.

There is at most one notification per (recipient, source, reason). A repeated
trigger of the same cause on the same resource marks the existing row unread
and bumps ``updated_at``; ``created_at`` never changes after insert.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from murmur.models.base import utcnow
from murmur.models.notification import Notification, NotificationReason, SourceKind
from murmur.repositories.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True, slots=True)
class SourceRef:
    """Typed reference to the resource a notification comes from."""

    kind: SourceKind
    id: str


class NotificationDeduplicator:
    def __init__(self, session: AsyncSession, *, clock: Clock = utcnow) -> None:
        self.session = session
        self._clock = clock
        self._repo = NotificationRepository(session)

    async def upsert(
        self,
        recipient_id: str,
        source: SourceRef,
        reason: NotificationReason,
    ) -> Notification:
        key = (recipient_id, source.kind.value, source.id, reason.value)
        now = self._clock()

        existing = await self._repo.get_by_key(*key)
        if existing is not None:
            return await self._repo.touch(existing, now)

        notification = Notification(
            recipient_id=recipient_id,
            from_kind=source.kind.value,
            from_id=source.id,
            reason=reason.value,
            read=False,
            created_at=now,
            updated_at=now,
        )
        # A concurrent writer may insert the same key between the lookup and
        # the flush; the savepoint keeps the surrounding event intact.
        try:
            async with self.session.begin_nested():
                self.session.add(notification)
                await self.session.flush()
        except IntegrityError:
            logger.warning(
                "Concurrent insert for notification %s; updating instead", key
            )
            existing = await self._repo.get_by_key(*key)
            if existing is None:
                raise
            return await self._repo.touch(existing, now)
        return notification
