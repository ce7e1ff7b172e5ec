# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Errors raised by the notification core.

Blocked recipients and content without mentions are ordinary no-op outcomes
and never surface as errors.
"""

from __future__ import annotations


class MurmurError(Exception):
    """Base error for the notification core."""


class ValidationError(MurmurError):
    """Malformed input to a content-creation path."""


class NotFoundError(MurmurError):
    """A referenced post, comment, user, report or notification does not exist."""

    def __init__(self, kind: str, resource_id: str) -> None:
        self.kind = kind
        self.resource_id = resource_id
        super().__init__(f"{kind} not found: {resource_id!r}")


class AuthorizationError(MurmurError):
    """The actor is not allowed to perform the action."""
