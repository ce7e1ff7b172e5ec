# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Mention extraction from rich-text content.

A mention is an anchor of class ``mention`` carrying the mentioned user's id
in its ``data-mention-id`` attribute::

    <a class="mention" data-mention-id="you" href="/profile/you">@al-capone</a>

Anything else, including malformed markup, is ignored.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

logger = logging.getLogger(__name__)

MENTION_CLASS = "mention"
MENTION_ATTRIBUTE = "data-mention-id"


def parse_markup(content: str) -> BeautifulSoup:
    return BeautifulSoup(content, "html.parser")


def find_mention_links(soup: BeautifulSoup) -> list[Tag]:
    """Return mention anchors in document order."""
    return soup.find_all("a", attrs={MENTION_ATTRIBUTE: True}, class_=MENTION_CLASS)


def extract_mentioned_user_ids(content: str | None) -> list[str]:
    """Return the ids of mentioned users in document order, without duplicates."""
    if not content:
        return []
    try:
        soup = parse_markup(content)
    except ParserRejectedMarkup:
        logger.debug("Ignoring unparseable markup while extracting mentions")
        return []

    user_ids: list[str] = []
    seen: set[str] = set()
    for link in find_mention_links(soup):
        value = link.get(MENTION_ATTRIBUTE)
        if not isinstance(value, str):
            continue
        user_id = value.strip()
        if user_id and user_id not in seen:
            seen.add(user_id)
            user_ids.append(user_id)
    return user_ids
