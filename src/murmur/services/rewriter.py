# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

"""Content rewriter: canonical display form of rich-text content.

The rewrite runs as a small pipeline over the parsed document:

1. ``<p>``/``<div>`` blocks are unwrapped, leaving a line break between
   consecutive blocks.
2. Every run of line breaks in text (with the indentation around it) becomes
   a single ``<br>``.
3. Mention links without a ``target`` get ``target="_blank"`` (configurable).

The output holds no newlines and no block elements, so
``rewrite_content(rewrite_content(x)) == rewrite_content(x)``.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, NavigableString, ParserRejectedMarkup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from murmur.errors import ValidationError
from murmur.services.mentions import find_mention_links, parse_markup

DEFAULT_LINK_TARGET = "_blank"

_BLOCK_TAGS = ("p", "div")
_LINE_ENDINGS = re.compile(r"\r\n?")
_LINE_BREAKS = re.compile(r"[ \t]*(?:\n[ \t]*)+")


class _SourceOrderFormatter(HTMLFormatter):
    """Minimal escaping, ``<br>`` without a slash, attributes in source order."""

    def __init__(self) -> None:
        super().__init__(
            entity_substitution=EntitySubstitution.substitute_xml,
            void_element_close_prefix=None,
        )

    def attributes(self, tag):  # type: ignore[no-untyped-def]
        if not tag.attrs:
            return []
        return list(tag.attrs.items())


_FORMATTER = _SourceOrderFormatter()


def _unwrap_blocks(soup: BeautifulSoup) -> None:
    for block in soup.find_all(_BLOCK_TAGS):
        if block.next_sibling is not None:
            block.insert_after(NavigableString("\n"))
        block.unwrap()


def _breaks_to_markers(soup: BeautifulSoup) -> None:
    for text in list(soup.find_all(string=True)):
        if type(text) is not NavigableString or "\n" not in text:
            continue
        pieces = _LINE_BREAKS.split(str(text))
        anchor = text
        for index, piece in enumerate(pieces):
            if index:
                marker = soup.new_tag("br")
                anchor.insert_after(marker)
                anchor = marker
            if piece:
                node = NavigableString(piece)
                anchor.insert_after(node)
                anchor = node
        text.extract()


def _inject_link_targets(soup: BeautifulSoup, target: str) -> None:
    for link in find_mention_links(soup):
        if not link.has_attr("target"):
            link["target"] = target


def rewrite_content(content: str, *, link_target: str = DEFAULT_LINK_TARGET) -> str:
    """Return ``content`` in canonical display form.

    Raises ValidationError if the markup cannot be parsed at all.
    """
    if not content:
        return ""
    try:
        soup = parse_markup(_LINE_ENDINGS.sub("\n", content))
    except ParserRejectedMarkup as exc:
        raise ValidationError(f"Content markup could not be parsed: {exc}") from exc

    _unwrap_blocks(soup)
    soup.smooth()
    _breaks_to_markers(soup)
    _inject_link_targets(soup, link_target)
    return soup.decode(formatter=_FORMATTER)


def visible_text(content: str | None) -> str:
    """Return the text of ``content`` with markup removed and whitespace trimmed."""
    if not content:
        return ""
    try:
        soup = parse_markup(content)
    except ParserRejectedMarkup:
        return content.strip()
    return soup.get_text().strip()
