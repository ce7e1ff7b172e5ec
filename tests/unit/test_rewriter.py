# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2026 Murmur Contributors

from __future__ import annotations

import pytest

from murmur.services.rewriter import rewrite_content, visible_text
from tests.conftest import EDITED_CONTENT, EDITED_CONTENT_REWRITTEN


class TestRewriteContent:
    def test_injects_target_into_mention_links(self) -> None:
        content = (
            'Hey <a class="mention" data-mention-id="you" '
            'href="/profile/you/al-capone">@al-capone</a> how do you do?'
        )
        assert rewrite_content(content) == (
            'Hey <a class="mention" data-mention-id="you" '
            'href="/profile/you/al-capone" target="_blank">@al-capone</a> how do you do?'
        )

    def test_existing_target_is_kept(self) -> None:
        content = (
            'One mention about me with <a data-mention-id="you" class="mention" '
            'href="/profile/you" target="_blank">@al-capone</a>.'
        )
        assert rewrite_content(content) == content

    def test_ordinary_links_are_untouched(self) -> None:
        content = '<a href="https://example.org">example</a>'
        assert rewrite_content(content) == content

    def test_line_breaks_become_break_markers(self) -> None:
        assert rewrite_content(EDITED_CONTENT) == EDITED_CONTENT_REWRITTEN

    def test_windows_line_endings(self) -> None:
        assert rewrite_content("first\r\nsecond\rthird") == "first<br>second<br>third"

    def test_blank_lines_collapse_into_one_break(self) -> None:
        assert rewrite_content("first\n\n   \nsecond") == "first<br>second"

    def test_paragraphs_are_flattened(self) -> None:
        assert rewrite_content("<p>Hello</p><p>World</p>") == "Hello<br>World"
        assert rewrite_content("<p>Hello</p>\n<p>World</p>") == "Hello<br>World"
        assert rewrite_content("<div><p>one</p></div>") == "one"

    def test_break_tags_are_canonical(self) -> None:
        assert rewrite_content("a<br/>b<br />c<BR>d") == "a<br>b<br>c<br>d"

    def test_plain_text_is_unchanged(self) -> None:
        assert rewrite_content("Commenters comment.") == "Commenters comment."
        assert rewrite_content("Commenter's comment.") == "Commenter's comment."

    def test_custom_link_target(self) -> None:
        content = '<a class="mention" data-mention-id="you" href="/profile/you">@you</a>'
        assert 'target="_self"' in rewrite_content(content, link_target="_self")

    def test_empty_content(self) -> None:
        assert rewrite_content("") == ""

    @pytest.mark.parametrize(
        "content",
        [
            EDITED_CONTENT,
            "<p>Hello</p>\n<p>World &amp; friends</p>",
            'x <a class="mention" data-mention-id="y" href="/profile/y">@y</a>\n z',
            "a&nbsp;b\n\nc",
            "<ul>\n  <li>one</li>\n  <li>two</li>\n</ul>",
        ],
    )
    def test_idempotent(self, content: str) -> None:
        once = rewrite_content(content)
        assert rewrite_content(once) == once


class TestVisibleText:
    def test_strips_markup_and_whitespace(self) -> None:
        assert visible_text("<p> Hello </p>") == "Hello"

    @pytest.mark.parametrize("content", ["", None, "<p></p>", "<p> </p>", "    ", "<p>&nbsp;</p>"])
    def test_blank_content(self, content: str | None) -> None:
        assert visible_text(content) == ""

    def test_mention_counts_as_text(self) -> None:
        content = '<a class="mention" data-mention-id="you" href="/profile/you">@you</a>'
        assert visible_text(content) == "@you"
