from __future__ import annotations

from reddit_stream.models import Comment, Link, Subreddit
from reddit_stream.text import html_to_text

ESCAPED_BODY = (
    "&lt;!-- SC_OFF --&gt;&lt;div class=\"md\"&gt;&lt;p&gt;hello&lt;/p&gt;\n\n"
    "&lt;p&gt;&lt;a href=\"https://go.dev\"&gt;world&lt;/a&gt;&lt;/p&gt;\n"
    "&lt;/div&gt;&lt;!-- SC_ON --&gt;"
)


def test_escaped_markdown_block_becomes_plain_text():
    assert html_to_text(ESCAPED_BODY) == "hello\nworld"


def test_html_without_md_wrapper_is_still_rendered():
    assert html_to_text("&lt;p&gt;plain &amp;amp; simple&lt;/p&gt;") == "plain & simple"


def test_empty_html_is_empty_text():
    assert html_to_text("") == ""


def test_payload_text_properties():
    assert Comment(body_html=ESCAPED_BODY).body_text == "hello\nworld"
    assert Link(selftext_html=ESCAPED_BODY).selftext_text == "hello\nworld"
    assert Subreddit().description_text == ""
