from __future__ import annotations

import html

from bs4 import BeautifulSoup


def html_to_text(value: str) -> str:
    """
    Render one of Reddit's `*_html` fields (body_html, selftext_html, ...)
    as plain text.

    The API sends these entity-escaped, e.g.
    `&lt;div class="md"&gt;&lt;p&gt;hi&lt;/p&gt;&lt;/div&gt;`, so they are
    unescaped first. When the markdown wrapper `<div class="md">` is
    present only its content is kept.
    """
    if not value:
        return ""

    soup = BeautifulSoup(html.unescape(value), "html.parser")
    md = soup.find("div", class_="md")
    root = md if md is not None else soup
    return root.get_text(separator="\n", strip=True)
