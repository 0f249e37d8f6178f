# === FILE: fin_scout/parser/html_parser.py ===
"""Display helpers for crawled pages.

Firecrawl usually fills ``metadata.title`` and ``metadata.sourceURL`` but
does not guarantee either.  :func:`summarize_page` builds a small
:class:`PageSummary` that the CLI can print without caring which fields the
remote side sent:

* title — metadata title, else the document <title>, else ``"Page N"``.
* source_url — metadata ``sourceURL`` (or ``url``), else ``None``.
* preview — first characters of the markdown, or of the visible HTML text.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup

from fin_scout.crawl.models import Page

__all__: Sequence[str] = ("PageSummary", "html_title", "html_text", "summarize_page")

PREVIEW_CHARS = 200


@dataclass(slots=True)
class PageSummary:
    """Lightweight representation of a crawled page for listings."""

    index: int
    title: str
    source_url: Optional[str]
    preview: str


def html_title(html: str) -> str:
    """Return document <title> text or ``""`` if absent."""
    soup = BeautifulSoup(html, "html.parser")
    title_tag = soup.find("title")
    return title_tag.get_text(strip=True) if title_tag else ""


def html_text(html: str) -> str:
    """Visible text (skip <script>, <style>, etc.)."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style", "noscript", "template"]):
        element.decompose()
    return " ".join(t.strip() for t in soup.stripped_strings)


def _shorten(text: str, limit: int) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: limit - 1].rstrip() + "…"


def summarize_page(page: Page, index: int, preview_chars: int = PREVIEW_CHARS) -> PageSummary:
    """Build a :class:`PageSummary` for the page at position *index* (0-based)."""
    meta = page.metadata
    title = str(meta.get("title") or "").strip()
    if not title and page.html:
        title = html_title(page.html)
    if not title:
        title = f"Page {index + 1}"

    source = meta.get("sourceURL") or meta.get("url")

    if page.markdown:
        body = page.markdown
    elif page.html:
        body = html_text(page.html)
    else:
        body = ""

    return PageSummary(
        index=index,
        title=title,
        source_url=str(source) if source else None,
        preview=_shorten(body, preview_chars),
    )
