# fin_scout/crawl/models.py
"""
Data models for the FinScout crawl gateway.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class CrawlOptions:
    """Fixed crawl profile sent with every crawl request."""

    limit: int = 10
    formats: Tuple[str, ...] = ("markdown", "html")
    only_main_content: bool = True
    include_tags: Tuple[str, ...] = ("title", "meta", "h1", "h2", "h3", "p", "div", "span", "table")
    exclude_tags: Tuple[str, ...] = ("script", "style", "nav", "footer", "header")
    allow_backward_links: bool = False
    allow_external_links: bool = False


CRAWL_PROFILE = CrawlOptions()


@dataclass(frozen=True, slots=True)
class CrawlJob:
    """Target site root URL plus the crawl profile, alive for one request."""

    url: str
    options: CrawlOptions = CRAWL_PROFILE

    def to_payload(self) -> Dict[str, Any]:
        """Request body for ``POST /v1/crawl``."""
        opts = self.options
        return {
            "url": self.url,
            "limit": opts.limit,
            "scrapeOptions": {
                "formats": list(opts.formats),
                "onlyMainContent": opts.only_main_content,
                "includeTags": list(opts.include_tags),
                "excludeTags": list(opts.exclude_tags),
            },
            "allowBackwardLinks": opts.allow_backward_links,
            "allowExternalLinks": opts.allow_external_links,
        }


@dataclass(slots=True)
class Page:
    """One crawled page: optional markdown, optional raw HTML and metadata."""

    markdown: Optional[str] = None
    html: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> Page:
        if not isinstance(item, dict):
            raise ValueError(f"Malformed page entry: {item!r}")
        metadata = item.get("metadata") or {}
        return cls(
            markdown=item.get("markdown"),
            html=item.get("html"),
            metadata=dict(metadata) if isinstance(metadata, dict) else {},
        )


@dataclass(slots=True)
class CrawlSuccess:
    status: str
    pages_completed: int
    pages_total: int
    credits_used: int
    expires_at: Optional[str]
    pages: List[Page] = field(default_factory=list)

    ok = True

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> CrawlSuccess:
        """Build from a final ``GET /v1/crawl/{id}`` status document."""
        return cls(
            status=str(payload.get("status") or "completed"),
            pages_completed=int(payload.get("completed") or 0),
            pages_total=int(payload.get("total") or 0),
            credits_used=int(payload.get("creditsUsed") or 0),
            expires_at=payload.get("expiresAt"),
            pages=[Page.from_payload(item) for item in payload.get("data") or []],
        )


@dataclass(frozen=True, slots=True)
class CrawlFailure:
    reason: str

    ok = False


CrawlResult = Union[CrawlSuccess, CrawlFailure]

__all__ = ("CRAWL_PROFILE", "CrawlFailure", "CrawlJob", "CrawlOptions", "CrawlResult", "CrawlSuccess", "Page")
