# fin_scout/crawl/client.py
"""
Firecrawl client: thin aiohttp wrapper over the v1 REST API (scrape, crawl, crawl status).
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Set

from aiohttp import ClientSession, ClientTimeout

from fin_scout.crawl.models import CrawlJob
from fin_scout.logger import logger

__all__ = ("DEFAULT_API_URL", "FirecrawlClient", "FirecrawlError")

DEFAULT_API_URL = "https://api.firecrawl.dev"

_DONE = "completed"
_PENDING = ("scraping",)
_FAILED = ("failed", "cancelled")


class FirecrawlError(Exception):
    """Remote service answered with an explicit failure."""


class FirecrawlClient:
    """Handles authenticated requests to Firecrawl and polls crawl jobs to completion.

    Используется как асинхронный контекстный менеджер: сессия создаётся
    в ``__aenter__`` и закрывается в ``__aexit__``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_API_URL,
        poll_interval: float = 2.0,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = str(base_url).rstrip("/")
        self.poll_interval = poll_interval
        self.timeout = timeout
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> FirecrawlClient:
        kwargs: Dict[str, Any] = {
            "headers": {
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            }
        }
        if self.timeout is not None:
            kwargs["timeout"] = ClientTimeout(total=self.timeout)
        self.session = ClientSession(**kwargs)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def scrape_url(self, url: str, formats: Sequence[str] = ("markdown",)) -> Dict[str, Any]:
        """Scrape a single page. Returns the raw response document."""
        return await self._request("POST", "/v1/scrape", {"url": url, "formats": list(formats)})

    async def crawl_url(self, job: CrawlJob) -> Dict[str, Any]:
        """
        Submit a crawl job and wait for it to finish.

        Returns the final status document with ``data`` holding every page,
        including pages served through ``next`` pagination links.
        """
        started = await self._request("POST", "/v1/crawl", job.to_payload())
        if not started.get("success"):
            raise FirecrawlError(started.get("error") or "Failed to crawl website")
        job_id = started.get("id")
        if not job_id:
            raise FirecrawlError("Crawl job id missing in response")
        logger.info("Crawl job %s started for %s", job_id, job.url)

        while True:
            status = await self._request("GET", f"/v1/crawl/{job_id}")
            state = status.get("status")
            logger.debug(
                "Crawl job %s: %s (%s/%s)", job_id, state, status.get("completed"), status.get("total")
            )
            if state == _DONE:
                break
            if state in _FAILED:
                raise FirecrawlError(status.get("error") or f"Crawl job {state}")
            if state not in _PENDING:
                raise FirecrawlError(f"Unexpected crawl status: {state!r}")
            await asyncio.sleep(self.poll_interval)

        pages: List[Dict[str, Any]] = list(status.get("data") or [])
        next_url = status.get("next")
        seen: Set[str] = set()
        while next_url and next_url not in seen:
            seen.add(next_url)
            chunk = await self._request("GET", next_url)
            pages.extend(chunk.get("data") or [])
            next_url = chunk.get("next")
        status["data"] = pages
        return status

    async def _request(
        self, method: str, path: str, payload: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        if not self.session:
            raise RuntimeError("Session not initialized")
        url = path if path.startswith(("http://", "https://")) else f"{self.base_url}{path}"
        async with self.session.request(method, url, json=payload) as resp:
            try:
                body = await resp.json(content_type=None)
            except ValueError:
                body = None
            if not isinstance(body, dict):
                body = {}
            if resp.status >= 400:
                raise FirecrawlError(body.get("error") or f"HTTP {resp.status} from {url}")
            if body.get("success") is False:
                raise FirecrawlError(body.get("error") or "Request failed")
            return body
