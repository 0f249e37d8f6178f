# File: tests/conftest.py
from __future__ import annotations

import random
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from functools import partial
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web

from fin_scout.crawl.client import FirecrawlClient
from fin_scout.crawl.gateway import CrawlGateway
from fin_scout.quotes.service import QuoteService
from fin_scout.storage import KeyValueStore

GOOD_KEY = "fc-good-key"

PAGE_ONE = {
    "markdown": "# Markets today\nSensex closes higher.",
    "html": "<html><head><title>Markets</title></head><body><h1>Markets today</h1></body></html>",
    "metadata": {"title": "Markets today", "sourceURL": "https://www.moneycontrol.com/"},
}
PAGE_TWO = {
    "html": "<html><head><title>Mutual Funds</title></head><body><p>NAV update</p></body></html>",
    "metadata": {"sourceURL": "https://www.moneycontrol.com/mutual-funds/"},
}


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, 9, 15, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def quotes(clock: FakeClock) -> QuoteService:
    return QuoteService(clock=clock, rng=random.Random(42))


@pytest.fixture()
def store(tmp_path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "storage.json")


# --------------------------------------------------------------------------- #
#                         Fake Firecrawl API server                           #
# --------------------------------------------------------------------------- #


@dataclass
class FirecrawlState:
    """What the fake server saw and how it should answer."""

    base_url: str = ""
    requests: list[tuple[str, str]] = field(default_factory=list)
    crawl_payloads: list[dict[str, Any]] = field(default_factory=list)
    auth_headers: list[str] = field(default_factory=list)
    crawl_status: str = "completed"
    crawl_error: str | None = None
    polls_before_done: int = 1
    status_body: dict[str, Any] | None = None
    repeat_next: bool = False
    _polls: int = 0


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def _authorized(request: web.Request, state: FirecrawlState) -> bool:
    header = request.headers.get("Authorization", "")
    state.auth_headers.append(header)
    return header == f"Bearer {GOOD_KEY}"


def _unauthorized() -> web.Response:
    return web.json_response({"success": False, "error": "Unauthorized: Invalid token"}, status=401)


@pytest_asyncio.fixture
async def firecrawl_server(unused_tcp_port: int) -> AsyncIterator[FirecrawlState]:
    state = FirecrawlState()
    app = web.Application()

    async def handle_scrape(request: web.Request) -> web.Response:
        state.requests.append(("POST", request.path))
        if not _authorized(request, state):
            return _unauthorized()
        body = await request.json()
        return web.json_response(
            {"success": True, "data": {"markdown": "Example Domain", "metadata": {"sourceURL": body["url"]}}}
        )

    async def handle_crawl(request: web.Request) -> web.Response:
        state.requests.append(("POST", request.path))
        if not _authorized(request, state):
            return _unauthorized()
        state.crawl_payloads.append(await request.json())
        if state.crawl_error is not None:
            return web.json_response({"success": False, "error": state.crawl_error}, status=400)
        return web.json_response({"success": True, "id": "job-1", "url": f"{state.base_url}/v1/crawl/job-1"})

    async def handle_status(request: web.Request) -> web.Response:
        state.requests.append(("GET", request.path_qs))
        if not _authorized(request, state):
            return _unauthorized()
        if request.query.get("skip") == "1":
            again = f"{state.base_url}/v1/crawl/job-1?skip=1" if state.repeat_next else None
            return web.json_response({"status": "completed", "data": [PAGE_TWO], "next": again})
        if state.status_body is not None:
            return web.json_response(state.status_body)
        if state._polls < state.polls_before_done:
            state._polls += 1
            return web.json_response({"status": "scraping", "total": 2, "completed": 0, "data": []})
        if state.crawl_status != "completed":
            return web.json_response({"status": state.crawl_status, "total": 2, "completed": 0})
        return web.json_response(
            {
                "status": "completed",
                "total": 2,
                "completed": 2,
                "creditsUsed": 2,
                "expiresAt": "2024-01-02T09:15:00.000Z",
                "next": f"{state.base_url}/v1/crawl/job-1?skip=1",
                "data": [PAGE_ONE],
            }
        )

    app.router.add_post("/v1/scrape", handle_scrape)
    app.router.add_post("/v1/crawl", handle_crawl)
    app.router.add_get("/v1/crawl/{job_id}", handle_status)

    async for url in _serve_app(app, unused_tcp_port):
        state.base_url = url
        yield state


@pytest.fixture()
def gateway_factory(store: KeyValueStore):
    """Build a CrawlGateway talking to the fake server at *base_url*."""

    def build(base_url: str) -> CrawlGateway:
        return CrawlGateway(
            store,
            client_factory=partial(FirecrawlClient, base_url=base_url, poll_interval=0.01),
            reference_url="https://example.com",
        )

    return build
