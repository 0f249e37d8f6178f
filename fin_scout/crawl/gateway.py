# File: fin_scout/crawl/gateway.py
"""fin_scout.crawl.gateway: управление API-ключом Firecrawl и запуск обхода сайта.

Все сбои удалённого сервиса и транспорта поглощаются на границе шлюза и
превращаются в :class:`CrawlFailure` (для ``crawl``) или ``False``
(для ``test_credential``). Клиент создаётся заново при каждом вызове,
ключ каждый раз читается из хранилища.
"""

from __future__ import annotations

from typing import Any, AsyncContextManager, Callable, Optional

from fin_scout.crawl.client import DEFAULT_API_URL, FirecrawlClient, FirecrawlError
from fin_scout.crawl.models import CrawlFailure, CrawlJob, CrawlResult, CrawlSuccess
from fin_scout.logger import logger
from fin_scout.storage import KeyValueStore

__all__ = ["CrawlGateway", "API_KEY_STORAGE_KEY"]

API_KEY_STORAGE_KEY = "firecrawl_api_key"
REFERENCE_URL = "https://example.com"

MISSING_KEY_MESSAGE = "API key not found"
REMOTE_FAILURE_MESSAGE = "Failed to crawl website"
CONNECTION_FAILURE_MESSAGE = "Failed to connect to Firecrawl API"

ClientFactory = Callable[[str], AsyncContextManager[Any]]


class CrawlGateway:
    """Фасад над Firecrawl: хранение ключа, проверка ключа и обход сайта."""

    def __init__(
        self,
        store: KeyValueStore,
        client_factory: Optional[ClientFactory] = None,
        reference_url: str = REFERENCE_URL,
    ) -> None:
        self.store = store
        self.reference_url = reference_url
        self._client_factory: ClientFactory = client_factory or (
            lambda token: FirecrawlClient(token, base_url=DEFAULT_API_URL)
        )

    # ------------------------------------------------------------------
    # Credential
    # ------------------------------------------------------------------

    def save_credential(self, token: str) -> None:
        """Сохраняет ключ без проверки; проверка — отдельный вызов test_credential."""
        self.store.set(API_KEY_STORAGE_KEY, token)
        logger.info("Firecrawl API key saved")

    def get_credential(self) -> Optional[str]:
        return self.store.get(API_KEY_STORAGE_KEY)

    def remove_credential(self) -> None:
        self.store.delete(API_KEY_STORAGE_KEY)
        logger.info("Firecrawl API key removed")

    async def test_credential(self, token: str) -> bool:
        """Пробный scrape одной страницы; True только если сервис ответил success."""
        logger.info("Testing Firecrawl API key against %s", self.reference_url)
        try:
            async with self._client_factory(token) as client:
                response = await client.scrape_url(self.reference_url)
            return bool(response.get("success"))
        except Exception as exc:
            logger.error("Error testing Firecrawl API key: %s", exc)
            return False

    # ------------------------------------------------------------------
    # Crawl
    # ------------------------------------------------------------------

    async def crawl(self, url: str) -> CrawlResult:
        token = self.get_credential()
        if not token:
            return CrawlFailure(MISSING_KEY_MESSAGE)

        job = CrawlJob(url)
        logger.info("Starting crawl for %s (limit %d)", url, job.options.limit)
        try:
            async with self._client_factory(token) as client:
                response = await client.crawl_url(job)
            result = CrawlSuccess.from_payload(response)
        except FirecrawlError as exc:
            logger.error("Crawl failed: %s", exc)
            return CrawlFailure(str(exc) or REMOTE_FAILURE_MESSAGE)
        except Exception as exc:
            logger.error("Error during crawl of %s: %s", url, exc)
            return CrawlFailure(str(exc) or CONNECTION_FAILURE_MESSAGE)

        logger.info(
            "Crawl completed: status=%s completed=%d total=%d credits=%d pages=%d",
            result.status,
            result.pages_completed,
            result.pages_total,
            result.credits_used,
            len(result.pages),
        )
        return result
