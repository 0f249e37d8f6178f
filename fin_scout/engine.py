# File: fin_scout/engine.py
"""fin_scout.engine: Фасад, собирающий шлюз Firecrawl и сервис котировок из конфигурации."""

from __future__ import annotations

from datetime import timedelta
from functools import partial
from typing import Optional, Union

from fin_scout.config import DashboardConfig, load_config
from fin_scout.crawl.client import FirecrawlClient
from fin_scout.crawl.gateway import CrawlGateway
from fin_scout.logger import logger
from fin_scout.quotes.models import FundRecord, QuoteRecord
from fin_scout.quotes.service import QuoteService
from fin_scout.storage import KeyValueStore

__all__ = ["Engine"]


class Engine:
    """Фасад для CLI и тестов: один шлюз обхода и один сервис котировок на процесс."""

    @staticmethod
    def load_config(path: Optional[str]) -> DashboardConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(
        self,
        config: DashboardConfig,
        gateway: Optional[CrawlGateway] = None,
        quotes: Optional[QuoteService] = None,
    ) -> None:
        self.config = config
        self.gateway = gateway or CrawlGateway(
            KeyValueStore(config.storage_path),
            client_factory=partial(
                FirecrawlClient,
                base_url=str(config.api_url),
                poll_interval=config.poll_interval,
                timeout=config.request_timeout,
            ),
            reference_url=str(config.reference_url),
        )
        self.quotes = quotes or QuoteService(ttl=timedelta(seconds=config.cache_ttl))

    async def lookup(self, query: str) -> Optional[Union[QuoteRecord, FundRecord]]:
        """Ищет сначала акцию по символу, затем фонд по ISIN; None — данных нет."""
        query = query.strip()
        if not query:
            return None
        logger.info("Searching for %s", query)
        stock = await self.quotes.get_stock_quote(query.upper())
        if stock is not None:
            return stock
        return await self.quotes.get_fund_quote(query)
