"""fin_scout.crawl: Firecrawl client, crawl gateway and result models."""

from fin_scout.crawl.client import FirecrawlClient, FirecrawlError
from fin_scout.crawl.gateway import API_KEY_STORAGE_KEY, CrawlGateway
from fin_scout.crawl.models import CrawlFailure, CrawlJob, CrawlResult, CrawlSuccess, Page

__all__ = [
    "API_KEY_STORAGE_KEY",
    "CrawlFailure",
    "CrawlGateway",
    "CrawlJob",
    "CrawlResult",
    "CrawlSuccess",
    "FirecrawlClient",
    "FirecrawlError",
    "Page",
]
