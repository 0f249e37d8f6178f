"""fin_scout.quotes: synthetic stock, index and fund quotes behind an expiring cache."""

from fin_scout.quotes.cache import ExpiringCache
from fin_scout.quotes.models import FundRecord, QuoteRecord
from fin_scout.quotes.service import CACHE_TTL, QuoteService

__all__ = ["CACHE_TTL", "ExpiringCache", "FundRecord", "QuoteRecord", "QuoteService"]
