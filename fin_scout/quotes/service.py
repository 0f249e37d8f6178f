# File: fin_scout/quotes/service.py
"""fin_scout.quotes.service: синтетические котировки акций, индексов и паевых фондов.

Реального источника рыночных данных нет: при промахе кэша запись
генерируется случайно и живёт в кэше ``ttl`` (по умолчанию 5 минут).
"""

from __future__ import annotations

import dataclasses
import random
from datetime import timedelta
from typing import List, Optional

from fin_scout.logger import logger
from fin_scout.quotes.cache import Clock, ExpiringCache, utcnow
from fin_scout.quotes.catalog import AMC_NAMES, MARKET_INDICES, POPULAR_SYMBOLS, SYMBOL_NAMES, SymbolInfo
from fin_scout.quotes.models import FundRecord, QuoteRecord

__all__ = ["QuoteService", "CACHE_TTL"]

CACHE_TTL = timedelta(minutes=5)

# множитель цены для индексов относительно сгенерированной "акции"
_INDEX_SCALE = 100


class QuoteService:
    """Выдаёт котировки по символу или ISIN с кэшированием на ``ttl``."""

    def __init__(
        self,
        ttl: timedelta = CACHE_TTL,
        clock: Clock = utcnow,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._clock = clock
        self._rng = rng or random.Random()
        self._stocks: ExpiringCache[str, QuoteRecord] = ExpiringCache(ttl, clock)
        self._funds: ExpiringCache[str, FundRecord] = ExpiringCache(ttl, clock)

    async def get_stock_quote(self, symbol: str) -> Optional[QuoteRecord]:
        """
        Возвращает котировку акции: из кэша, если она ещё свежая, иначе новую.

        ``None`` зарезервирован для будущего реального источника данных;
        генерация сейчас всегда успешна.
        """
        cached = self._stocks.get(symbol)
        if cached is not None:
            logger.debug("Returning cached quote for %s", symbol)
            return cached

        rnd = self._rng.random
        record = QuoteRecord(
            symbol=symbol,
            name=SYMBOL_NAMES.get(symbol, f"{symbol} Ltd"),
            price=100 + rnd() * 3000,
            change=(rnd() - 0.5) * 100,
            change_percent=(rnd() - 0.5) * 10,
            volume=self._rng.randrange(10_000, 1_010_000),
            market_cap=10_000 + rnd() * 500_000,
            timestamp=self._clock(),
        )
        self._stocks.set(symbol, record)
        logger.info("Generated quote for %s: %.2f", symbol, record.price)
        return record

    async def get_fund_quote(self, isin: str) -> Optional[FundRecord]:
        """Котировка паевого фонда по ISIN; та же дисциплина кэша, что и у акций."""
        cached = self._funds.get(isin)
        if cached is not None:
            logger.debug("Returning cached fund quote for %s", isin)
            return cached

        rnd = self._rng.random
        record = FundRecord(
            isin=isin,
            name=f"Sample Mutual Fund ({isin[-4:]})",
            amc=self._rng.choice(AMC_NAMES),
            nav=10 + rnd() * 100,
            change=(rnd() - 0.5) * 5,
            change_percent=(rnd() - 0.5) * 3,
            timestamp=self._clock(),
        )
        self._funds.set(isin, record)
        logger.info("Generated fund quote for %s: NAV %.2f", isin, record.nav)
        return record

    async def get_market_indices(self) -> List[QuoteRecord]:
        results: List[QuoteRecord] = []
        for index in MARKET_INDICES:
            quote = await self.get_stock_quote(index.symbol)
            if quote is None:
                continue
            results.append(
                dataclasses.replace(
                    quote,
                    name=index.name,
                    price=quote.price * _INDEX_SCALE,
                    market_cap=None,
                )
            )
        return results

    def get_popular_symbols(self) -> List[SymbolInfo]:
        return list(POPULAR_SYMBOLS)

    def clear_cache(self) -> None:
        self._stocks.clear()
        self._funds.clear()
        logger.info("Quote cache cleared")
