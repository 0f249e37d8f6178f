# fin_scout/quotes/catalog.py
"""
Static reference tables: popular NSE symbols, market indices and fund houses.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple, Tuple


class SymbolInfo(NamedTuple):
    symbol: str
    name: str


POPULAR_SYMBOLS: Tuple[SymbolInfo, ...] = (
    SymbolInfo("RELIANCE", "Reliance Industries Ltd"),
    SymbolInfo("TCS", "Tata Consultancy Services Ltd"),
    SymbolInfo("INFY", "Infosys Ltd"),
    SymbolInfo("HDFC", "HDFC Bank Ltd"),
    SymbolInfo("ICICIBANK", "ICICI Bank Ltd"),
    SymbolInfo("SBIN", "State Bank of India"),
    SymbolInfo("BHARTIARTL", "Bharti Airtel Ltd"),
    SymbolInfo("ITC", "ITC Ltd"),
    SymbolInfo("KOTAKBANK", "Kotak Mahindra Bank Ltd"),
    SymbolInfo("LT", "Larsen & Toubro Ltd"),
)

SYMBOL_NAMES: Mapping[str, str] = MappingProxyType({s.symbol: s.name for s in POPULAR_SYMBOLS})

MARKET_INDICES: Tuple[SymbolInfo, ...] = (
    SymbolInfo("NIFTY50", "Nifty 50"),
    SymbolInfo("SENSEX", "BSE Sensex"),
    SymbolInfo("BANKNIFTY", "Bank Nifty"),
    SymbolInfo("NIFTYIT", "Nifty IT"),
)

AMC_NAMES: Tuple[str, ...] = ("SBI", "HDFC", "ICICI", "Aditya Birla", "UTI")

__all__ = ("AMC_NAMES", "MARKET_INDICES", "POPULAR_SYMBOLS", "SYMBOL_NAMES", "SymbolInfo")
