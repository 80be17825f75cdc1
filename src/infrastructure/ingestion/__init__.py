"""Ingestion package: upstream fetch, normalization and session loading."""

from .http_source import HttpMarketDataSource
from .loader import TickerCache, load_store
from .parsers import reduce_resolution
from .session import MarketSession

__all__ = [
    "HttpMarketDataSource",
    "MarketSession",
    "TickerCache",
    "load_store",
    "reduce_resolution",
]
