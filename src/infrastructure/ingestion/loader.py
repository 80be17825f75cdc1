"""Session loading: concurrent built-in fetches and the lazy ticker cache."""

from __future__ import annotations

import asyncio
import logging
from datetime import date

from src.domain.errors import IngestionError
from src.domain.models.assets import ticker
from src.domain.models.enums import SeriesSource
from src.domain.models.market_data import PriceSeries
from src.domain.models.store import SeriesStore
from src.domain.repositories.market_data import MarketDataSource
from src.infrastructure.ingestion.parsers import reduce_resolution

logger = logging.getLogger(__name__)


async def load_store(
    source: MarketDataSource, reduce_as_of: date | None = None
) -> SeriesStore:
    """Fetch every built-in series concurrently and build the session store.

    All fetches run to completion before anything is built.  If any fail, a
    single IngestionError naming every failed source is raised; a partially
    loaded store is never returned.

    With reduce_as_of set, each built-in series is thinned by
    reduce_resolution() relative to that date before the store is built.
    The most recent decade is kept whole.
    """
    names = (SeriesSource.STOCK, SeriesSource.HOME, SeriesSource.GOLD, SeriesSource.BITCOIN)
    results = await asyncio.gather(
        source.fetch_stock(),
        source.fetch_home(),
        source.fetch_gold(),
        source.fetch_bitcoin(),
        return_exceptions=True,
    )

    failures: list[tuple[SeriesSource, Exception]] = []
    for name, result in zip(names, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.error("Failed to load %s data: %s", name.value, result)
            failures.append((name, result))

    if len(failures) == 1 and isinstance(failures[0][1], IngestionError):
        raise failures[0][1]
    if failures:
        raise IngestionError(
            ", ".join(name.value for name, _ in failures),
            "; ".join(str(exc) for _, exc in failures),
        ) from failures[0][1]

    stock, home, gold, bitcoin = results
    if reduce_as_of is not None:
        stock, home, gold, bitcoin = (
            reduce_resolution(series, reduce_as_of) for series in (stock, home, gold, bitcoin)
        )
    store = SeriesStore.build(stock=stock, home=home, gold=gold, bitcoin=bitcoin)
    logger.info(
        "Session store ready: %d stock, %d home, %d gold, %d bitcoin observations; "
        "base level %.3f",
        len(stock),
        len(home),
        len(gold),
        len(bitcoin),
        store.base_level,
    )
    return store


class TickerCache:
    """At-most-once fetch per ticker symbol for the lifetime of a session.

    Concurrent requests for the same symbol share one in-flight fetch.  A
    failed fetch stays failed: later requests re-raise the same error
    instead of hitting the network again.
    """

    def __init__(self, source: MarketDataSource) -> None:
        self._source = source
        self._fetches: dict[str, asyncio.Future[PriceSeries]] = {}

    async def get(self, symbol: str, api_key: str) -> PriceSeries:
        key = ticker(symbol).symbol
        fetch = self._fetches.get(key)
        if fetch is None:
            logger.info("Fetching ticker %s", key)
            fetch = asyncio.ensure_future(self._source.fetch_ticker(key, api_key))
            self._fetches[key] = fetch
        return await asyncio.shield(fetch)

    def is_cached(self, symbol: str) -> bool:
        """True once the symbol has been fetched successfully."""
        fetch = self._fetches.get(ticker(symbol).symbol)
        return (
            fetch is not None
            and fetch.done()
            and not fetch.cancelled()
            and fetch.exception() is None
        )
