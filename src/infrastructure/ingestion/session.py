"""MarketSession: one loaded store plus the services bound to it.

Typical wiring at the application boundary:

    async with httpx.AsyncClient() as client, AsyncSessionLocal() as db:
        session = await MarketSession.open(
            HttpMarketDataSource(client),
            api_keys=SqlApiKeyRepository(db),
        )
        spy = await session.ensure_ticker("SPY")
        dataset = session.charts.build_dataset(spy, ratio_to(GOLD), DateRange.last_years(5, today))
"""

from __future__ import annotations

import logging
from datetime import date

from src.domain.errors import MissingApiKeyError
from src.domain.models.analytics import StatisticsSnapshot
from src.domain.models.assets import TickerAssetRef, ticker
from src.domain.models.credentials import ApiKey
from src.domain.models.enums import SeriesSource
from src.domain.models.store import SeriesStore
from src.domain.repositories.api_keys import ApiKeyRepository
from src.domain.repositories.market_data import MarketDataSource
from src.domain.services.charting import ChartService
from src.domain.services.returns import ReturnCalculator
from src.domain.services.statistics import StatisticsService
from src.domain.services.valuation import ValuationService
from src.infrastructure.database import Settings, settings
from src.infrastructure.ingestion.loader import TickerCache, load_store

logger = logging.getLogger(__name__)


class MarketSession:
    """Holds the session store and rebinds services when a ticker is added.

    The base level comes from the store built at open() and survives every
    ticker registration unchanged.
    """

    def __init__(
        self,
        store: SeriesStore,
        source: MarketDataSource,
        api_keys: ApiKeyRepository | None = None,
        config: Settings = settings,
    ) -> None:
        self._source = source
        self._api_keys = api_keys
        self._config = config
        self._tickers = TickerCache(source)
        self._statistics = StatisticsService()
        self._bind(store)

    @classmethod
    async def open(
        cls,
        source: MarketDataSource,
        api_keys: ApiKeyRepository | None = None,
        config: Settings = settings,
        reduce_as_of: date | None = None,
    ) -> MarketSession:
        """Load every built-in series (barrier) and return a ready session.

        reduce_as_of thins long histories for charting; see load_store().
        """
        store = await load_store(source, reduce_as_of=reduce_as_of)
        return cls(store, source, api_keys=api_keys, config=config)

    def _bind(self, store: SeriesStore) -> None:
        self._store = store
        self.valuation = ValuationService(store)
        self.returns = ReturnCalculator(self.valuation)
        self.charts = ChartService(self.valuation)

    @property
    def store(self) -> SeriesStore:
        return self._store

    def statistics(self) -> StatisticsSnapshot:
        return self._statistics.compute_stats(
            self._store.stock, self._store.gold, self._store.home, valuation=self.valuation
        )

    async def ensure_ticker(self, symbol: str) -> TickerAssetRef:
        """Make a custom ticker addressable, fetching it on first use only."""
        ref = ticker(symbol)
        if self._store.has(ref):
            return ref
        api_key = await self._resolve_api_key()
        series = await self._tickers.get(ref.symbol, api_key)
        if not self._store.has(ref):
            self._bind(self._store.with_ticker(ref.symbol, series))
            logger.info("Registered ticker %s (%d observations)", ref.symbol, len(series))
        return ref

    async def _resolve_api_key(self) -> str:
        provider = self._config.ticker_provider
        if self._api_keys is not None:
            cached = await self._api_keys.get(provider)
            if cached is not None:
                logger.info("Using cached %s API key %s", provider, cached.masked())
                return cached.api_key
        if self._config.alpha_vantage_api_key:
            configured = ApiKey(provider=provider, api_key=self._config.alpha_vantage_api_key)
            logger.info("Using configured %s API key %s", provider, configured.masked())
            return configured.api_key
        raise MissingApiKeyError(SeriesSource.TICKER.value, provider)
