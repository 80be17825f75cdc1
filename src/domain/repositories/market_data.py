"""Market data source interface.

MarketDataSource is the ingestion collaborator: it turns upstream feeds into
normalized, date-sorted Series.  Concrete implementations live in
src/infrastructure/ingestion/ and are wired at the application boundary.

Every fetch is independent of the others so callers may run them
concurrently.  A failed fetch raises IngestionError naming its source.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.market_data import HomeSeries, PriceSeries, StockSeries


class MarketDataSource(ABC):
    """Read-only interface to the upstream price feeds."""

    @abstractmethod
    async def fetch_stock(self) -> StockSeries:
        """Monthly S&P 500 (real), CAPE, dividend, earnings and CPI."""

    @abstractmethod
    async def fetch_home(self) -> HomeSeries:
        """Yearly real home price index."""

    @abstractmethod
    async def fetch_gold(self) -> PriceSeries:
        """Nominal USD gold price history."""

    @abstractmethod
    async def fetch_bitcoin(self) -> PriceSeries:
        """Nominal USD Bitcoin price history."""

    @abstractmethod
    async def fetch_ticker(self, symbol: str, api_key: str) -> PriceSeries:
        """Nominal USD daily closes for a custom ticker.

        The provider may return only a short recent window; the valuation
        engine treats ticker series as bounded history.
        """
