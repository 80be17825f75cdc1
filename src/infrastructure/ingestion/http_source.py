"""httpx implementation of MarketDataSource.

Network IO lives here; parsing is delegated to parsers.py.  Any transport
error, HTTP error status or unparseable payload is re-raised as
IngestionError tagged with the failing source.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from src.domain.errors import IngestionError
from src.domain.models.enums import SeriesSource
from src.domain.models.market_data import HomeSeries, PriceSeries, Series, StockSeries
from src.domain.repositories.market_data import MarketDataSource
from src.infrastructure.database import Settings, settings
from src.infrastructure.ingestion.parsers import (
    parse_alpha_vantage_daily,
    parse_coingecko_prices,
    parse_gold_csv,
    parse_home_records,
    parse_stock_records,
)

logger = logging.getLogger(__name__)


class HttpMarketDataSource(MarketDataSource):
    """Fetches every upstream feed over a shared httpx.AsyncClient.

    The client is injected so callers control its lifetime (and tests can
    mount an httpx.MockTransport).
    """

    def __init__(self, client: httpx.AsyncClient, config: Settings = settings) -> None:
        self._client = client
        self._config = config

    async def fetch_stock(self) -> StockSeries:
        response = await self._get(SeriesSource.STOCK.value, self._config.stock_data_url)
        return self._parse(SeriesSource.STOCK.value, lambda r: parse_stock_records(r.json()), response)

    async def fetch_home(self) -> HomeSeries:
        response = await self._get(SeriesSource.HOME.value, self._config.home_data_url)
        return self._parse(SeriesSource.HOME.value, lambda r: parse_home_records(r.json()), response)

    async def fetch_gold(self) -> PriceSeries:
        response = await self._get(SeriesSource.GOLD.value, self._config.gold_data_url)
        return self._parse(SeriesSource.GOLD.value, lambda r: parse_gold_csv(r.text), response)

    async def fetch_bitcoin(self) -> PriceSeries:
        response = await self._get(SeriesSource.BITCOIN.value, self._config.bitcoin_data_url)
        return self._parse(
            SeriesSource.BITCOIN.value, lambda r: parse_coingecko_prices(r.json()), response
        )

    async def fetch_ticker(self, symbol: str, api_key: str) -> PriceSeries:
        source = f"{SeriesSource.TICKER.value}:{symbol}"
        response = await self._get(
            source,
            self._config.ticker_api_url,
            params={
                "function": "TIME_SERIES_DAILY",
                "symbol": symbol,
                "outputsize": self._config.ticker_output_size,
                "apikey": api_key,
            },
        )
        return self._parse(source, lambda r: parse_alpha_vantage_daily(r.json(), symbol), response)

    async def _get(
        self,
        source: str,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        logger.info("Fetching %s data", source)
        try:
            response = await self._client.get(
                url, params=params, timeout=self._config.http_timeout_seconds
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise IngestionError(source, str(exc) or type(exc).__name__) from exc
        return response

    @staticmethod
    def _parse(
        source: str,
        parser: Callable[[httpx.Response], Series],
        response: httpx.Response,
    ) -> Series:
        try:
            series = parser(response)
        except ValueError as exc:
            raise IngestionError(source, str(exc)) from exc
        logger.info("Loaded %d %s observations", len(series), source)
        return series
