"""Session-scoped store of every ingested series.

The store is built once, after all built-in sources have loaded, and is then
handed to the valuation services.  It is never mutated: registering a custom
ticker produces a new store that shares the original series and, crucially,
the original base level.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .assets import BuiltinAssetRef, TickerAssetRef, builtin, ticker
from .enums import BuiltinAsset
from .market_data import HomeSeries, PriceSeries, Series, StockSeries


def derive_base_level(stock: StockSeries) -> float | None:
    """Price level of the most recent stock observation that carries a CPI."""
    for obs in reversed(stock.observations):
        if obs.cpi is not None:
            return obs.cpi
    return None


class SeriesStore(BaseModel):
    """Immutable container for the built-in series plus registered tickers.

    base_level anchors every real/nominal conversion for the session.  Use
    SeriesStore.build() so it is derived from the stock series; with_ticker()
    carries it over unchanged.
    """

    model_config = ConfigDict(frozen=True)

    stock: StockSeries
    home: HomeSeries
    gold: PriceSeries
    bitcoin: PriceSeries
    tickers: dict[str, PriceSeries] = Field(default_factory=dict)
    base_level: float = Field(default=1.0, gt=0.0)

    @classmethod
    def build(
        cls,
        stock: StockSeries,
        home: HomeSeries,
        gold: PriceSeries,
        bitcoin: PriceSeries,
    ) -> SeriesStore:
        base = derive_base_level(stock)
        return cls(
            stock=stock,
            home=home,
            gold=gold,
            bitcoin=bitcoin,
            base_level=base if base is not None else 1.0,
        )

    def with_ticker(self, symbol: str, series: PriceSeries) -> SeriesStore:
        """Return a new store that also holds `series` under `symbol`."""
        key = ticker(symbol).symbol
        return self.model_copy(update={"tickers": {**self.tickers, key: series}})

    def series_for(self, asset: BuiltinAssetRef | TickerAssetRef) -> Series | None:
        """The series backing an asset, or None for an unregistered ticker."""
        if isinstance(asset, TickerAssetRef):
            return self.tickers.get(asset.symbol)
        return {
            BuiltinAsset.CAPE: self.stock,
            BuiltinAsset.SP500: self.stock,
            BuiltinAsset.HOME: self.home,
            BuiltinAsset.GOLD: self.gold,
            BuiltinAsset.BITCOIN: self.bitcoin,
        }[asset.asset]

    def has(self, asset: BuiltinAssetRef | TickerAssetRef) -> bool:
        return self.series_for(asset) is not None

    def assets(self) -> list[BuiltinAssetRef | TickerAssetRef]:
        """Every addressable asset: built-ins in enum order, then tickers by symbol."""
        refs: list[BuiltinAssetRef | TickerAssetRef] = [builtin(a) for a in BuiltinAsset]
        refs.extend(ticker(symbol) for symbol in sorted(self.tickers))
        return refs
