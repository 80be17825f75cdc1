"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .analytics import ReturnResult, SampleCounts, StatisticsSnapshot
from .assets import (
    AssetDescriptor,
    AssetRef,
    BuiltinAssetRef,
    DenominatorSpec,
    NominalDenominator,
    RatioDenominator,
    RealDenominator,
    TickerAssetRef,
    describe,
    ratio_to,
)
from .charts import ChartDataset, ChartPoint, DateRange, HistoricalEvent, HISTORICAL_EVENTS
from .credentials import ApiKey
from .enums import BuiltinAsset, NativeForm, SeriesSource
from .market_data import (
    HomeObservation,
    HomeSeries,
    Observation,
    PriceObservation,
    PriceSeries,
    Series,
    StockObservation,
    StockSeries,
)
from .store import SeriesStore

__all__ = [
    # enums
    "BuiltinAsset",
    "NativeForm",
    "SeriesSource",
    # market data
    "Observation",
    "StockObservation",
    "HomeObservation",
    "PriceObservation",
    "Series",
    "StockSeries",
    "HomeSeries",
    "PriceSeries",
    # assets
    "AssetRef",
    "BuiltinAssetRef",
    "TickerAssetRef",
    "AssetDescriptor",
    "describe",
    "DenominatorSpec",
    "NominalDenominator",
    "RealDenominator",
    "RatioDenominator",
    "ratio_to",
    # store
    "SeriesStore",
    # charts
    "ChartPoint",
    "ChartDataset",
    "DateRange",
    "HistoricalEvent",
    "HISTORICAL_EVENTS",
    # analytics
    "SampleCounts",
    "StatisticsSnapshot",
    "ReturnResult",
    # credentials
    "ApiKey",
]
