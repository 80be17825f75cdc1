"""Domain enumerations for the valuation engine.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (Pydantic default behaviour).
"""

from enum import Enum


class BuiltinAsset(str, Enum):
    """The fixed set of data sources loaded at session start."""

    CAPE = "cape"
    HOME = "home"
    SP500 = "sp500"
    GOLD = "gold"
    BITCOIN = "bitcoin"


class NativeForm(str, Enum):
    """How an asset's raw field is denominated in its series.

    NOMINAL       — unadjusted USD (gold, Bitcoin, custom tickers).
    REAL          — already inflation-adjusted to the session base level
                    (home price index, S&P 500).
    DIMENSIONLESS — a ratio with no real/nominal duality (CAPE).
    """

    NOMINAL = "nominal"
    REAL = "real"
    DIMENSIONLESS = "dimensionless"


class SeriesSource(str, Enum):
    """Upstream data sources fetched by the ingestion layer."""

    STOCK = "stock"
    HOME = "home"
    GOLD = "gold"
    BITCOIN = "bitcoin"
    TICKER = "ticker"
