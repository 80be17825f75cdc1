"""Domain services package."""

from .charting import ChartService
from .inflation import InflationNormalizer
from .lookup import NearestDateLookup
from .returns import ReturnCalculator
from .statistics import StatisticsService
from .valuation import ValuationService

__all__ = [
    "ChartService",
    "InflationNormalizer",
    "NearestDateLookup",
    "ReturnCalculator",
    "StatisticsService",
    "ValuationService",
]
