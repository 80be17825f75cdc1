"""Statistics engine: current CAPE / real-gold reading and its percentile rank.

    current_ratio = CAPE(latest) / real_gold(latest stock date)
    percentile    = 100 · #{historical ratio < current_ratio} / #historical ratios

The historical population is every stock observation's CAPE / real-gold
ratio, the latest observation included.  Ties are not counted as "below",
so an all-time high reads just under 100 rather than 100.
"""

from __future__ import annotations

import numpy as np

from src.domain.models.analytics import SampleCounts, StatisticsSnapshot
from src.domain.models.assets import CAPE, GOLD, ratio_to
from src.domain.models.market_data import HomeSeries, PriceSeries, StockSeries
from src.domain.models.store import SeriesStore
from src.domain.services.valuation import ValuationService


def percentile_rank(population: np.ndarray | list[float], value: float) -> float:
    """Percentage of `population` strictly less than `value` (0–100)."""
    arr = np.asarray(population, dtype=float)
    if arr.size == 0:
        raise ValueError("percentile_rank requires a non-empty population")
    return 100.0 * float(np.count_nonzero(arr < value)) / arr.size


class StatisticsService:
    """Pure computation service for the summary statistics panel.

    The class is stateless; the series are passed per-call.  Callers that
    already hold a ValuationService over the same series pass it in so the
    real gold price uses their store's base level; otherwise a private one is
    built from the series.
    """

    def compute_stats(
        self,
        stock: StockSeries,
        gold: PriceSeries,
        home: HomeSeries | None = None,
        valuation: ValuationService | None = None,
    ) -> StatisticsSnapshot:
        """Return the current snapshot, or an unavailable one when inputs are missing."""
        counts = SampleCounts(
            stock=len(stock),
            gold=len(gold),
            home=len(home) if home is not None else None,
        )
        if stock.is_empty or gold.is_empty:
            return StatisticsSnapshot.unavailable(
                "Stock and gold series are both required.", counts
            )

        if valuation is None:
            valuation = ValuationService(
                SeriesStore.build(
                    stock=stock,
                    home=home if home is not None else HomeSeries(source="home"),
                    gold=gold,
                    bitcoin=PriceSeries(source="bitcoin"),
                )
            )

        latest = stock.last
        if latest.cape is None:
            return StatisticsSnapshot.unavailable(
                f"Latest stock observation ({latest.obs_date}) has no CAPE value.", counts
            )
        current_gold = valuation.real_value_at(GOLD, latest.obs_date)
        if current_gold is None:
            return StatisticsSnapshot.unavailable(
                f"No gold price available near {latest.obs_date}.", counts
            )
        current_ratio = latest.cape / current_gold

        cape_over_gold = ratio_to(GOLD)
        ratios = np.sort(
            np.array(
                [
                    r
                    for r in (valuation.valuate(CAPE, obs, cape_over_gold) for obs in stock.observations)
                    if r is not None
                ],
                dtype=float,
            )
        )
        counts = counts.model_copy(update={"ratios": int(ratios.size)})

        return StatisticsSnapshot(
            available=True,
            as_of=latest.obs_date,
            current_raw_value=latest.cape,
            current_denominator_value=current_gold,
            current_ratio=current_ratio,
            percentile=percentile_rank(ratios, current_ratio),
            sample_counts=counts,
        )
