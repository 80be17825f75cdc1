"""Inflation normalizer: nominal <-> real conversion against the session base level.

    to_real(v, d)    = v · (base_level / level(d))
    to_nominal(v, d) = v · (level(d) / base_level)

level(d) is the CPI of the stock observation nearest to d.  When no CPI is
available the base level itself is used, which makes both conversions a
no-op.  The two functions are exact inverses for the same date.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from src.domain.models.market_data import StockSeries
from src.domain.services.lookup import NearestDateLookup

logger = logging.getLogger(__name__)


class InflationNormalizer:
    """Converts values between nominal USD and base-level (real) USD.

    The base level is fixed at construction and never recomputed.
    """

    def __init__(
        self,
        stock: StockSeries,
        base_level: float,
        lookup: NearestDateLookup | None = None,
    ) -> None:
        if base_level <= 0:
            raise ValueError(f"base_level must be positive, got {base_level}")
        self._base_level = base_level
        self._lookup = lookup or NearestDateLookup()
        self._levels = StockSeries(
            source=f"{stock.source}:cpi",
            observations=tuple(o for o in stock.observations if o.cpi is not None),
        )
        if self._levels.is_empty:
            logger.warning(
                "No CPI observations in %s series; real and nominal values "
                "will be treated as identical.",
                stock.source,
            )

    @property
    def base_level(self) -> float:
        return self._base_level

    def price_level_at(self, when: date | datetime) -> float:
        """CPI nearest to `when`, falling back to the base level."""
        obs = self._lookup.nearest(self._levels, when)
        if obs is None or obs.cpi is None:
            return self._base_level
        return obs.cpi

    def to_real(
        self,
        value: float,
        when: date | datetime,
        price_level: float | None = None,
    ) -> float:
        """Express a nominal value observed at `when` in base-level dollars.

        price_level overrides the lookup when the observation embeds its own CPI.
        """
        level = price_level if price_level else self.price_level_at(when)
        return value * (self._base_level / level)

    def to_nominal(
        self,
        value: float,
        when: date | datetime,
        price_level: float | None = None,
    ) -> float:
        """Inverse of to_real for the same date and price level."""
        level = price_level if price_level else self.price_level_at(when)
        return value * (level / self._base_level)
