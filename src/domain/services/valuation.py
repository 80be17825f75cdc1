"""Asset valuation engine.

Expresses any loaded asset in any denominator:

  NOMINAL          — unadjusted USD
  REAL             — USD at the session base level
  RATIO(asset B)   — asset real value / B's real value on the nearest date

Per-point failures (missing field, missing denominator observation, zero
denominator) return None and are dropped from chart output; nothing here
raises for bad data.

Pipeline for one point:
    valuate
        → _raw_value        (descriptor's field on the observation)
        → _nominal / _real  (inflation normalizer when the native form differs)
        → real_value_at     (ratio mode: nearest denominator observation, real form)
"""

from __future__ import annotations

import math
from datetime import date, datetime

from src.domain.models.assets import (
    AssetDescriptor,
    BuiltinAssetRef,
    NOMINAL,
    NominalDenominator,
    REAL,
    RatioDenominator,
    RealDenominator,
    TickerAssetRef,
    describe,
    ratio_to,
)
from src.domain.models.charts import ChartPoint, DateRange
from src.domain.models.enums import NativeForm
from src.domain.models.market_data import Observation
from src.domain.models.store import SeriesStore
from src.domain.services.inflation import InflationNormalizer
from src.domain.services.lookup import NearestDateLookup

AnyAsset = BuiltinAssetRef | TickerAssetRef
AnyDenominator = NominalDenominator | RealDenominator | RatioDenominator


def _positive_finite(value: float | None) -> float | None:
    if value is None or not math.isfinite(value) or value <= 0.0:
        return None
    return value


class ValuationService:
    """Computes single-point valuations against an injected SeriesStore.

    The store and the inflation normalizer (and therefore the base level) are
    fixed for the lifetime of the service.  Build a new service when the store
    gains a ticker.
    """

    def __init__(self, store: SeriesStore, lookup: NearestDateLookup | None = None) -> None:
        self._store = store
        self._lookup = lookup or NearestDateLookup()
        self._inflation = InflationNormalizer(store.stock, store.base_level, self._lookup)

    @property
    def store(self) -> SeriesStore:
        return self._store

    @property
    def inflation(self) -> InflationNormalizer:
        return self._inflation

    # ------------------------------------------------------------------ #
    # Public API                                                           #
    # ------------------------------------------------------------------ #

    def valuate(
        self,
        asset: AnyAsset,
        observation: Observation,
        denominator: AnyDenominator,
    ) -> float | None:
        """Value of `asset` at `observation` expressed in `denominator`.

        Returns None when the observation lacks the asset's field, or when a
        ratio denominator cannot be resolved or is not positive.
        """
        descriptor = describe(asset)
        raw = self._raw_value(descriptor, observation)
        if raw is None:
            return None

        if isinstance(denominator, NominalDenominator):
            return _positive_finite(self._nominal(descriptor, raw, observation))

        real = self._real(descriptor, raw, observation)
        if isinstance(denominator, RealDenominator):
            return _positive_finite(real)

        denominator_real = self.real_value_at(denominator.asset, observation.obs_date)
        if denominator_real is None:
            return None
        return _positive_finite(real / denominator_real)

    def real_value_at(self, asset: AnyAsset, when: date | datetime) -> float | None:
        """Real value of `asset` from its observation nearest to `when`."""
        series = self._store.series_for(asset)
        if series is None:
            return None
        descriptor = describe(asset)
        obs = self._lookup.nearest(series, when, bounded_history=descriptor.bounded_history)
        if obs is None:
            return None
        raw = self._raw_value(descriptor, obs)
        if raw is None:
            return None
        return _positive_finite(self._real(descriptor, raw, obs))

    def value_at(
        self,
        asset: AnyAsset,
        when: date | datetime,
        denominator: AnyDenominator,
    ) -> float | None:
        """Valuate the asset's own observation nearest to `when`."""
        series = self._store.series_for(asset)
        if series is None:
            return None
        descriptor = describe(asset)
        obs = self._lookup.nearest(series, when, bounded_history=descriptor.bounded_history)
        if obs is None:
            return None
        return self.valuate(asset, obs, denominator)

    def series(
        self,
        asset: AnyAsset,
        denominator: AnyDenominator,
        date_range: DateRange | None = None,
    ) -> list[ChartPoint]:
        """One point per in-range observation of the asset; unresolvable points dropped."""
        source = self._store.series_for(asset)
        if source is None:
            return []
        observations = (
            source.between(date_range.start, date_range.end)
            if date_range is not None
            else source.observations
        )
        points: list[ChartPoint] = []
        for obs in observations:
            value = self.valuate(asset, obs, denominator)
            if value is not None:
                points.append(ChartPoint(x=obs.obs_date, y=value))
        return points

    def denominator_options(self, asset: AnyAsset) -> list[AnyDenominator]:
        """Denominators a UI may offer for `asset`.

        Nominal and real USD (only real for dimensionless assets, where the two
        coincide), then one ratio per other loaded asset.  Ratios carry no
        real/nominal choice; they always divide by the real form.
        """
        options: list[AnyDenominator] = []
        if describe(asset).native_form is not NativeForm.DIMENSIONLESS:
            options.append(NOMINAL)
        options.append(REAL)
        options.extend(ratio_to(other) for other in self._store.assets() if other != asset)
        return options

    # ------------------------------------------------------------------ #
    # Conversions                                                          #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _raw_value(descriptor: AssetDescriptor, observation: Observation) -> float | None:
        return _positive_finite(observation.value_of(descriptor.value_field))

    def _real(self, descriptor: AssetDescriptor, raw: float, obs: Observation) -> float:
        if descriptor.native_form is NativeForm.NOMINAL:
            return self._inflation.to_real(raw, obs.obs_date, obs.value_of("cpi"))
        return raw

    def _nominal(self, descriptor: AssetDescriptor, raw: float, obs: Observation) -> float:
        if descriptor.native_form is NativeForm.REAL:
            return self._inflation.to_nominal(raw, obs.obs_date, obs.value_of("cpi"))
        return raw
