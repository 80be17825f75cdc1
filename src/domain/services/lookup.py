"""Nearest-date lookup over irregularly sampled series.

Series are sampled at different cadences (monthly stock rows, yearly home
rows, daily gold / ticker prices), so every cross-series value is resolved by
picking the observation closest in time to the target.
"""

from __future__ import annotations

from bisect import bisect_left
from datetime import date, datetime, timedelta

from src.domain.models.market_data import ObservationT, Series, to_timestamp

INCEPTION_TOLERANCE = timedelta(days=30)


class NearestDateLookup:
    """Find the observation minimising |obs_date - target|.

    Equivalent to an ascending linear scan that only replaces the running best
    on a strictly smaller distance: equidistant neighbours resolve to the
    earlier date.  A match is returned however far away it is, except for
    bounded-history series, where a target more than inception_tolerance
    before the first observation yields None.
    """

    def __init__(self, inception_tolerance: timedelta = INCEPTION_TOLERANCE) -> None:
        self._tolerance_seconds = inception_tolerance.total_seconds()

    def nearest(
        self,
        series: Series[ObservationT],
        target: date | datetime,
        bounded_history: bool = False,
    ) -> ObservationT | None:
        """Return the closest observation, or None when the series is empty
        or the target predates a bounded series beyond tolerance."""
        observations = series.observations
        if not observations:
            return None

        stamps = series.timestamps
        t = to_timestamp(target)
        if bounded_history and stamps[0] - t > self._tolerance_seconds:
            return None

        i = bisect_left(stamps, t)
        if i == 0:
            return observations[0]
        if i == len(stamps):
            return observations[-1]
        if stamps[i] - t < t - stamps[i - 1]:
            return observations[i]
        return observations[i - 1]
