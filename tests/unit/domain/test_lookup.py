"""Unit tests for NearestDateLookup."""

from datetime import date, datetime, timedelta

import pytest

from src.domain.models.market_data import PriceObservation, PriceSeries
from src.domain.services.lookup import INCEPTION_TOLERANCE, NearestDateLookup


def _series(*dates):
    return PriceSeries(
        source="test",
        observations=tuple(
            PriceObservation(obs_date=d, price=float(i + 1)) for i, d in enumerate(dates)
        ),
    )


def _linear_scan(series, target):
    """Reference: ascending scan, replace only on strictly smaller distance."""
    best, best_distance = None, None
    t = datetime(target.year, target.month, target.day)
    for obs in series.observations:
        distance = abs((datetime(obs.obs_date.year, obs.obs_date.month, obs.obs_date.day) - t).total_seconds())
        if best_distance is None or distance < best_distance:
            best, best_distance = obs, distance
    return best


@pytest.fixture
def lookup() -> NearestDateLookup:
    return NearestDateLookup()


class TestNearest:
    def test_empty_series_returns_none(self, lookup):
        assert lookup.nearest(PriceSeries(source="empty"), date(2020, 1, 1)) is None

    def test_exact_match(self, lookup):
        series = _series(date(2020, 1, 1), date(2020, 2, 1))
        assert lookup.nearest(series, date(2020, 2, 1)).obs_date == date(2020, 2, 1)

    def test_equidistant_picks_earlier(self, lookup):
        series = _series(date(2020, 1, 1), date(2020, 1, 3))
        assert lookup.nearest(series, date(2020, 1, 2)).obs_date == date(2020, 1, 1)

    def test_one_second_past_midpoint_picks_later(self, lookup):
        series = _series(date(2020, 1, 1), date(2020, 1, 3))
        result = lookup.nearest(series, datetime(2020, 1, 2, 0, 0, 1))
        assert result.obs_date == date(2020, 1, 3)

    def test_target_before_first_clamps_to_first(self, lookup):
        series = _series(date(2000, 1, 1), date(2001, 1, 1))
        assert lookup.nearest(series, date(1900, 1, 1)).obs_date == date(2000, 1, 1)

    def test_target_after_last_clamps_to_last(self, lookup):
        series = _series(date(2000, 1, 1), date(2001, 1, 1))
        assert lookup.nearest(series, date(2100, 1, 1)).obs_date == date(2001, 1, 1)

    def test_single_observation_always_matches(self, lookup):
        series = _series(date(2000, 1, 1))
        assert lookup.nearest(series, date(1800, 1, 1)).obs_date == date(2000, 1, 1)

    def test_matches_linear_scan_on_irregular_series(self, lookup):
        series = _series(
            date(2000, 1, 1),
            date(2000, 1, 5),
            date(2000, 1, 9),
            date(2000, 3, 1),
            date(2001, 6, 30),
        )
        start = date(1999, 12, 1)
        for offset in range(0, 600, 3):
            target = start + timedelta(days=offset)
            assert lookup.nearest(series, target) == _linear_scan(series, target)


class TestBoundedHistory:
    def test_target_far_before_inception_is_none(self, lookup):
        series = _series(date(2015, 6, 1), date(2015, 7, 1))
        assert lookup.nearest(series, date(2015, 4, 1), bounded_history=True) is None

    def test_target_within_tolerance_matches_first(self, lookup):
        series = _series(date(2015, 6, 1), date(2015, 7, 1))
        result = lookup.nearest(series, date(2015, 5, 15), bounded_history=True)
        assert result.obs_date == date(2015, 6, 1)

    def test_unbounded_series_ignores_inception(self, lookup):
        series = _series(date(2015, 6, 1))
        assert lookup.nearest(series, date(1900, 1, 1)).obs_date == date(2015, 6, 1)

    def test_after_inception_unaffected(self, lookup):
        series = _series(date(2015, 6, 1), date(2015, 7, 1))
        result = lookup.nearest(series, date(2015, 6, 20), bounded_history=True)
        assert result.obs_date == date(2015, 7, 1)

    def test_custom_tolerance(self):
        lookup = NearestDateLookup(inception_tolerance=timedelta(days=1))
        series = _series(date(2015, 6, 1))
        assert lookup.nearest(series, date(2015, 5, 25), bounded_history=True) is None

    def test_default_tolerance_is_thirty_days(self):
        assert INCEPTION_TOLERANCE == timedelta(days=30)
