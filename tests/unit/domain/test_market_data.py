"""Tests for src/domain/models/market_data.py."""

import math
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from src.domain.models.market_data import (
    HomeObservation,
    PriceObservation,
    PriceSeries,
    StockObservation,
    StockSeries,
    to_timestamp,
)


def _prices(*pairs):
    return PriceSeries(
        source="gold",
        observations=tuple(PriceObservation(obs_date=d, price=p) for d, p in pairs),
    )


# --- to_timestamp ---

def test_to_timestamp_epoch_is_zero():
    assert to_timestamp(date(1970, 1, 1)) == 0.0


def test_to_timestamp_date_is_midnight():
    assert to_timestamp(date(1970, 1, 2)) == 86400.0


def test_to_timestamp_naive_datetime_keeps_seconds():
    assert to_timestamp(datetime(1970, 1, 1, 0, 0, 1)) == 1.0


def test_to_timestamp_aware_datetime_converted_to_utc():
    aware = datetime(1970, 1, 2, tzinfo=timezone.utc)
    assert to_timestamp(aware) == 86400.0


def test_to_timestamp_handles_pre_epoch_dates():
    assert to_timestamp(date(1871, 1, 1)) < 0


# --- StockObservation ---

def test_stock_observation_optional_fields_default_to_none():
    obs = StockObservation(obs_date=date(1871, 1, 1), sp500=4.44)
    assert obs.cape is None
    assert obs.cpi is None
    assert obs.dividend is None
    assert obs.earnings is None


def test_stock_observation_sp500_zero_raises():
    with pytest.raises(ValidationError):
        StockObservation(obs_date=date(2000, 1, 1), sp500=0.0)


def test_stock_observation_negative_cape_raises():
    with pytest.raises(ValidationError):
        StockObservation(obs_date=date(2000, 1, 1), sp500=1.0, cape=-1.0)


def test_stock_observation_nan_raises():
    with pytest.raises(ValidationError):
        StockObservation(obs_date=date(2000, 1, 1), sp500=math.nan)


def test_stock_observation_infinite_cpi_raises():
    with pytest.raises(ValidationError):
        StockObservation(obs_date=date(2000, 1, 1), sp500=1.0, cpi=math.inf)


def test_stock_observation_is_frozen():
    obs = StockObservation(obs_date=date(2000, 1, 1), sp500=1.0)
    with pytest.raises(ValidationError):
        obs.sp500 = 2.0  # type: ignore[misc]


def test_value_of_returns_named_field():
    obs = StockObservation(obs_date=date(2000, 1, 1), sp500=1.0, cape=44.2)
    assert obs.value_of("cape") == 44.2


def test_value_of_unknown_field_is_none():
    obs = PriceObservation(obs_date=date(2000, 1, 1), price=280.0)
    assert obs.value_of("cape") is None


# --- HomeObservation / PriceObservation ---

def test_home_observation_real_price_must_be_positive():
    with pytest.raises(ValidationError):
        HomeObservation(obs_date=date(1890, 1, 1), real_price=0.0)


def test_price_observation_negative_raises():
    with pytest.raises(ValidationError):
        PriceObservation(obs_date=date(2000, 1, 1), price=-5.0)


# --- Series ---

def test_series_rejects_unsorted_dates():
    with pytest.raises(ValidationError):
        _prices((date(2020, 2, 1), 1.0), (date(2020, 1, 1), 2.0))


def test_series_rejects_duplicate_dates():
    with pytest.raises(ValidationError):
        _prices((date(2020, 1, 1), 1.0), (date(2020, 1, 1), 2.0))


def test_series_empty_is_allowed():
    series = PriceSeries(source="bitcoin")
    assert series.is_empty
    assert len(series) == 0
    assert series.first is None
    assert series.last is None


def test_series_first_and_last():
    series = _prices((date(2020, 1, 1), 1.0), (date(2020, 2, 1), 2.0), (date(2020, 3, 1), 3.0))
    assert series.first.price == 1.0
    assert series.last.price == 3.0
    assert len(series) == 3


def test_series_between_is_inclusive():
    series = _prices((date(2020, 1, 1), 1.0), (date(2020, 2, 1), 2.0), (date(2020, 3, 1), 3.0))
    result = series.between(date(2020, 1, 1), date(2020, 2, 1))
    assert [o.price for o in result] == [1.0, 2.0]


def test_series_between_outside_range_is_empty():
    series = _prices((date(2020, 1, 1), 1.0))
    assert series.between(date(2021, 1, 1), date(2022, 1, 1)) == []


def test_series_timestamps_align_with_observations():
    series = _prices((date(1970, 1, 1), 1.0), (date(1970, 1, 2), 2.0))
    assert series.timestamps == (0.0, 86400.0)


def test_stock_series_alias_validates_stock_rows():
    series = StockSeries(
        source="stock",
        observations=(StockObservation(obs_date=date(2000, 1, 1), sp500=1.0, cpi=170.0),),
    )
    assert series.last.cpi == 170.0
