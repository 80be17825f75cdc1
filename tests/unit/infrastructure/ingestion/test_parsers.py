"""Tests for src/infrastructure/ingestion/parsers.py."""

from datetime import date

import pytest

from src.domain.models.market_data import PriceObservation, PriceSeries
from src.infrastructure.ingestion.parsers import (
    fractional_year_to_date,
    parse_alpha_vantage_daily,
    parse_coingecko_prices,
    parse_gold_csv,
    parse_home_records,
    parse_iso_date,
    parse_shiller_date,
    parse_stock_records,
    reduce_resolution,
)


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------


class TestParseShillerDate:
    def test_january_float(self):
        assert parse_shiller_date(1871.01) == date(1871, 1, 1)

    def test_october_float_reads_as_one_zero(self):
        assert parse_shiller_date(1871.1) == date(1871, 10, 1)

    def test_december_string(self):
        assert parse_shiller_date("2023.12") == date(2023, 12, 1)

    def test_one_digit_string_fraction(self):
        assert parse_shiller_date("1871.1") == date(1871, 10, 1)

    def test_integer_year_is_january(self):
        assert parse_shiller_date(1900) == date(1900, 1, 1)

    def test_invalid_month_is_none(self):
        assert parse_shiller_date("2020.13") is None

    def test_garbage_is_none(self):
        assert parse_shiller_date("n/a") is None

    def test_nan_is_none(self):
        assert parse_shiller_date(float("nan")) is None

    def test_none_is_none(self):
        assert parse_shiller_date(None) is None


class TestParseIsoDate:
    def test_full_date(self):
        assert parse_iso_date("2024-02-29") == date(2024, 2, 29)

    def test_datetime_string_truncated(self):
        assert parse_iso_date("2024-02-29T12:00:00Z") == date(2024, 2, 29)

    def test_year_month(self):
        assert parse_iso_date("1850-06") == date(1850, 6, 1)

    def test_year_only(self):
        assert parse_iso_date("1800") == date(1800, 1, 1)

    def test_invalid_day(self):
        assert parse_iso_date("2023-02-30") is None

    def test_garbage(self):
        assert parse_iso_date("yesterday") is None


class TestFractionalYear:
    def test_whole_year(self):
        assert fractional_year_to_date(1890.0) == date(1890, 1, 1)

    def test_half_year_is_july(self):
        assert fractional_year_to_date(1953.5) == date(1953, 7, 1)

    def test_near_one_clamps_to_december(self):
        assert fractional_year_to_date(1953.999) == date(1953, 12, 1)

    def test_nan_is_none(self):
        assert fractional_year_to_date(float("nan")) is None


# ---------------------------------------------------------------------------
# Stock
# ---------------------------------------------------------------------------


class TestParseStockRecords:
    def test_converts_nominal_price_to_real(self):
        series = parse_stock_records(
            [
                {"date": 2000.01, "P": 1400.0, "cape": 44.0, "cpi": 170.0},
                {"date": 2020.01, "P": 3300.0, "cape": 30.0, "cpi": 255.0},
            ]
        )
        assert series.first.sp500 == pytest.approx(1400.0 * 255.0 / 170.0)
        assert series.last.sp500 == pytest.approx(3300.0)
        assert series.first.cape == 44.0

    def test_accepts_alternate_column_names(self):
        series = parse_stock_records(
            {"data": [{"Date": "1990.05", "S&P 500": 350.0, "CAPE Ratio": 17.0, "CPI": 129.0}]}
        )
        assert series.first.obs_date == date(1990, 5, 1)
        assert series.first.cape == 17.0
        assert series.first.cpi == 129.0

    def test_sorts_and_drops_duplicates(self):
        series = parse_stock_records(
            [
                {"date": 2000.02, "P": 2.0, "cpi": 1.0},
                {"date": 2000.01, "P": 1.0, "cpi": 1.0},
                {"date": 2000.01, "P": 9.0, "cpi": 1.0},
            ]
        )
        assert [o.obs_date for o in series.observations] == [date(2000, 1, 1), date(2000, 2, 1)]
        assert series.first.sp500 == 1.0

    def test_drops_rows_with_bad_price(self):
        series = parse_stock_records(
            [
                {"date": 2000.01, "P": None, "cpi": 1.0},
                {"date": 2000.02, "P": -1.0, "cpi": 1.0},
                {"date": 2000.03, "P": 5.0, "cpi": 1.0},
            ]
        )
        assert len(series) == 1

    def test_missing_optional_values_become_none(self):
        series = parse_stock_records([{"date": 1871.01, "P": 4.44, "cpi": 12.46}])
        assert series.first.cape is None
        assert series.first.dividend is None

    def test_without_cpi_price_left_unadjusted(self):
        series = parse_stock_records([{"date": 2000.01, "P": 1400.0}])
        assert series.first.sp500 == 1400.0
        assert series.first.cpi is None

    def test_no_valid_rows_raises(self):
        with pytest.raises(ValueError):
            parse_stock_records([{"date": "bad", "P": 1.0}])

    def test_non_list_payload_raises(self):
        with pytest.raises(ValueError):
            parse_stock_records("not json records")


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------


class TestParseHomeRecords:
    def test_shiller_column_names(self):
        series = parse_home_records(
            [
                {"Unnamed: 0": 1890, "Real": 100.0, "Real.1": 80.0},
                {"Unnamed: 0": 1891, "Real": 102.5},
            ]
        )
        assert series.first.obs_date == date(1890, 1, 1)
        assert series.first.building_cost == 80.0
        assert series.last.real_price == 102.5
        assert series.last.building_cost is None

    def test_fractional_year_rows(self):
        series = parse_home_records([{"Year": 1953.5, "realPrice": 70.0}])
        assert series.first.obs_date == date(1953, 7, 1)

    def test_drops_non_positive_prices(self):
        series = parse_home_records(
            [{"year": 1900, "real_price": 0.0}, {"year": 1901, "real_price": 90.0}]
        )
        assert [o.obs_date.year for o in series.observations] == [1901]


# ---------------------------------------------------------------------------
# Gold / Bitcoin / tickers
# ---------------------------------------------------------------------------


class TestParseGoldCsv:
    def test_parses_rows(self):
        series = parse_gold_csv("date,price\n2020-01-01,1520.5\n2020-02-01,1580.0\n")
        assert len(series) == 2
        assert series.last.price == 1580.0

    def test_year_only_dates(self):
        series = parse_gold_csv("date,price\n1800,19.39\n1801,19.39\n")
        assert series.first.obs_date == date(1800, 1, 1)

    def test_skips_unparseable_rows(self):
        series = parse_gold_csv("date,price\n2020-01-01,abc\nbad,100\n2020-03-01,1600\n")
        assert [o.price for o in series.observations] == [1600.0]

    def test_single_column_raises(self):
        with pytest.raises(ValueError):
            parse_gold_csv("price\n1\n2\n")


class TestParseCoingecko:
    def test_millisecond_pairs(self):
        series = parse_coingecko_prices(
            {"prices": [[1367107200000, 135.3], [1367193600000, 141.96]]}
        )
        assert series.first.obs_date == date(2013, 4, 28)
        assert series.last.price == 141.96

    def test_same_day_keeps_first(self):
        series = parse_coingecko_prices(
            {"prices": [[1704067200000, 42000.0], [1704110400000, 43000.0]]}
        )
        assert len(series) == 1
        assert series.first.price == 42000.0

    def test_missing_prices_key_raises(self):
        with pytest.raises(ValueError):
            parse_coingecko_prices({"error": "rate limited"})


class TestParseAlphaVantage:
    def test_daily_closes_sorted_ascending(self):
        payload = {
            "Meta Data": {"2. Symbol": "SPY"},
            "Time Series (Daily)": {
                "2024-01-03": {"4. close": "467.28"},
                "2024-01-02": {"4. close": "472.65"},
            },
        }
        series = parse_alpha_vantage_daily(payload, "SPY")
        assert series.source == "ticker:SPY"
        assert [o.obs_date for o in series.observations] == [date(2024, 1, 2), date(2024, 1, 3)]
        assert series.first.price == 472.65

    def test_error_message_raises(self):
        with pytest.raises(ValueError, match="Invalid API call"):
            parse_alpha_vantage_daily({"Error Message": "Invalid API call."}, "NOPE")

    def test_rate_limit_note_raises(self):
        with pytest.raises(ValueError):
            parse_alpha_vantage_daily({"Note": "Thank you for using Alpha Vantage!"}, "SPY")

    def test_empty_series_raises(self):
        with pytest.raises(ValueError):
            parse_alpha_vantage_daily({"Time Series (Daily)": {}}, "SPY")


# ---------------------------------------------------------------------------
# reduce_resolution
# ---------------------------------------------------------------------------


def _monthly(start_year, end_year):
    return PriceSeries(
        source="gold",
        observations=tuple(
            PriceObservation(obs_date=date(y, m, 1), price=1.0)
            for y in range(start_year, end_year + 1)
            for m in range(1, 13)
        ),
    )


class TestReduceResolution:
    TODAY = date(2025, 6, 1)

    def test_recent_points_all_kept(self):
        reduced = reduce_resolution(_monthly(2016, 2024), self.TODAY)
        assert len(reduced) == 9 * 12

    def test_middle_period_quarterly(self):
        reduced = reduce_resolution(_monthly(2000, 2000), self.TODAY)
        assert [o.obs_date.month for o in reduced.observations] == [1, 4, 7, 10]

    def test_old_period_january_only(self):
        reduced = reduce_resolution(_monthly(1900, 1902), self.TODAY)
        assert [o.obs_date for o in reduced.observations] == [
            date(1900, 1, 1),
            date(1901, 1, 1),
            date(1902, 1, 1),
        ]

    def test_keeps_series_type_and_source(self):
        reduced = reduce_resolution(_monthly(1900, 1900), self.TODAY)
        assert isinstance(reduced, PriceSeries)
        assert reduced.source == "gold"
