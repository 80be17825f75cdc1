"""Upstream payload parsing and normalization.

Every provider quirk lives here: alternate column names, Shiller's YYYY.MM
dates, fractional-year home rows, CSV gold, CoinGecko [ms, price] pairs and
Alpha Vantage's nested daily JSON.  Each parser returns a canonical Series
(sorted ascending, one row per date, non-finite or non-positive required
values discarded) or raises ValueError when nothing usable remains.
"""

from __future__ import annotations

import io
import logging
import math
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

import numpy as np
import pandas as pd

from src.domain.models.market_data import (
    HomeObservation,
    HomeSeries,
    PriceObservation,
    PriceSeries,
    Series,
    StockObservation,
    StockSeries,
)

logger = logging.getLogger(__name__)

_STOCK_COLUMNS: dict[str, tuple[str, ...]] = {
    "date": ("date", "Date"),
    "sp500": ("P", "S&P 500", "sp500"),
    "cape": ("cape", "CAPE Ratio", "CAPE"),
    "dividend": ("D", "Dividend", "dividend"),
    "earnings": ("E", "Earnings", "earnings"),
    "cpi": ("cpi", "CPI"),
}

_HOME_COLUMNS: dict[str, tuple[str, ...]] = {
    "year": ("Unnamed: 0", "Year", "year"),
    "real_price": ("Real", "realPrice", "real_price"),
    "building_cost": ("Real.1", "buildingCost", "building_cost"),
}

_AV_SERIES_KEY = "Time Series (Daily)"
_AV_CLOSE_KEYS = ("4. close", "5. adjusted close")
_AV_ERROR_KEYS = ("Error Message", "Note", "Information")


# ─────────────────────────────────────────────────────────────────────────── #
# Field helpers                                                                #
# ─────────────────────────────────────────────────────────────────────────── #


def parse_shiller_date(value: Any) -> date | None:
    """Parse Shiller's YYYY.MM month stamp into the first day of that month.

    Numbers are read to two decimals, so 1871.1 is October (1871.10) and
    1871.01 is January.  A one-digit string fraction is read the same way.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return None
        text = str(value) if isinstance(value, int) else f"{value:.2f}"
    else:
        text = str(value).strip()
    year_part, _, month_part = text.partition(".")
    try:
        year = int(year_part)
        month = int(month_part.ljust(2, "0")) if month_part else 1
    except ValueError:
        return None
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        return None
    return date(year, month, 1)


def parse_iso_date(value: Any) -> date | None:
    """Accept YYYY-MM-DD (optionally with a time part), YYYY-MM or YYYY."""
    text = str(value).strip()[:10]
    parts = text.split("-")
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        return None
    if not 1 <= len(numbers) <= 3:
        return None
    numbers += [1] * (3 - len(numbers))
    try:
        return date(*numbers)
    except ValueError:
        return None


def fractional_year_to_date(value: float) -> date | None:
    """1890.0 -> 1890-01-01; 1953.5 -> 1953-07-01 (fraction read as months)."""
    if value is None or not math.isfinite(value) or value < 1:
        return None
    year = int(value)
    month = min(int((value - year) * 12 + 1e-6) + 1, 12)
    return date(year, month, 1)


def _optional(value: Any, positive: bool = False) -> float | None:
    if value is None:
        return None
    number = float(value)
    if not math.isfinite(number) or (positive and number <= 0):
        return None
    return number


def _coalesce(frame: pd.DataFrame, candidates: Iterable[str], numeric: bool = True) -> pd.Series:
    """First non-null value across alternate column names, row by row."""
    result = pd.Series(np.nan, index=frame.index, dtype=object)
    for name in candidates:
        if name not in frame.columns:
            continue
        column = pd.to_numeric(frame[name], errors="coerce") if numeric else frame[name]
        result = result.where(result.notna(), column)
    return pd.to_numeric(result, errors="coerce") if numeric else result


def _unwrap_records(payload: Any) -> list[dict]:
    """Accept a bare list, {"data": [...]}, or a dict of row objects."""
    data = payload.get("data", payload) if isinstance(payload, dict) else payload
    if isinstance(data, dict):
        data = list(data.values())
    if not isinstance(data, list):
        raise ValueError(f"expected a list of records, got {type(payload).__name__}")
    return [row for row in data if isinstance(row, dict)]


def _finish(
    source: str,
    frame: pd.DataFrame,
    build: Callable[[Any], Any],
    series_cls: type[Series],
    raw_count: int,
) -> Series:
    frame = frame.sort_values("obs_date", kind="stable").drop_duplicates("obs_date", keep="first")
    observations = tuple(build(row) for row in frame.itertuples(index=False))
    if not observations:
        raise ValueError(f"no valid {source} rows in payload ({raw_count} raw rows)")
    if len(observations) < raw_count:
        logger.info(
            "Parsed %s: kept %d of %d rows", source, len(observations), raw_count
        )
    return series_cls(source=source, observations=observations)


# ─────────────────────────────────────────────────────────────────────────── #
# Source parsers                                                               #
# ─────────────────────────────────────────────────────────────────────────── #


def parse_stock_records(payload: Any) -> StockSeries:
    """Shiller stock table -> StockSeries with a real sp500 level.

    Upstream P is nominal; it is restated at the CPI of the most recent row
    that has one, the same base level the valuation session uses.
    """
    records = _unwrap_records(payload)
    frame = pd.DataFrame.from_records(records)
    if frame.empty:
        raise ValueError("no stock rows in payload")

    out = pd.DataFrame(
        {
            "obs_date": _coalesce(frame, _STOCK_COLUMNS["date"], numeric=False).map(
                parse_shiller_date
            ),
            **{
                field: _coalesce(frame, _STOCK_COLUMNS[field])
                for field in ("sp500", "cape", "dividend", "earnings", "cpi")
            },
        }
    )
    out = out[out["obs_date"].notna() & np.isfinite(out["sp500"]) & (out["sp500"] > 0)]
    out = out.sort_values("obs_date", kind="stable")

    cpi = out["cpi"].where(np.isfinite(out["cpi"]) & (out["cpi"] > 0))
    if cpi.notna().any():
        base = float(cpi.dropna().iloc[-1])
        conversion_level = cpi.ffill().bfill()
        out = out.assign(sp500=out["sp500"] * base / conversion_level)
    else:
        logger.warning("Stock payload has no CPI column values; sp500 left unadjusted")

    return _finish(
        "stock",
        out,
        lambda row: StockObservation(
            obs_date=row.obs_date,
            sp500=float(row.sp500),
            cape=_optional(row.cape, positive=True),
            dividend=_optional(row.dividend),
            earnings=_optional(row.earnings),
            cpi=_optional(row.cpi, positive=True),
        ),
        StockSeries,
        len(records),
    )


def parse_home_records(payload: Any) -> HomeSeries:
    """Shiller home price table (year in "Unnamed: 0", real index in "Real")."""
    records = _unwrap_records(payload)
    frame = pd.DataFrame.from_records(records)
    if frame.empty:
        raise ValueError("no home rows in payload")

    out = pd.DataFrame(
        {
            "obs_date": _coalesce(frame, _HOME_COLUMNS["year"]).map(fractional_year_to_date),
            "real_price": _coalesce(frame, _HOME_COLUMNS["real_price"]),
            "building_cost": _coalesce(frame, _HOME_COLUMNS["building_cost"]),
        }
    )
    out = out[
        out["obs_date"].notna() & np.isfinite(out["real_price"]) & (out["real_price"] > 0)
    ]
    return _finish(
        "home",
        out,
        lambda row: HomeObservation(
            obs_date=row.obs_date,
            real_price=float(row.real_price),
            building_cost=_optional(row.building_cost, positive=True),
        ),
        HomeSeries,
        len(records),
    )


def _price_frame(dates: pd.Series, prices: pd.Series) -> pd.DataFrame:
    out = pd.DataFrame({"obs_date": dates, "price": pd.to_numeric(prices, errors="coerce")})
    return out[out["obs_date"].notna() & np.isfinite(out["price"]) & (out["price"] > 0)]


def _price_series(source: str, out: pd.DataFrame, raw_count: int) -> PriceSeries:
    return _finish(
        source,
        out,
        lambda row: PriceObservation(obs_date=row.obs_date, price=float(row.price)),
        PriceSeries,
        raw_count,
    )


def parse_gold_csv(text: str, source: str = "gold") -> PriceSeries:
    """Two-column CSV with a header row: date, price."""
    frame = pd.read_csv(io.StringIO(text.strip()), dtype=str, skip_blank_lines=True)
    if frame.shape[1] < 2:
        raise ValueError(f"{source} CSV needs at least two columns, got {frame.shape[1]}")
    out = _price_frame(frame.iloc[:, 0].map(parse_iso_date), frame.iloc[:, 1])
    return _price_series(source, out, len(frame))


def parse_coingecko_prices(payload: Any, source: str = "bitcoin") -> PriceSeries:
    """CoinGecko market_chart: {"prices": [[epoch_ms, price], ...]}.

    The feed's final entry is an intraday quote for today; the first entry
    per calendar day wins.
    """
    pairs = payload.get("prices") if isinstance(payload, dict) else None
    if not isinstance(pairs, list):
        raise ValueError("expected a 'prices' list in CoinGecko payload")
    frame = pd.DataFrame([p for p in pairs if isinstance(p, list) and len(p) >= 2])
    if frame.empty:
        raise ValueError("no price pairs in CoinGecko payload")
    stamps = pd.to_datetime(pd.to_numeric(frame[0], errors="coerce"), unit="ms", utc=True)
    dates = stamps.map(lambda ts: ts.date() if pd.notna(ts) else None)
    return _price_series(source, _price_frame(dates, frame[1]), len(frame))


def parse_alpha_vantage_daily(payload: Any, symbol: str) -> PriceSeries:
    """Alpha Vantage TIME_SERIES_DAILY -> closes.  Provider error notes raise."""
    source = f"ticker:{symbol}"
    if not isinstance(payload, dict):
        raise ValueError(f"unexpected {source} payload type {type(payload).__name__}")
    for key in _AV_ERROR_KEYS:
        if key in payload:
            raise ValueError(str(payload[key]))
    daily = payload.get(_AV_SERIES_KEY)
    if not isinstance(daily, dict) or not daily:
        raise ValueError(f"no daily series for {symbol}")

    def _close(fields: Any) -> Any:
        if not isinstance(fields, dict):
            return None
        return next((fields[k] for k in _AV_CLOSE_KEYS if k in fields), None)

    frame = pd.DataFrame(
        {"day": list(daily.keys()), "close": [_close(v) for v in daily.values()]}
    )
    out = _price_frame(frame["day"].map(parse_iso_date), frame["close"])
    return _price_series(source, out, len(frame))


# ─────────────────────────────────────────────────────────────────────────── #
# Resolution reduction                                                         #
# ─────────────────────────────────────────────────────────────────────────── #


def reduce_resolution(series: Series, today: date) -> Series:
    """Thin a long history for charting.

    Last 10 years: every observation.  10–50 years back: the first observation
    of each calendar quarter.  Older: only January observations, one per year.
    """
    ten_years_ago = date(today.year - 10, 1, 1)
    fifty_years_ago = date(today.year - 50, 1, 1)

    kept = []
    last_quarter: tuple[int, int] | None = None
    last_year: int | None = None
    for obs in series.observations:
        d = obs.obs_date
        if d >= ten_years_ago:
            kept.append(obs)
        elif d >= fifty_years_ago:
            quarter = (d.year, (d.month - 1) // 3)
            if quarter != last_quarter:
                kept.append(obs)
                last_quarter = quarter
        elif d.year != last_year and d.month == 1:
            kept.append(obs)
            last_year = d.year
    return type(series)(source=series.source, observations=tuple(kept))
