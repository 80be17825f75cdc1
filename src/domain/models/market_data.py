"""Market data domain models.

Observation      — one dated row of a source series.
StockObservation — Shiller stock-market row (S&P 500 level, CAPE, CPI, ...).
HomeObservation  — Shiller home price index row.
PriceObservation — single-price row for gold, Bitcoin and custom tickers.
Series           — an ordered, immutable run of observations for one source.

Every model is an immutable value object.  Non-finite and non-positive
values are rejected at construction time; discarding bad upstream rows is
the ingestion layer's job, so a row that reaches these models is clean.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from functools import cached_property
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

_EPOCH = datetime(1970, 1, 1)


def to_timestamp(value: date | datetime) -> float:
    """Seconds since the Unix epoch; a bare date counts as midnight UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return (value - _EPOCH).total_seconds()
    return (datetime(value.year, value.month, value.day) - _EPOCH).total_seconds()


class Observation(BaseModel):
    """Base row type.  Subclasses add the numeric fields of their source."""

    model_config = ConfigDict(frozen=True)

    obs_date: date

    def value_of(self, field: str) -> float | None:
        """Return the named numeric field, or None when absent on this row type."""
        return getattr(self, field, None)


class StockObservation(Observation):
    """One month of the Shiller stock table.

    sp500 is the real (inflation-adjusted) index level; the nominal figure is
    recovered from cpi.  cape is None for the first ten years of history;
    dividend / earnings lag the index by a few months upstream.
    """

    sp500: float = Field(gt=0.0, allow_inf_nan=False)
    cape: float | None = Field(default=None, gt=0.0, allow_inf_nan=False)
    dividend: float | None = Field(default=None, allow_inf_nan=False)
    earnings: float | None = Field(default=None, allow_inf_nan=False)
    cpi: float | None = Field(default=None, gt=0.0, allow_inf_nan=False)


class HomeObservation(Observation):
    """Real home price index (and real building cost) for one year."""

    real_price: float = Field(gt=0.0, allow_inf_nan=False)
    building_cost: float | None = Field(default=None, gt=0.0, allow_inf_nan=False)


class PriceObservation(Observation):
    """Nominal USD price of a single-price asset."""

    price: float = Field(gt=0.0, allow_inf_nan=False)


ObservationT = TypeVar("ObservationT", bound=Observation)


class Series(BaseModel, Generic[ObservationT]):
    """Date-sorted observations for one asset source.

    Built once by ingestion and never mutated.  Dates are unique and strictly
    ascending; construction fails otherwise.
    """

    model_config = ConfigDict(frozen=True)

    source: str
    observations: tuple[ObservationT, ...] = ()

    @model_validator(mode="after")
    def _dates_strictly_ascending(self) -> Series:
        obs = self.observations
        for prev, cur in zip(obs, obs[1:]):
            if cur.obs_date <= prev.obs_date:
                raise ValueError(
                    f"{self.source} series must be sorted by unique date: "
                    f"{cur.obs_date} follows {prev.obs_date}"
                )
        return self

    def __len__(self) -> int:
        return len(self.observations)

    @property
    def is_empty(self) -> bool:
        return not self.observations

    @property
    def first(self) -> ObservationT | None:
        return self.observations[0] if self.observations else None

    @property
    def last(self) -> ObservationT | None:
        return self.observations[-1] if self.observations else None

    @cached_property
    def timestamps(self) -> tuple[float, ...]:
        """Observation dates as epoch seconds, aligned to observations."""
        return tuple(to_timestamp(o.obs_date) for o in self.observations)

    def between(self, start: date, end: date) -> list[ObservationT]:
        """Observations with start <= obs_date <= end, in date order."""
        return [o for o in self.observations if start <= o.obs_date <= end]


StockSeries = Series[StockObservation]
HomeSeries = Series[HomeObservation]
PriceSeries = Series[PriceObservation]
