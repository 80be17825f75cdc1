"""Chart-facing output models and date ranges.

ChartPoint      — one {x: date, y: value} point handed to the rendering layer.
ChartDataset    — a labelled run of points for one asset / denominator pair.
DateRange       — inclusive [start, end] window, with the UI presets.
HistoricalEvent — a dated annotation passed through to the chart untouched.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

EARLIEST_HISTORY = date(1871, 1, 1)  # first month of the Shiller stock table


class ChartPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: date
    y: float = Field(allow_inf_nan=False)


class ChartDataset(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    points: tuple[ChartPoint, ...] = ()


class DateRange(BaseModel):
    """Inclusive date window.  start must not be after end."""

    model_config = ConfigDict(frozen=True)

    start: date
    end: date

    @model_validator(mode="after")
    def _start_not_after_end(self) -> DateRange:
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must be <= end ({self.end})")
        return self

    def contains(self, value: date) -> bool:
        return self.start <= value <= self.end

    @classmethod
    def all_history(cls, today: date) -> DateRange:
        return cls(start=EARLIEST_HISTORY, end=today)

    @classmethod
    def last_years(cls, years: int, today: date) -> DateRange:
        """From January 1st `years` calendar years ago through today."""
        return cls(start=date(today.year - years, 1, 1), end=today)

    @classmethod
    def from_years(cls, start_year: int, end_year: int) -> DateRange:
        """January 1st of start_year through December 31st of end_year."""
        return cls(start=date(start_year, 1, 1), end=date(end_year, 12, 31))


class HistoricalEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_date: date
    label: str
    color: str


HISTORICAL_EVENTS: tuple[HistoricalEvent, ...] = (
    HistoricalEvent(event_date=date(1929, 10, 1), label="1929 Crash", color="#dc3545"),
    HistoricalEvent(event_date=date(1933, 3, 1), label="Gold Standard Abandoned", color="#ffc107"),
    HistoricalEvent(event_date=date(1973, 1, 1), label="1973 Oil Crisis", color="#fd7e14"),
    HistoricalEvent(event_date=date(1987, 10, 1), label="1987 Crash", color="#dc3545"),
    HistoricalEvent(event_date=date(2000, 3, 1), label="Dot-com Bubble Peak", color="#dc3545"),
    HistoricalEvent(event_date=date(2007, 10, 1), label="2007 Housing Bubble Peak", color="#dc3545"),
    HistoricalEvent(event_date=date(2008, 9, 1), label="2008 Financial Crisis", color="#dc3545"),
    HistoricalEvent(event_date=date(2020, 3, 1), label="COVID-19 Crash", color="#dc3545"),
)
