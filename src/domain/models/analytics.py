"""Derived analytics models.

StatisticsSnapshot — current CAPE / real-gold reading and its historical percentile.
ReturnResult       — growth of an asset between two dates in a chosen denominator.

Both are recomputed on demand and never persisted.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .assets import AssetRef, DenominatorSpec


class SampleCounts(BaseModel):
    model_config = ConfigDict(frozen=True)

    stock: int = Field(ge=0)
    gold: int = Field(ge=0)
    home: int | None = Field(default=None, ge=0)
    ratios: int = Field(default=0, ge=0)


class StatisticsSnapshot(BaseModel):
    """Summary panel values.

    When available is False every numeric field is None and reason says why
    (an empty input series, or no gold price for the latest stock date).
    percentile uses strict less-than against the historical population,
    which includes the latest observation itself.
    """

    model_config = ConfigDict(frozen=True)

    available: bool
    as_of: date | None = None
    current_raw_value: float | None = None
    current_denominator_value: float | None = None
    current_ratio: float | None = None
    percentile: float | None = Field(default=None, ge=0.0, le=100.0)
    sample_counts: SampleCounts
    reason: str | None = None

    @model_validator(mode="after")
    def _fields_match_availability(self) -> StatisticsSnapshot:
        numeric = (
            self.current_raw_value,
            self.current_denominator_value,
            self.current_ratio,
            self.percentile,
        )
        if self.available and any(v is None for v in numeric):
            raise ValueError("an available snapshot must carry every numeric field")
        if not self.available and self.reason is None:
            raise ValueError("an unavailable snapshot must state a reason")
        return self

    @classmethod
    def unavailable(cls, reason: str, sample_counts: SampleCounts) -> StatisticsSnapshot:
        return cls(available=False, reason=reason, sample_counts=sample_counts)


class ReturnResult(BaseModel):
    """Investment outcome between the first and last observation of a range.

    principal / final_value / total_return are None when no principal was
    given; return_pct and annualized_return_pct are always populated.
    """

    model_config = ConfigDict(frozen=True)

    asset: AssetRef
    denominator: DenominatorSpec
    start_date: date
    end_date: date
    start_value: float = Field(gt=0.0)
    end_value: float = Field(gt=0.0)
    multiplier: float = Field(gt=0.0)
    return_pct: float
    years: float
    annualized_return_pct: float
    principal: float | None = Field(default=None, gt=0.0)
    final_value: float | None = None
    total_return: float | None = None
