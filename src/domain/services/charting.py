"""Chart dataset assembly for the rendering layer."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.domain.models.assets import (
    RatioDenominator,
    describe,
    denominator_label,
)
from src.domain.models.charts import ChartDataset, ChartPoint, DateRange, HistoricalEvent
from src.domain.models.enums import NativeForm
from src.domain.services.valuation import AnyAsset, AnyDenominator, ValuationService


def pair_label(asset: AnyAsset, denominator: AnyDenominator) -> str:
    """Legend text such as "CAPE / Gold" or "Gold (Real USD)"."""
    descriptor = describe(asset)
    if isinstance(denominator, RatioDenominator):
        return f"{descriptor.label} / {denominator_label(denominator)}"
    if descriptor.native_form is NativeForm.DIMENSIONLESS:
        return descriptor.label
    return f"{descriptor.label} ({denominator_label(denominator)})"


def normalize(points: Sequence[ChartPoint], base: float = 100.0) -> list[ChartPoint]:
    """Rescale so the first point equals `base`."""
    if not points:
        return []
    first = points[0].y
    return [ChartPoint(x=p.x, y=p.y / first * base) for p in points]


class ChartService:
    """Turns valuation output into labelled datasets and annotations."""

    def __init__(self, valuation: ValuationService) -> None:
        self._valuation = valuation

    def build_dataset(
        self,
        asset: AnyAsset,
        denominator: AnyDenominator,
        date_range: DateRange,
    ) -> ChartDataset:
        return ChartDataset(
            label=pair_label(asset, denominator),
            points=tuple(self._valuation.series(asset, denominator, date_range)),
        )

    def normalized_datasets(
        self,
        pairs: Iterable[tuple[AnyAsset, AnyDenominator]],
        date_range: DateRange,
        base: float = 100.0,
    ) -> list[ChartDataset]:
        """One dataset per pair, each rescaled to `base` at its first point."""
        datasets = []
        for asset, denominator in pairs:
            raw = self.build_dataset(asset, denominator, date_range)
            datasets.append(
                ChartDataset(
                    label=f"{raw.label} (Normalized)",
                    points=tuple(normalize(raw.points, base)),
                )
            )
        return datasets

    @staticmethod
    def events_in_range(
        events: Iterable[HistoricalEvent],
        date_range: DateRange,
    ) -> list[HistoricalEvent]:
        return [e for e in events if date_range.contains(e.event_date)]
