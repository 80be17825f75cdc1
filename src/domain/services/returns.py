"""Return calculator: growth of an asset between two dates in a chosen denominator.

    multiplier            = end_value / start_value
    return_pct            = (multiplier − 1) · 100
    years                 = (end_date − start_date).days / 365.25
    annualized_return_pct = (multiplier^(1/years) − 1) · 100,  0 when years ≤ 0
    final_value           = principal · multiplier           (principal > 0 only)
    total_return          = final_value − principal

Start and end are the first and last observations of the asset inside the
range, not the range boundaries themselves.
"""

from __future__ import annotations

import math

from src.domain.errors import InsufficientDataError, InvalidPriceDataError
from src.domain.models.analytics import ReturnResult
from src.domain.models.assets import describe
from src.domain.models.charts import DateRange
from src.domain.services.valuation import AnyAsset, AnyDenominator, ValuationService

DAYS_PER_YEAR = 365.25


def annualized_return_pct(multiplier: float, years: float) -> float:
    """Compound annual growth rate in percent; 0 when years <= 0.

    Raises:
        InvalidPriceDataError: the rate is too large to represent, as with a
            big move over a window of a few days.
    """
    if years <= 0:
        return 0.0
    try:
        growth = math.exp(math.log(multiplier) / years)
    except OverflowError as exc:
        raise InvalidPriceDataError(
            f"Annualized return overflows: a {multiplier:.6g}x move over {years:.4f} years",
            remedy="Select a longer date range.",
        ) from exc
    return (growth - 1.0) * 100.0


class ReturnCalculator:
    """Computes a ReturnResult or raises a typed, user-facing error."""

    def __init__(self, valuation: ValuationService) -> None:
        self._valuation = valuation

    def compute_return(
        self,
        asset: AnyAsset,
        denominator: AnyDenominator,
        date_range: DateRange,
        principal: float | None = None,
    ) -> ReturnResult:
        """Compute the return of `asset` over `date_range`.

        Only observations that carry the asset's own field count (early stock
        rows have no CAPE, for example).

        Raises:
            InsufficientDataError: fewer than two such observations in range.
            InvalidPriceDataError: the start or end value does not resolve to a
                positive number in the requested denominator, or the annualized
                rate is too large to represent.
        """
        descriptor = describe(asset)
        series = self._valuation.store.series_for(asset)
        in_range = (
            [
                obs
                for obs in series.between(date_range.start, date_range.end)
                if obs.value_of(descriptor.value_field) is not None
            ]
            if series is not None
            else []
        )
        if len(in_range) < 2:
            raise InsufficientDataError(
                f"Insufficient data: {len(in_range)} {descriptor.label} observation(s) "
                f"between {date_range.start} and {date_range.end}, need at least 2"
            )

        start_obs, end_obs = in_range[0], in_range[-1]
        start_value = self._valuation.valuate(asset, start_obs, denominator)
        end_value = self._valuation.valuate(asset, end_obs, denominator)
        if start_value is None or end_value is None:
            raise InvalidPriceDataError(
                f"Invalid price data: {descriptor.label} has no value in this denominator "
                f"on {start_obs.obs_date if start_value is None else end_obs.obs_date}"
            )

        multiplier = end_value / start_value
        years = (end_obs.obs_date - start_obs.obs_date).days / DAYS_PER_YEAR

        has_principal = principal is not None and principal > 0
        final_value = principal * multiplier if has_principal else None
        return ReturnResult(
            asset=asset,
            denominator=denominator,
            start_date=start_obs.obs_date,
            end_date=end_obs.obs_date,
            start_value=start_value,
            end_value=end_value,
            multiplier=multiplier,
            return_pct=(multiplier - 1.0) * 100.0,
            years=years,
            annualized_return_pct=annualized_return_pct(multiplier, years),
            principal=principal if has_principal else None,
            final_value=final_value,
            total_return=final_value - principal if has_principal else None,
        )
