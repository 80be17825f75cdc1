"""Typed errors surfaced to callers.

Per-point problems (a missing observation, a zero denominator) are never
raised; the valuation engine returns None and the point is dropped.  Only
range-level and session-level failures become exceptions, and each message
ends with what the user can do about it.
"""

from __future__ import annotations


class ShillerGoldError(Exception):
    """Root of every error raised by this package."""

    remedy: str = ""

    def __init__(self, message: str, remedy: str | None = None) -> None:
        self.remedy = remedy if remedy is not None else self.remedy
        super().__init__(f"{message}. {self.remedy}" if self.remedy else message)


class InsufficientDataError(ShillerGoldError):
    """Fewer than two observations fall inside the requested date range."""

    remedy = "Select a different date range."


class InvalidPriceDataError(ShillerGoldError):
    """Start or end value of a return is missing or not positive, or its annual rate overflows."""

    remedy = "Select a different date range or denominator."


class IngestionError(ShillerGoldError):
    """A data source failed to load; valuation that needs it cannot proceed."""

    remedy = "Check your connection and reload the page."

    def __init__(self, source: str, message: str, remedy: str | None = None) -> None:
        self.source = source
        super().__init__(f"Failed to load {source} data: {message}", remedy)


class MissingApiKeyError(IngestionError):
    remedy = "Save an API key for the ticker provider and try again."

    def __init__(self, source: str, provider: str) -> None:
        self.provider = provider
        super().__init__(source, f"no API key configured for {provider}")
