"""Command-line smoke entry point: load every feed and log the summary panel.

    python -m src.main
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from src.domain.errors import ShillerGoldError
from src.domain.models.analytics import StatisticsSnapshot
from src.infrastructure.database import AsyncSessionLocal, settings
from src.infrastructure.ingestion import HttpMarketDataSource, MarketSession
from src.infrastructure.logging_config import configure_logging
from src.infrastructure.persistence import get_repositories

logger = logging.getLogger(__name__)


def format_snapshot(snapshot: StatisticsSnapshot) -> str:
    if not snapshot.available:
        return f"Statistics unavailable: {snapshot.reason}"
    return (
        f"As of {snapshot.as_of}: CAPE {snapshot.current_raw_value:.2f}, "
        f"real gold ${snapshot.current_denominator_value:,.2f}, "
        f"CAPE/Gold {snapshot.current_ratio:.6f} "
        f"({snapshot.percentile:.1f}th percentile of "
        f"{snapshot.sample_counts.ratios} months)"
    )


async def main() -> int:
    configure_logging(settings.log_level)
    async with httpx.AsyncClient() as client, AsyncSessionLocal() as db:
        try:
            session = await MarketSession.open(
                HttpMarketDataSource(client),
                api_keys=get_repositories(db).api_keys,
            )
        except ShillerGoldError as exc:
            logger.error("%s", exc)
            return 1
        logger.info("%s", format_snapshot(session.statistics()))
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
