"""Application settings, async SQLAlchemy engine and session factory.

The database holds nothing but the local API-key cache, so the default
URL points at a SQLite file next to the working directory.
"""

from collections.abc import AsyncGenerator

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite+aiosqlite:///./shiller_gold.db"
    log_level: str = "INFO"

    # Upstream feeds
    stock_data_url: str = (
        "https://posix4e.github.io/shiller_wrapper_data/data/stock_market_data.json"
    )
    home_data_url: str = (
        "https://posix4e.github.io/shiller_wrapper_data/data/home_price_data.json"
    )
    gold_data_url: str = "https://freegoldapi.com/data/latest.csv"
    bitcoin_data_url: str = (
        "https://api.coingecko.com/api/v3/coins/bitcoin/market_chart"
        "?vs_currency=usd&days=max&interval=daily"
    )
    ticker_api_url: str = "https://www.alphavantage.co/query"
    ticker_provider: str = "alphavantage"
    ticker_output_size: str = "compact"  # compact = most recent 100 trading days
    alpha_vantage_api_key: str | None = None

    http_timeout_seconds: float = 30.0


settings = Settings()

engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a transactional async session."""
    async with AsyncSessionLocal() as session:
        async with session.begin():
            yield session
