"""Credential cache ORM model: api_keys."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database import Base


class ApiKey(Base):
    """One cached API key per data provider.

    PK: provider.  saved_at records when the key was last written.
    """

    __tablename__ = "api_keys"

    provider: Mapped[str] = mapped_column(Text, primary_key=True)
    api_key: Mapped[str] = mapped_column(Text, nullable=False)
    saved_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
