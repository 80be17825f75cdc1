"""Locally cached API credentials for the custom-ticker data provider."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ApiKey(BaseModel):
    """One provider's API key.  provider is a short lowercase slug."""

    model_config = ConfigDict(frozen=True)

    provider: str = Field(min_length=1)
    api_key: str = Field(min_length=1)
    saved_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("provider")
    @classmethod
    def _lowercase_provider(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("api_key")
    @classmethod
    def _strip_key(cls, value: str) -> str:
        key = value.strip()
        if not key:
            raise ValueError("api_key must not be blank")
        return key

    def masked(self) -> str:
        """Key with all but the last four characters hidden, for logs."""
        return "*" * max(len(self.api_key) - 4, 0) + self.api_key[-4:]
