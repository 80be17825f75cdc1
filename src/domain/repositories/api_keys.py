"""API key repository interface.

The API-key cache is the only state this application persists.  Keys are
addressed by provider slug; saving a key for a provider replaces any
previous one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.credentials import ApiKey


class ApiKeyRepository(ABC):
    """Read/write interface for locally cached provider API keys."""

    @abstractmethod
    async def get(self, provider: str) -> ApiKey | None:
        """Return the cached key for the provider, or None if none is saved."""

    @abstractmethod
    async def save(self, api_key: ApiKey) -> ApiKey:
        """Insert or replace the key for api_key.provider and return it."""

    @abstractmethod
    async def delete(self, provider: str) -> None:
        """Forget the provider's key.  No-op when none is saved."""
