"""SQLAlchemy implementation of ApiKeyRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.credentials import ApiKey as DomainApiKey
from src.domain.repositories.api_keys import ApiKeyRepository
from src.infrastructure.persistence.models.credentials import ApiKey as OrmApiKey


class SqlApiKeyRepository(ApiKeyRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: OrmApiKey) -> DomainApiKey:
        return DomainApiKey(
            provider=row.provider,
            api_key=row.api_key,
            saved_at=row.saved_at,
        )

    async def _get_row(self, provider: str) -> OrmApiKey | None:
        stmt = select(OrmApiKey).where(OrmApiKey.provider == provider.strip().lower())
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, provider: str) -> DomainApiKey | None:
        row = await self._get_row(provider)
        return self._to_domain(row) if row else None

    async def save(self, api_key: DomainApiKey) -> DomainApiKey:
        row = await self._get_row(api_key.provider)
        if row is None:
            self._session.add(
                OrmApiKey(
                    provider=api_key.provider,
                    api_key=api_key.api_key,
                    saved_at=api_key.saved_at,
                )
            )
        else:
            row.api_key = api_key.api_key
            row.saved_at = api_key.saved_at
        await self._session.flush()
        return api_key

    async def delete(self, provider: str) -> None:
        row = await self._get_row(provider)
        if row is not None:
            await self._session.delete(row)
