"""Concrete SQLAlchemy repository implementations.

Exports the SqlRepository classes and the get_repositories() factory function
for wiring at the application boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .api_keys import SqlApiKeyRepository


@dataclass
class Repositories:
    """All repository instances bound to a single AsyncSession."""

    api_keys: SqlApiKeyRepository


def get_repositories(session: AsyncSession) -> Repositories:
    """Construct all repositories bound to the given session.

        async with AsyncSessionLocal() as session:
            repos = get_repositories(session)
            key = await repos.api_keys.get("alphavantage")
    """
    return Repositories(
        api_keys=SqlApiKeyRepository(session),
    )


__all__ = [
    "SqlApiKeyRepository",
    "Repositories",
    "get_repositories",
]
