"""Persistence for the local API-key cache.

Importing this package registers the ApiKey mapper on Base.metadata, which
Alembic and SQLAlchemy mapper configuration both rely on.
"""

from src.infrastructure.persistence.models import ApiKey as ApiKeyRow
from src.infrastructure.persistence.repositories import (
    Repositories,
    SqlApiKeyRepository,
    get_repositories,
)

__all__ = [
    "ApiKeyRow",
    "Repositories",
    "SqlApiKeyRepository",
    "get_repositories",
]
