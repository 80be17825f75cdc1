"""ORM model registry — imports every mapper module so each class is
registered with Base.metadata before Alembic or SQLAlchemy runs.
"""

from src.infrastructure.persistence.models.credentials import ApiKey

__all__ = [
    "ApiKey",
]
