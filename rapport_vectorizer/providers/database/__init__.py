"""Relational project repository adapters."""

from rapport_vectorizer.providers.database.postgres_repository import (
    PostgresProjectRepository,
    to_async_database_url,
)

__all__ = ["PostgresProjectRepository", "to_async_database_url"]
