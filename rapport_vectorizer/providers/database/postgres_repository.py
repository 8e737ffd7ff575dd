"""PostgreSQL project repository backed by a SQLAlchemy async engine.

The engine owns the connection pool (asyncpg driver).  It connects lazily on
the first statement and :meth:`PostgresProjectRepository.close` disposes the
pool; a disposed engine opens a fresh pool if it is used again, so one
repository can serve several invocations of a warm function.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from rapport_vectorizer.config.settings import Settings
from rapport_vectorizer.interfaces.project_repository import IProjectRepository
from rapport_vectorizer.utils.errors import ConfigurationError, DatabaseError

logger = structlog.get_logger(logger_name=__name__)

# ``technologies`` is a PostgreSQL enum type; the column is an array of it.
_MARK_PROCESSED_SQL = text(
    "UPDATE pfe "
    "SET technologies = CAST(:technologies AS technologies[]), "
    "processing = false, resume = :resume "
    "WHERE id = :project_id"
)
_CLEAR_PROCESSING_SQL = text("UPDATE pfe SET processing = false WHERE id = :project_id")

# libpq query parameters that asyncpg does not accept as connect() kwargs.
_UNSUPPORTED_QUERY_PARAMS = ("channel_binding", "options", "application_name")


def to_async_database_url(database_url: str) -> URL:
    """Rewrite a libpq-style connection string for the asyncpg driver.

    ``postgres://`` and ``postgresql://`` become ``postgresql+asyncpg://``
    and ``sslmode=<mode>`` becomes ``ssl=<mode>``.

    Raises
    ------
    ConfigurationError
        If the string is not a PostgreSQL URL.
    """
    try:
        url = make_url(database_url)
    except (ArgumentError, ValueError) as exc:
        raise ConfigurationError(message=f"Unparseable DATABASE_URL: {exc}") from exc

    if url.get_backend_name() not in ("postgres", "postgresql"):
        raise ConfigurationError(
            message=f"DATABASE_URL must be a PostgreSQL URL, got '{url.get_backend_name()}'"
        )

    query = dict(url.query)
    sslmode = query.pop("sslmode", None)
    if sslmode and "ssl" not in query:
        query["ssl"] = sslmode
    for name in _UNSUPPORTED_QUERY_PARAMS:
        query.pop(name, None)

    return url.set(drivername="postgresql+asyncpg", query=query)


def _coerce_project_id(project_id: str) -> int | str:
    # asyncpg binds parameters strictly; the ``id`` column is a bigint.
    return int(project_id) if project_id.isdigit() else project_id


class PostgresProjectRepository(IProjectRepository):
    """Updates rows of the ``pfe`` table by project id."""

    def __init__(
        self,
        database_url: str = "",
        pool_size: int = 2,
        engine: AsyncEngine | None = None,
    ) -> None:
        if engine is not None:
            self._engine = engine
        else:
            self._engine = create_async_engine(
                to_async_database_url(database_url),
                pool_size=pool_size,
                max_overflow=0,
                pool_pre_ping=True,
            )
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> PostgresProjectRepository:
        return cls(database_url=settings.database_url, pool_size=settings.database_pool_size)

    # ------------------------------------------------------------------
    # IProjectRepository implementation
    # ------------------------------------------------------------------

    async def mark_processed(
        self,
        project_id: str,
        technologies: list[str],
        resume: str,
    ) -> None:
        rowcount = await self._execute(
            _MARK_PROCESSED_SQL,
            {
                "technologies": list(technologies),
                "resume": resume,
                "project_id": _coerce_project_id(project_id),
            },
        )
        logger.info(
            "project_marked_processed",
            project_id=project_id,
            technologies=len(technologies),
            rows=rowcount,
        )

    async def clear_processing(self, project_id: str) -> None:
        rowcount = await self._execute(
            _CLEAR_PROCESSING_SQL,
            {"project_id": _coerce_project_id(project_id)},
        )
        logger.info("project_processing_cleared", project_id=project_id, rows=rowcount)

    async def close(self) -> None:
        if self._closed:
            return
        await self._engine.dispose()
        self._closed = True
        logger.debug("postgres_pool_closed")

    def get_provider_name(self) -> str:
        return "postgres"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _execute(self, statement: Any, params: dict[str, Any]) -> int:
        self._closed = False
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement, params)
        except (SQLAlchemyError, OSError) as exc:
            raise DatabaseError(
                message=f"Project update failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if result.rowcount == 0:
            logger.warning("project_not_found", project_id=params.get("project_id"))
        return result.rowcount
