"""Database configuration and query execution.

Provides the SQLAlchemy engine, a connection provider scoping one pooled
connection per query, and an executor that runs ``QueryFragment``
statements through it.
"""

from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, TypeVar

import structlog
from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.engine import Connection, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import TextClause

from catalog_api.catalog.mappers import map_rows
from catalog_api.catalog.queries import PLACEHOLDER, QueryFragment
from catalog_api.domain.exceptions import CatalogConnectionError, QueryExecutionError
from catalog_api.infrastructure.config import settings

logger = structlog.get_logger()

T = TypeVar("T")


def _unicode_upper(value: Any) -> Any:
    if isinstance(value, str):
        return value.upper()
    return value


def register_unicode_upper(engine: Engine) -> None:
    """Replace SQLite's ASCII-only ``UPPER`` on every new connection.

    Search patterns are upper-cased with ``str.upper``; the stored side
    must use the same folding for non-ASCII names to match.

    Args:
        engine: SQLite engine.
    """

    @event.listens_for(engine, "connect")
    def _register(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.create_function("UPPER", 1, _unicode_upper, deterministic=True)


def create_catalog_engine(database_url: str | None = None) -> Engine:
    """Create a pooled engine from settings.

    Pool sizing applies to server databases only; SQLite keeps the
    pool SQLAlchemy picks for it and gets a Unicode ``UPPER``.

    Args:
        database_url: Overrides ``settings.database_url``.

    Returns:
        SQLAlchemy engine.
    """
    url = make_url(database_url or settings.database_url)
    options: dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}
    if url.get_backend_name() == "sqlite":
        engine = create_engine(url, **options)
        register_unicode_upper(engine)
        return engine

    options.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
    )
    return create_engine(url, **options)


@lru_cache
def get_engine() -> Engine:
    """Get the process-wide engine, created on first use."""
    return create_catalog_engine()


class ConnectionProvider:
    """Hands out one pooled connection per query.

    Example usage:
        provider = ConnectionProvider(engine)
        with provider.acquire() as conn:
            conn.execute(text("SELECT 1"))
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize provider with an engine.

        Args:
            engine: SQLAlchemy engine owning the pool.
        """
        self.engine = engine

    @property
    def dialect_name(self) -> str:
        """Name of the engine's SQL dialect (e.g. "postgresql")."""
        return self.engine.dialect.name

    @contextmanager
    def acquire(self) -> Iterator[Connection]:
        """Check a connection out of the pool for the duration of a block.

        The connection goes back to the pool on every exit path.

        Yields:
            Open connection.

        Raises:
            CatalogConnectionError: If the pool cannot supply a connection.
        """
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            logger.error(
                "Database connection failed",
                dialect=self.dialect_name,
                error=str(e),
            )
            raise CatalogConnectionError(
                "Could not connect to the catalog database",
                details={"dialect": self.dialect_name},
            ) from e

        with conn:
            yield conn

    def ping(self) -> None:
        """Run a trivial statement to prove the database is reachable.

        Raises:
            CatalogConnectionError: If no connection can be obtained.
            QueryExecutionError: If the statement fails.
        """
        QueryExecutor(self).fetch_one(QueryFragment("SELECT 1 AS total"), lambda row: row)


def to_text_clause(fragment: QueryFragment) -> tuple[TextClause, dict[str, Any]]:
    """Rewrite ``?`` placeholders as named binds.

    Named binds let SQLAlchemy render the placeholder style of whichever
    driver is in use.

    Returns:
        Text clause and its bind parameters.
    """
    head, *rest = fragment.sql.split(PLACEHOLDER)
    sql = head + "".join(f":p{i}{part}" for i, part in enumerate(rest))
    params = {f"p{i}": value for i, value in enumerate(fragment.params)}
    return text(sql), params


class QueryExecutor:
    """Runs catalog statements and decodes their rows.

    Rows are decoded while the connection is still held, so the
    connection is released after decoding succeeds or fails.
    """

    def __init__(self, provider: ConnectionProvider) -> None:
        """Initialize executor.

        Args:
            provider: Source of pooled connections.
        """
        self.provider = provider

    def fetch_all(
        self,
        fragment: QueryFragment,
        mapper: Callable[[Mapping[str, Any]], T],
    ) -> list[T]:
        """Execute a statement and decode every row.

        Args:
            fragment: Statement to run.
            mapper: Row decoder.

        Returns:
            Decoded rows in result order; empty list for no rows.
        """
        with self.provider.acquire() as conn:
            rows = self._run(conn, fragment, lambda result: result.mappings().all())
            return map_rows(rows, mapper)

    def fetch_one(
        self,
        fragment: QueryFragment,
        mapper: Callable[[Mapping[str, Any] | None], T],
    ) -> T:
        """Execute a statement and decode its first row.

        Args:
            fragment: Statement to run.
            mapper: Decoder receiving the first row, or None without rows.

        Returns:
            Decoded value.
        """
        with self.provider.acquire() as conn:
            row = self._run(conn, fragment, lambda result: result.mappings().first())
            return mapper(row)

    def _run(self, conn: Connection, fragment: QueryFragment, fetch: Callable) -> Any:
        statement, params = to_text_clause(fragment)
        logger.debug("Executing query", sql=fragment.sql, bind_count=len(params))
        try:
            result = conn.execute(statement, params)
            return fetch(result)
        except SQLAlchemyError as e:
            logger.error("Query execution failed", sql=fragment.sql, error=str(e))
            raise QueryExecutionError(fragment.sql, str(e)) from e


def get_connection_provider() -> ConnectionProvider:
    """FastAPI dependency returning the connection provider.

    Tests override this dependency to point at their own engine.
    """
    return ConnectionProvider(get_engine())
