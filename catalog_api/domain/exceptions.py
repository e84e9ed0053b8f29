"""Domain exceptions.

Errors raised while querying the catalog. None of them are handled by
the query layer itself: they propagate to the HTTP layer, which turns
them into 5xx responses.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    Carries an HTTP-friendly error code alongside the message so the
    API layer can render it without inspecting the concrete type.
    """

    error_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class CatalogConnectionError(CatalogError):
    """Raised when no database connection can be obtained.

    Covers an exhausted pool as well as an unreachable server.
    """

    error_code = "DATABASE_UNAVAILABLE"
    status_code = 503


class QueryExecutionError(CatalogError):
    """Raised when the database rejects or fails a statement."""

    error_code = "QUERY_FAILED"

    def __init__(self, sql: str, reason: str) -> None:
        """Initialize query execution error.

        Args:
            sql: Statement text that failed.
            reason: Driver error message.
        """
        super().__init__(
            f"Query execution failed: {reason}",
            details={"sql": sql},
        )
        self.sql = sql


class RowMappingError(CatalogError):
    """Raised when a result row lacks a column the mapper expects."""

    def __init__(self, record_type: str, column: str) -> None:
        """Initialize row mapping error.

        Args:
            record_type: Record being decoded (e.g. "Product").
            column: Missing column name.
        """
        super().__init__(
            f"Cannot map row to {record_type}: missing column '{column}'",
            details={"record_type": record_type, "column": column},
        )
