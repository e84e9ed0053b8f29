"""Domain layer module.

Contains the catalog error taxonomy.
"""

from catalog_api.domain.exceptions import (
    CatalogConnectionError,
    CatalogError,
    QueryExecutionError,
    RowMappingError,
)

__all__ = [
    "CatalogConnectionError",
    "CatalogError",
    "QueryExecutionError",
    "RowMappingError",
]
