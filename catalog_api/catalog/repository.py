"""Catalog repository for database reads.

Combines the query builders, the executor, and the row decoders into
the read operations the API exposes.
"""

from catalog_api.catalog.mappers import map_brand, map_category, map_product, map_total
from catalog_api.catalog.models import Brand, Category, Product, ProductFilter
from catalog_api.catalog.queries import (
    PaginationStyle,
    build_all_products_query,
    build_brands_query,
    build_categories_query,
    build_count_query,
    build_search_query,
)
from catalog_api.infrastructure.database import ConnectionProvider, QueryExecutor


class CatalogRepository:
    """Repository for catalog reads.

    Example usage:
        repo = CatalogRepository(ConnectionProvider(engine))
        products = repo.search_products(ProductFilter(brand_name="acme", page=2))
        total = repo.count_products(ProductFilter(brand_name="acme"))
    """

    def __init__(self, provider: ConnectionProvider) -> None:
        """Initialize repository with a connection provider.

        Args:
            provider: Source of pooled connections.
        """
        self.executor = QueryExecutor(provider)
        self.pagination_style = PaginationStyle.for_dialect(provider.dialect_name)

    def list_products(self) -> list[Product]:
        """Get every product with its category and brand names."""
        return self.executor.fetch_all(build_all_products_query(), map_product)

    def search_products(self, filters: ProductFilter) -> list[Product]:
        """Find one page of products matching the filters, ordered by ID.

        Args:
            filters: Name filters and page number.

        Returns:
            Up to 100 products.
        """
        query = build_search_query(filters, self.pagination_style)
        return self.executor.fetch_all(query, map_product)

    def count_products(self, filters: ProductFilter) -> int:
        """Count every product matching the filters, ignoring the page."""
        return self.executor.fetch_one(build_count_query(filters), map_total)

    def list_categories(self) -> list[Category]:
        """Get all categories ordered by ID."""
        return self.executor.fetch_all(build_categories_query(), map_category)

    def list_brands(self) -> list[Brand]:
        """Get all brands ordered by ID."""
        return self.executor.fetch_all(build_brands_query(), map_brand)
