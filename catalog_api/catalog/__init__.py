"""Product Catalog queries.

Filter normalization, SQL assembly, row decoding, and the repository
tying them to the database.
"""

from catalog_api.catalog.filters import MAX_PAGE, PAGE_SIZE, page_offset, to_like_pattern
from catalog_api.catalog.mappers import map_brand, map_category, map_product, map_total
from catalog_api.catalog.models import Brand, Category, Product, ProductFilter
from catalog_api.catalog.queries import PaginationStyle, QueryFragment

__all__ = [
    # Models
    "Brand",
    "Category",
    "Product",
    "ProductFilter",
    # Filters
    "MAX_PAGE",
    "PAGE_SIZE",
    "page_offset",
    "to_like_pattern",
    # Queries
    "PaginationStyle",
    "QueryFragment",
    # Mappers
    "map_brand",
    "map_category",
    "map_product",
    "map_total",
]
