"""SQL builders for catalog queries.

Statements are assembled from ``QueryFragment`` values: SQL text with
``?`` placeholders plus the bind values for those placeholders, in
order. Nothing here touches a driver, so every statement can be
inspected without a database.

Example usage:
    query = build_search_query(ProductFilter(product_name="phone", page=2))
    query.sql     # "SELECT ... WHERE UPPER(p.name) LIKE ? ORDER BY p.id OFFSET ? ..."
    query.params  # ("%PHONE%", 100, 100)
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from itertools import chain
from typing import Any

from catalog_api.catalog.filters import PAGE_SIZE, page_offset, to_like_pattern
from catalog_api.catalog.models import ProductFilter

PLACEHOLDER = "?"

PRODUCT_SOURCE = (
    "FROM products p "
    "LEFT JOIN categories c ON c.id = p.category_id "
    "LEFT JOIN brands b ON b.id = p.brand_id"
)

SEARCH_COLUMNS = (
    "SELECT p.id, p.name, p.description, "
    "c.name AS category_name, b.name AS brand_name"
)

LISTING_COLUMNS = (
    "SELECT p.id, p.name, p.description, p.category_id, p.brand_id, "
    "c.name AS category_name, b.name AS brand_name"
)

# Filter attribute -> joined column, in predicate emission order.
FILTER_COLUMNS = (
    ("product_name", "p.name"),
    ("category_name", "c.name"),
    ("brand_name", "b.name"),
)


@dataclass(frozen=True)
class QueryFragment:
    """SQL text with its bind values.

    Attributes:
        sql: Statement text using ``?`` placeholders.
        params: Bind values in placeholder order.

    Raises:
        ValueError: If the placeholder count and the value count differ.
    """

    sql: str
    params: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        placeholders = self.sql.count(PLACEHOLDER)
        if placeholders != len(self.params):
            raise ValueError(
                f"Fragment has {placeholders} placeholder(s) "
                f"but {len(self.params)} bind value(s): {self.sql!r}"
            )


def combine(fragments: Iterable[QueryFragment], sep: str = " ") -> QueryFragment:
    """Join fragments left to right, concatenating their bind values.

    Empty fragments are skipped so optional clauses can be passed through
    unconditionally.
    """
    parts = [f for f in fragments if f.sql]
    return QueryFragment(
        sep.join(f.sql for f in parts),
        tuple(chain.from_iterable(f.params for f in parts)),
    )


class PaginationStyle(str, Enum):
    """Row-limiting syntax understood by the target database."""

    FETCH = "fetch"  # OFFSET ? ROWS FETCH NEXT ? ROWS ONLY
    LIMIT = "limit"  # LIMIT ?, ?

    @classmethod
    def for_dialect(cls, dialect_name: str) -> "PaginationStyle":
        """Pick the syntax for a SQLAlchemy dialect name."""
        if dialect_name in {"sqlite", "mysql", "mariadb"}:
            return cls.LIMIT
        return cls.FETCH


def filter_predicates(filters: ProductFilter) -> list[QueryFragment]:
    """Build one LIKE predicate per non-empty filter value.

    Args:
        filters: Search filters.

    Returns:
        Predicates in product, category, brand order.
    """
    predicates = []
    for attribute, column in FILTER_COLUMNS:
        pattern = to_like_pattern(getattr(filters, attribute))
        if pattern is not None:
            predicates.append(QueryFragment(f"UPPER({column}) LIKE ?", (pattern,)))
    return predicates


def where_clause(predicates: list[QueryFragment]) -> QueryFragment:
    """``WHERE a AND b ...``, or an empty fragment without predicates."""
    if not predicates:
        return QueryFragment("")
    return combine([QueryFragment("WHERE"), combine(predicates, sep=" AND ")])


def pagination_clause(
    page: int,
    style: PaginationStyle = PaginationStyle.FETCH,
) -> QueryFragment:
    """Build the row-limiting clause for a page.

    Both styles bind the offset first and the page size second.

    Args:
        page: 1-based page number.
        style: Syntax to emit.

    Returns:
        Pagination fragment.
    """
    params = (page_offset(page), PAGE_SIZE)
    if style is PaginationStyle.LIMIT:
        return QueryFragment("LIMIT ?, ?", params)
    return QueryFragment("OFFSET ? ROWS FETCH NEXT ? ROWS ONLY", params)


def build_search_query(
    filters: ProductFilter,
    style: PaginationStyle = PaginationStyle.FETCH,
) -> QueryFragment:
    """Build the paginated product search statement.

    Args:
        filters: Search filters and page.
        style: Pagination syntax for the target database.

    Returns:
        Statement ordered by product ID, one page of at most
        ``PAGE_SIZE`` rows.
    """
    return combine(
        [
            QueryFragment(f"{SEARCH_COLUMNS} {PRODUCT_SOURCE}"),
            where_clause(filter_predicates(filters)),
            QueryFragment("ORDER BY p.id"),
            pagination_clause(filters.page, style),
        ]
    )


def build_count_query(filters: ProductFilter) -> QueryFragment:
    """Build the statement counting every product matching the filters.

    The page in ``filters`` is ignored.
    """
    return combine(
        [
            QueryFragment(f"SELECT COUNT(*) AS total {PRODUCT_SOURCE} WHERE 1=1"),
            *(
                combine([QueryFragment("AND"), predicate])
                for predicate in filter_predicates(filters)
            ),
        ]
    )


def build_all_products_query() -> QueryFragment:
    """Build the unfiltered, unpaginated product listing."""
    return QueryFragment(f"{LISTING_COLUMNS} {PRODUCT_SOURCE}")


def build_categories_query() -> QueryFragment:
    """Build the category listing ordered by ID."""
    return QueryFragment("SELECT id, name FROM categories ORDER BY id")


def build_brands_query() -> QueryFragment:
    """Build the brand listing ordered by ID."""
    return QueryFragment("SELECT id, name FROM brands ORDER BY id")
