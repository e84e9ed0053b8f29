"""Row decoders.

Each decoder reads columns by name from a ``Mapping`` (a SQLAlchemy
``RowMapping`` in production, a plain dict in tests) and returns a
catalog record.
"""

from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

from catalog_api.catalog.models import Brand, Category, Product
from catalog_api.domain.exceptions import RowMappingError

T = TypeVar("T")

Row = Mapping[str, Any]


def _column(row: Row, column: str, record_type: str) -> Any:
    try:
        return row[column]
    except KeyError:
        raise RowMappingError(record_type, column) from None


def map_product(row: Row) -> Product:
    """Decode a product search or listing row.

    Null joined columns stay None rather than becoming empty strings.
    """
    return Product(
        id=_column(row, "id", "Product"),
        name=_column(row, "name", "Product"),
        description=_column(row, "description", "Product"),
        category_name=_column(row, "category_name", "Product"),
        brand_name=_column(row, "brand_name", "Product"),
    )


def map_category(row: Row) -> Category:
    """Decode a category row."""
    return Category(
        id=_column(row, "id", "Category"),
        name=_column(row, "name", "Category"),
    )


def map_brand(row: Row) -> Brand:
    """Decode a brand row."""
    return Brand(
        id=_column(row, "id", "Brand"),
        name=_column(row, "name", "Brand"),
    )


def map_total(row: Row | None) -> int:
    """Read the ``total`` column of a count row, 0 when there is no row."""
    if row is None:
        return 0
    return int(_column(row, "total", "count"))


def map_rows(rows: Iterable[Row], mapper: Callable[[Row], T]) -> list[T]:
    """Decode rows in iteration order. No rows gives an empty list."""
    return [mapper(row) for row in rows]
