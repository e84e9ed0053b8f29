"""Catalog records.

Immutable value objects built fresh for every query result.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A product row joined with its category and brand names.

    Attributes:
        id: Database-assigned product ID.
        name: Product name.
        description: Free-text description, if any.
        category_name: Name of the referenced category, None when the
            product has no matching category.
        brand_name: Name of the referenced brand, None when absent.
    """

    id: int
    name: str
    description: str | None = None
    category_name: str | None = None
    brand_name: str | None = None


@dataclass(frozen=True)
class Category:
    """A product category."""

    id: int
    name: str


@dataclass(frozen=True)
class Brand:
    """A product brand."""

    id: int
    name: str


@dataclass(frozen=True)
class ProductFilter:
    """Filter parameters for product search.

    Attributes:
        product_name: Substring to match against the product name.
        category_name: Substring to match against the category name.
        brand_name: Substring to match against the brand name.
        page: Page number (1-based). Values below 1 behave like 1.
    """

    product_name: str | None = None
    category_name: str | None = None
    brand_name: str | None = None
    page: int = 1
