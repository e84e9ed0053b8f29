"""Catalog API endpoints.

Read-only product listing and search, plus category and brand lists.
"""

from fastapi import APIRouter, Depends, Query, status

from catalog_api.api.schemas import BrandSchema, CategorySchema, ErrorResponse, ProductSchema
from catalog_api.catalog.filters import MAX_PAGE
from catalog_api.catalog.models import ProductFilter
from catalog_api.catalog.repository import CatalogRepository
from catalog_api.infrastructure.database import ConnectionProvider, get_connection_provider

router = APIRouter(
    prefix="/api",
    tags=["Catalog"],
    responses={
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)


def get_repository(
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> CatalogRepository:
    """Build a repository for the current request."""
    return CatalogRepository(provider)


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/products",
    response_model=list[ProductSchema],
    status_code=status.HTTP_200_OK,
    summary="List products",
    description="Get every product joined with its category and brand.",
)
def list_products(
    repository: CatalogRepository = Depends(get_repository),
) -> list[ProductSchema]:
    """List all products, unpaginated."""
    return [ProductSchema.model_validate(p) for p in repository.list_products()]


@router.get(
    "/search",
    response_model=list[ProductSchema],
    status_code=status.HTTP_200_OK,
    summary="Search products",
    description="Case-insensitive substring search, 100 products per page, ordered by ID.",
)
def search_products(
    product_name: str | None = Query(default=None, alias="productName"),
    category_name: str | None = Query(default=None, alias="categoryName"),
    brand_name: str | None = Query(default=None, alias="brandName"),
    page: int = Query(default=1, le=MAX_PAGE, description="Page number (1-based)"),
    repository: CatalogRepository = Depends(get_repository),
) -> list[ProductSchema]:
    """Search products by product, category, and brand name.

    Empty filter values are ignored. Pages below 1 return the first page.
    """
    filters = ProductFilter(
        product_name=product_name,
        category_name=category_name,
        brand_name=brand_name,
        page=page,
    )
    return [ProductSchema.model_validate(p) for p in repository.search_products(filters)]


@router.get(
    "/search/count",
    response_model=int,
    status_code=status.HTTP_200_OK,
    summary="Count search results",
    description="Total number of products matching the search filters.",
)
def count_products(
    product_name: str | None = Query(default=None, alias="productName"),
    category_name: str | None = Query(default=None, alias="categoryName"),
    brand_name: str | None = Query(default=None, alias="brandName"),
    repository: CatalogRepository = Depends(get_repository),
) -> int:
    """Count products matching the filters across all pages."""
    filters = ProductFilter(
        product_name=product_name,
        category_name=category_name,
        brand_name=brand_name,
    )
    return repository.count_products(filters)


@router.get(
    "/categories",
    response_model=list[CategorySchema],
    status_code=status.HTTP_200_OK,
    summary="List categories",
)
def list_categories(
    repository: CatalogRepository = Depends(get_repository),
) -> list[CategorySchema]:
    """List all categories ordered by ID."""
    return [CategorySchema.model_validate(c) for c in repository.list_categories()]


@router.get(
    "/brands",
    response_model=list[BrandSchema],
    status_code=status.HTTP_200_OK,
    summary="List brands",
)
def list_brands(
    repository: CatalogRepository = Depends(get_repository),
) -> list[BrandSchema]:
    """List all brands ordered by ID."""
    return [BrandSchema.model_validate(b) for b in repository.list_brands()]
