"""API schemas for the Catalog API.

Pydantic models for response serialization. Field names are exposed in
camelCase (``categoryName``, ``brandName``).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogSchema(BaseModel):
    """Base schema: camelCase aliases, built from catalog records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(default=None, description="Request ID for correlation")


# ============================================================================
# Catalog Schemas
# ============================================================================


class ProductSchema(CatalogSchema):
    """Product with its category and brand names."""

    id: int = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: str | None = Field(default=None, description="Product description")
    category_name: str | None = Field(
        default=None, description="Category name, null when uncategorized"
    )
    brand_name: str | None = Field(default=None, description="Brand name, null when unbranded")


class CategorySchema(CatalogSchema):
    """Product category."""

    id: int = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")


class BrandSchema(CatalogSchema):
    """Product brand."""

    id: int = Field(..., description="Brand ID")
    name: str = Field(..., description="Brand name")
