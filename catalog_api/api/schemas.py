"""API schemas for the catalog API.

Pydantic models for request/response validation and serialization.
Fields are exposed in camelCase on the wire; snake_case input is
accepted as well.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from catalog_api.catalog.models import CODE_MAX_LENGTH, TEXT_MAX_LENGTH


class CamelModel(BaseModel):
    """Base schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
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
    details: list[ErrorDetail] | dict = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Brand Schemas
# ============================================================================


class BrandCreateRequest(CamelModel):
    """Request to create a brand."""

    code: str = Field(..., min_length=1, max_length=CODE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH)


class BrandUpdateRequest(BrandCreateRequest):
    """Request to update a brand. The ID must match the path."""

    id: int


class BrandResponse(CamelModel):
    """Brand representation."""

    id: int
    code: str
    description: str


# ============================================================================
# Collection Schemas
# ============================================================================


class CollectionCreateRequest(CamelModel):
    """Request to create a collection."""

    brand_id: int = Field(..., description="Owning brand")
    code: str = Field(..., min_length=1, max_length=CODE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH)


class CollectionUpdateRequest(CollectionCreateRequest):
    """Request to update a collection. The ID must match the path."""

    id: int


class CollectionResponse(CamelModel):
    """Collection representation."""

    id: int
    brand_id: int
    code: str
    description: str


class CollectionWithBrandResponse(CollectionResponse):
    """Collection with its brand embedded."""

    brand: BrandResponse


# ============================================================================
# File Schemas
# ============================================================================


class FileRecordResponse(CamelModel):
    """File metadata record."""

    id: int
    file_name: str
    absolute_path: str


class FileAttachRequest(CamelModel):
    """One file to attach to a product.

    Give either ``fileId`` for an existing record or ``absolutePath``
    to reuse or create a record by path.
    """

    file_id: int | None = Field(default=None, description="Existing file ID")
    absolute_path: str | None = Field(
        default=None,
        max_length=TEXT_MAX_LENGTH,
        description="Absolute path used when fileId is not provided",
    )
    file_name: str | None = Field(
        default=None,
        max_length=TEXT_MAX_LENGTH,
        description="Name for a new record (defaults to the last path segment)",
    )


class AttachedFileResponse(CamelModel):
    """Outcome of attaching one file."""

    id: int
    file_name: str
    absolute_path: str
    linked: bool
    reason: str | None = None


class AttachFilesResponse(CamelModel):
    """Result of attaching files to a product."""

    added: list[AttachedFileResponse]


class ProductFileResponse(CamelModel):
    """File linked to a product."""

    file_id: int
    file_name: str
    absolute_path: str


class ProductFileLinkResponse(CamelModel):
    """Product-file link with the file embedded."""

    id: int
    file_id: int
    file: FileRecordResponse


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCreateRequest(CamelModel):
    """Request to create a product.

    Embedded brand, collection or file objects sent by clients are
    ignored; only the reference IDs are used.
    """

    code: str = Field(..., min_length=1, max_length=CODE_MAX_LENGTH)
    description: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH)
    extended_description: str | None = Field(default=None, max_length=TEXT_MAX_LENGTH)
    brand_id: int | None = Field(default=None, description="Optional brand")
    collection_id: int | None = Field(default=None, description="Optional collection")


class ProductUpdateRequest(ProductCreateRequest):
    """Request to update a product. The ID must match the path."""

    id: int


class ProductResponse(CamelModel):
    """Product scalar fields."""

    id: int
    code: str
    description: str
    extended_description: str | None = None
    created_at: datetime
    brand_id: int | None = None
    collection_id: int | None = None


class ProductListItemResponse(ProductResponse):
    """Product with brand and collection embedded."""

    brand: BrandResponse | None = None
    collection: CollectionResponse | None = None


class ProductDetailResponse(ProductListItemResponse):
    """Product with brand, collection and file links embedded."""

    files: list[ProductFileLinkResponse] = Field(
        default_factory=list,
        validation_alias="file_links",
    )


# ============================================================================
# Health Schemas
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str
