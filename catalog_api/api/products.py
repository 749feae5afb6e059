"""Product API endpoints.

Provides CRUD endpoints for products and the endpoints that link
files to a product.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Query, Request, Response, status

from catalog_api.api.dependencies import CatalogServiceDep
from catalog_api.api.schemas import (
    AttachedFileResponse,
    AttachFilesResponse,
    ErrorResponse,
    FileAttachRequest,
    ProductCreateRequest,
    ProductDetailResponse,
    ProductFileResponse,
    ProductListItemResponse,
    ProductResponse,
    ProductUpdateRequest,
)
from catalog_api.catalog.service import FileAttachItem, ProductData

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Converters
# ============================================================================


def request_to_product_data(
    request: ProductCreateRequest,
    product_id: int | None = None,
) -> ProductData:
    """Convert a create/update request to service input."""
    return ProductData(
        code=request.code,
        description=request.description,
        extended_description=request.extended_description,
        brand_id=request.brand_id,
        collection_id=request.collection_id,
        id=product_id,
    )


# ============================================================================
# Product Endpoints
# ============================================================================


@router.get(
    "",
    response_model=list[ProductListItemResponse],
    summary="List products",
    description="Get all products with their brand and collection.",
)
async def list_products(service: CatalogServiceDep) -> list[ProductListItemResponse]:
    """List all products."""
    products = await service.list_products()
    return [ProductListItemResponse.model_validate(p) for p in products]


@router.get(
    "/{product_id}",
    response_model=ProductDetailResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
    description="Get a product with its brand, collection and linked files.",
)
async def get_product(product_id: int, service: CatalogServiceDep) -> ProductDetailResponse:
    """Get a product by ID.

    Raises:
        NotFoundError: If the product does not exist.
    """
    product = await service.get_product(product_id)
    return ProductDetailResponse.model_validate(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Create product",
    description="Create a product. The code must be unique.",
)
async def create_product(
    body: ProductCreateRequest,
    request: Request,
    response: Response,
    service: CatalogServiceDep,
) -> ProductResponse:
    """Create a product.

    Returns the created product and a Location header pointing at it.
    """
    product = await service.create_product(request_to_product_data(body))
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update product",
    description="Update code, descriptions and brand/collection references.",
)
async def update_product(
    product_id: int,
    body: ProductUpdateRequest,
    service: CatalogServiceDep,
) -> Response:
    """Update a product. The body ID must match the path ID."""
    await service.update_product(product_id, request_to_product_data(body, body.id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
    description="Delete a product and its file links. File records are kept.",
)
async def delete_product(product_id: int, service: CatalogServiceDep) -> Response:
    """Delete a product."""
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ============================================================================
# Product File Endpoints
# ============================================================================


@router.get(
    "/{product_id}/files",
    response_model=list[ProductFileResponse],
    responses={404: {"model": ErrorResponse}},
    summary="List product files",
    description="Get the files linked to a product.",
)
async def list_product_files(
    product_id: int,
    service: CatalogServiceDep,
) -> list[ProductFileResponse]:
    """List files linked to a product."""
    files = await service.list_product_files(product_id)
    return [ProductFileResponse.model_validate(f) for f in files]


@router.post(
    "/{product_id}/files",
    response_model=AttachFilesResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Attach files",
    description=(
        "Link one or more files to a product by fileId or absolutePath. "
        "Unknown paths create a new file record."
    ),
)
async def attach_files(
    product_id: int,
    body: Annotated[list[FileAttachRequest] | FileAttachRequest, Body()],
    service: CatalogServiceDep,
) -> AttachFilesResponse:
    """Attach files to a product.

    Accepts an array of items or a single item.
    """
    items = body if isinstance(body, list) else [body]
    result = await service.attach_files(
        product_id,
        [
            FileAttachItem(
                file_id=item.file_id,
                absolute_path=item.absolute_path,
                file_name=item.file_name,
            )
            for item in items
        ],
    )
    return AttachFilesResponse(
        added=[AttachedFileResponse.model_validate(a) for a in result.added]
    )


@router.delete(
    "/{product_id}/files/{file_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Detach file",
    description=(
        "Remove the link between a product and a file. With removeFile=true the "
        "file record is deleted too when no other product links to it."
    ),
)
async def remove_file(
    product_id: int,
    file_id: int,
    service: CatalogServiceDep,
    remove_file: Annotated[bool, Query(alias="removeFile")] = False,
) -> Response:
    """Detach one file from a product."""
    await service.remove_file(product_id, file_id, remove_orphan=remove_file)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id}/files",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Detach files",
    description=(
        "Remove the links between a product and several files (JSON array of file "
        "IDs). With removeOrphanFiles=true unreferenced file records are deleted."
    ),
)
async def remove_files(
    product_id: int,
    file_ids: Annotated[list[int], Body()],
    service: CatalogServiceDep,
    remove_orphan_files: Annotated[bool, Query(alias="removeOrphanFiles")] = False,
) -> Response:
    """Detach several files from a product."""
    await service.remove_files(
        product_id,
        file_ids,
        remove_orphan_files=remove_orphan_files,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
