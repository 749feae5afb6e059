"""Collection API endpoints."""

from fastapi import APIRouter, Request, Response, status

from catalog_api.api.dependencies import CatalogServiceDep
from catalog_api.api.schemas import (
    CollectionCreateRequest,
    CollectionResponse,
    CollectionUpdateRequest,
    CollectionWithBrandResponse,
    ErrorResponse,
)
from catalog_api.catalog.service import CollectionData

router = APIRouter(prefix="/collections", tags=["Collections"])


@router.get(
    "",
    response_model=list[CollectionWithBrandResponse],
    summary="List collections",
    description="Get all collections with their brand.",
)
async def list_collections(service: CatalogServiceDep) -> list[CollectionWithBrandResponse]:
    """List all collections."""
    collections = await service.list_collections()
    return [CollectionWithBrandResponse.model_validate(c) for c in collections]


@router.get(
    "/{collection_id}",
    response_model=CollectionResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get collection",
)
async def get_collection(collection_id: int, service: CatalogServiceDep) -> CollectionResponse:
    """Get a collection by ID."""
    return CollectionResponse.model_validate(await service.get_collection(collection_id))


@router.post(
    "",
    response_model=CollectionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create collection",
)
async def create_collection(
    body: CollectionCreateRequest,
    request: Request,
    response: Response,
    service: CatalogServiceDep,
) -> CollectionResponse:
    """Create a collection under an existing brand."""
    collection = await service.create_collection(
        CollectionData(brand_id=body.brand_id, code=body.code, description=body.description)
    )
    response.headers["Location"] = str(
        request.url_for("get_collection", collection_id=collection.id)
    )
    return CollectionResponse.model_validate(collection)


@router.put(
    "/{collection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update collection",
)
async def update_collection(
    collection_id: int,
    body: CollectionUpdateRequest,
    service: CatalogServiceDep,
) -> Response:
    """Update a collection. The body ID must match the path ID."""
    await service.update_collection(
        collection_id,
        CollectionData(
            brand_id=body.brand_id,
            code=body.code,
            description=body.description,
            id=body.id,
        ),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{collection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete collection",
    description="Delete a collection; products referencing it lose the reference.",
)
async def delete_collection(collection_id: int, service: CatalogServiceDep) -> Response:
    """Delete a collection."""
    await service.delete_collection(collection_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
