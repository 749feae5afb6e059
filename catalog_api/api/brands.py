"""Brand API endpoints."""

from fastapi import APIRouter, Request, Response, status

from catalog_api.api.dependencies import CatalogServiceDep
from catalog_api.api.schemas import (
    BrandCreateRequest,
    BrandResponse,
    BrandUpdateRequest,
    ErrorResponse,
)
from catalog_api.catalog.service import BrandData

router = APIRouter(prefix="/brands", tags=["Brands"])


@router.get("", response_model=list[BrandResponse], summary="List brands")
async def list_brands(service: CatalogServiceDep) -> list[BrandResponse]:
    """List all brands."""
    brands = await service.list_brands()
    return [BrandResponse.model_validate(b) for b in brands]


@router.get(
    "/{brand_id}",
    response_model=BrandResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get brand",
)
async def get_brand(brand_id: int, service: CatalogServiceDep) -> BrandResponse:
    """Get a brand by ID."""
    return BrandResponse.model_validate(await service.get_brand(brand_id))


@router.post(
    "",
    response_model=BrandResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create brand",
)
async def create_brand(
    body: BrandCreateRequest,
    request: Request,
    response: Response,
    service: CatalogServiceDep,
) -> BrandResponse:
    """Create a brand."""
    brand = await service.create_brand(BrandData(code=body.code, description=body.description))
    response.headers["Location"] = str(request.url_for("get_brand", brand_id=brand.id))
    return BrandResponse.model_validate(brand)


@router.put(
    "/{brand_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Update brand",
)
async def update_brand(
    brand_id: int,
    body: BrandUpdateRequest,
    service: CatalogServiceDep,
) -> Response:
    """Update a brand. The body ID must match the path ID."""
    await service.update_brand(
        brand_id,
        BrandData(code=body.code, description=body.description, id=body.id),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{brand_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Delete brand",
    description=(
        "Delete a brand. Rejected while collections belong to it; products "
        "referencing it lose the reference."
    ),
)
async def delete_brand(brand_id: int, service: CatalogServiceDep) -> Response:
    """Delete a brand."""
    await service.delete_brand(brand_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
