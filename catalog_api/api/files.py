"""File API endpoints.

Read-only access to file metadata records. Records are created by
attaching files to a product.
"""

from fastapi import APIRouter

from catalog_api.api.dependencies import CatalogServiceDep
from catalog_api.api.schemas import ErrorResponse, FileRecordResponse

router = APIRouter(prefix="/files", tags=["Files"])


@router.get("", response_model=list[FileRecordResponse], summary="List files")
async def list_files(service: CatalogServiceDep) -> list[FileRecordResponse]:
    """List all file records."""
    files = await service.list_files()
    return [FileRecordResponse.model_validate(f) for f in files]


@router.get(
    "/{file_id}",
    response_model=FileRecordResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get file",
)
async def get_file(file_id: int, service: CatalogServiceDep) -> FileRecordResponse:
    """Get a file record by ID."""
    return FileRecordResponse.model_validate(await service.get_file(file_id))
