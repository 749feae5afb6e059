"""Product Catalog.

Provides the catalog tables, their repositories and the catalog service
that validates writes and manages product/file links.
"""

from catalog_api.catalog.models import Brand, Collection, File, Product, ProductFile
from catalog_api.catalog.repository import (
    BrandRepository,
    CollectionRepository,
    FileRepository,
    ProductFileRepository,
    ProductRepository,
    Repository,
)
from catalog_api.catalog.service import (
    AttachedFile,
    AttachFilesResult,
    BrandData,
    CatalogService,
    CollectionData,
    FileAttachItem,
    ProductData,
    ProductFileInfo,
)

__all__ = [
    # Models
    "Brand",
    "Collection",
    "File",
    "Product",
    "ProductFile",
    # Repositories
    "Repository",
    "BrandRepository",
    "CollectionRepository",
    "FileRepository",
    "ProductFileRepository",
    "ProductRepository",
    # Service
    "CatalogService",
    "AttachedFile",
    "AttachFilesResult",
    "BrandData",
    "CollectionData",
    "FileAttachItem",
    "ProductData",
    "ProductFileInfo",
]
