"""Catalog service for product, brand, collection and file operations.

High-level service that combines repository operations with the
validation rules of the catalog: code uniqueness, referential checks
and the product/file linking workflow.

Each write is committed by the service as soon as it is complete. Loops
over several items (attach, bulk detach) are not atomic: items that were
processed before a failure stay committed.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.models import Brand, Collection, File, Product, ProductFile
from catalog_api.catalog.repository import (
    BrandRepository,
    CollectionRepository,
    FileRepository,
    ProductFileRepository,
    ProductRepository,
)
from catalog_api.domain.exceptions import ConflictError, NotFoundError, ValidationError

logger = structlog.get_logger()

ALREADY_LINKED = "already linked"

_PATH_SEPARATORS = re.compile(r"[\\/]")


# ============================================================================
# Service Input / Result Types
# ============================================================================


@dataclass
class ProductData:
    """Writable product fields.

    Attributes:
        code: Product code.
        description: Short description.
        extended_description: Optional long description.
        brand_id: Optional brand reference.
        collection_id: Optional collection reference.
        id: Product ID echoed by update requests.
    """

    code: str
    description: str
    extended_description: str | None = None
    brand_id: int | None = None
    collection_id: int | None = None
    id: int | None = None

    def values(self) -> dict[str, object]:
        """Column values applied on insert and update."""
        return {
            "code": self.code,
            "description": self.description,
            "extended_description": self.extended_description,
            "brand_id": self.brand_id,
            "collection_id": self.collection_id,
        }


@dataclass
class BrandData:
    """Writable brand fields."""

    code: str
    description: str
    id: int | None = None


@dataclass
class CollectionData:
    """Writable collection fields."""

    brand_id: int
    code: str
    description: str
    id: int | None = None


@dataclass
class FileAttachItem:
    """One file to attach, addressed by ID or by absolute path.

    Attributes:
        file_id: Existing file ID. Takes precedence over the path.
        absolute_path: Path used to find or create the file record.
        file_name: Name for a newly created record. Defaults to the
            last segment of the path.
    """

    file_id: int | None = None
    absolute_path: str | None = None
    file_name: str | None = None


@dataclass
class AttachedFile:
    """Outcome of attaching one file."""

    id: int
    file_name: str
    absolute_path: str
    linked: bool
    reason: str | None = None


@dataclass
class AttachFilesResult:
    """Result of attaching files to a product."""

    product_id: int
    added: list[AttachedFile] = field(default_factory=list)

    @property
    def linked_count(self) -> int:
        """Number of links created by the call."""
        return sum(1 for item in self.added if item.linked)


@dataclass
class ProductFileInfo:
    """File linked to a product."""

    file_id: int
    file_name: str
    absolute_path: str


def file_name_from_path(absolute_path: str) -> str:
    """Get the last segment of a path.

    Both slash styles are treated as separators so Windows paths stored
    by clients resolve to the same name on any server.

    Args:
        absolute_path: File path.

    Returns:
        Last path segment (empty if the path ends with a separator).
    """
    return _PATH_SEPARATORS.split(absolute_path.strip())[-1]


# ============================================================================
# Catalog Service
# ============================================================================


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)

            product = await service.create_product(
                ProductData(code="P1", description="Chair"),
            )
            result = await service.attach_files(
                product.id,
                [FileAttachItem(absolute_path="/images/p1/front.png")],
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.brands = BrandRepository(session)
        self.collections = CollectionRepository(session)
        self.products = ProductRepository(session)
        self.files = FileRepository(session)
        self.product_files = ProductFileRepository(session)

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def list_products(self) -> list[Product]:
        """Get all products with brand and collection loaded."""
        return list(await self.products.list_with_relations())

    async def get_product(self, product_id: int) -> Product:
        """Get product with brand, collection and file links.

        Args:
            product_id: Product ID.

        Returns:
            The product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self.products.get_with_relations(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def create_product(self, data: ProductData) -> Product:
        """Create a product.

        Only scalar fields are inserted; the new product starts without
        file links.

        Args:
            data: Product fields.

        Returns:
            Created product with its assigned ID.

        Raises:
            ConflictError: If the code is already used.
            ValidationError: If the brand or collection does not exist.
        """
        if await self.products.code_exists(data.code):
            raise ConflictError(
                "Product code already exists",
                details={"code": data.code},
                error_code="DUPLICATE_PRODUCT_CODE",
            )

        await self._check_references(data)

        product = await self.products.add(Product(**data.values()))
        await self.session.commit()

        logger.info("Product created", product_id=product.id, code=product.code)
        return product

    async def update_product(self, product_id: int, data: ProductData) -> None:
        """Update the mutable fields of a product.

        ID and creation time never change, and file links are left alone.

        Args:
            product_id: Product ID from the request path.
            data: New field values, including the echoed ID.

        Raises:
            ValidationError: On ID mismatch or unknown brand/collection.
            NotFoundError: If the product does not exist.
            ConflictError: If the new code belongs to another product.
        """
        if data.id != product_id:
            raise ValidationError(
                "Id mismatch",
                details={"path_id": product_id, "body_id": data.id},
            )

        existing = await self.products.get_by_id(product_id)
        if existing is None:
            raise NotFoundError("Product", product_id)

        if existing.code.lower() != data.code.lower():
            taken = await self.products.code_exists(
                data.code, exclude_id=product_id, ignore_case=True
            )
        elif existing.code != data.code:
            # Case-only change: only an exact spelling held by another product collides
            taken = await self.products.code_exists(data.code, exclude_id=product_id)
        else:
            taken = False

        if taken:
            raise ConflictError(
                "Product code already used by another product",
                details={"code": data.code},
                error_code="DUPLICATE_PRODUCT_CODE",
            )

        await self._check_references(data)

        await self.products.update(product_id, **data.values())
        await self.session.commit()

        logger.info("Product updated", product_id=product_id, code=data.code)

    async def delete_product(self, product_id: int) -> None:
        """Delete a product.

        Its file links go with it through the foreign key cascade; the
        linked File rows are kept.

        Args:
            product_id: Product ID.

        Raises:
            NotFoundError: If the product does not exist.
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)

        await self.products.delete(product)
        await self.session.commit()

        logger.info("Product deleted", product_id=product_id)

    async def _check_references(self, data: ProductData) -> None:
        """Validate the optional brand and collection references."""
        if data.brand_id is not None and not await self.brands.exists(
            Brand.id == data.brand_id
        ):
            raise ValidationError("Brand not found", details={"brand_id": data.brand_id})

        if data.collection_id is not None and not await self.collections.exists(
            Collection.id == data.collection_id
        ):
            raise ValidationError(
                "Collection not found",
                details={"collection_id": data.collection_id},
            )

    # ------------------------------------------------------------------
    # Product files
    # ------------------------------------------------------------------

    async def list_product_files(self, product_id: int) -> list[ProductFileInfo]:
        """Get the files linked to a product.

        Args:
            product_id: Product ID.

        Returns:
            One entry per link.

        Raises:
            NotFoundError: If the product does not exist.
        """
        await self._require_product(product_id)

        links = await self.product_files.list_for_product(product_id)
        return [
            ProductFileInfo(
                file_id=link.file_id,
                file_name=link.file.file_name,
                absolute_path=link.file.absolute_path,
            )
            for link in links
        ]

    async def attach_files(
        self,
        product_id: int,
        items: Sequence[FileAttachItem],
    ) -> AttachFilesResult:
        """Link files to a product, creating file records by path if needed.

        Items are processed in order. A file that is already linked is
        reported with ``linked=False`` instead of being linked twice.
        Each item is committed on its own, so an invalid item aborts the
        call but leaves the earlier items in place.

        Args:
            product_id: Product ID.
            items: Files to attach.

        Returns:
            Per-item outcome.

        Raises:
            NotFoundError: If the product does not exist.
            ValidationError: If no items are given, a file ID is unknown or
                an item has neither ID nor path.
        """
        await self._require_product(product_id)

        if not items:
            raise ValidationError("No files provided")

        result = AttachFilesResult(product_id=product_id)

        for item in items:
            file = await self._resolve_file(item)

            if await self.product_files.link_exists(product_id, file.id):
                # A file created for this item cannot be linked yet, so
                # there is nothing pending here.
                result.added.append(
                    AttachedFile(
                        id=file.id,
                        file_name=file.file_name,
                        absolute_path=file.absolute_path,
                        linked=False,
                        reason=ALREADY_LINKED,
                    )
                )
                continue

            await self.product_files.add(ProductFile(product_id=product_id, file_id=file.id))
            await self.session.commit()

            logger.info("File linked", product_id=product_id, file_id=file.id)
            result.added.append(
                AttachedFile(
                    id=file.id,
                    file_name=file.file_name,
                    absolute_path=file.absolute_path,
                    linked=True,
                )
            )

        return result

    async def _resolve_file(self, item: FileAttachItem) -> File:
        """Find the file an attach item refers to, creating it by path.

        A created file is flushed but not committed; it is committed
        together with its link.
        """
        if item.file_id is not None:
            file = await self.files.get_by_id(item.file_id)
            if file is None:
                raise ValidationError(
                    f"FileId {item.file_id} not found",
                    details={"file_id": item.file_id},
                )
            return file

        if item.absolute_path is None or not item.absolute_path.strip():
            raise ValidationError("AbsolutePath is required when FileId is not provided")

        file = await self.files.get_by_path(item.absolute_path)
        if file is not None:
            return file

        file_name = item.file_name
        if file_name is None:
            file_name = file_name_from_path(item.absolute_path)
        if not file_name:
            raise ValidationError(
                "FileName could not be derived from AbsolutePath",
                details={"absolute_path": item.absolute_path},
            )

        file = await self.files.add(File(file_name=file_name, absolute_path=item.absolute_path))
        logger.info("File record created", file_id=file.id, absolute_path=file.absolute_path)
        return file

    async def remove_file(
        self,
        product_id: int,
        file_id: int,
        remove_orphan: bool = False,
    ) -> None:
        """Unlink a file from a product.

        Args:
            product_id: Product ID.
            file_id: File ID.
            remove_orphan: Also delete the file record when no other
                product links to it. File content on disk is never touched.

        Raises:
            NotFoundError: If the link does not exist.
        """
        link = await self.product_files.get_link(product_id, file_id)
        if link is None:
            raise NotFoundError("ProductFile", message="Product-file link not found")

        await self.product_files.delete(link)
        await self.session.commit()

        logger.info("File unlinked", product_id=product_id, file_id=file_id)

        if remove_orphan and await self._delete_if_orphan(file_id):
            await self.session.commit()

    async def remove_files(
        self,
        product_id: int,
        file_ids: Sequence[int],
        remove_orphan_files: bool = False,
    ) -> int:
        """Unlink several files from a product.

        The links are deleted in one commit. Orphan cleanup runs afterwards
        as a second commit and checks every requested ID, not only the ones
        that were linked to this product.

        Args:
            product_id: Product ID.
            file_ids: File IDs to unlink.
            remove_orphan_files: Also delete file records left without links.

        Returns:
            Number of links removed.

        Raises:
            ValidationError: If no file IDs are given.
            NotFoundError: If none of the files is linked to the product.
        """
        if not file_ids:
            raise ValidationError("No fileId provided")

        links = await self.product_files.find_links(product_id, file_ids)
        if not links:
            raise NotFoundError(
                "ProductFile",
                message="No links found for the provided files",
            )

        removed = await self.product_files.delete_all(links)
        await self.session.commit()

        logger.info(
            "Files unlinked",
            product_id=product_id,
            file_ids=[link.file_id for link in links],
        )

        if remove_orphan_files:
            for file_id in dict.fromkeys(file_ids):
                await self._delete_if_orphan(file_id)
            await self.session.commit()

        return removed

    async def _delete_if_orphan(self, file_id: int) -> bool:
        """Delete a file record that no product links to.

        Returns:
            True if a record was deleted.
        """
        if await self.product_files.is_referenced(file_id):
            return False

        file = await self.files.get_by_id(file_id)
        if file is None:
            return False

        await self.files.delete(file)
        logger.info("Orphan file record removed", file_id=file_id)
        return True

    async def _require_product(self, product_id: int) -> None:
        if not await self.products.exists(Product.id == product_id):
            raise NotFoundError("Product", product_id)

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    async def list_files(self) -> list[File]:
        """Get all file records."""
        return list(await self.files.find_all())

    async def get_file(self, file_id: int) -> File:
        """Get a file record.

        Raises:
            NotFoundError: If the file does not exist.
        """
        file = await self.files.get_by_id(file_id)
        if file is None:
            raise NotFoundError("File", file_id)
        return file

    # ------------------------------------------------------------------
    # Brands
    # ------------------------------------------------------------------

    async def list_brands(self) -> list[Brand]:
        """Get all brands."""
        return list(await self.brands.find_all())

    async def get_brand(self, brand_id: int) -> Brand:
        """Get a brand.

        Raises:
            NotFoundError: If the brand does not exist.
        """
        brand = await self.brands.get_by_id(brand_id)
        if brand is None:
            raise NotFoundError("Brand", brand_id)
        return brand

    async def create_brand(self, data: BrandData) -> Brand:
        """Create a brand."""
        brand = await self.brands.add(Brand(code=data.code, description=data.description))
        await self.session.commit()

        logger.info("Brand created", brand_id=brand.id, code=brand.code)
        return brand

    async def update_brand(self, brand_id: int, data: BrandData) -> None:
        """Update a brand's code and description.

        Raises:
            ValidationError: On ID mismatch.
            NotFoundError: If the brand does not exist.
        """
        if data.id != brand_id:
            raise ValidationError(
                "Id mismatch",
                details={"path_id": brand_id, "body_id": data.id},
            )
        await self.get_brand(brand_id)

        await self.brands.update(brand_id, code=data.code, description=data.description)
        await self.session.commit()

        logger.info("Brand updated", brand_id=brand_id)

    async def delete_brand(self, brand_id: int) -> None:
        """Delete a brand.

        Products referencing the brand lose the reference. A brand that
        still owns collections cannot be deleted.

        Raises:
            NotFoundError: If the brand does not exist.
            ConflictError: If a collection references the brand.
        """
        brand = await self.get_brand(brand_id)

        if await self.collections.exists_for_brand(brand_id):
            raise ConflictError(
                "Brand is referenced by one or more collections",
                details={"brand_id": brand_id},
                error_code="BRAND_IN_USE",
            )

        await self.brands.delete(brand)
        await self.session.commit()

        logger.info("Brand deleted", brand_id=brand_id)

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    async def list_collections(self) -> list[Collection]:
        """Get all collections with their brand."""
        return list(await self.collections.list_with_brand())

    async def get_collection(self, collection_id: int) -> Collection:
        """Get a collection.

        Raises:
            NotFoundError: If the collection does not exist.
        """
        collection = await self.collections.get_by_id(collection_id)
        if collection is None:
            raise NotFoundError("Collection", collection_id)
        return collection

    async def create_collection(self, data: CollectionData) -> Collection:
        """Create a collection under an existing brand.

        Raises:
            ValidationError: If the brand does not exist.
        """
        await self._check_brand(data.brand_id)

        collection = await self.collections.add(
            Collection(brand_id=data.brand_id, code=data.code, description=data.description)
        )
        await self.session.commit()

        logger.info(
            "Collection created",
            collection_id=collection.id,
            brand_id=collection.brand_id,
        )
        return collection

    async def update_collection(self, collection_id: int, data: CollectionData) -> None:
        """Update a collection.

        Raises:
            ValidationError: On ID mismatch or unknown brand.
            NotFoundError: If the collection does not exist.
        """
        if data.id != collection_id:
            raise ValidationError(
                "Id mismatch",
                details={"path_id": collection_id, "body_id": data.id},
            )
        await self.get_collection(collection_id)
        await self._check_brand(data.brand_id)

        await self.collections.update(
            collection_id,
            brand_id=data.brand_id,
            code=data.code,
            description=data.description,
        )
        await self.session.commit()

        logger.info("Collection updated", collection_id=collection_id)

    async def delete_collection(self, collection_id: int) -> None:
        """Delete a collection; referencing products lose the reference.

        Raises:
            NotFoundError: If the collection does not exist.
        """
        collection = await self.get_collection(collection_id)

        await self.collections.delete(collection)
        await self.session.commit()

        logger.info("Collection deleted", collection_id=collection_id)

    async def _check_brand(self, brand_id: int) -> None:
        if not await self.brands.exists(Brand.id == brand_id):
            raise ValidationError("Brand not found", details={"brand_id": brand_id})
