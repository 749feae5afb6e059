"""Tests for the catalog service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.service import (
    ALREADY_LINKED,
    BrandData,
    CatalogService,
    CollectionData,
    FileAttachItem,
    ProductData,
    file_name_from_path,
)
from catalog_api.domain.exceptions import ConflictError, NotFoundError, ValidationError


class TestFileNameFromPath:
    """Tests for deriving file names from paths."""

    def test_unix_path(self) -> None:
        """Should return the last segment of a slash path."""
        assert file_name_from_path("/x/y/z.png") == "z.png"

    def test_windows_path(self) -> None:
        """Should treat backslashes as separators."""
        assert file_name_from_path("C:\\img\\front.jpg") == "front.jpg"

    def test_plain_name(self) -> None:
        """A bare name is its own file name."""
        assert file_name_from_path("photo.png") == "photo.png"

    def test_trailing_separator(self) -> None:
        """A path ending with a separator has no file name."""
        assert file_name_from_path("/img/") == ""


class TestProductService:
    """Tests for product operations."""

    @pytest.mark.asyncio
    async def test_create_product_assigns_id(self, service: CatalogService) -> None:
        """Should insert the product and assign an ID."""
        product = await service.create_product(ProductData(code="P1", description="d"))

        assert product.id is not None
        assert product.created_at is not None

    @pytest.mark.asyncio
    async def test_create_duplicate_code(self, service: CatalogService) -> None:
        """Should raise ConflictError for an existing code."""
        await service.create_product(ProductData(code="P1", description="d"))

        with pytest.raises(ConflictError) as exc_info:
            await service.create_product(ProductData(code="P1", description="x"))
        assert exc_info.value.error_code == "DUPLICATE_PRODUCT_CODE"

    @pytest.mark.asyncio
    async def test_update_id_mismatch(self, service: CatalogService) -> None:
        """Should reject an update whose body ID differs."""
        product = await service.create_product(ProductData(code="P1", description="d"))

        with pytest.raises(ValidationError, match="Id mismatch"):
            await service.update_product(
                product.id,
                ProductData(code="P1", description="d", id=product.id + 1),
            )

    @pytest.mark.asyncio
    async def test_update_to_code_of_other_product_in_other_case(
        self, service: CatalogService
    ) -> None:
        """Should raise ConflictError when another product has the code in any case."""
        await service.create_product(ProductData(code="AAA", description="d"))
        other = await service.create_product(ProductData(code="BBB", description="d"))

        with pytest.raises(ConflictError):
            await service.update_product(
                other.id,
                ProductData(code="aaa", description="d", id=other.id),
            )

    @pytest.mark.asyncio
    async def test_update_missing_product(self, service: CatalogService) -> None:
        """Should raise NotFoundError for an unknown product."""
        with pytest.raises(NotFoundError):
            await service.update_product(5, ProductData(code="P1", description="d", id=5))

    @pytest.mark.asyncio
    async def test_update_keeps_created_at(
        self, service: CatalogService, session: AsyncSession
    ) -> None:
        """Should change fields but never the creation time."""
        product = await service.create_product(ProductData(code="P1", description="d"))
        product_id = product.id
        created_at = product.created_at

        await service.update_product(
            product_id,
            ProductData(code="P2", description="new", id=product_id),
        )

        session.expire_all()
        updated = await service.get_product(product_id)
        assert updated.code == "P2"
        assert updated.description == "new"
        assert updated.created_at.replace(tzinfo=None) == created_at.replace(tzinfo=None)

    @pytest.mark.asyncio
    async def test_get_product_loads_relations(self, service: CatalogService) -> None:
        """Brand, collection and file links should be loaded."""
        brand = await service.create_brand(BrandData(code="B", description="Brand"))
        collection = await service.create_collection(
            CollectionData(brand_id=brand.id, code="C", description="Coll")
        )
        product = await service.create_product(
            ProductData(
                code="P1",
                description="d",
                brand_id=brand.id,
                collection_id=collection.id,
            )
        )
        await service.attach_files(product.id, [FileAttachItem(absolute_path="/a.png")])

        loaded = await service.get_product(product.id)
        assert loaded.brand.code == "B"
        assert loaded.collection.code == "C"
        assert [link.file.file_name for link in loaded.file_links] == ["a.png"]


class TestAttachFiles:
    """Tests for linking files to products."""

    @pytest.mark.asyncio
    async def test_attach_reports_each_item(self, service: CatalogService) -> None:
        """Should report linked and already linked items in order."""
        product = await service.create_product(ProductData(code="P1", description="d"))

        result = await service.attach_files(
            product.id,
            [
                FileAttachItem(absolute_path="/img/a.png"),
                FileAttachItem(absolute_path="/img/a.png"),
                FileAttachItem(absolute_path="/img/b.png", file_name="Back"),
            ],
        )

        assert result.product_id == product.id
        assert result.linked_count == 2
        assert [a.linked for a in result.added] == [True, False, True]
        assert result.added[1].reason == ALREADY_LINKED
        assert result.added[2].file_name == "Back"

    @pytest.mark.asyncio
    async def test_attach_prefers_file_id_over_path(self, service: CatalogService) -> None:
        """A given file ID wins over the path of the same item."""
        product = await service.create_product(ProductData(code="P1", description="d"))
        first = await service.attach_files(product.id, [FileAttachItem(absolute_path="/a.png")])
        other = await service.create_product(ProductData(code="P2", description="d"))

        result = await service.attach_files(
            other.id,
            [FileAttachItem(file_id=first.added[0].id, absolute_path="/ignored.png")],
        )

        assert result.added[0].absolute_path == "/a.png"
        assert len(await service.list_files()) == 1

    @pytest.mark.asyncio
    async def test_attach_underivable_name_rejected(self, service: CatalogService) -> None:
        """A path without a last segment needs an explicit name."""
        product = await service.create_product(ProductData(code="P1", description="d"))

        with pytest.raises(ValidationError):
            await service.attach_files(product.id, [FileAttachItem(absolute_path="/img/")])

    @pytest.mark.asyncio
    async def test_attach_unknown_product(self, service: CatalogService) -> None:
        """Should raise NotFoundError for an unknown product."""
        with pytest.raises(NotFoundError):
            await service.attach_files(9, [FileAttachItem(absolute_path="/a.png")])


class TestRemoveFiles:
    """Tests for unlinking files."""

    @pytest.mark.asyncio
    async def test_remove_files_returns_count(self, service: CatalogService) -> None:
        """Should unlink only the matched links and count them."""
        product = await service.create_product(ProductData(code="P1", description="d"))
        await service.attach_files(
            product.id,
            [FileAttachItem(absolute_path="/a.png"), FileAttachItem(absolute_path="/b.png")],
        )

        removed = await service.remove_files(product.id, [1, 1, 99])

        assert removed == 1
        remaining = await service.list_product_files(product.id)
        assert [f.file_id for f in remaining] == [2]

    @pytest.mark.asyncio
    async def test_remove_files_requires_ids(self, service: CatalogService) -> None:
        """Should reject an empty ID list."""
        with pytest.raises(ValidationError):
            await service.remove_files(1, [])

    @pytest.mark.asyncio
    async def test_remove_file_orphan_cleanup(self, service: CatalogService) -> None:
        """Should delete the record once the last link is gone."""
        product = await service.create_product(ProductData(code="P1", description="d"))
        await service.attach_files(product.id, [FileAttachItem(absolute_path="/a.png")])

        await service.remove_file(product.id, 1, remove_orphan=True)

        with pytest.raises(NotFoundError):
            await service.get_file(1)


class TestBrandService:
    """Tests for brand and collection operations."""

    @pytest.mark.asyncio
    async def test_delete_brand_in_use(self, service: CatalogService) -> None:
        """A brand with collections cannot be deleted."""
        brand = await service.create_brand(BrandData(code="B", description="Brand"))
        await service.create_collection(
            CollectionData(brand_id=brand.id, code="C", description="Coll")
        )

        with pytest.raises(ConflictError) as exc_info:
            await service.delete_brand(brand.id)
        assert exc_info.value.error_code == "BRAND_IN_USE"

    @pytest.mark.asyncio
    async def test_create_collection_unknown_brand(self, service: CatalogService) -> None:
        """Should reject a collection for a missing brand."""
        with pytest.raises(ValidationError, match="Brand not found"):
            await service.create_collection(
                CollectionData(brand_id=3, code="C", description="Coll")
            )
