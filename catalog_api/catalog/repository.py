"""Catalog repositories for database operations.

Provides CRUD primitives for every catalog table plus the joins the
catalog service needs. Repositories flush but never commit; the service
decides where a unit of work ends.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_api.catalog.models import Brand, Collection, File, Product, ProductFile

ModelT = TypeVar("ModelT", Brand, Collection, File, Product, ProductFile)


class Repository(Generic[ModelT]):
    """Generic repository over a single mapped table.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            product = await repo.get_by_id(1)
            if await repo.exists(Product.code == "P1"):
                ...
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_by_id(self, entity_id: int, *options: Any) -> ModelT | None:
        """Get entity by ID.

        Args:
            entity_id: Primary key value.
            *options: Loader options (e.g. selectinload) to apply.

        Returns:
            Entity if found, None otherwise.
        """
        query = select(self.model).where(self.model.id == entity_id)
        if options:
            # Entities already in the session are refreshed so the options apply
            query = query.options(*options).execution_options(populate_existing=True)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_all(self, *options: Any) -> Sequence[ModelT]:
        """Get all entities ordered by ID.

        Args:
            *options: Loader options for eager-loading relations.

        Returns:
            Sequence of entities.
        """
        query = select(self.model).order_by(self.model.id)
        if options:
            query = query.options(*options)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def find_one(self, *criteria: Any) -> ModelT | None:
        """Get the first entity matching all criteria.

        Args:
            *criteria: SQLAlchemy boolean expressions.

        Returns:
            Entity if found, None otherwise.
        """
        query = select(self.model).where(and_(*criteria)).order_by(self.model.id).limit(1)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def exists(self, *criteria: Any) -> bool:
        """Check whether any entity matches all criteria.

        Args:
            *criteria: SQLAlchemy boolean expressions.

        Returns:
            True if at least one row matches.
        """
        query = select(exists().where(and_(*criteria)))
        result = await self.session.execute(query)
        return bool(result.scalar())

    async def add(self, entity: ModelT) -> ModelT:
        """Insert an entity and assign its ID.

        Args:
            entity: Entity to insert.

        Returns:
            The inserted entity with its generated ID.
        """
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def update(self, entity_id: int, **values: Any) -> None:
        """Write the given column values to an existing row.

        Args:
            entity_id: Primary key of the row to update.
            **values: Column values to write.
        """
        if not values:
            return
        await self.session.execute(
            update(self.model).where(self.model.id == entity_id).values(**values)
        )

    async def delete(self, entity: ModelT) -> None:
        """Delete an entity.

        Args:
            entity: Entity to delete.
        """
        await self.session.delete(entity)
        await self.session.flush()

    async def delete_all(self, entities: Sequence[ModelT]) -> int:
        """Delete several entities in one flush.

        Args:
            entities: Entities to delete.

        Returns:
            Number of deleted entities.
        """
        for entity in entities:
            await self.session.delete(entity)
        await self.session.flush()
        return len(entities)


class BrandRepository(Repository[Brand]):
    """Repository for Brand rows."""

    model = Brand


class CollectionRepository(Repository[Collection]):
    """Repository for Collection rows."""

    model = Collection

    async def list_with_brand(self) -> Sequence[Collection]:
        """Get all collections with their brand loaded."""
        return await self.find_all(selectinload(Collection.brand))

    async def exists_for_brand(self, brand_id: int) -> bool:
        """Check whether any collection belongs to the brand."""
        return await self.exists(Collection.brand_id == brand_id)


class ProductRepository(Repository[Product]):
    """Repository for Product rows.

    Handles the eager loading of brand, collection and file links
    used by the read endpoints.
    """

    model = Product

    async def list_with_relations(self) -> Sequence[Product]:
        """Get all products with brand and collection loaded.

        Returns:
            Sequence of products.
        """
        return await self.find_all(
            selectinload(Product.brand),
            selectinload(Product.collection),
        )

    async def get_with_relations(self, product_id: int) -> Product | None:
        """Get product with brand, collection and file links loaded.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        return await self.get_by_id(
            product_id,
            selectinload(Product.brand),
            selectinload(Product.collection),
            selectinload(Product.file_links).selectinload(ProductFile.file),
        )

    async def code_exists(
        self,
        code: str,
        exclude_id: int | None = None,
        ignore_case: bool = False,
    ) -> bool:
        """Check whether a product code is already taken.

        Args:
            code: Product code.
            exclude_id: Product ID to ignore, used when updating.
            ignore_case: Compare lower-cased codes instead of exact ones.

        Returns:
            True if another product uses the code.
        """
        if ignore_case:
            criteria = [func.lower(Product.code) == code.lower()]
        else:
            criteria = [Product.code == code]
        if exclude_id is not None:
            criteria.append(Product.id != exclude_id)
        return await self.exists(*criteria)


class FileRepository(Repository[File]):
    """Repository for File metadata rows."""

    model = File

    async def get_by_path(self, absolute_path: str) -> File | None:
        """Get file by exact absolute path.

        Args:
            absolute_path: Absolute path of the file.

        Returns:
            File if found, None otherwise.
        """
        return await self.find_one(File.absolute_path == absolute_path)


class ProductFileRepository(Repository[ProductFile]):
    """Repository for product-file links."""

    model = ProductFile

    async def get_link(self, product_id: int, file_id: int) -> ProductFile | None:
        """Get the link between a product and a file."""
        return await self.find_one(
            ProductFile.product_id == product_id,
            ProductFile.file_id == file_id,
        )

    async def link_exists(self, product_id: int, file_id: int) -> bool:
        """Check whether a product is already linked to a file."""
        return await self.exists(
            ProductFile.product_id == product_id,
            ProductFile.file_id == file_id,
        )

    async def find_links(
        self,
        product_id: int,
        file_ids: Sequence[int],
    ) -> Sequence[ProductFile]:
        """Get the links of a product to any of the given files.

        Args:
            product_id: Product ID.
            file_ids: Candidate file IDs.

        Returns:
            Matching links.
        """
        query = (
            select(ProductFile)
            .where(
                and_(
                    ProductFile.product_id == product_id,
                    ProductFile.file_id.in_(list(file_ids)),
                )
            )
            .order_by(ProductFile.id)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def list_for_product(self, product_id: int) -> Sequence[ProductFile]:
        """Get all links of a product with their files loaded.

        Args:
            product_id: Product ID.

        Returns:
            Links ordered by creation.
        """
        query = (
            select(ProductFile)
            .where(ProductFile.product_id == product_id)
            .options(selectinload(ProductFile.file))
            .order_by(ProductFile.id)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def is_referenced(self, file_id: int) -> bool:
        """Check whether any product still links to the file."""
        return await self.exists(ProductFile.file_id == file_id)
