"""SQLAlchemy models for the product catalog.

Defines the Brand, Collection, Product, File and ProductFile tables.
Entities carry foreign-key columns only; related rows are loaded
explicitly by the repositories (relationships are ``lazy="raise"``).
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from catalog_api.infrastructure.database import Base

CODE_MAX_LENGTH = 50
TEXT_MAX_LENGTH = 250


class Brand(Base):
    """Brand owning collections and products.

    Attributes:
        id: Surrogate identifier.
        code: Short brand code.
        description: Brand description.
    """

    __tablename__ = "Brand"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(CODE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Brand(id={self.id}, code={self.code})>"


class Collection(Base):
    """Collection of products within a brand.

    Attributes:
        id: Surrogate identifier.
        brand_id: Owning brand (required, deletion of the brand is restricted).
        code: Short collection code.
        description: Collection description.
    """

    __tablename__ = "Collection"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    brand_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("Brand.id", ondelete="RESTRICT", name="fk_collection_brand"),
        nullable=False,
        index=True,
    )
    code: Mapped[str] = mapped_column(String(CODE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False)

    # Relationships
    brand: Mapped["Brand"] = relationship("Brand", lazy="raise")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Collection(id={self.id}, code={self.code}, brand_id={self.brand_id})>"


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Surrogate identifier.
        code: Product code, unique across the catalog.
        description: Short description.
        extended_description: Optional long description.
        created_at: Insertion timestamp.
        brand_id: Optional brand, nulled when the brand is deleted.
        collection_id: Optional collection, nulled when the collection is deleted.
    """

    __tablename__ = "Product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(CODE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False)
    extended_description: Mapped[str | None] = mapped_column(
        String(TEXT_MAX_LENGTH), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    brand_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("Brand.id", ondelete="SET NULL", name="fk_product_brand"),
        nullable=True,
        index=True,
    )
    collection_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("Collection.id", ondelete="SET NULL", name="fk_product_collection"),
        nullable=True,
        index=True,
    )

    # Relationships
    brand: Mapped["Brand | None"] = relationship("Brand", lazy="raise")
    collection: Mapped["Collection | None"] = relationship("Collection", lazy="raise")
    # Read-only: links are written through ProductFile rows and removed by
    # the database cascade.
    file_links: Mapped[list["ProductFile"]] = relationship(
        "ProductFile",
        viewonly=True,
        lazy="raise",
        order_by="ProductFile.id",
    )

    __table_args__ = (UniqueConstraint("code", name="uq_product_code"),)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, code={self.code})>"


class File(Base):
    """Metadata record pointing at a file on disk.

    Only the path is stored; file content is never read or written.

    Attributes:
        id: Surrogate identifier.
        file_name: Display name, usually the last path segment.
        absolute_path: Absolute path, unique across the catalog.
    """

    __tablename__ = "File"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_name: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False)
    absolute_path: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False)

    __table_args__ = (UniqueConstraint("absolute_path", name="uq_file_absolute_path"),)

    def __repr__(self) -> str:
        """String representation."""
        return f"<File(id={self.id}, absolute_path={self.absolute_path})>"


class ProductFile(Base):
    """Link between a product and a file.

    Attributes:
        id: Surrogate identifier.
        product_id: Linked product (cascade on delete).
        file_id: Linked file (cascade on delete).
    """

    __tablename__ = "ProductFile"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("Product.id", ondelete="CASCADE", name="fk_productfile_product"),
        nullable=False,
        index=True,
    )
    file_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("File.id", ondelete="CASCADE", name="fk_productfile_file"),
        nullable=False,
        index=True,
    )

    # Relationships
    file: Mapped["File"] = relationship("File", lazy="raise")

    __table_args__ = (
        UniqueConstraint("product_id", "file_id", name="uq_productfile_product_file"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductFile(product_id={self.product_id}, file_id={self.file_id})>"
