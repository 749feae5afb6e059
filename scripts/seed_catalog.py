#!/usr/bin/env python3
"""Seed catalog script.

Creates the catalog tables and inserts a small set of brands,
collections and products through the catalog service, so the same
validation rules apply as for API clients.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --with-files
    python scripts/seed_catalog.py --tables-only
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_api.catalog.service import (
    BrandData,
    CatalogService,
    CollectionData,
    FileAttachItem,
    ProductData,
)
from catalog_api.domain.exceptions import ConflictError
from catalog_api.infrastructure.database import async_session_factory, create_tables

SAMPLE_BRANDS = [
    ("ACME", "Acme Furniture"),
    ("NWD", "Northwind Living"),
]

SAMPLE_COLLECTIONS = [
    ("ACME", "OFFICE", "Office seating"),
    ("ACME", "OUTDOOR", "Garden and terrace"),
    ("NWD", "NORDIC", "Nordic line"),
]

SAMPLE_PRODUCTS = [
    ("OFFICE", "CH-001", "Ergonomic chair", "Mesh back, adjustable armrests"),
    ("OFFICE", "DK-010", "Standing desk", None),
    ("OUTDOOR", "BN-200", "Teak bench", "Oiled teak, seats three"),
    ("NORDIC", "LM-030", "Floor lamp", None),
]


async def seed(with_files: bool) -> dict[str, int]:
    """Insert the sample catalog.

    Nothing is inserted when brands already exist. Products whose code
    is already taken are skipped.

    Args:
        with_files: Also link one image path per product.

    Returns:
        Counts of created rows.
    """
    counts = {"brands": 0, "collections": 0, "products": 0, "skipped": 0, "files": 0}

    async with async_session_factory() as session:
        service = CatalogService(session)

        if await service.list_brands():
            counts["skipped"] = len(SAMPLE_PRODUCTS)
            return counts

        brand_ids: dict[str, int] = {}
        for code, description in SAMPLE_BRANDS:
            brand = await service.create_brand(BrandData(code=code, description=description))
            brand_ids[code] = brand.id
            counts["brands"] += 1

        collection_ids: dict[str, int] = {}
        for brand_code, code, description in SAMPLE_COLLECTIONS:
            collection = await service.create_collection(
                CollectionData(
                    brand_id=brand_ids[brand_code],
                    code=code,
                    description=description,
                )
            )
            collection_ids[code] = collection.id
            counts["collections"] += 1

        for collection_code, code, description, extended in SAMPLE_PRODUCTS:
            collection_id = collection_ids[collection_code]
            collection = await service.get_collection(collection_id)
            try:
                product = await service.create_product(
                    ProductData(
                        code=code,
                        description=description,
                        extended_description=extended,
                        brand_id=collection.brand_id,
                        collection_id=collection_id,
                    )
                )
            except ConflictError:
                counts["skipped"] += 1
                continue
            counts["products"] += 1

            if with_files:
                result = await service.attach_files(
                    product.id,
                    [FileAttachItem(absolute_path=f"/srv/catalog/images/{code.lower()}.png")],
                )
                counts["files"] += result.linked_count

    return counts


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Create catalog tables and seed sample data",
    )
    parser.add_argument(
        "--tables-only",
        action="store_true",
        help="Only create the tables",
    )
    parser.add_argument(
        "--with-files",
        action="store_true",
        help="Link a sample image path to every seeded product",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)

    # Create tables
    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    if args.tables_only:
        return

    print("Seeding sample catalog...")
    result = await seed(with_files=args.with_files)

    print(f"  ✓ Brands: {result['brands']}")
    print(f"  ✓ Collections: {result['collections']}")
    print(f"  ✓ Products: {result['products']} (skipped {result['skipped']} existing)")
    print(f"  ✓ File links: {result['files']}")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
