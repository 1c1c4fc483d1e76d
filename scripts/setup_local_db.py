#!/usr/bin/env python
"""Setup a local database for Dairycart.

This script:
1. Creates every table defined in dairycart.models
2. Optionally seeds an example product with attributes

Usage:
    # Create tables
    python scripts/setup_local_db.py

    # Drop and recreate tables
    python scripts/setup_local_db.py --reset

    # Create tables and an example product
    python scripts/setup_local_db.py --seed

    # List tables and their row counts
    python scripts/setup_local_db.py --list-tables
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import text

from dairycart.core.creation_pipeline import CreationPipeline
from dairycart.core.errors import DairycartError
from dairycart.infra.database import (
    close_db_engine,
    get_db_session,
    get_engine,
    get_session_factory,
)
from dairycart.infra.logging import get_logger, setup_logging
from dairycart.models import Base
from dairycart.schemas.product import ProductCreationInput

setup_logging()
logger = get_logger(__name__)


EXAMPLE_PRODUCT = {
    "sku": "skateboard",
    "name": "Skateboard",
    "upc": "1234567890",
    "quantity": 123,
    "price": 12.34,
    "cost": 5.0,
    "description": "This is a skateboard. Please wear a helmet.",
    "taxable": True,
    "product_weight": 8,
    "product_height": 7,
    "product_width": 6,
    "product_length": 5,
    "package_weight": 4,
    "package_height": 3,
    "package_width": 2,
    "package_length": 1,
    "attributes_and_values": [
        {"name": "color", "values": ["red", "green", "blue"]},
    ],
}


async def create_tables(reset: bool = False) -> bool:
    """Create all tables, optionally dropping them first."""
    try:
        async with get_engine().begin() as conn:
            if reset:
                await conn.run_sync(Base.metadata.drop_all)
                logger.info("Tables dropped")
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables ensured", tables=sorted(Base.metadata.tables))
        return True
    except Exception as e:
        logger.error("Failed to create tables", error=str(e))
        return False


async def seed_example_product() -> bool:
    """Create the example product through the creation pipeline."""
    data = ProductCreationInput.model_validate(EXAMPLE_PRODUCT)

    async with get_db_session() as session:
        result = await session.execute(
            text("SELECT EXISTS(SELECT 1 FROM products WHERE sku = :sku AND archived_on IS NULL)"),
            {"sku": data.sku},
        )
        if result.scalar_one():
            logger.info("Example product already exists", sku=data.sku)
            return True

    try:
        created = await CreationPipeline(get_session_factory()).create_product(data)
    except DairycartError as e:
        logger.error("Failed to seed example product", error=e.message)
        return False

    logger.info("Example product created", sku=data.sku, product_id=created.product.id)
    return True


async def list_tables() -> list[tuple[str, int]]:
    """Row count (archived rows included) for every table."""
    counts = []
    async with get_db_session() as session:
        for name in sorted(Base.metadata.tables):
            result = await session.execute(text(f"SELECT count(*) FROM {name}"))
            counts.append((name, result.scalar_one()))
    return counts


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Setup a local database for Dairycart",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop all tables before creating them",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Create an example product with attributes",
    )
    parser.add_argument(
        "--list-tables",
        action="store_true",
        help="List tables and their row counts",
    )

    return parser.parse_args()


async def main() -> int:
    """Main entry point."""
    args = parse_args()

    try:
        if args.list_tables:
            print("\nTables:")
            print("-" * 40)
            for name, count in await list_tables():
                print(f"  {name}: {count} rows")
            return 0

        if not await create_tables(reset=args.reset):
            return 1

        if args.seed and not await seed_example_product():
            return 1

        print("\nLocal database ready")
        return 0
    finally:
        await close_db_engine()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
