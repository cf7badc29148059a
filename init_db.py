"""Initialize database schema for the advocates directory.

Creates the advocates table and its trigram indexes, optionally seeding
the sample rows. Run this before starting the API server.
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import text

from solace.config import settings
from solace.db import AsyncSessionMaker, engine
from solace.models import Base
from solace.pipelines.seed import seed_advocates


async def init_database(*, drop: bool = True, seed: bool = False):
    """Create all database tables."""
    if engine is None:
        raise RuntimeError("DB_URL / DATABASE_URL is not set")

    print(f"Initializing database: {engine.url.render_as_string(hide_password=True)}")
    print("Creating tables...")

    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            # Trigram indexes back the ILIKE '%term%' search
            await conn.execute(text("CREATE EXTENSION IF NOT EXISTS pg_trgm"))
            print("✓ Enabled pg_trgm extension")

        if drop:
            # Drop all tables (for clean start)
            await conn.run_sync(Base.metadata.drop_all)
            print("✓ Dropped existing tables")

        # Create all tables
        await conn.run_sync(Base.metadata.create_all)
        print("✓ Created all tables")

    if seed:
        async with AsyncSessionMaker() as session:
            inserted = await seed_advocates(session)
        print(f"✓ Seeded {len(inserted)} advocates")

    print("\n✅ Database initialization complete!")
    print(f"Tables created: {', '.join(Base.metadata.tables.keys())}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f"Initialize the {settings.app_name} database")
    parser.add_argument("--seed", action="store_true", help="Insert the sample advocates")
    parser.add_argument("--keep", action="store_true", help="Keep existing tables instead of dropping them")
    return parser.parse_args(argv)


async def main():
    """Main entry point."""
    args = parse_args()
    try:
        await init_database(drop=not args.keep, seed=args.seed)
    except Exception as e:
        print(f"\n❌ Error initializing database: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
