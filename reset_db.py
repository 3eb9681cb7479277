# reset_db.py
"""
Database reset utility - drops the lending tables and recreates them fresh.

Usage:
    python reset_db.py           # Reset only
    python reset_db.py --seed    # Reset + seed mock data
"""
import argparse

import psycopg2
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from sqlalchemy import create_engine

from config import settings
from db_base import Base

# Import all models to register them with Base.metadata
import db_models  # noqa: F401


def get_sync_url(async_url: str) -> str:
    """Convert async database URL to sync URL for psycopg2."""
    return async_url.replace("postgresql+asyncpg://", "postgresql://")


def list_public_tables(cur) -> list[str]:
    cur.execute("""
        SELECT tablename FROM pg_tables
        WHERE schemaname = 'public'
        ORDER BY tablename
    """)
    return [row[0] for row in cur.fetchall()]


def reset_database() -> bool:
    """Drop all tables and recreate them from the models."""
    sync_url = get_sync_url(settings.DATABASE_URL)

    print("=" * 60)
    print("EQUIPMENT LENDING - DATABASE RESET")
    print("=" * 60)
    print(f"\nConnecting to: {sync_url.split('@')[1] if '@' in sync_url else sync_url}")

    conn = psycopg2.connect(sync_url)
    conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
    cur = conn.cursor()

    try:
        tables = list_public_tables(cur)
        if tables:
            print(f"\nDropping {len(tables)} tables: {', '.join(tables)}")
            for table in tables:
                cur.execute(f'DROP TABLE IF EXISTS "{table}" CASCADE')
        else:
            print("\nNo existing tables found.")

        print("\nCreating tables from SQLAlchemy models...")
        sync_engine = create_engine(sync_url)
        Base.metadata.create_all(bind=sync_engine)
        sync_engine.dispose()

        new_tables = list_public_tables(cur)
        print(f"Created {len(new_tables)} tables: {', '.join(new_tables)}")

        # The open-loan guard lives in the database; make sure it made it
        cur.execute("SELECT 1 FROM pg_indexes WHERE indexname = 'uq_borrows_open_asset'")
        if cur.fetchone() is None:
            print("\nWARNING: open-loan index uq_borrows_open_asset is missing")

        print("\nDATABASE RESET COMPLETE")
        return True

    except psycopg2.Error as e:
        print(f"\nERROR: {e}")
        return False

    finally:
        cur.close()
        conn.close()


def seed_data():
    """Run the seed_mock_data script."""
    print("\nSeeding database with mock data...\n")
    from seed_mock_data import seed_database
    seed_database()


def main():
    parser = argparse.ArgumentParser(
        description="Reset database - drop all tables and recreate fresh"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Also seed the database with mock data after reset"
    )
    parser.add_argument(
        "--seed-only",
        action="store_true",
        help="Only seed data (skip table reset)"
    )

    args = parser.parse_args()

    if args.seed_only:
        seed_data()
        return

    success = reset_database()

    if success and args.seed:
        seed_data()
    elif success:
        print("\nTo seed mock data, run:")
        print("  python reset_db.py --seed")


if __name__ == "__main__":
    main()
