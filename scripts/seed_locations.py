#!/usr/bin/env python3
"""
Location Seeding Script

Loads locations from a JSON file into the database configured in .env.

Usage:
    python3 scripts/seed_locations.py data/locations.json [--create-tables]

File format:
    [
        {"name": "France", "population": 68000000},
        {"name": "Paris", "population": 2000000, "parent": "France"}
    ]

Environment Variables (set in .env):
    POSTGRES_HOST, POSTGRES_PORT, POSTGRES_DB, POSTGRES_USER, POSTGRES_PASSWORD
    or DATABASE_URL_OVERRIDE
"""
from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# Project root
project_root = Path(__file__).parent.parent

# Load .env before settings are read
load_dotenv(project_root / ".env")

from lineage.database import create_session_factory, get_database_url, init_models
from lineage.errors import LocationServiceError
from lineage.observability import setup_logging
from lineage.seed import load_entries, seed_locations
from lineage.services import LocationService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the locations table from JSON")
    parser.add_argument("file", type=Path, help="JSON array of {name, population, parent?}")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create the locations table if it does not exist",
    )
    return parser.parse_args(argv)


async def seed(file: Path, create_tables: bool) -> int:
    """Seed the database and print a summary. Returns the exit code."""
    entries = load_entries(file)

    session_factory, engine = create_session_factory(get_database_url())
    try:
        if create_tables:
            await init_models(engine)

        async with session_factory() as session:
            report = await seed_locations(LocationService(session), entries)
    finally:
        await engine.dispose()

    print("🌍 Location seeding")
    print("=" * 40)
    print(f"  Entries:   {report.total}")
    print(f"  Created:   {len(report.created)}")
    print(f"  Existing:  {len(report.conflicts)}")
    print(f"  Invalid:   {len(report.invalid)}")
    print("=" * 40)

    for name in report.invalid:
        print(f"⚠️  Invalid entry: {name}")

    return 1 if report.invalid else 0


def main():
    args = parse_args()
    setup_logging(service_name="seed", json_format=False)
    try:
        sys.exit(asyncio.run(seed(args.file, args.create_tables)))
    except KeyboardInterrupt:
        print("\n\n⚠️  Cancelled by user")
        sys.exit(1)
    except (OSError, ValueError, LocationServiceError) as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
