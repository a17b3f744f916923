#!/usr/bin/env python3
"""
Database Reset Script

WARNING: DESTRUCTIVE. Every run permanently deletes all rows in the
articles, article_media, comments and admins tables.

This script drops the four article publishing tables, recreates them from the
SQL files in sql/schema/, and inserts one sample row into each.

Usage:
    python scripts/database/reset_database.py

Connection settings come from the environment (or a .env file at the project
root): POSTGRES_HOST, POSTGRES_PORT, POSTGRES_DB, POSTGRES_USER,
POSTGRES_PASSWORD. The seeded admin uses SEED_ADMIN_USERNAME and
SEED_ADMIN_PASSWORD; the password is stored as a salted hash.

This will:
1. Drop article_media, comments, articles and admins (missing tables are ignored)
2. Create all tables with their foreign keys and indexes
3. Insert a sample admin, article, media row and comment
4. Print a confirmation message, or exit with status 1 on the first error
"""

import os
import sys

from dotenv import load_dotenv

sys.path.append(os.path.join(os.path.dirname(__file__), "..", ".."))

# Load .env before local imports that need env vars
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", ".env"))

from config.settings import config
from scripts.database.schema_manager import SchemaManager, get_postgres_engine
from scripts.database.seed_schemas import build_sample_data
from utils.logging import setup_reset_logging

CONFIRMATION_MESSAGE = "Database tables created and sample data inserted."


def main() -> int:
    """Main function to reset the database."""
    logger = setup_reset_logging()

    try:
        logger.info(
            f"Starting database reset of '{config.DB_NAME}' on {config.DB_HOST}:{config.DB_PORT}..."
        )

        sample = build_sample_data(
            config.SEED_ADMIN_USERNAME, config.SEED_ADMIN_PASSWORD
        )

        engine = get_postgres_engine()
        try:
            manager = SchemaManager(engine, logger)
            manager.reset_database(sample)

            # The reset has committed; listing tables is informational only
            try:
                tables = manager.get_table_names()
                logger.info(f"Tables now present: {', '.join(tables)}")
            except Exception as e:
                logger.warning(f"⚠️  Could not list tables after reset: {e}")
        finally:
            engine.dispose()

    except Exception as e:
        logger.error(f"❌ Database reset failed: {e}")
        return 1

    print(CONFIRMATION_MESSAGE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
