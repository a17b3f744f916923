#!/usr/bin/env python3
"""
Schema Verification Script

This script verifies that the article publishing schema has been reset
correctly.

Usage:
    python scripts/database/verify_schema.py

This will:
1. Connect to the database
2. Verify all four tables exist
3. Check that media and comments cascade-delete with their article
4. Check the supporting indexes
5. Validate the sample rows and their article links
6. Flag admin passwords that are stored as plaintext
"""

import os
import sys

from dotenv import load_dotenv

sys.path.append(os.path.join(os.path.dirname(__file__), "..", ".."))

load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", ".env"))

from sqlalchemy import inspect, text

from scripts.database.schema_manager import SchemaManager, get_postgres_engine
from utils.logging import setup_verification_logging
from utils.passwords import is_password_hash

EXPECTED_TABLES = ["articles", "article_media", "comments", "admins"]

# (child table, child column, parent table, parent column)
EXPECTED_FOREIGN_KEYS = [
    ("article_media", "article_id", "articles", "id"),
    ("comments", "article_id", "articles", "id"),
]

EXPECTED_INDEXES = [
    ("articles", "idx_articles_bump_time"),
    ("article_media", "idx_article_media_article_id"),
    ("comments", "idx_comments_article_id"),
]


def verify_table_structure(engine, logger) -> bool:
    """Verify that all expected tables exist."""
    logger.info("🔍 Verifying table structure...")

    all_correct = True

    try:
        existing_tables = inspect(engine).get_table_names()

        for table_name in EXPECTED_TABLES:
            if table_name in existing_tables:
                logger.info(f"✅ Table {table_name} - Found")
            else:
                logger.error(f"❌ Table {table_name} - Missing")
                all_correct = False

    except Exception as e:
        logger.error(f"❌ Error checking tables: {e}")
        all_correct = False

    return all_correct


def verify_foreign_keys(engine, logger) -> bool:
    """Verify that child tables reference articles with ON DELETE CASCADE."""
    logger.info("🔍 Verifying foreign keys...")

    all_correct = True

    try:
        inspector = inspect(engine)

        for child, column, parent, parent_column in EXPECTED_FOREIGN_KEYS:
            label = f"{child}.{column} -> {parent}.{parent_column}"
            matches = [
                fk
                for fk in inspector.get_foreign_keys(child)
                if fk["constrained_columns"] == [column]
                and fk["referred_table"] == parent
                and fk["referred_columns"] == [parent_column]
            ]

            if not matches:
                logger.error(f"❌ {label} - Missing")
                all_correct = False
                continue

            ondelete = (matches[0].get("options") or {}).get("ondelete", "")
            if ondelete.upper() == "CASCADE":
                logger.info(f"✅ {label} ON DELETE CASCADE - Correct")
            else:
                logger.error(
                    f"❌ {label} ON DELETE {ondelete or 'NO ACTION'} - Expected CASCADE"
                )
                all_correct = False

    except Exception as e:
        logger.error(f"❌ Error checking foreign keys: {e}")
        all_correct = False

    return all_correct


def verify_indexes(engine, logger) -> bool:
    """Verify that indexes are properly created."""
    logger.info("🔍 Verifying indexes...")

    all_correct = True

    try:
        inspector = inspect(engine)

        for table_name, index_name in EXPECTED_INDEXES:
            index_names = [idx["name"] for idx in inspector.get_indexes(table_name)]
            if index_name in index_names:
                logger.info(f"✅ {table_name}.{index_name} - Found")
            else:
                logger.error(f"❌ {table_name}.{index_name} - Missing")
                all_correct = False

    except Exception as e:
        logger.error(f"❌ Error checking indexes: {e}")
        all_correct = False

    return all_correct


def verify_sample_data(engine, logger) -> bool:
    """Verify one sample row per table, with media and comment linked to the article."""
    logger.info("🔍 Verifying sample data...")

    all_correct = True

    try:
        manager = SchemaManager(engine, logger)

        for table_name in EXPECTED_TABLES:
            row_count = manager.get_table_info(table_name)["row_count"]
            if row_count == 1:
                logger.info(f"✅ {table_name}: 1 row")
            else:
                logger.error(f"❌ {table_name}: {row_count} rows - Expected 1")
                all_correct = False

        with engine.connect() as conn:
            article_id = conn.execute(text("SELECT MIN(id) FROM articles")).scalar()

            for child in ("article_media", "comments"):
                orphans = conn.execute(
                    text(
                        f"SELECT COUNT(*) FROM {child} WHERE article_id IS DISTINCT FROM :article_id"
                    ),
                    {"article_id": article_id},
                ).scalar()
                if orphans == 0:
                    logger.info(f"✅ {child} rows reference article {article_id}")
                else:
                    logger.error(
                        f"❌ {child}: {orphans} row(s) not linked to article {article_id}"
                    )
                    all_correct = False

    except Exception as e:
        logger.error(f"❌ Error checking sample data: {e}")
        all_correct = False

    return all_correct


def verify_admin_credentials(engine, logger) -> bool:
    """Verify that no admin password is stored as plaintext."""
    logger.info("🔍 Verifying admin credentials...")

    all_correct = True

    try:
        with engine.connect() as conn:
            rows = conn.execute(
                text("SELECT username, password_hash FROM admins ORDER BY username")
            ).fetchall()

        for username, password_hash in rows:
            if is_password_hash(password_hash):
                logger.info(f"✅ admins.{username}: salted hash")
            else:
                logger.error(f"❌ admins.{username}: password is not a recognised hash")
                all_correct = False

    except Exception as e:
        logger.error(f"❌ Error checking admin credentials: {e}")
        all_correct = False

    return all_correct


def main() -> int:
    """Main function to verify the schema."""
    logger = setup_verification_logging()

    try:
        logger.info("🚀 Starting schema verification...")

        engine = get_postgres_engine()

        checks = [
            ("Table Structure", verify_table_structure),
            ("Foreign Keys", verify_foreign_keys),
            ("Indexes", verify_indexes),
            ("Sample Data", verify_sample_data),
            ("Admin Credentials", verify_admin_credentials),
        ]

        all_passed = True

        try:
            for check_name, check_func in checks:
                logger.info(f"📋 Running {check_name} check...")
                if not check_func(engine, logger):
                    all_passed = False
                    logger.error(f"❌ {check_name} check failed")
                else:
                    logger.info(f"✅ {check_name} check passed")
        finally:
            engine.dispose()

        logger.info("=" * 60)
        if all_passed:
            logger.info("🎉 ALL CHECKS PASSED! Schema verification successful!")
            return 0

        logger.error("❌ SOME CHECKS FAILED! Please review the errors above")
        return 1

    except Exception as e:
        logger.error(f"❌ Schema verification failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
