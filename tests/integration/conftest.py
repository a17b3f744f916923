"""
Integration test fixtures and configuration.

This module provides pytest fixtures for integration testing with a real PostgreSQL database.
The fixtures handle database lifecycle management and cleanup.

Key fixtures:
- test_db_engine: SQLAlchemy engine connected to test database
- test_db: Database with the article tables dropped before and after each test
- schema_manager: SchemaManager instance for test operations

Usage:
    @pytest.mark.integration
    def test_my_integration(schema_manager):
        schema_manager.reset_database(sample_data)

Running integration tests:
    pytest tests/integration -v -m integration
"""

import os
import time

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine

from scripts.database.schema_manager import SchemaManager
from utils.logging import setup_logging


def wait_for_db(
    engine: Engine, max_retries: int = 5, retry_delay: float = 1.0
) -> None:
    """
    Wait for database to be ready by attempting connections.

    Args:
        engine: SQLAlchemy engine to test
        max_retries: Maximum number of connection attempts
        retry_delay: Delay between retries in seconds

    Raises:
        RuntimeError: If database doesn't become ready within max_retries
    """
    for attempt in range(max_retries):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            print(f"✅ Database ready after {attempt + 1} attempt(s)")
            return
        except Exception as e:
            if attempt < max_retries - 1:
                print(
                    f"⏳ Waiting for database (attempt {attempt + 1}/{max_retries})..."
                )
                time.sleep(retry_delay)
            else:
                raise RuntimeError(
                    f"Database not ready after {max_retries} attempts: {e}"
                ) from e


@pytest.fixture(scope="session")
def test_db_url() -> URL:
    """
    Build the test database URL.

    Environment Variables:
        POSTGRES_TEST_HOST: Test database host (default: localhost)
        POSTGRES_TEST_PORT: Test database port (default: 5434)
        POSTGRES_TEST_DB: Test database name (default: articles_test)
        POSTGRES_TEST_USER: Test database user (default: postgres)
        POSTGRES_TEST_PASSWORD: Test database password (default: test_password)
    """
    host = os.getenv("POSTGRES_TEST_HOST", "localhost")
    port = os.getenv("POSTGRES_TEST_PORT", "5434")
    db = os.getenv("POSTGRES_TEST_DB", "articles_test")
    user = os.getenv("POSTGRES_TEST_USER", "postgres")
    password = os.getenv("POSTGRES_TEST_PASSWORD", "test_password")

    return URL.create(
        "postgresql+psycopg2",
        username=user,
        password=password,
        host=host,
        port=int(port),
        database=db,
    )


@pytest.fixture(scope="session")
def test_db_engine(test_db_url: URL) -> Engine:
    """
    Create a SQLAlchemy engine for the test database.

    The engine is reused across all tests in the session. Tests are skipped
    when no test database is reachable.

    Returns:
        Engine: SQLAlchemy engine connected to test database
    """
    engine = create_engine(test_db_url, connect_args={"connect_timeout": 5})

    try:
        wait_for_db(engine)
    except RuntimeError as e:
        engine.dispose()
        pytest.skip(f"Test database unavailable: {e}")

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def test_db(test_db_engine: Engine) -> Engine:
    """
    Provide a database without the article tables for each test.

    Tables are dropped before the test (so it starts from an empty schema)
    and again afterwards to prevent test pollution.

    Args:
        test_db_engine: Session-scoped database engine

    Yields:
        Engine: Database engine with no article tables
    """
    logger = setup_logging(logger_name="test_db", log_level="INFO")
    manager = SchemaManager(test_db_engine, logger)

    manager.drop_all_tables()

    yield test_db_engine

    logger.info("🧹 Cleaning up test database...")
    manager.drop_all_tables()


@pytest.fixture
def schema_manager(test_db: Engine) -> SchemaManager:
    """
    Provide a SchemaManager instance connected to the test database.

    Args:
        test_db: Test database with no article tables

    Returns:
        SchemaManager: Manager instance for test database operations
    """
    logger = setup_logging(logger_name="test_schema_manager", log_level="DEBUG")
    return SchemaManager(test_db, logger)
