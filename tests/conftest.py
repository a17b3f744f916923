"""
Shared test fixtures and configuration for the schema reset test suite.

This file contains pytest fixtures that can be used across all test modules.
Fixtures defined here are automatically available to all test files.
"""

import logging
import os
from unittest.mock import MagicMock

import pytest
from dotenv import load_dotenv

# Load test environment variables (if any)
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))


@pytest.fixture(autouse=True)
def setup_test_environment():
    """
    Set up test environment variables.

    This fixture automatically runs before each test to ensure the test
    environment is properly configured.
    """
    if not os.getenv("POSTGRES_PASSWORD"):
        os.environ["POSTGRES_PASSWORD"] = "test_password"

    yield

    if os.getenv("POSTGRES_PASSWORD") == "test_password":
        del os.environ["POSTGRES_PASSWORD"]


@pytest.fixture
def mock_db_engine():
    """
    Provide a mock SQLAlchemy engine.

    Both ``engine.begin()`` and ``engine.connect()`` yield the same mock
    connection, exposed as ``mock_engine.mock_connection``. Executed
    statements report one affected row.
    """
    mock_engine = MagicMock()
    mock_connection = MagicMock()
    mock_result = MagicMock()

    for factory in (mock_engine.begin, mock_engine.connect):
        factory.return_value.__enter__.return_value = mock_connection
        factory.return_value.__exit__.return_value = None

    mock_connection.execute.return_value = mock_result
    mock_result.rowcount = 1
    mock_result.fetchall.return_value = []

    mock_engine.mock_connection = mock_connection
    return mock_engine


@pytest.fixture
def mock_logger():
    """Provide a mock logger so tests can assert on logged messages."""
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def sample_data():
    """
    Provide the standard sample rows with a fixed bump_time.

    A fixed timestamp keeps assertions on insert parameters deterministic.
    """
    from scripts.database.seed_schemas import build_sample_data

    sample = build_sample_data("admin", "s3cret-pass")
    sample.article.bump_time = 1_700_000_000
    return sample

