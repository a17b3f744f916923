"""
Configuration settings for the article schema reset tooling.

This module centralizes all configuration values and provides a single source of truth for all
configurable parameters. Credentials are never embedded here: the database password must come
from the environment (or a .env file loaded by the calling script).
"""

import os
from typing import Optional

from sqlalchemy.engine import URL


class Config:
    """
    Central configuration class for the article schema tooling.

    This class consolidates database connection settings, the seeded admin
    credentials, and logging parameters.
    """

    # Database Configuration
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "chessdb"
    DB_USER: str = "chess1"
    DB_PASSWORD: Optional[str] = None
    DB_SSLMODE: Optional[str] = None
    DB_CONNECT_TIMEOUT: int = 10

    # Sample data
    SEED_ADMIN_USERNAME: str = "admin"
    SEED_ADMIN_PASSWORD: str = "changeme"

    # Schema files
    SQL_SCHEMA_DIR: str = os.path.join(
        os.path.dirname(__file__), "..", "sql", "schema"
    )

    # Logging Configuration
    LOG_LEVEL: str = "INFO"
    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3
    RESET_LOG_FILE: str = "logs/database_reset.log"
    VERIFY_LOG_FILE: str = "logs/schema_verification.log"

    def __init__(self):
        """Initialize configuration by loading from environment variables."""
        self._load_from_env()

    def _load_from_env(self):
        """Load configuration values from environment variables."""
        # Database settings
        db_host = os.getenv("POSTGRES_HOST")
        if db_host:
            self.DB_HOST = db_host

        db_port = os.getenv("POSTGRES_PORT")
        if db_port:
            self.DB_PORT = int(db_port)

        db_name = os.getenv("POSTGRES_DB")
        if db_name:
            self.DB_NAME = db_name

        db_user = os.getenv("POSTGRES_USER")
        if db_user:
            self.DB_USER = db_user

        db_password = os.getenv("POSTGRES_PASSWORD")
        if db_password:
            self.DB_PASSWORD = db_password

        db_sslmode = os.getenv("POSTGRES_SSLMODE")
        if db_sslmode:
            self.DB_SSLMODE = db_sslmode

        connect_timeout = os.getenv("DB_CONNECT_TIMEOUT")
        if connect_timeout:
            self.DB_CONNECT_TIMEOUT = int(connect_timeout)

        # Seeded admin account
        admin_username = os.getenv("SEED_ADMIN_USERNAME")
        if admin_username:
            self.SEED_ADMIN_USERNAME = admin_username

        admin_password = os.getenv("SEED_ADMIN_PASSWORD")
        if admin_password:
            self.SEED_ADMIN_PASSWORD = admin_password

        # Optional overrides
        sql_schema_dir = os.getenv("SQL_SCHEMA_DIR")
        if sql_schema_dir:
            self.SQL_SCHEMA_DIR = sql_schema_dir

        log_level = os.getenv("LOG_LEVEL")
        if log_level:
            self.LOG_LEVEL = log_level

    def validate_for_database_operations(self):
        """
        Validate the configuration values needed to open a database connection.

        Raises:
            ValueError: If required configuration is missing.
        """
        if not self.DB_PASSWORD:
            raise ValueError(
                "POSTGRES_PASSWORD environment variable is required. "
                "Please set it in your .env file or environment."
            )

        if self.DB_CONNECT_TIMEOUT <= 0:
            raise ValueError(
                f"DB_CONNECT_TIMEOUT must be positive, got {self.DB_CONNECT_TIMEOUT}"
            )

    def get_database_url(self) -> str:
        """
        Generate database connection URL.

        Credentials are percent-escaped, so passwords containing URL
        delimiters such as '@', '/', '#' or ':' survive parsing.

        Returns:
            str: PostgreSQL connection URL
        """
        url = URL.create(
            "postgresql+psycopg2",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
            query={"sslmode": self.DB_SSLMODE} if self.DB_SSLMODE else {},
        )
        return url.render_as_string(hide_password=False)


# Global configuration instance
config = Config()
