"""
Schema Manager for the article publishing database

This module owns the four tables of the article publishing system (articles,
article_media, comments, admins): it drops them, recreates them from the SQL
files in sql/schema/, and seeds the sample rows.

Key Features:
- Table creation in dependency order with circular dependency detection
- Children-before-parents drop order, tolerant of missing tables
- Parameterized inserts for the sample rows (admin password stored hashed)
- Single-transaction reset so a failure leaves no partial writes
- Table inspection helpers used by the verification script

Example Usage:
    engine = get_postgres_engine()
    manager = SchemaManager(engine, logger)
    manager.reset_database(build_sample_data("admin", "changeme"))
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from sqlalchemy import Engine, create_engine, inspect, text
from sqlalchemy.engine import Connection

from config.settings import config
from scripts.database.seed_schemas import SampleData


def get_postgres_engine() -> Engine:
    """
    Create a SQLAlchemy engine for PostgreSQL using configuration.

    The engine carries the configured connect timeout so an unreachable host
    fails fast instead of hanging.

    Returns:
        Engine: SQLAlchemy engine instance configured for PostgreSQL

    Raises:
        ValueError: If any required configuration is missing
    """
    config.validate_for_database_operations()

    conn_str = config.get_database_url()
    return create_engine(
        conn_str, connect_args={"connect_timeout": config.DB_CONNECT_TIMEOUT}
    )


class SchemaManager:
    """
    Drops, recreates and seeds the article publishing schema.

    Table DDL is loaded from SQL files in the sql/schema/ directory. Creation
    follows ``table_dependencies``; dropping follows ``DROP_ORDER``.
    """

    # Children before parents
    DROP_ORDER = ["article_media", "comments", "articles", "admins"]

    def __init__(
        self,
        engine: Engine,
        logger: Optional[logging.Logger] = None,
        schema_dir: Optional[str] = None,
    ):
        """
        Initialize the schema manager.

        Args:
            engine (Engine): SQLAlchemy engine for database connections
            logger (Optional[logging.Logger]): Logger instance for operation tracking.
                                             If None, creates a default logger.
            schema_dir (Optional[str]): Directory holding the <table>.sql files.
                                      If None, uses config.SQL_SCHEMA_DIR.
        """
        self.engine = engine
        self.logger = logger or logging.getLogger(__name__)
        self.schema_dir = schema_dir or config.SQL_SCHEMA_DIR

        self.table_dependencies = {
            "articles": [],
            "article_media": ["articles"],
            "comments": ["articles"],
            "admins": [],
        }

    def _load_sql_schema(self, table_name: str) -> str:
        """
        Load SQL schema from file.

        Args:
            table_name (str): Name of the table (without .sql extension)

        Returns:
            str: SQL content from the schema file

        Raises:
            FileNotFoundError: If SQL schema file is missing
            ValueError: If SQL schema file is empty
        """
        sql_path = os.path.join(self.schema_dir, f"{table_name}.sql")

        if not os.path.exists(sql_path):
            self.logger.error(f"Schema file missing: {sql_path}")
            raise FileNotFoundError(f"SQL schema file not found: {sql_path}")

        with open(sql_path, "r") as f:
            sql_content = f.read().strip()

        if not sql_content:
            self.logger.error(f"Invalid schema file: {sql_path}")
            raise ValueError(f"SQL schema file is empty: {sql_path}")

        return sql_content

    def _creation_order(self) -> List[str]:
        """
        Resolve the order in which tables must be created.

        Returns:
            List[str]: Table names, each after all of its dependencies

        Raises:
            RuntimeError: If circular dependency is detected
        """
        ordered: List[str] = []

        while len(ordered) < len(self.table_dependencies):
            progress_made = False

            for table_name, dependencies in self.table_dependencies.items():
                if table_name in ordered:
                    continue
                if all(dep in ordered for dep in dependencies):
                    ordered.append(table_name)
                    progress_made = True

            if not progress_made:
                remaining = set(self.table_dependencies.keys()) - set(ordered)
                raise RuntimeError(
                    f"Circular dependency detected in table creation. Remaining tables: {remaining}"
                )

        return ordered

    def _drop_tables(self, conn: Connection) -> None:
        for table_name in self.DROP_ORDER:
            conn.execute(text(f"DROP TABLE IF EXISTS {table_name} CASCADE"))
            self.logger.info(f"Dropped table: {table_name}")

    def _create_tables(self, conn: Connection) -> None:
        # Load every file first so a bad schema file fails before any DDL runs
        statements = [
            (table_name, self._load_sql_schema(table_name))
            for table_name in self._creation_order()
        ]
        for table_name, sql_content in statements:
            conn.execute(text(sql_content))
            self.logger.info(f"Successfully created table: {table_name}")

    def _insert_sample_data(self, conn: Connection, sample: SampleData) -> None:
        conn.execute(
            text(
                "INSERT INTO admins (username, password_hash) "
                "VALUES (:username, :password_hash)"
            ),
            {
                "username": sample.admin.username,
                "password_hash": sample.admin.password_hash(),
            },
        )
        self.logger.info(f"Inserted admin: {sample.admin.username}")

        conn.execute(
            text(
                "INSERT INTO articles (title, body, bump_time) "
                "VALUES (:title, :body, :bump_time)"
            ),
            sample.article.model_dump(),
        )
        self.logger.info(f"Inserted article: {sample.article.title}")

        # The article id is server-generated, so children resolve it by title
        result = conn.execute(
            text(
                "INSERT INTO article_media (article_id, media_path) "
                "SELECT id, :media_path FROM articles WHERE title = :title"
            ),
            {"media_path": sample.media.media_path, "title": sample.article.title},
        )
        if result.rowcount == 0:
            raise RuntimeError(
                f"No article titled '{sample.article.title}' to attach media to"
            )
        self.logger.info(f"Inserted media: {sample.media.media_path}")

        result = conn.execute(
            text(
                "INSERT INTO comments (article_id, comment) "
                "SELECT id, :comment FROM articles WHERE title = :title"
            ),
            {"comment": sample.comment.comment, "title": sample.article.title},
        )
        if result.rowcount == 0:
            raise RuntimeError(
                f"No article titled '{sample.article.title}' to attach a comment to"
            )
        self.logger.info("Inserted sample comment")

    def drop_all_tables(self) -> None:
        """
        Drop the four schema tables, children before parents.

        Missing tables are skipped silently (DROP TABLE IF EXISTS).

        Raises:
            SQLAlchemyError: If any error occurs during table dropping
        """
        try:
            with self.engine.begin() as conn:
                self._drop_tables(conn)
            self.logger.info("Successfully dropped all tables")
        except Exception as e:
            self.logger.error(f"Error dropping tables: {e}")
            raise

    def create_all_tables(self) -> None:
        """
        Create all tables in dependency order.

        Raises:
            RuntimeError: If circular dependency is detected
            FileNotFoundError: If a schema file is missing
            SQLAlchemyError: If any table creation fails
        """
        try:
            with self.engine.begin() as conn:
                self._create_tables(conn)
        except Exception as e:
            self.logger.error(f"Failed to create tables: {e}")
            raise

    def seed_sample_data(self, sample: SampleData) -> None:
        """
        Insert the sample admin, article, media and comment rows.

        Args:
            sample (SampleData): Validated rows to insert

        Raises:
            SQLAlchemyError: If an insert fails (e.g. a foreign key violation)
        """
        try:
            with self.engine.begin() as conn:
                self._insert_sample_data(conn, sample)
        except Exception as e:
            self.logger.error(f"Failed to insert sample data: {e}")
            raise

    def reset_database(self, sample: SampleData) -> None:
        """
        Complete database reset: drop, recreate and seed the four tables.

        WARNING: this irreversibly deletes every row in articles,
        article_media, comments and admins.

        All steps run on one connection inside one transaction. PostgreSQL
        DDL is transactional, so if any statement fails the database is left
        exactly as it was before the call.

        Args:
            sample (SampleData): Validated rows to insert after recreation

        Raises:
            Exception: If any error occurs during the reset process
        """
        self.logger.info("Starting complete database reset...")

        try:
            with self.engine.begin() as conn:
                self.logger.info("Step 1: Dropping existing tables...")
                self._drop_tables(conn)

                self.logger.info("Step 2: Creating tables...")
                self._create_tables(conn)

                self.logger.info("Step 3: Inserting sample data...")
                self._insert_sample_data(conn, sample)

            self.logger.info("✅ Database reset completed successfully!")

        except Exception as e:
            self.logger.error(f"❌ Database reset failed: {e}")
            raise

    def get_table_names(self) -> List[str]:
        """
        List user tables in the public schema.

        Returns:
            List[str]: Sorted table names
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                text(
                    """
                SELECT tablename FROM pg_tables
                WHERE schemaname = 'public'
                ORDER BY tablename
            """
                )
            )
            return [row[0] for row in result]

    def get_table_info(self, table_name: str) -> Dict[str, Any]:
        """
        Get information about a table including row count and schema.

        Args:
            table_name (str): Name of the table to inspect

        Returns:
            Dict[str, Any]: Dictionary containing table information including
                           row_count, columns, and primary_keys
        """
        inspector = inspect(self.engine)

        info: Dict[str, Any] = {
            "exists": inspector.has_table(table_name),
            "row_count": 0,
            "columns": [],
            "primary_keys": [],
        }

        if info["exists"]:
            with self.engine.connect() as conn:
                result = conn.execute(text(f"SELECT COUNT(*) FROM {table_name}"))
                info["row_count"] = result.scalar()

            info["columns"] = [col["name"] for col in inspector.get_columns(table_name)]

            pk_constraint = inspector.get_pk_constraint(table_name)
            info["primary_keys"] = pk_constraint.get("constrained_columns", [])

        return info
