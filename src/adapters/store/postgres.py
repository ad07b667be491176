"""
PostgreSQL store adapter - Implements DomainStore protocol.

This module provides the PostgreSQL implementation of the domain's
key-value store port using psycopg3 with raw SQL.

The table is a plain key/value mapping: the key is the full domain and
the value is the JSON registration record, opaque to the database.
put_if_absent relies on the primary key with INSERT ... ON CONFLICT
DO NOTHING, so concurrent writers for the same key cannot both succeed.
"""

import logging
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class PostgresDomainStore:
    """
    Implements DomainStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries. Driver errors surface as
    ExternalServiceError.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def get(self, key: str) -> str | None:
        sql = "SELECT value FROM domain_store WHERE key = %s"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.error("Store lookup failed for %s: %s", key, e)
            raise ExternalServiceError(f"Store error: {e}") from e

        return row[0] if row is not None else None

    def put(self, key: str, value: str) -> None:
        sql = """
            INSERT INTO domain_store (key, value)
            VALUES (%s, %s)
            ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key, value))
                conn.commit()
        except psycopg.Error as e:
            logger.error("Store write failed for %s: %s", key, e)
            raise ExternalServiceError(f"Store error: {e}") from e

    def put_if_absent(self, key: str, value: str) -> bool:
        """
        Atomically insert value under key.

        Returns:
            True if inserted, False if the key already existed
        """
        sql = """
            INSERT INTO domain_store (key, value)
            VALUES (%s, %s)
            ON CONFLICT (key) DO NOTHING
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key, value))
                conn.commit()
                # 1 if inserted, 0 if the primary key already existed
                return cursor.rowcount == 1
        except psycopg.Error as e:
            logger.error("Store write failed for %s: %s", key, e)
            raise ExternalServiceError(f"Store error: {e}") from e

    def ping(self) -> None:
        with self._pool.connection() as conn:
            conn.execute("SELECT 1")


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/store/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
