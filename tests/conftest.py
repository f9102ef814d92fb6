"""
Pytest configuration for the insert benchmark.

Provides fixtures for:
- SQLite-backed target tables (unit tests, no server needed)
- PostgreSQL connection management (integration tests, skipped when unreachable)
- Settings override for integration tests
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Callable, Generator

import psycopg
import pytest

from insert_bench.config import Settings
from insert_bench.domain.models import ConnectionConfig
from insert_bench.infrastructure.connection_manager import ConnectionManager

TABLE = "Temp"

CREATE_TABLE_SQL = f"CREATE TABLE {TABLE} (num1 REAL, num2 REAL, num3 REAL)"

# Rejects the sixth and later rows so a run fails partway through.
ROW_LIMIT = 5
ROW_LIMIT_TRIGGER_SQL = f"""
    CREATE TRIGGER limit_rows BEFORE INSERT ON {TABLE}
    WHEN (SELECT COUNT(*) FROM {TABLE}) >= {ROW_LIMIT}
    BEGIN
        SELECT RAISE(ABORT, 'row limit reached');
    END
"""


def _create_sqlite_db(path: Path, *statements: str) -> Path:
    conn = sqlite3.connect(path)
    try:
        for statement in statements:
            conn.execute(statement)
        conn.commit()
    finally:
        conn.close()
    return path


def _sqlite_config(path: Path) -> ConnectionConfig:
    return ConnectionConfig(driver="", url=f"sqlite:///{path}", username="u", password="p")


@pytest.fixture
def sqlite_db(tmp_path: Path) -> Path:
    """A SQLite file with an empty Temp table."""
    return _create_sqlite_db(tmp_path / "bench.db", CREATE_TABLE_SQL)


@pytest.fixture
def limited_sqlite_db(tmp_path: Path) -> Path:
    """A SQLite file whose Temp table refuses more than ROW_LIMIT rows."""
    return _create_sqlite_db(tmp_path / "limited.db", CREATE_TABLE_SQL, ROW_LIMIT_TRIGGER_SQL)


@pytest.fixture
def sqlite_config(sqlite_db: Path) -> ConnectionConfig:
    return _sqlite_config(sqlite_db)


@pytest.fixture
def limited_sqlite_config(limited_sqlite_db: Path) -> ConnectionConfig:
    return _sqlite_config(limited_sqlite_db)


@pytest.fixture
def count_rows() -> Callable[[Path], int]:
    """Count rows in Temp through an independent connection."""

    def _count(path: Path) -> int:
        conn = sqlite3.connect(path)
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()[0]
        finally:
            conn.close()

    return _count


@pytest.fixture
def connected_manager(sqlite_config: ConnectionConfig) -> Generator[ConnectionManager, None, None]:
    manager = ConnectionManager()
    manager.connect(sqlite_config)
    try:
        yield manager
    finally:
        manager.close()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_driver="psycopg",
        db_url=os.getenv("DB_URL", "postgresql://localhost:5432/javabook"),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def pg_config(test_settings: Settings) -> ConnectionConfig:
    return test_settings.connection_config()


@pytest.fixture(scope="session")
def db_connection_available(test_settings: Settings) -> bool:
    """
    Check if the PostgreSQL server is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(
            test_settings.db_url,
            user=test_settings.db_user,
            password=test_settings.db_password,
            connect_timeout=5,
        ) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_settings: Settings, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped auto-commit PostgreSQL connection for integration tests.

    Skips the test if the database is not available.
    """
    if not db_connection_available:
        pytest.skip("PostgreSQL is not available")

    conn = psycopg.connect(
        test_settings.db_url,
        user=test_settings.db_user,
        password=test_settings.db_password,
        autocommit=True,
    )
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def pg_temp_table(db_connection: psycopg.Connection) -> Generator[str, None, None]:
    """
    Ensure an empty Temp table exists before each test function, and drop the
    row-limit trigger some tests install.
    """
    with db_connection.cursor() as cur:
        cur.execute(f"CREATE TABLE IF NOT EXISTS {TABLE} (num1 DOUBLE PRECISION, num2 DOUBLE PRECISION, num3 DOUBLE PRECISION)")
        cur.execute(f"DROP TRIGGER IF EXISTS limit_rows ON {TABLE}")
        cur.execute(f"TRUNCATE TABLE {TABLE}")
    yield TABLE
    with db_connection.cursor() as cur:
        cur.execute(f"DROP TRIGGER IF EXISTS limit_rows ON {TABLE}")
        cur.execute(f"TRUNCATE TABLE {TABLE}")


@pytest.fixture
def pg_count_rows(db_connection: psycopg.Connection) -> Callable[[], int]:
    def _count() -> int:
        with db_connection.cursor() as cur:
            cur.execute(f"SELECT COUNT(*) FROM {TABLE}")
            return cur.fetchone()[0]

    return _count
