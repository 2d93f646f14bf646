"""
Graph Database Connection (Shared Kernel)

Connection and schema helpers for the link graph:
- PostgreSQL when DATABASE_URL is set (required in production)
- SQLite file at GRAPH_DB_PATH otherwise (development/test)
"""

import os
from typing import Any

from linkgraph.core.infrastructure_config import settings, Environment

# Serialises schema creation when several replicas start at once
SCHEMA_LOCK_ID = 731904552

SCHEMA_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS pages (
      url TEXT PRIMARY KEY,
      page_rank {rank_type} NOT NULL DEFAULT 0
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_pages_rank ON pages(page_rank)",
    """
    CREATE TABLE IF NOT EXISTS links (
      src TEXT NOT NULL,
      dst TEXT NOT NULL,
      PRIMARY KEY (src, dst)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_links_dst ON links(dst)",
)

SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
)


def is_postgres_mode() -> bool:
    """Check if we're using PostgreSQL."""
    return os.getenv("DATABASE_URL") is not None


def sql_placeholder() -> str:
    """Return parameter placeholder for current database driver."""
    return "%s" if is_postgres_mode() else "?"


def schema_statements(postgres: bool) -> list[str]:
    """DDL for the graph tables in the given dialect."""
    rank_type = "DOUBLE PRECISION" if postgres else "REAL"
    statements = [s.format(rank_type=rank_type).strip() for s in SCHEMA_STATEMENTS]
    if postgres:
        return statements
    return [*SQLITE_PRAGMAS, *statements]


def get_connection(db_path: str | None = None) -> Any:
    """Connect to PostgreSQL (DATABASE_URL) or to the SQLite file at db_path.

    Raises:
        RuntimeError: If ENVIRONMENT is 'production' but DATABASE_URL is not set.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        import psycopg2

        return psycopg2.connect(database_url)

    if settings.ENVIRONMENT == Environment.PRODUCTION:
        raise RuntimeError(
            "DATABASE_URL is required in production environment. "
            "SQLite is only for development and tests."
        )

    import sqlite3

    return sqlite3.connect(db_path or settings.GRAPH_DB_PATH)


def create_schema(con: Any, postgres: bool | None = None) -> None:
    """Create the graph tables if they do not exist yet."""
    if postgres is None:
        postgres = is_postgres_mode()

    cur = con.cursor()
    if postgres:
        cur.execute("SELECT pg_advisory_lock(%s)", (SCHEMA_LOCK_ID,))
    try:
        for statement in schema_statements(postgres):
            cur.execute(statement)
        con.commit()
    except Exception:
        con.rollback()
        raise
    finally:
        if postgres:
            cur.execute("SELECT pg_advisory_unlock(%s)", (SCHEMA_LOCK_ID,))
            con.commit()
        cur.close()


def open_db(path: str | None = None) -> Any:
    """Open a connection with the schema in place. DATABASE_URL overrides path."""
    con = get_connection(path)
    try:
        create_schema(con)
    except Exception:
        con.close()
        raise
    return con
