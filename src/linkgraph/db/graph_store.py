"""
Graph Store - Link Graph Persistence

Stores pages (nodes with a rank value) and the directed links between them.
Every public operation is serialised by a store-level lock, so concurrent
writers touching the same node are applied one after another (last write
wins). Driver failures are wrapped in StoreError.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Callable, TypeVar

from linkgraph.db.connection import (
    get_connection,
    is_postgres_mode,
    open_db,
    sql_placeholder,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RANK = 0.0


class StoreError(Exception):
    """A graph store operation failed."""

    def __init__(self, operation: str, cause: BaseException | None = None):
        self.operation = operation
        self.cause = cause
        message = f"Graph store operation '{operation}' failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class GraphStore:
    """Query contract consumed by the crawler core."""

    def upsert_node(self, url: str, initial_rank: float) -> None:
        raise NotImplementedError

    def upsert_edge(self, source_url: str, target_url: str) -> None:
        raise NotImplementedError

    def in_neighbors(self, url: str) -> list[tuple[str, float]]:
        raise NotImplementedError

    def set_rank(self, url: str, rank: float) -> None:
        raise NotImplementedError

    def all_nodes_ordered_by_rank(
        self, ascending: bool = True
    ) -> list[tuple[str, float]]:
        raise NotImplementedError

    def clear_all(self) -> None:
        raise NotImplementedError

    def ping(self) -> bool:
        raise NotImplementedError


class SqlGraphStore(GraphStore):
    """
    Graph store on SQLite (default) or PostgreSQL (when DATABASE_URL is set).

    Opens a short-lived connection per operation. The SQLite path must be a
    file path; ':memory:' would give every operation a fresh database.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._lock = threading.Lock()
        self._init_db()

    def _init_db(self):
        """Initialize database."""
        if not is_postgres_mode():
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        con = open_db(self.db_path)
        con.close()

    def _ph(self) -> str:
        return sql_placeholder()

    def _run(self, operation: str, fn: Callable[[Any], T]) -> T:
        with self._lock:
            try:
                con = get_connection(self.db_path)
            except Exception as e:
                raise StoreError(operation, e) from e
            try:
                result = fn(con)
                con.commit()
                return result
            except Exception as e:
                try:
                    con.rollback()
                except Exception:
                    logger.debug(f"Rollback failed after '{operation}' error")
                raise StoreError(operation, e) from e
            finally:
                con.close()

    def upsert_node(self, url: str, initial_rank: float) -> None:
        """Create the node or overwrite its rank with initial_rank."""
        ph = self._ph()

        def op(con):
            cur = con.cursor()
            cur.execute(
                f"""
                INSERT INTO pages (url, page_rank) VALUES ({ph}, {ph})
                ON CONFLICT (url) DO UPDATE SET page_rank = excluded.page_rank
                """,
                (url, initial_rank),
            )
            cur.close()

        self._run("upsert_node", op)

    def upsert_edge(self, source_url: str, target_url: str) -> None:
        """Create both endpoints (if missing) and the directed edge between them."""
        ph = self._ph()

        def op(con):
            cur = con.cursor()
            for url in (source_url, target_url):
                cur.execute(
                    f"""
                    INSERT INTO pages (url, page_rank) VALUES ({ph}, {ph})
                    ON CONFLICT (url) DO NOTHING
                    """,
                    (url, DEFAULT_RANK),
                )
            cur.execute(
                f"""
                INSERT INTO links (src, dst) VALUES ({ph}, {ph})
                ON CONFLICT (src, dst) DO NOTHING
                """,
                (source_url, target_url),
            )
            cur.close()

        self._run("upsert_edge", op)

    def in_neighbors(self, url: str) -> list[tuple[str, float]]:
        """Return (url, rank) of every page linking to url."""
        ph = self._ph()

        def op(con):
            cur = con.cursor()
            cur.execute(
                f"""
                SELECT p.url, p.page_rank
                FROM links l
                JOIN pages p ON p.url = l.src
                WHERE l.dst = {ph}
                ORDER BY p.url
                """,
                (url,),
            )
            rows = cur.fetchall()
            cur.close()
            return [(row[0], float(row[1])) for row in rows]

        return self._run("in_neighbors", op)

    def set_rank(self, url: str, rank: float) -> None:
        ph = self._ph()

        def op(con):
            cur = con.cursor()
            cur.execute(
                f"UPDATE pages SET page_rank = {ph} WHERE url = {ph}", (rank, url)
            )
            cur.close()

        self._run("set_rank", op)

    def get_rank(self, url: str) -> float | None:
        """Return the stored rank of url, or None if the node does not exist."""
        ph = self._ph()

        def op(con):
            cur = con.cursor()
            cur.execute(f"SELECT page_rank FROM pages WHERE url = {ph}", (url,))
            row = cur.fetchone()
            cur.close()
            return float(row[0]) if row else None

        return self._run("get_rank", op)

    def all_nodes_ordered_by_rank(
        self, ascending: bool = True
    ) -> list[tuple[str, float]]:
        """Return every node as (url, rank), ordered by rank (ties by url)."""
        direction = "ASC" if ascending else "DESC"

        def op(con):
            cur = con.cursor()
            cur.execute(
                f"SELECT url, page_rank FROM pages ORDER BY page_rank {direction}, url ASC"
            )
            rows = cur.fetchall()
            cur.close()
            return [(row[0], float(row[1])) for row in rows]

        return self._run("all_nodes_ordered_by_rank", op)

    def edges(self) -> list[tuple[str, str]]:
        """Return every edge as (src, dst), ordered."""

        def op(con):
            cur = con.cursor()
            cur.execute("SELECT src, dst FROM links ORDER BY src, dst")
            rows = cur.fetchall()
            cur.close()
            return [(row[0], row[1]) for row in rows]

        return self._run("edges", op)

    def node_count(self) -> int:
        def op(con):
            cur = con.cursor()
            cur.execute("SELECT COUNT(*) FROM pages")
            count = cur.fetchone()[0]
            cur.close()
            return count

        return self._run("node_count", op)

    def edge_count(self) -> int:
        def op(con):
            cur = con.cursor()
            cur.execute("SELECT COUNT(*) FROM links")
            count = cur.fetchone()[0]
            cur.close()
            return count

        return self._run("edge_count", op)

    def clear_all(self) -> None:
        """Delete every node and edge."""

        def op(con):
            cur = con.cursor()
            cur.execute("DELETE FROM links")
            cur.execute("DELETE FROM pages")
            cur.close()

        self._run("clear_all", op)
        logger.info("Cleared graph store")

    def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            self._run("ping", lambda con: con.cursor().execute("SELECT 1"))
            return True
        except StoreError as e:
            logger.warning(f"Graph store ping failed: {e}")
            return False
