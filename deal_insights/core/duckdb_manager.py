"""
DuckDB Connection Manager.

Singleton manager for the process-wide DuckDB database used to scan deal
Parquet files. Queries never share a connection: every unit of work takes its
own cursor, which makes concurrent reads from batch workers safe.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from threading import Lock, RLock
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import duckdb

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class DuckDBManager:
    """
    Singleton manager for DuckDB connections.

    Features:
    - Memory limit configuration
    - Thread count configuration for parallel scans
    - Per-caller cursors for thread-safe concurrent reads
    - Lazy Parquet relations with predicate pushdown

    Usage:
        manager = get_duckdb()

        with manager.cursor() as cur:
            relation = manager.read_parquet(cur, "deals.parquet")
            # Nothing is read until .df() / .fetchall()
            df = relation.filter('"entry" = 1').df()
    """

    _instance = None
    _lock = Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._conn: Optional[duckdb.DuckDBPyConnection] = None
        self._config: Dict[str, Any] = {}
        self._conn_lock = RLock()
        self._initialized = True

    def _init_connection(
        self,
        memory_limit: str = "4GB",
        threads: int = 4,
    ) -> None:
        """
        Initialize the DuckDB connection.

        Args:
            memory_limit: Maximum memory DuckDB can use (e.g., "8GB", "4GB")
            threads: Number of threads for parallel execution
        """
        with self._conn_lock:
            if self._conn is not None:
                return

            self._conn = duckdb.connect(":memory:")

            self._conn.execute(f"SET memory_limit='{memory_limit}'")
            logger.info(f"DuckDB memory limit set to {memory_limit}")

            self._conn.execute(f"SET threads={int(threads)}")
            logger.info(f"DuckDB threads set to {threads}")

            self._conn.execute("SET enable_progress_bar=false")

            self._config = {
                "memory_limit": memory_limit,
                "threads": threads,
            }

    @property
    def conn(self) -> duckdb.DuckDBPyConnection:
        """Get the DuckDB connection, initializing if needed."""
        if self._conn is None:
            # Reopen with the last settings after close().
            self._init_connection(**self._config)
        return self._conn

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    @contextmanager
    def cursor(self) -> Iterator[duckdb.DuckDBPyConnection]:
        """
        Yield a private cursor on the shared database.

        A DuckDB connection must not be used from two threads at once; a
        cursor is an independent connection to the same database.
        """
        with self._conn_lock:
            cur = self.conn.cursor()
        try:
            yield cur
        finally:
            cur.close()

    # =========================================================================
    # Parquet access
    # =========================================================================

    @staticmethod
    def read_parquet(
        cur: duckdb.DuckDBPyConnection,
        path: PathLike,
    ) -> duckdb.DuckDBPyRelation:
        """
        Read a Parquet file as a lazy DuckDB relation.

        Filters applied to the relation are pushed down into the scan, so
        only matching rows are materialized.
        """
        return cur.read_parquet(str(path))

    @staticmethod
    def describe(relation: duckdb.DuckDBPyRelation) -> List[Tuple[str, str]]:
        """Return (column name, DuckDB type name) pairs for a relation."""
        return [
            (name, str(dtype))
            for name, dtype in zip(relation.columns, relation.types)
        ]

    @staticmethod
    def write_parquet(
        relation: duckdb.DuckDBPyRelation,
        path: PathLike,
        compression: str = "zstd",
    ) -> str:
        """
        Write a relation to Parquet format.

        Args:
            relation: DuckDB relation to write
            path: Output file path
            compression: Compression codec (zstd, snappy, gzip, uncompressed)

        Returns:
            Path to written file
        """
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        relation.write_parquet(str(path), compression=compression)
        logger.debug(f"Written Parquet: {path}")
        return str(path)

    def close(self) -> None:
        """Close the DuckDB connection."""
        with self._conn_lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info("DuckDB connection closed")


# ============================================================================
# Module-level accessor
# ============================================================================

_manager: Optional[DuckDBManager] = None
_manager_lock = Lock()


def get_duckdb(
    memory_limit: Optional[str] = None,
    threads: Optional[int] = None,
) -> DuckDBManager:
    """
    Get the global DuckDB manager instance.

    Args:
        memory_limit: Maximum memory for DuckDB (defaults to settings)
        threads: Number of threads (defaults to settings)

    Returns:
        DuckDBManager singleton instance
    """
    global _manager
    if _manager is None:
        with _manager_lock:
            if _manager is None:
                from deal_insights.core.config import get_settings

                settings = get_settings()
                manager = DuckDBManager()
                manager._init_connection(
                    memory_limit=memory_limit or settings.duckdb_memory_limit,
                    threads=threads or settings.duckdb_threads,
                )
                _manager = manager
    return _manager
