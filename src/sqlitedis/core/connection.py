"""SQLite connection management for sqlitedis."""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, List, Union
from contextlib import contextmanager

from sqlitedis.core.path_utils import is_memory_path

logger = logging.getLogger(__name__)

# Per-connection cache of compiled statements, reused across commands
STATEMENT_CACHE_SIZE = 128


class ConnectionClosedError(RuntimeError):
    """Raised when a command is issued against a closed store."""

    pass


class DatabaseConnection:
    """Manages a SQLite connection with configurable durability."""

    def __init__(self, path: Union[str, Path], durable: bool = False, timeout: float = 5.0):
        """Initialize database connection.

        Args:
            path: Path to SQLite database file, or ":memory:"
            durable: Use synchronous writes and a rollback journal on disk
            timeout: Seconds to wait when the database is locked
        """
        self.path = path if is_memory_path(path) else Path(path)
        self.durable = durable
        self.timeout = timeout
        self._conn: Optional[sqlite3.Connection] = None
        self._connect()

    def _connect(self) -> None:
        """Establish database connection and configure journaling."""
        if isinstance(self.path, Path):
            self.path.parent.mkdir(parents=True, exist_ok=True)

        # Autocommit: every statement outside transaction() commits on its own
        self._conn = sqlite3.connect(
            str(self.path),
            timeout=self.timeout,
            isolation_level=None,
            cached_statements=STATEMENT_CACHE_SIZE,
        )

        try:
            if self.durable:
                self._conn.execute("PRAGMA synchronous = FULL")
                self._conn.execute("PRAGMA journal_mode = DELETE")
            else:
                # Trades crash safety for write throughput
                self._conn.execute("PRAGMA synchronous = OFF")
                self._conn.execute("PRAGMA journal_mode = MEMORY")
            self._conn.row_factory = sqlite3.Row
        except sqlite3.Error:
            self._conn.close()
            self._conn = None
            raise

        mode = "durable" if self.durable else "fast"
        logger.debug(f"Opened {self.path} in {mode} mode")

    @property
    def is_open(self) -> bool:
        """Whether the underlying handle is still open."""
        return self._conn is not None

    def _require_open(self) -> sqlite3.Connection:
        if not self._conn:
            raise ConnectionClosedError("Connection is closed")
        return self._conn

    def execute(self, sql: str, params: Optional[tuple] = None) -> sqlite3.Cursor:
        """Execute a SQL statement.

        Args:
            sql: SQL statement to execute
            params: Optional parameters for parameterized queries

        Returns:
            Cursor with results
        """
        conn = self._require_open()

        if params:
            return conn.execute(sql, params)
        return conn.execute(sql)

    def executemany(self, sql: str, params: List[tuple]) -> sqlite3.Cursor:
        """Execute a SQL statement multiple times with different parameters.

        Args:
            sql: SQL statement to execute
            params: List of parameter tuples

        Returns:
            Cursor
        """
        return self._require_open().executemany(sql, params)

    @contextmanager
    def transaction(self):
        """Context manager for database transactions.

        Automatically commits on success or rolls back on exception. When a
        transaction is already open the block joins it, so commands built
        from other commands commit once.
        """
        conn = self._require_open()

        if conn.in_transaction:
            yield self
            return

        conn.execute("BEGIN")
        try:
            yield self
            conn.execute("COMMIT")
        except Exception:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise

    def close(self) -> bool:
        """Close the database connection.

        Returns:
            True if a handle was closed, False if it was already closed
        """
        if not self._conn:
            return False
        self._conn.close()
        self._conn = None
        logger.info(f"Closed {self.path}")
        return True

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager."""
        _ = (exc_type, exc_val, exc_tb)
        self.close()
        return False
