"""Tests for SQLite connection management."""

import pytest

from sqlitedis.core.connection import DatabaseConnection, ConnectionClosedError
from sqlitedis.core.schema import ensure_schema


class TestDatabaseConnection:
    """Test database connection management."""

    def test_connection_init(self, temp_db):
        """Test initializing a database connection."""
        conn = DatabaseConnection(temp_db)

        assert conn.path == temp_db
        assert conn.is_open
        assert temp_db.exists()

        conn.close()

    def test_creates_parent_directories(self, temp_db):
        nested = temp_db.parent / "a" / "b" / "store.db"
        with DatabaseConnection(nested) as conn:
            assert conn.is_open
        assert nested.exists()

    def test_fast_mode_pragmas(self, temp_db):
        """Default mode turns off synchronous writes and keeps the journal in memory."""
        conn = DatabaseConnection(temp_db)

        assert conn.execute("PRAGMA synchronous").fetchone()[0] == 0  # OFF
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "memory"

        conn.close()

    def test_durable_mode_pragmas(self, temp_db):
        conn = DatabaseConnection(temp_db, durable=True)

        assert conn.execute("PRAGMA synchronous").fetchone()[0] == 2  # FULL
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "delete"

        conn.close()

    def test_memory_database(self):
        conn = DatabaseConnection(":memory:")
        assert conn.path == ":memory:"
        ensure_schema(conn)
        assert table_names(conn) == ["sets", "string"]
        conn.close()

    def test_execute(self, temp_db):
        """Test executing SQL statements."""
        conn = DatabaseConnection(temp_db)

        conn.execute("CREATE TABLE test (id TEXT PRIMARY KEY, name TEXT NOT NULL)")
        conn.execute("INSERT INTO test (id, name) VALUES (?, ?)", ("1", "Test"))

        row = conn.execute("SELECT * FROM test WHERE id = ?", ("1",)).fetchone()
        assert row["id"] == "1"
        assert row["name"] == "Test"

        conn.close()

    def test_executemany(self, temp_db):
        conn = DatabaseConnection(temp_db)
        conn.execute("CREATE TABLE test (value TEXT)")
        conn.executemany("INSERT INTO test VALUES (?)", [("a",), ("b",)])

        assert conn.execute("SELECT COUNT(*) AS count FROM test").fetchone()["count"] == 2
        conn.close()

    def test_transaction(self, temp_db):
        """Test transaction management."""
        conn = DatabaseConnection(temp_db)
        conn.execute("CREATE TABLE test (id INTEGER PRIMARY KEY, value TEXT)")

        with conn.transaction():
            conn.execute("INSERT INTO test (value) VALUES (?)", ("test1",))
            conn.execute("INSERT INTO test (value) VALUES (?)", ("test2",))

        result = conn.execute("SELECT COUNT(*) as count FROM test")
        assert result.fetchone()["count"] == 2

        with pytest.raises(RuntimeError, match="Test error"):
            with conn.transaction():
                conn.execute("INSERT INTO test (value) VALUES (?)", ("test3",))
                raise RuntimeError("Test error")

        result = conn.execute("SELECT COUNT(*) as count FROM test")
        assert result.fetchone()["count"] == 2  # Still 2, not 3

        conn.close()

    def test_nested_transaction_joins_outer(self, temp_db):
        """An inner transaction block rolls back with its outer block."""
        conn = DatabaseConnection(temp_db)
        conn.execute("CREATE TABLE test (value TEXT)")

        with pytest.raises(ValueError):
            with conn.transaction():
                with conn.transaction():
                    conn.execute("INSERT INTO test VALUES ('inner')")
                raise ValueError("outer failure")

        assert conn.execute("SELECT COUNT(*) AS count FROM test").fetchone()["count"] == 0
        conn.close()

    def test_error_after_transaction_already_ended(self, temp_db):
        """The block's own error surfaces when nothing is left to roll back."""
        conn = DatabaseConnection(temp_db)
        conn.execute("CREATE TABLE test (value TEXT)")

        with pytest.raises(ValueError, match="after rollback"):
            with conn.transaction():
                conn.execute("INSERT INTO test VALUES ('x')")
                conn.execute("ROLLBACK")
                raise ValueError("after rollback")

        assert conn._conn.in_transaction is False
        assert conn.execute("SELECT COUNT(*) AS count FROM test").fetchone()["count"] == 0
        with conn.transaction():
            conn.execute("INSERT INTO test VALUES ('y')")
        assert conn.execute("SELECT COUNT(*) AS count FROM test").fetchone()["count"] == 1
        conn.close()

    def test_autocommit_outside_transaction(self, temp_db):
        """Writes outside transaction() are visible to other connections immediately."""
        writer = DatabaseConnection(temp_db)
        writer.execute("CREATE TABLE test (value TEXT)")
        writer.execute("INSERT INTO test VALUES ('x')")

        reader = DatabaseConnection(temp_db)
        assert reader.execute("SELECT value FROM test").fetchone()["value"] == "x"

        reader.close()
        writer.close()

    def test_closed_connection(self, temp_db):
        conn = DatabaseConnection(temp_db)
        assert conn.close() is True
        assert conn.close() is False
        assert not conn.is_open

        with pytest.raises(ConnectionClosedError, match="Connection is closed"):
            conn.execute("SELECT 1")

        with pytest.raises(ConnectionClosedError):
            with conn.transaction():
                pass

    def test_context_manager(self, temp_db):
        """Test using connection as context manager."""
        with DatabaseConnection(temp_db) as conn:
            conn.execute("CREATE TABLE test (id INTEGER)")

        assert conn._conn is None


class TestSchema:
    """Test schema creation."""

    def test_ensure_schema(self, temp_db):
        with DatabaseConnection(temp_db) as conn:
            ensure_schema(conn)
            assert table_names(conn) == ["sets", "string"]

    def test_ensure_schema_is_repeatable(self, temp_db):
        with DatabaseConnection(temp_db) as conn:
            ensure_schema(conn)
            conn.execute("INSERT INTO string (key, val) VALUES ('k', x'01')")
            ensure_schema(conn)
            assert conn.execute("SELECT COUNT(*) AS count FROM string").fetchone()["count"] == 1

    def test_string_keys_are_unique(self, temp_db):
        import sqlite3

        with DatabaseConnection(temp_db) as conn:
            ensure_schema(conn)
            conn.execute("INSERT INTO string (key, val) VALUES ('k', 'a')")
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute("INSERT INTO string (key, val) VALUES ('k', 'b')")


def table_names(conn: DatabaseConnection) -> list:
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
    ).fetchall()
    return [row["name"] for row in rows]
