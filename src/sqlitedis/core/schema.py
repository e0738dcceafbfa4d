"""Storage schema for sqlitedis.

Two tables hold everything:

* ``string`` maps a unique key to one scalar value.
* ``sets`` holds one row per (key, member) pair. The schema does not make the
  pair unique; ``sadd`` only inserts rows that are not already present.
"""

import logging

from sqlitedis.core.connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS string (
        id INTEGER PRIMARY KEY,
        key TEXT UNIQUE,
        val BLOB
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS sets (
        id INTEGER PRIMARY KEY,
        key TEXT,
        val BLOB
    )
    """,
    "CREATE INDEX IF NOT EXISTS sets_key_val ON sets (key, val)",
)


def ensure_schema(conn: DatabaseConnection) -> None:
    """Create the storage tables if they do not exist yet."""
    with conn.transaction():
        for statement in SCHEMA:
            conn.execute(statement)
    logger.debug(f"Schema ready in {conn.path}")

