"""Core sqlitedis functionality."""

from sqlitedis.core.connection import DatabaseConnection, ConnectionClosedError
from sqlitedis.core.store import SQLiteRedis, connect

__all__ = ["DatabaseConnection", "ConnectionClosedError", "SQLiteRedis", "connect"]
