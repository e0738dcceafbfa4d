"""sqlitedis - Redis-style string and set commands stored in SQLite."""

from sqlitedis.core.store import SQLiteRedis, connect
from sqlitedis.core.connection import ConnectionClosedError
from sqlitedis.config import Config, StoreConfig
from sqlitedis.models import Command, UnsupportedCommand
from sqlitedis.utils.encoding import DataError, ResponseError

try:
    from importlib.metadata import version
    __version__ = version("sqlitedis")
except Exception:
    # Package metadata is not available when running from a source checkout
    __version__ = "0.3.0"

__all__ = [
    "SQLiteRedis",
    "connect",
    "Config",
    "StoreConfig",
    "Command",
    "UnsupportedCommand",
    "ConnectionClosedError",
    "DataError",
    "ResponseError",
]
