"""Unified store interface for sqlitedis."""

import logging
from functools import partial
from pathlib import Path
from typing import Any, List, Optional, Set, Union, TYPE_CHECKING

from sqlitedis.config import Config, StoreConfig
from sqlitedis.core.connection import ConnectionClosedError, DatabaseConnection
from sqlitedis.core.path_utils import resolve_db_path
from sqlitedis.core.schema import ensure_schema
from sqlitedis.managers.base import StoreContext
from sqlitedis.managers.strings import pairs
from sqlitedis.models.command import Command, UnsupportedCommand, UNSUPPORTED_COMMANDS
from sqlitedis.utils.encoding import EncodedValue, Encoder

if TYPE_CHECKING:
    from sqlitedis.managers.strings import StringManager
    from sqlitedis.managers.sets import SetManager
    from sqlitedis.managers.bits import BitManager
    from sqlitedis.managers.keys import KeyManager

logger = logging.getLogger(__name__)


def _flatten(args: tuple) -> list:
    """Accept both ``f(k1, k2)`` and ``f([k1, k2])`` call styles."""
    if len(args) == 1 and isinstance(args[0], (list, tuple, set)):
        return list(args[0])
    return list(args)


class SQLiteRedis:
    """Redis-style string and set commands persisted to a SQLite file.

    Method names and return values follow the Redis Python client for the
    commands implemented here, so code written against that client runs
    unchanged as long as it only uses strings, sets and bit operations.

    Examples:
        # Default file (~/.predis.db)
        r = SQLiteRedis()

        # Explicit file, str responses
        r = SQLiteRedis(path="/tmp/cache.db", decode_responses=True)
        r.set("foo", "bar")
        r.get("foo")              # "bar"

        r.sadd("langs", "python")
        r.smembers("langs")       # ["python"]

        # Close deterministically
        with SQLiteRedis(path="/tmp/cache.db") as r:
            r.incr("hits")
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        durable: Optional[bool] = None,
        decode_responses: Optional[bool] = None,
        config: Optional[StoreConfig] = None,
    ):
        """Open (creating if needed) a store.

        Settings not given here come from ``config``; when that is None they
        are loaded from ~/.sqlitedis.toml and the environment (see Config).

        Args:
            path: Database file, ":memory:", or None for ~/.predis.db
            durable: Use full fsync and a rollback journal (default: False)
            decode_responses: Return str rather than bytes
            config: Pre-built settings, skips file/environment loading
        """
        if config is None:
            config = Config().load()

        overrides = {
            name: value
            for name, value in (
                ("path", path),
                ("durable", durable),
                ("decode_responses", decode_responses),
            )
            if value is not None
        }
        if overrides:
            config = config.model_copy(update=overrides)

        self.config = config
        self.path = resolve_db_path(config.path)
        self.encoder = Encoder(config.encoding, config.decode_responses)
        self.connection = DatabaseConnection(
            self.path, durable=config.durable, timeout=config.timeout
        )
        ensure_schema(self.connection)
        self.context = StoreContext(self.connection, self.encoder)

        # Lazy-loaded managers
        self._string_manager: Optional["StringManager"] = None
        self._set_manager: Optional["SetManager"] = None
        self._bit_manager: Optional["BitManager"] = None
        self._key_manager: Optional["KeyManager"] = None

    @property
    def strings(self) -> "StringManager":
        """String command operations."""
        if self._string_manager is None:
            self._string_manager = self.context.strings
        return self._string_manager

    @property
    def sets(self) -> "SetManager":
        """Set command operations."""
        if self._set_manager is None:
            self._set_manager = self.context.sets
        return self._set_manager

    @property
    def bits(self) -> "BitManager":
        """Bit command operations."""
        if self._bit_manager is None:
            self._bit_manager = self.context.bits
        return self._bit_manager

    @property
    def key_space(self) -> "KeyManager":
        """Key-space operations."""
        if self._key_manager is None:
            self._key_manager = self.context.keys
        return self._key_manager

    # Strings

    def get(self, key: Any) -> Optional[EncodedValue]:
        return self.strings.get(key)

    def set(self, key: Any, value: Any) -> None:
        self.strings.set(key, value)

    def setnx(self, key: Any, value: Any) -> bool:
        return self.strings.setnx(key, value)

    def getset(self, key: Any, value: Any) -> Optional[EncodedValue]:
        return self.strings.getset(key, value)

    def append(self, key: Any, data: Any) -> int:
        return self.strings.append(key, data)

    def strlen(self, key: Any) -> int:
        return self.strings.strlen(key)

    def getrange(self, key: Any, start: int, end: int) -> EncodedValue:
        return self.strings.getrange(key, start, end)

    def setrange(self, key: Any, offset: int, data: Any) -> int:
        return self.strings.setrange(key, offset, data)

    def incr(self, key: Any, amount: int = 1) -> int:
        return self.strings.incr(key, amount)

    def incrby(self, key: Any, amount: int = 1) -> int:
        return self.strings.incrby(key, amount)

    def decr(self, key: Any, amount: int = 1) -> int:
        return self.strings.decr(key, amount)

    def decrby(self, key: Any, amount: int = 1) -> int:
        return self.strings.decrby(key, amount)

    def mget(self, *keys: Any) -> List[Optional[EncodedValue]]:
        """Get several keys; takes the keys as arguments or as one list."""
        return self.strings.mget(_flatten(keys))

    def mset(self, *args: Any) -> None:
        """Set several keys from flat ``k1, v1, k2, v2`` arguments or one mapping."""
        self.strings.mset(pairs(args))

    def msetnx(self, *args: Any) -> bool:
        """Like mset, but writes nothing and returns False if any key exists."""
        return self.strings.msetnx(pairs(args))

    # Sets

    def sadd(self, key: Any, member: Any) -> bool:
        return self.sets.sadd(key, member)

    def srem(self, key: Any, member: Any) -> bool:
        return self.sets.srem(key, member)

    def smembers(self, key: Any) -> List[EncodedValue]:
        return self.sets.smembers(key)

    def sismember(self, key: Any, member: Any) -> bool:
        return self.sets.sismember(key, member)

    def scard(self, key: Any) -> int:
        return self.sets.scard(key)

    def srandmember(self, key: Any) -> Optional[EncodedValue]:
        return self.sets.srandmember(key)

    def spop(self, key: Any, count: int = 1) -> List[EncodedValue]:
        return self.sets.spop(key, count)

    def smove(self, source: Any, destination: Any, member: Any) -> bool:
        return self.sets.smove(source, destination, member)

    def sunion(self, *keys: Any) -> Set[EncodedValue]:
        return self.sets.sunion(_flatten(keys))

    def sinter(self, *keys: Any) -> Set[EncodedValue]:
        return self.sets.sinter(_flatten(keys))

    def sunionstore(self, destination: Any, *keys: Any) -> int:
        return self.sets.sunionstore(destination, _flatten(keys))

    def sinterstore(self, destination: Any, *keys: Any) -> int:
        return self.sets.sinterstore(destination, _flatten(keys))

    # Bits

    def bitcount(self, key: Any, start: Optional[int] = None, end: Optional[int] = None) -> int:
        return self.bits.bitcount(key, start, end)

    def setbit(self, key: Any, offset: int, value: int) -> int:
        return self.bits.setbit(key, offset, value)

    def getbit(self, key: Any, offset: int) -> int:
        return self.bits.getbit(key, offset)

    # Key space

    def keys(self, pattern: Optional[str] = None) -> List[str]:
        return self.key_space.keys(pattern)

    def randomkey(self) -> Optional[str]:
        return self.key_space.randomkey()

    def delete(self, key: Any) -> bool:
        return self.key_space.delete(key)

    def exists(self, key: Any) -> bool:
        return self.key_space.exists(key)

    def type(self, key: Any) -> Optional[str]:
        return self.key_space.type(key)

    def rename(self, key: Any, new_key: Any) -> bool:
        return self.key_space.rename(key, new_key)

    def renamenx(self, key: Any, new_key: Any) -> bool:
        return self.key_space.renamenx(key, new_key)

    # Connection

    def ping(self) -> bool:
        """True while the database handle is open."""
        return self.connection.is_open

    def echo(self, value: Any) -> Any:
        return value

    def quit(self) -> bool:
        """Close the database handle.

        Every later command except ``ping``, ``echo`` and ``quit`` raises
        ConnectionClosedError.

        Returns:
            True if the handle was open, False if it was already closed
        """
        return self.connection.close()

    def shutdown(self) -> bool:
        return self.quit()

    def close(self) -> None:
        self.quit()

    @property
    def closed(self) -> bool:
        return not self.connection.is_open

    # Command dispatch

    def execute_command(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Run a command given by its Redis name, e.g. ``execute_command("SADD", "s", "x")``.

        Commands this store does not implement are not an error: a warning
        is logged and an UnsupportedCommand result (which is truthy) comes back.

        Args:
            name: Command name, any case
            *args: Command arguments
            **kwargs: Keyword arguments for the command method

        Returns:
            The command's result, or UnsupportedCommand
        """
        command = Command.lookup(name)
        if command is None:
            return self._unsupported(name, *args, **kwargs)
        return getattr(self, command.method)(*args, **kwargs)

    def _unsupported(self, name: str, *args: Any, **kwargs: Any) -> UnsupportedCommand:
        logger.warning(
            f"Command not implemented: {name.upper()} "
            f"({len(args)} args, keywords: {sorted(kwargs)})"
        )
        return UnsupportedCommand(command=name.upper(), args=args, kwargs=kwargs)

    def __getattr__(self, name: str):
        # Only reached when normal lookup fails
        if name.lower() in UNSUPPORTED_COMMANDS:
            return partial(self._unsupported, name)
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<SQLiteRedis path={self.path!s} {state}>"

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()


def connect(
    path: Optional[Union[str, Path]] = None,
    durable: Optional[bool] = None,
    decode_responses: Optional[bool] = None,
    config: Optional[StoreConfig] = None,
) -> SQLiteRedis:
    """Open a store.

    Args:
        path: Database file, ":memory:", or None for ~/.predis.db
        durable: Use full fsync and a rollback journal
        decode_responses: Return str rather than bytes
        config: Pre-built settings, skips file/environment loading

    Returns:
        SQLiteRedis instance

    Examples:
        # Default location
        r = connect()

        # Crash-safe writes
        r = connect("~/data/cache.db", durable=True)
    """
    return SQLiteRedis(
        path=path, durable=durable, decode_responses=decode_responses, config=config
    )


__all__ = ["SQLiteRedis", "connect", "ConnectionClosedError"]
