"""Command names understood by the store."""

from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import Field

from .base import SqlitedisBaseModel


class Command(str, Enum):
    """Supported commands, valued by their Redis command name."""

    # Strings
    GET = "GET"
    SET = "SET"
    SETNX = "SETNX"
    GETSET = "GETSET"
    APPEND = "APPEND"
    STRLEN = "STRLEN"
    GETRANGE = "GETRANGE"
    SETRANGE = "SETRANGE"
    INCR = "INCR"
    INCRBY = "INCRBY"
    DECR = "DECR"
    DECRBY = "DECRBY"
    MGET = "MGET"
    MSET = "MSET"
    MSETNX = "MSETNX"

    # Sets
    SADD = "SADD"
    SREM = "SREM"
    SMEMBERS = "SMEMBERS"
    SISMEMBER = "SISMEMBER"
    SCARD = "SCARD"
    SRANDMEMBER = "SRANDMEMBER"
    SPOP = "SPOP"
    SMOVE = "SMOVE"
    SUNION = "SUNION"
    SINTER = "SINTER"
    SUNIONSTORE = "SUNIONSTORE"
    SINTERSTORE = "SINTERSTORE"

    # Bits
    BITCOUNT = "BITCOUNT"
    SETBIT = "SETBIT"
    GETBIT = "GETBIT"

    # Key space
    KEYS = "KEYS"
    RANDOMKEY = "RANDOMKEY"
    DEL = "DEL"
    EXISTS = "EXISTS"
    TYPE = "TYPE"
    RENAME = "RENAME"
    RENAMENX = "RENAMENX"

    # Connection
    PING = "PING"
    ECHO = "ECHO"
    QUIT = "QUIT"
    SHUTDOWN = "SHUTDOWN"

    @property
    def method(self) -> str:
        """Name of the store method implementing this command."""
        if self is Command.DEL:
            return "delete"
        return self.value.lower()

    @classmethod
    def lookup(cls, name: str) -> Optional["Command"]:
        """Find a command by name, ignoring case. Returns None if unsupported."""
        try:
            return cls(name.upper())
        except ValueError:
            return None


# Redis client methods with no counterpart here. Calling them yields an
# UnsupportedCommand instead of an AttributeError.
UNSUPPORTED_COMMANDS = frozenset(
    {
        # expiry
        "expire", "expireat", "pexpire", "pexpireat", "ttl", "pttl", "persist",
        "setex", "psetex",
        # hashes
        "hset", "hget", "hgetall", "hdel", "hlen", "hkeys", "hvals", "hexists",
        "hincrby", "hincrbyfloat", "hmset", "hmget", "hsetnx", "hstrlen", "hscan",
        # lists
        "lpush", "rpush", "lpushx", "rpushx", "lpop", "rpop", "llen", "lrange",
        "lindex", "lset", "ltrim", "lrem", "linsert", "rpoplpush", "blpop",
        "brpop", "brpoplpush",
        # sorted sets
        "zadd", "zrem", "zcard", "zcount", "zrange", "zrevrange", "zscore",
        "zincrby", "zrank", "zrevrank", "zrangebyscore", "zrevrangebyscore",
        "zremrangebyrank", "zremrangebyscore", "zunionstore", "zinterstore",
        "zscan",
        # scripting
        "eval", "evalsha", "script_load", "script_exists", "script_flush",
        # pub/sub
        "publish", "subscribe", "unsubscribe", "psubscribe", "punsubscribe",
        # transactions
        "multi", "exec", "discard", "watch", "unwatch",
        # cursors and server
        "scan", "sscan", "select", "move", "flushdb", "flushall", "dbsize",
        "info", "save", "bgsave", "lastsave", "auth", "client_setname",
        "incrbyfloat", "sdiff", "sdiffstore", "bitop", "bitpos", "sort",
        "dump", "restore", "object",
    }
)


class UnsupportedCommand(SqlitedisBaseModel):
    """Soft result returned for a command this store does not implement.

    Evaluates as true so callers that only check for success keep working.
    """

    command: str = Field(description="Command name as it was requested")
    args: Tuple[Any, ...] = Field(default=(), description="Arguments passed")
    kwargs: Dict[str, Any] = Field(default_factory=dict, description="Keyword arguments passed")

    def __bool__(self) -> bool:
        return True
