"""String manager - scalar key/value commands over the ``string`` table."""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlitedis.managers.base import BaseManager
from sqlitedis.utils.encoding import DataError, EncodedValue, to_int

GET_SQL = "SELECT val FROM string WHERE key = ?"
SET_SQL = "INSERT OR REPLACE INTO string (key, val) VALUES (?, ?)"


def byte_range(length: int, start: int, end: int) -> Tuple[int, int]:
    """Resolve an inclusive [start, end] byte range to slice bounds.

    Negative indices count back from the end (-1 is the last byte). Indices
    outside the value are clamped, and an empty slice comes back when the
    range selects nothing.

    Args:
        length: Length of the value
        start: First byte offset
        end: Last byte offset, inclusive

    Returns:
        (lower, upper) suitable for ``value[lower:upper]``
    """
    if start < 0:
        start = length + start
    if end < 0:
        end = length + end
    start = max(start, 0)
    end = min(end, length - 1)
    if length == 0 or start > end:
        return 0, 0
    return start, end + 1


def pairs(args: Tuple[Any, ...]) -> Dict[Any, Any]:
    """Turn ``(k1, v1, k2, v2, ...)`` or ``({k1: v1, ...},)`` into a dict."""
    if len(args) == 1 and isinstance(args[0], dict):
        return dict(args[0])
    if len(args) % 2:
        raise DataError("Expected an even number of key/value arguments")
    return dict(zip(args[0::2], args[1::2]))


class StringManager(BaseManager):
    """Commands over scalar string entries.

    Values are stored as BLOBs and returned as bytes, or str when the store
    decodes responses. A missing key reads as None (or empty/zero where the
    command needs a value).
    """

    def get_raw(self, key: str) -> Optional[bytes]:
        row = self.conn.execute(GET_SQL, (key,)).fetchone()
        return self.encoder.stored(row["val"]) if row else None

    def set_raw(self, key: str, value: bytes) -> None:
        self.conn.execute(SET_SQL, (key, value))

    def get(self, key: Any) -> Optional[EncodedValue]:
        """Get the value of a string key.

        Args:
            key: Key to retrieve

        Returns:
            Stored value, or None if the key has no string entry
        """
        return self.encoder.decode(self.get_raw(self.encoder.key(key)))

    def set(self, key: Any, value: Any) -> None:
        """Insert or replace the value of a string key."""
        self.set_raw(self.encoder.key(key), self.encoder.encode(value))

    def setnx(self, key: Any, value: Any) -> bool:
        """Set a key only if it does not exist as a string or a set.

        Returns:
            True if the value was written
        """
        key = self.encoder.key(key)
        value = self.encoder.encode(value)
        with self.conn.transaction():
            if self.context.keys.exists(key):
                return False
            self.set_raw(key, value)
            return True

    def getset(self, key: Any, value: Any) -> Optional[EncodedValue]:
        """Store a new value and return the previous one (None if absent)."""
        key = self.encoder.key(key)
        value = self.encoder.encode(value)
        with self.conn.transaction():
            old = self.get_raw(key)
            self.set_raw(key, value)
        return self.encoder.decode(old)

    def append(self, key: Any, data: Any) -> int:
        """Append data to a value, creating the key if needed.

        Returns:
            Length of the value after appending
        """
        key = self.encoder.key(key)
        data = self.encoder.encode(data)
        with self.conn.transaction():
            value = (self.get_raw(key) or b"") + data
            self.set_raw(key, value)
        return len(value)

    def strlen(self, key: Any) -> int:
        """Byte length of a value, 0 if the key is missing."""
        value = self.get_raw(self.encoder.key(key))
        return len(value) if value is not None else 0

    def getrange(self, key: Any, start: int, end: int) -> EncodedValue:
        """Return the inclusive byte range [start, end] of a value.

        Negative offsets count from the end of the value, so ``getrange(k, 0, -1)``
        returns the whole value. A missing key yields an empty result.
        """
        value = self.get_raw(self.encoder.key(key)) or b""
        lower, upper = byte_range(len(value), to_int(start), to_int(end))
        return self.encoder.decode(value[lower:upper])

    def setrange(self, key: Any, offset: int, data: Any) -> int:
        """Overwrite part of a value starting at ``offset``.

        A value shorter than ``offset`` is padded with zero bytes first.

        Args:
            key: Key to modify
            offset: Byte position to start writing at
            data: Bytes to write

        Returns:
            Length of the value after the write

        Raises:
            DataError: If offset is negative
        """
        offset = to_int(offset)
        if offset < 0:
            raise DataError("offset is out of range")

        key = self.encoder.key(key)
        data = self.encoder.encode(data)
        with self.conn.transaction():
            value = self.get_raw(key) or b""
            if len(value) < offset:
                value += b"\x00" * (offset - len(value))
            value = value[:offset] + data + value[offset + len(data):]
            self.set_raw(key, value)
        return len(value)

    def incrby(self, key: Any, amount: int = 1) -> int:
        """Add ``amount`` to the integer stored at key.

        A missing key counts as 0. The result is stored as decimal text.

        Returns:
            The new value

        Raises:
            ResponseError: If the stored value or amount is not an integer
        """
        amount = to_int(amount)
        key = self.encoder.key(key)
        with self.conn.transaction():
            current = self.get_raw(key)
            value = (to_int(current) if current is not None else 0) + amount
            self.set_raw(key, str(value).encode())
        return value

    def incr(self, key: Any, amount: int = 1) -> int:
        return self.incrby(key, amount)

    def decrby(self, key: Any, amount: int = 1) -> int:
        """Subtract ``amount`` from the integer stored at key."""
        return self.incrby(key, -to_int(amount))

    def decr(self, key: Any, amount: int = 1) -> int:
        return self.decrby(key, amount)

    # Batch operations

    def mget(self, keys: Iterable[Any]) -> List[Optional[EncodedValue]]:
        """Get several values at once, None for each missing key."""
        return [self.get(key) for key in keys]

    def mset(self, mapping: Dict[Any, Any]) -> None:
        """Set every key/value pair in the mapping."""
        items = [
            (self.encoder.key(key), self.encoder.encode(value))
            for key, value in mapping.items()
        ]
        with self.conn.transaction():
            self.conn.executemany(SET_SQL, items)

    def msetnx(self, mapping: Dict[Any, Any]) -> bool:
        """Set every pair only if none of the keys exist.

        Returns:
            True if all pairs were written, False if any key existed (nothing written)
        """
        with self.conn.transaction():
            if any(self.context.keys.exists(key) for key in mapping):
                return False
            self.mset(mapping)
            return True
