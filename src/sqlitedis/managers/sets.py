"""Set manager - membership commands over the ``sets`` table."""

from typing import Any, Iterable, List, Optional, Set

from sqlitedis.managers.base import BaseManager
from sqlitedis.utils.encoding import EncodedValue, to_int

SADD_SQL = (
    "INSERT INTO sets (key, val) SELECT ?, ? "
    "WHERE NOT EXISTS (SELECT 1 FROM sets WHERE key = ? AND val = ?)"
)
SREM_SQL = "DELETE FROM sets WHERE key = ? AND val = ?"
MEMBERS_SQL = "SELECT val FROM sets WHERE key = ?"
ISMEMBER_SQL = "SELECT 1 FROM sets WHERE key = ? AND val = ? LIMIT 1"
SCARD_SQL = "SELECT COUNT(*) AS count FROM sets WHERE key = ?"
RANDOM_SQL = "SELECT val FROM sets WHERE key = ? ORDER BY RANDOM() LIMIT 1"


class SetManager(BaseManager):
    """Commands over unordered sets of byte-string members.

    A set is nothing more than its member rows: a set with no members and a
    missing key look the same. Each (key, member) pair is stored at most once.
    """

    def _add_raw(self, key: str, member: bytes) -> bool:
        result = self.conn.execute(SADD_SQL, (key, member, key, member))
        return result.rowcount > 0

    def _remove_raw(self, key: str, member: bytes) -> bool:
        result = self.conn.execute(SREM_SQL, (key, member))
        return result.rowcount > 0

    def _members_raw(self, key: str) -> List[bytes]:
        rows = self.conn.execute(MEMBERS_SQL, (key,)).fetchall()
        return [self.encoder.stored(row["val"]) for row in rows]

    def _random_raw(self, key: str) -> Optional[bytes]:
        row = self.conn.execute(RANDOM_SQL, (key,)).fetchone()
        return self.encoder.stored(row["val"]) if row else None

    def _decode_all(self, members: Iterable[bytes]) -> List[EncodedValue]:
        return [self.encoder.decode(member) for member in members]

    def sadd(self, key: Any, member: Any) -> bool:
        """Add a member to a set.

        Returns:
            True if the member was added, False if it was already present
        """
        return self._add_raw(self.encoder.key(key), self.encoder.encode(member))

    def srem(self, key: Any, member: Any) -> bool:
        """Remove a member from a set.

        Returns:
            True if the member was present and removed
        """
        return self._remove_raw(self.encoder.key(key), self.encoder.encode(member))

    def smembers(self, key: Any) -> List[EncodedValue]:
        """All members of a set, in no particular order."""
        return self._decode_all(self._members_raw(self.encoder.key(key)))

    def sismember(self, key: Any, member: Any) -> bool:
        row = self.conn.execute(
            ISMEMBER_SQL, (self.encoder.key(key), self.encoder.encode(member))
        ).fetchone()
        return row is not None

    def scard(self, key: Any) -> int:
        """Number of members in a set (0 if missing)."""
        row = self.conn.execute(SCARD_SQL, (self.encoder.key(key),)).fetchone()
        return row["count"] if row else 0

    def srandmember(self, key: Any) -> Optional[EncodedValue]:
        """Return one member chosen at random, or None for an empty set."""
        return self.encoder.decode(self._random_raw(self.encoder.key(key)))

    def spop(self, key: Any, count: int = 1) -> List[EncodedValue]:
        """Remove and return ``count`` random members.

        Nothing is removed when ``count`` is larger than the set, so asking
        for more members than exist returns an empty list.

        Args:
            key: Set to pop from
            count: Number of members to remove (default: 1)

        Returns:
            The removed members
        """
        key = self.encoder.key(key)
        count = to_int(count)
        popped = []
        with self.conn.transaction():
            while 0 < count <= self.scard(key):
                member = self._random_raw(key)
                self._remove_raw(key, member)
                popped.append(member)
                count -= 1
        return self._decode_all(popped)

    def smove(self, source: Any, destination: Any, member: Any) -> bool:
        """Move a member from one set to another.

        Returns:
            True if the member was in ``source`` and got moved
        """
        source = self.encoder.key(source)
        destination = self.encoder.key(destination)
        member = self.encoder.encode(member)
        with self.conn.transaction():
            if not self.conn.execute(ISMEMBER_SQL, (source, member)).fetchone():
                return False
            if source == destination:
                return True
            if self.conn.execute(ISMEMBER_SQL, (destination, member)).fetchone():
                # Already there: drop the source row rather than duplicate it
                self._remove_raw(source, member)
            else:
                self.conn.execute(
                    "UPDATE sets SET key = ? WHERE key = ? AND val = ?",
                    (destination, source, member),
                )
            return True

    # Multi-key operations

    def _union_raw(self, keys: Iterable[Any]) -> Set[bytes]:
        union: Set[bytes] = set()
        for key in keys:
            union.update(self._members_raw(self.encoder.key(key)))
        return union

    def _inter_raw(self, keys: Iterable[Any]) -> Set[bytes]:
        keys = list(keys)
        if not keys:
            return set()
        sets = [set(self._members_raw(self.encoder.key(key))) for key in keys]
        return set.intersection(*sets)

    def sunion(self, keys: Iterable[Any]) -> Set[EncodedValue]:
        """Members found in any of the named sets, each listed once."""
        return set(self._decode_all(self._union_raw(keys)))

    def sinter(self, keys: Iterable[Any]) -> Set[EncodedValue]:
        """Members found in every one of the named sets."""
        return set(self._decode_all(self._inter_raw(keys)))

    def _store(self, destination: Any, members: Set[bytes]) -> int:
        destination = self.encoder.key(destination)
        with self.conn.transaction():
            self.context.keys.delete(destination)
            for member in members:
                self._add_raw(destination, member)
        return len(members)

    def sunionstore(self, destination: Any, keys: Iterable[Any]) -> int:
        """Replace ``destination`` with the union of the named sets.

        Returns:
            Number of members stored
        """
        with self.conn.transaction():
            return self._store(destination, self._union_raw(keys))

    def sinterstore(self, destination: Any, keys: Iterable[Any]) -> int:
        """Replace ``destination`` with the intersection of the named sets.

        Returns:
            Number of members stored
        """
        with self.conn.transaction():
            return self._store(destination, self._inter_raw(keys))
