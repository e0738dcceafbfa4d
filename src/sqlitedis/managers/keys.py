"""Key-space manager: existence, type, deletion, renaming and enumeration."""

import re
from typing import Any, List, Optional

from sqlitedis.managers.base import BaseManager

ALL_KEYS_SQL = "SELECT key FROM string UNION SELECT key FROM sets"


class KeyManager(BaseManager):
    """Commands that work on key names regardless of the value type.

    String keys and set keys share one namespace. Nothing stops a name from
    holding rows in both tables; when that happens the string entry wins in
    ``type``.
    """

    def exists(self, key: Any) -> bool:
        """Check if a key has a string entry or at least one set member.

        Args:
            key: Key to check

        Returns:
            True if the key exists in either table
        """
        key = self.encoder.key(key)
        row = self.conn.execute(
            "SELECT 1 FROM string WHERE key = ? "
            "UNION ALL SELECT 1 FROM sets WHERE key = ? LIMIT 1",
            (key, key),
        ).fetchone()
        return row is not None

    def type(self, key: Any) -> Optional[str]:
        """Return "string", "set" or None for a missing key."""
        key = self.encoder.key(key)
        if self.conn.execute("SELECT 1 FROM string WHERE key = ?", (key,)).fetchone():
            return "string"
        if self.conn.execute("SELECT 1 FROM sets WHERE key = ? LIMIT 1", (key,)).fetchone():
            return "set"
        return None

    def delete(self, key: Any) -> bool:
        """Delete a key, whether it holds a string, a set, or both.

        Args:
            key: Key to delete

        Returns:
            True if any row was removed
        """
        key = self.encoder.key(key)
        with self.conn.transaction():
            strings = self.conn.execute("DELETE FROM string WHERE key = ?", (key,))
            members = self.conn.execute("DELETE FROM sets WHERE key = ?", (key,))
            return (strings.rowcount + members.rowcount) > 0

    def rename(self, key: Any, new_key: Any) -> bool:
        """Move a key's string entry and set members to a new name.

        Whatever was stored under ``new_key`` is deleted first. The source is
        not required to exist; renaming a missing key just clears the target.

        Returns:
            True
        """
        key = self.encoder.key(key)
        new_key = self.encoder.key(new_key)
        if key == new_key:
            return True

        with self.conn.transaction():
            self.delete(new_key)
            self.conn.execute("UPDATE string SET key = ? WHERE key = ?", (new_key, key))
            self.conn.execute("UPDATE sets SET key = ? WHERE key = ?", (new_key, key))
        return True

    def renamenx(self, key: Any, new_key: Any) -> bool:
        """Rename a key only if the new name is not taken.

        Returns:
            True if renamed, False if ``new_key`` already exists (nothing changes)
        """
        with self.conn.transaction():
            if self.exists(new_key):
                return False
            return self.rename(key, new_key)

    def keys(self, pattern: Optional[str] = None) -> List[str]:
        """List key names, optionally filtered by a regular expression.

        The pattern is searched for anywhere in the name, so use ``^`` and
        ``$`` to anchor it.

        Args:
            pattern: Regular expression, or None for every key

        Returns:
            Sorted list of distinct key names
        """
        rows = self.conn.execute(f"{ALL_KEYS_SQL} ORDER BY key").fetchall()
        names = [row["key"] for row in rows]

        if not pattern:
            return names

        regex = re.compile(pattern)
        return [name for name in names if regex.search(name)]

    def randomkey(self) -> Optional[str]:
        """Return a uniformly chosen key name, or None if the store is empty."""
        row = self.conn.execute(
            f"SELECT key FROM ({ALL_KEYS_SQL}) ORDER BY RANDOM() LIMIT 1"
        ).fetchone()
        return row["key"] if row else None
