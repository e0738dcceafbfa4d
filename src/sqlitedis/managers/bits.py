"""Bit manager - treats a string value as a big-endian bit string."""

from typing import Any, Optional

from sqlitedis.managers.base import BaseManager
from sqlitedis.managers.strings import byte_range
from sqlitedis.utils.encoding import DataError, to_int

# Number of set bits in each byte value 0-255
POPCOUNT = tuple(bin(byte).count("1") for byte in range(256))


class BitManager(BaseManager):
    """Bit-level access to string values.

    Bit 0 is the most significant bit of the first byte. Bits past the end of
    the value read as 0, and writing past the end grows the value with zero
    bytes.
    """

    def bitcount(self, key: Any, start: Optional[int] = None, end: Optional[int] = None) -> int:
        """Count the set bits in a value.

        Args:
            key: Key to inspect
            start: Optional first byte, negative counts from the end
            end: Optional last byte (inclusive); required when start is given

        Returns:
            Number of 1 bits, 0 for a missing key
        """
        value = self.context.strings.get_raw(self.encoder.key(key)) or b""

        if start is not None or end is not None:
            if start is None or end is None:
                raise DataError("Both start and end must be specified")
            lower, upper = byte_range(len(value), to_int(start), to_int(end))
            value = value[lower:upper]

        return sum(POPCOUNT[byte] for byte in value)

    def getbit(self, key: Any, offset: int) -> int:
        """Return the bit at ``offset``, 0 beyond the end of the value."""
        offset = self._check_offset(offset)
        value = self.context.strings.get_raw(self.encoder.key(key)) or b""

        index, shift = divmod(offset, 8)
        if index >= len(value):
            return 0
        return (value[index] >> (7 - shift)) & 1

    def setbit(self, key: Any, offset: int, value: int) -> int:
        """Set or clear the bit at ``offset``.

        Args:
            key: Key to modify
            offset: Bit position, 0 is the high bit of the first byte
            value: 0 or 1

        Returns:
            The bit's previous value

        Raises:
            DataError: If offset is negative or value is not 0 or 1
        """
        offset = self._check_offset(offset)
        if isinstance(value, bool) or value not in (0, 1):
            raise DataError("bit is not an integer or out of range")

        key = self.encoder.key(key)
        strings = self.context.strings
        index, shift = divmod(offset, 8)
        mask = 1 << (7 - shift)

        with self.conn.transaction():
            data = bytearray(strings.get_raw(key) or b"")
            if index >= len(data):
                data.extend(b"\x00" * (index + 1 - len(data)))

            previous = 1 if data[index] & mask else 0
            if value:
                data[index] |= mask
            else:
                data[index] &= ~mask & 0xFF
            strings.set_raw(key, bytes(data))

        return previous

    def _check_offset(self, offset: Any) -> int:
        offset = to_int(offset, "bit offset is not an integer or out of range")
        if offset < 0:
            raise DataError("bit offset is not an integer or out of range")
        return offset
