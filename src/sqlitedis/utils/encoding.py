"""Value and key normalisation for sqlitedis.

Values are stored as raw bytes, keys as text. The Encoder converts what
callers pass in to those forms and turns stored bytes back into what callers
asked for (bytes, or str when responses are decoded).
"""

import re
from typing import Any, Optional, Union

EncodedValue = Union[bytes, str]

# Optional minus sign followed by ASCII digits
INTEGER_PATTERN = re.compile(r"-?[0-9]+")


class DataError(ValueError):
    """Raised when an argument cannot be stored or interpreted."""

    pass


class ResponseError(ValueError):
    """Raised when a stored value does not support the requested command."""

    pass


class Encoder:
    """Converts between Python values and the stored representation."""

    def __init__(self, encoding: str = "utf-8", decode_responses: bool = False):
        self.encoding = encoding
        self.decode_responses = decode_responses

    def encode(self, value: Any) -> bytes:
        """Convert a value to the bytes that get stored.

        Args:
            value: bytes-like, str, int or float

        Returns:
            Raw bytes

        Raises:
            DataError: For None, bool and any other type
        """
        if isinstance(value, bytes):
            return value
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, bool):
            # Check bool before int, True is an int
            raise DataError(
                "Invalid input of type: 'bool'. Convert to a bytes, string, int or float first."
            )
        if isinstance(value, (int, float)):
            return repr(value).encode()
        if isinstance(value, str):
            return value.encode(self.encoding)
        raise DataError(
            f"Invalid input of type: '{type(value).__name__}'. "
            f"Convert to a bytes, string, int or float first."
        )

    def key(self, key: Any) -> str:
        """Convert a key name to the text stored in the key column."""
        if isinstance(key, str):
            return key
        if isinstance(key, (bytes, bytearray, memoryview)):
            return bytes(key).decode(self.encoding)
        if isinstance(key, bool) or not isinstance(key, (int, float)):
            raise DataError(f"Invalid key of type: '{type(key).__name__}'")
        return repr(key)

    def stored(self, value: Any) -> Optional[bytes]:
        """Normalise a column value read back from SQLite to bytes.

        Rows written by other tools may hold TEXT or numbers rather than BLOBs.
        """
        if value is None:
            return None
        return self.encode(value)

    def decode(self, value: Optional[bytes]) -> Optional[EncodedValue]:
        """Convert stored bytes to the form returned to callers."""
        if value is None or not self.decode_responses:
            return value
        return value.decode(self.encoding)


def to_int(value: Any, message: str = "value is not an integer or out of range") -> int:
    """Interpret a stored value or argument as a base-10 integer.

    Raises:
        ResponseError: If the value is not an integral number
    """
    if isinstance(value, bool):
        raise ResponseError(message)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ResponseError(message)
        return int(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        value = bytes(value).decode("ascii", errors="replace")
    if not isinstance(value, str) or not INTEGER_PATTERN.fullmatch(value):
        raise ResponseError(message)
    return int(value)
