"""Utility modules for sqlitedis."""

from sqlitedis.utils.encoding import (
    Encoder,
    DataError,
    ResponseError,
    to_int,
)

__all__ = [
    "Encoder",
    "DataError",
    "ResponseError",
    "to_int",
]
