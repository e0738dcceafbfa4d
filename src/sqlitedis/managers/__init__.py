"""sqlitedis managers."""

from sqlitedis.managers.base import StoreContext, BaseManager
from sqlitedis.managers.strings import StringManager
from sqlitedis.managers.sets import SetManager
from sqlitedis.managers.bits import BitManager
from sqlitedis.managers.keys import KeyManager

__all__ = [
    "StoreContext",
    "BaseManager",
    "StringManager",
    "SetManager",
    "BitManager",
    "KeyManager",
]
