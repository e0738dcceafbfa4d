"""Base manager class and shared context for all sqlitedis managers."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlitedis.core.connection import DatabaseConnection
from sqlitedis.utils.encoding import Encoder

if TYPE_CHECKING:
    from sqlitedis.managers.strings import StringManager
    from sqlitedis.managers.sets import SetManager
    from sqlitedis.managers.bits import BitManager
    from sqlitedis.managers.keys import KeyManager


@dataclass
class StoreContext:
    """Shared context for all managers.

    Holds the one open connection and the encoder, so every manager reads and
    writes the same tables with the same value conventions.

    Attributes:
        connection: Open database connection
        encoder: Converts values to and from their stored form
    """
    connection: DatabaseConnection
    encoder: Encoder = field(default_factory=Encoder)

    # Manager properties for convenient access
    # These use lazy imports to avoid circular dependencies

    @property
    def strings(self) -> "StringManager":
        """Access StringManager for this context."""
        from sqlitedis.managers.strings import StringManager
        return StringManager(self)

    @property
    def sets(self) -> "SetManager":
        """Access SetManager for this context."""
        from sqlitedis.managers.sets import SetManager
        return SetManager(self)

    @property
    def bits(self) -> "BitManager":
        """Access BitManager for this context."""
        from sqlitedis.managers.bits import BitManager
        return BitManager(self)

    @property
    def keys(self) -> "KeyManager":
        """Access KeyManager for this context."""
        from sqlitedis.managers.keys import KeyManager
        return KeyManager(self)


class BaseManager:
    """Common plumbing for managers bound to a StoreContext."""

    def __init__(self, context: StoreContext):
        """Initialize manager.

        Args:
            context: Shared store context
        """
        self.context = context

    @property
    def conn(self) -> DatabaseConnection:
        return self.context.connection

    @property
    def encoder(self) -> Encoder:
        return self.context.encoder
