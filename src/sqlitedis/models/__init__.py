"""Data models for sqlitedis."""

from .base import SqlitedisBaseModel
from .command import Command, UnsupportedCommand, UNSUPPORTED_COMMANDS

__all__ = [
    "SqlitedisBaseModel",
    "Command",
    "UnsupportedCommand",
    "UNSUPPORTED_COMMANDS",
]
