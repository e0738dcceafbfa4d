"""Path utilities for sqlitedis."""

import os
from pathlib import Path
from typing import Optional, Union

DEFAULT_DB_NAME = ".predis.db"
DEFAULT_CONFIG_NAME = ".sqlitedis.toml"
MEMORY_PATH = ":memory:"


def get_home_dir() -> Path:
    """Find the current user's home directory.

    Checks HOME, then USERPROFILE, before falling back to the platform lookup.
    """
    for var in ("HOME", "USERPROFILE"):
        value = os.environ.get(var)
        if value:
            return Path(value)
    return Path.home()


def get_default_db_path() -> Path:
    """Get the default database location, ~/.predis.db."""
    return get_home_dir() / DEFAULT_DB_NAME


def get_default_config_path() -> Path:
    """Get the default config file location, ~/.sqlitedis.toml."""
    return get_home_dir() / DEFAULT_CONFIG_NAME


def is_memory_path(path: Union[str, Path, None]) -> bool:
    """Check whether a path names a private in-memory database."""
    return path is not None and str(path) == MEMORY_PATH


def resolve_db_path(path: Optional[Union[str, Path]] = None) -> Union[str, Path]:
    """Resolve the database location for a store.

    Args:
        path: Explicit location, ":memory:", or None for the default

    Returns:
        ":memory:" unchanged, otherwise an expanded Path
    """
    if path is None:
        return get_default_db_path()
    if is_memory_path(path):
        return MEMORY_PATH
    return Path(path).expanduser()
