"""Configuration management for sqlitedis stores."""

import os
from pathlib import Path
from typing import Optional, Dict, Any
import toml
from pydantic import BaseModel, Field, ConfigDict

from sqlitedis.core.path_utils import get_default_config_path


FALSE_VALUES = {"", "0", "false", "no", "off"}


class StoreConfig(BaseModel):
    """Settings used to open a store, optionally stored in ~/.sqlitedis.toml."""

    model_config = ConfigDict(extra="forbid")

    path: Optional[Path] = Field(
        default=None,
        description="SQLite database file, None for ~/.predis.db",
    )
    durable: bool = Field(
        default=False,
        description="Enable full fsync and rollback journaling",
    )
    decode_responses: bool = Field(
        default=False, description="Return str instead of bytes for values"
    )
    encoding: str = Field(default="utf-8", description="Codec for str values")
    timeout: float = Field(
        default=5.0, description="Seconds to wait on a locked database"
    )


def env_flag(value: Optional[str]) -> bool:
    """Interpret an environment variable as a boolean switch."""
    if value is None:
        return False
    return value.strip().lower() not in FALSE_VALUES


class Config:
    """Loads and saves store configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager.

        Args:
            config_path: Path to a TOML config file. If None, uses SQLITEDIS_CONFIG env var or ~/.sqlitedis.toml.
        """
        if config_path is None:
            env_path = os.environ.get("SQLITEDIS_CONFIG")
            if env_path:
                config_path = Path(env_path)

        self.config_path = (
            Path(config_path).expanduser() if config_path else get_default_config_path()
        )
        self._config: Optional[StoreConfig] = None

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> StoreConfig:
        """Load configuration from disk, with environment variable overrides.

        A missing config file is not an error: defaults are used instead.
        """
        data: Dict[str, Any] = {}
        if self.exists:
            with open(self.config_path, "r") as f:
                data = toml.load(f)

        self._apply_env_overrides(data)

        self._config = StoreConfig(**data)
        return self._config

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""
        if env_path := os.environ.get("SQLITEDIS_PATH"):
            data["path"] = env_path

        # SAFE is the historical switch; the prefixed name takes precedence
        safe = os.environ.get("SQLITEDIS_SAFE", os.environ.get("SAFE"))
        if safe is not None:
            data["durable"] = env_flag(safe)

    def save(self, config: Optional[StoreConfig] = None) -> None:
        """Save configuration to disk.

        Args:
            config: Configuration to save. If None, saves current config.
        """
        if config:
            self._config = config

        if not self._config:
            raise ValueError("No configuration to save")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        # TOML has no null, so unset fields are left out
        config_dict = self._config.model_dump(exclude_none=True)
        if "path" in config_dict:
            config_dict["path"] = str(config_dict["path"])

        with open(self.config_path, "w") as f:
            toml.dump(config_dict, f)
