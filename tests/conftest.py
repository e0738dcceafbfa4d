"""Pytest configuration and shared fixtures."""

import shutil
import tempfile
from pathlib import Path

import pytest

from sqlitedis import SQLiteRedis, StoreConfig


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the real home directory and ambient settings."""
    for var in ("SQLITEDIS_PATH", "SQLITEDIS_SAFE", "SQLITEDIS_CONFIG", "SAFE", "USERPROFILE"):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    yield home


@pytest.fixture
def temp_db():
    """Path to a database file in a fresh temporary directory."""
    temp = tempfile.mkdtemp()
    yield Path(temp) / "test.db"
    shutil.rmtree(temp)


@pytest.fixture
def store(temp_db):
    """An open store returning bytes."""
    r = SQLiteRedis(config=StoreConfig(path=temp_db))
    yield r
    r.close()


@pytest.fixture
def text_store(temp_db):
    """An open store returning str."""
    r = SQLiteRedis(config=StoreConfig(path=temp_db, decode_responses=True))
    yield r
    r.close()
