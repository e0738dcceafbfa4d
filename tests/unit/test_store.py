"""Tests for SQLiteRedis - construction, lifecycle and command dispatch."""

import logging

import pytest

import sqlitedis
from sqlitedis import (
    Command,
    ConnectionClosedError,
    SQLiteRedis,
    StoreConfig,
    UnsupportedCommand,
)
from sqlitedis.models.command import UNSUPPORTED_COMMANDS


class TestConstruction:
    """Test opening stores."""

    def test_default_location(self, isolated_environment):
        with SQLiteRedis() as r:
            r.set("foo", "bar")
        assert (isolated_environment / ".predis.db").exists()

    def test_explicit_path(self, temp_db):
        with sqlitedis.connect(temp_db) as r:
            assert r.path == temp_db
            assert r.ping() is True
        assert temp_db.exists()

    def test_memory_store(self):
        with sqlitedis.connect(":memory:") as r:
            r.set("foo", "bar")
            assert r.get("foo") == b"bar"

    def test_data_persists_across_instances(self, temp_db):
        with SQLiteRedis(path=temp_db) as r:
            r.set("foo", "bar")
            r.sadd("set", "member")

        with SQLiteRedis(path=temp_db) as r:
            assert r.get("foo") == b"bar"
            assert r.smembers("set") == [b"member"]

    def test_env_path(self, monkeypatch, temp_db):
        monkeypatch.setenv("SQLITEDIS_PATH", str(temp_db))
        with SQLiteRedis() as r:
            assert r.path == temp_db

    def test_env_safe_mode(self, monkeypatch, temp_db):
        monkeypatch.setenv("SAFE", "1")
        with SQLiteRedis(path=temp_db) as r:
            assert r.config.durable is True
            assert r.connection.execute("PRAGMA synchronous").fetchone()[0] == 2

    def test_arguments_override_config(self, temp_db, tmp_path):
        config = StoreConfig(path=tmp_path / "other.db", durable=True)
        with SQLiteRedis(path=temp_db, durable=False, decode_responses=True, config=config) as r:
            assert r.path == temp_db
            assert r.config.durable is False
            r.set("foo", "bar")
            assert r.get("foo") == "bar"

    def test_config_file(self, isolated_environment, temp_db):
        Config = sqlitedis.Config
        Config().save(StoreConfig(path=temp_db, decode_responses=True))

        with SQLiteRedis() as r:
            assert r.path == temp_db
            assert r.config.decode_responses is True

    def test_repr(self, store):
        assert "open" in repr(store)
        store.quit()
        assert "closed" in repr(store)


class TestLifecycle:
    """Test ping/echo/quit/shutdown."""

    def test_ping(self, store):
        assert store.ping() is True

    def test_echo(self, store):
        assert store.echo("hello") == "hello"
        assert store.echo(b"\x00") == b"\x00"

    def test_quit(self, store):
        assert store.quit() is True
        assert store.ping() is False
        assert store.closed
        assert store.quit() is False

    def test_shutdown(self, store):
        assert store.shutdown() is True
        assert store.ping() is False

    def test_commands_after_quit_fail(self, store):
        store.quit()
        with pytest.raises(ConnectionClosedError):
            store.get("foo")
        with pytest.raises(ConnectionClosedError):
            store.sadd("set", "x")
        assert store.echo("still here") == "still here"

    def test_context_manager_closes(self, temp_db):
        with SQLiteRedis(path=temp_db) as r:
            assert r.ping() is True
        assert r.ping() is False


class TestExecuteCommand:
    """Test name-based command dispatch."""

    def test_dispatch(self, store):
        store.execute_command("SET", "foo", "bar")
        assert store.execute_command("get", "foo") == b"bar"
        assert store.execute_command("Sadd", "set", "x") is True
        assert store.execute_command("SCARD", "set") == 1

    def test_del_maps_to_delete(self, store):
        store.set("foo", "bar")
        assert store.execute_command("DEL", "foo") is True
        assert store.exists("foo") is False

    def test_variadic_dispatch(self, store):
        store.execute_command("MSET", "a", "1", "b", "2")
        assert store.execute_command("MGET", "a", "b") == [b"1", b"2"]
        store.sadd("x", "1")
        store.sadd("y", "1")
        assert store.execute_command("SINTERSTORE", "z", "x", "y") == 1

    def test_every_command_has_a_method(self, store):
        for command in Command:
            assert callable(getattr(store, command.method))

    def test_unknown_command(self, store, caplog):
        with caplog.at_level(logging.WARNING, logger="sqlitedis.core.store"):
            result = store.execute_command("HSET", "hash", "field", "value")

        assert isinstance(result, UnsupportedCommand)
        assert result
        assert result.command == "HSET"
        assert result.args == ("hash", "field", "value")
        assert "Command not implemented: HSET" in caplog.text

    def test_made_up_command(self, store):
        result = store.execute_command("frobnicate")
        assert isinstance(result, UnsupportedCommand)
        assert result.args == ()


class TestUnsupportedMethods:
    """Test the soft fallback for well-known unported client methods."""

    @pytest.mark.parametrize("name", ["expire", "hset", "lpush", "zadd", "eval", "publish"])
    def test_soft_noop(self, store, name, caplog):
        with caplog.at_level(logging.WARNING):
            result = getattr(store, name)("key", 1)

        assert isinstance(result, UnsupportedCommand)
        assert result
        assert result.command == name.upper()
        assert "not implemented" in caplog.text

    def test_keyword_arguments(self, store, caplog):
        with caplog.at_level(logging.WARNING):
            hset = store.hset("h", mapping={"a": "1"})
            expire = store.expire("k", time=10)

        assert isinstance(hset, UnsupportedCommand)
        assert hset
        assert hset.args == ("h",)
        assert hset.kwargs == {"mapping": {"a": "1"}}
        assert expire.command == "EXPIRE"
        assert expire.kwargs == {"time": 10}
        assert "keywords: ['mapping']" in caplog.text

    def test_keyword_arguments_through_execute_command(self, store):
        result = store.execute_command("ZADD", "z", {"a": 1}, nx=True)
        assert result.args == ("z", {"a": 1})
        assert result.kwargs == {"nx": True}

    def test_expire_changes_nothing(self, store):
        store.set("foo", "bar")
        assert store.expire("foo", 10)
        assert store.get("foo") == b"bar"

    def test_unknown_attribute_still_raises(self, store):
        with pytest.raises(AttributeError):
            store.definitely_not_a_command

    def test_supported_and_unsupported_are_disjoint(self):
        supported = {command.method for command in Command}
        assert not supported & UNSUPPORTED_COMMANDS
