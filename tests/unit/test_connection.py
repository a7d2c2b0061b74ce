"""Unit tests for ConnectionConfig and ConnectionManager."""

from __future__ import annotations

from typing import Any

import pytest

from rowbind.adapters.sqlite import SqliteAsyncAdapter, SqliteSyncAdapter
from rowbind.core.connection import (
    AsyncConnectionManager,
    ConnectionConfig,
    ConnectionManager,
    _load_adapter,
)
from rowbind.core.exceptions import AdapterError, ConnectionError  # noqa: A004


class TestConnectionConfig:
    def test_sqlite_config(self, sqlite_config: ConnectionConfig) -> None:
        assert sqlite_config.driver == "sqlite"
        assert sqlite_config.database == ":memory:"
        assert sqlite_config.host is None
        assert sqlite_config.extra == {}

    def test_sqlite_dsn(self) -> None:
        config = ConnectionConfig.from_dsn("sqlite:///data/app.db", timeout=5)
        assert config.driver == "sqlite"
        assert config.database == "data/app.db"
        assert config.extra == {"timeout": 5}

    def test_sqlite_memory_dsn(self) -> None:
        assert ConnectionConfig.from_dsn("sqlite:///:memory:").database == ":memory:"
        assert ConnectionConfig.from_dsn("sqlite://").database == ":memory:"

    @pytest.mark.parametrize("scheme", ["postgres", "postgresql"])
    def test_postgres_dsn(self, scheme: str) -> None:
        config = ConnectionConfig.from_dsn(f"{scheme}://app:p%40ss@db.local:6543/orders")
        assert config.driver == "postgresql"
        assert config.host == "db.local"
        assert config.port == 6543
        assert config.user == "app"
        assert config.password == "p@ss"
        assert config.database == "orders"

    def test_unsupported_scheme(self) -> None:
        with pytest.raises(AdapterError, match="mysql"):
            ConnectionConfig.from_dsn("mysql://localhost/db")


class TestLoadAdapter:
    def test_sync_sqlite(self) -> None:
        assert isinstance(_load_adapter("sqlite", "sync"), SqliteSyncAdapter)

    def test_async_sqlite(self) -> None:
        assert isinstance(_load_adapter("SQLITE", "async"), SqliteAsyncAdapter)

    def test_unknown_driver(self) -> None:
        with pytest.raises(AdapterError, match="oracle"):
            _load_adapter("oracle", "sync")


class FailingAdapter:
    paramstyle = "qmark"

    def connect(self, config: ConnectionConfig) -> Any:
        raise OSError("unable to open database file")

    async def connect_async(self, config: ConnectionConfig) -> Any:
        raise OSError("unable to open database file")


class TrackingConnection:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def commit(self) -> None:
        self.calls.append("commit")

    def rollback(self) -> None:
        self.calls.append("rollback")


class AsyncTrackingConnection(TrackingConnection):
    async def commit(self) -> None:  # type: ignore[override]
        super().commit()

    async def rollback(self) -> None:  # type: ignore[override]
        super().rollback()


class RejectingAdapter:
    """Adapter whose statements always fail."""

    paramstyle = "qmark"

    def execute(self, connection: Any, sql: str, args: Any = (), context: Any = None) -> int:
        raise RuntimeError("constraint violated")

    async def execute_async(
        self, connection: Any, sql: str, args: Any = (), context: Any = None
    ) -> int:
        raise RuntimeError("constraint violated")


class TestConnectionManager:
    def test_lazy_open(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        assert manager._connection is None
        with manager.get_connection() as connection:
            assert connection is manager.open()
        manager.close()
        assert manager._connection is None

    def test_query_and_execute(self, sqlite_config: ConnectionConfig) -> None:
        with ConnectionManager(sqlite_config) as manager:
            manager.execute("CREATE TABLE t (id INTEGER)")
            assert manager.execute("INSERT INTO t (id) VALUES ($1)", (7,)) == 1
            result_set = manager.query("SELECT id FROM t WHERE id = $1", (7,))
            assert result_set.columns == ["id"]
            assert result_set.advance()
            assert list(result_set.values()) == [7]
            result_set.close()

    def test_connect_failure(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        manager._adapter = FailingAdapter()
        with pytest.raises(ConnectionError, match="unable to open"):
            manager.open()

    def test_failed_execute_rolls_back(self, sqlite_config: ConnectionConfig) -> None:
        manager = ConnectionManager(sqlite_config)
        connection = TrackingConnection()
        manager._adapter = RejectingAdapter()
        manager._connection = connection
        with pytest.raises(RuntimeError, match="constraint"):
            manager.execute("INSERT INTO t (id) VALUES ($1)", (1,))
        assert connection.calls == ["rollback"]

    def test_execute_commits(self, sqlite_config: ConnectionConfig) -> None:
        with ConnectionManager(sqlite_config) as manager:
            manager.execute("CREATE TABLE t (id INTEGER PRIMARY KEY)")
            manager.execute("INSERT INTO t (id) VALUES ($1)", (1,))
            with pytest.raises(Exception, match="UNIQUE"):
                manager.execute("INSERT INTO t (id) VALUES ($1)", (1,))
            assert not manager.open().in_transaction
            result_set = manager.query("SELECT COUNT(*) FROM t")
            assert result_set.advance()
            assert list(result_set.values()) == [1]
            result_set.close()

    async def test_async_failed_execute_rolls_back(self, sqlite_config: ConnectionConfig) -> None:
        manager = AsyncConnectionManager(sqlite_config)
        connection = AsyncTrackingConnection()
        manager._adapter = RejectingAdapter()
        manager._connection = connection
        with pytest.raises(RuntimeError):
            await manager.execute("UPDATE t SET id = $1", (2,))
        assert connection.calls == ["rollback"]

    async def test_async_connect_failure(self, sqlite_config: ConnectionConfig) -> None:
        manager = AsyncConnectionManager(sqlite_config)
        manager._adapter = FailingAdapter()
        with pytest.raises(ConnectionError):
            await manager.open()
