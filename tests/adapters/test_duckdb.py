"""Integration tests for DuckDB adapter — runs real queries in-memory."""

import asyncio

import pytest

from rowguard.adapters._base import AdapterError, ConnectionConfig, DatabaseType
from rowguard.adapters.duckdb import DuckDBAdapter


@pytest.fixture
def adapter():
    a = DuckDBAdapter()
    config = ConnectionConfig(name="test", db_type=DatabaseType.DUCKDB, params={"path": ":memory:"})
    asyncio.run(a.connect(config))
    yield a
    asyncio.run(a.close())


def test_execute_simple(adapter):
    result = asyncio.run(adapter.execute("SELECT 1 AS x, 'hello' AS y"))
    assert result.columns == ["x", "y"]
    assert result.row_count == 1
    assert result.rows == [{"x": 1, "y": "hello"}]
    assert result.rows_affected is None
    assert result.duration_ms is not None


def test_execute_positional_params(adapter):
    result = asyncio.run(adapter.execute("SELECT ?::INTEGER + 1 AS n", [41]))
    assert result.rows == [{"n": 42}]


def test_execute_named_params(adapter):
    result = asyncio.run(adapter.execute("SELECT $name::VARCHAR AS who", {"name": "alice"}))
    assert result.rows == [{"who": "alice"}]


def test_ddl_returns_no_rows(adapter):
    result = asyncio.run(adapter.execute("CREATE TABLE t (id INTEGER)"))
    assert result.rows == []
    assert result.row_count == 0


def test_dml_count_is_not_a_row(adapter):
    asyncio.run(adapter.execute("CREATE TABLE t (id INTEGER)"))
    result = asyncio.run(adapter.execute("INSERT INTO t VALUES (1), (2), (3)"))
    assert result.rows == []
    assert result.columns == []
    assert result.row_count == 0
    assert result.rows_affected == 3


def test_dml_returning_keeps_rows(adapter):
    asyncio.run(adapter.execute("CREATE TABLE t (id INTEGER)"))
    result = asyncio.run(adapter.execute("INSERT INTO t VALUES (1), (2) RETURNING id"))
    assert result.rows == [{"id": 1}, {"id": 2}]
    assert result.rows_affected is None


def test_execution_error_wrapped(adapter):
    with pytest.raises(AdapterError, match="DuckDB execution failed"):
        asyncio.run(adapter.execute("SELECT * FROM no_such_table"))


def test_execute_before_connect():
    with pytest.raises(AdapterError, match="Not connected"):
        asyncio.run(DuckDBAdapter().execute("SELECT 1"))


def test_dialect(adapter):
    assert adapter.dialect() == "duckdb"


def test_db_type(adapter):
    assert adapter.db_type() == DatabaseType.DUCKDB
