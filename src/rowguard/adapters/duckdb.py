"""DuckDB adapter — local/in-memory, great for testing and local analytics."""

from __future__ import annotations

import time

import duckdb as _duckdb

from rowguard.adapters._base import (
    AdapterError,
    ConnectionConfig,
    DatabaseType,
    ExecutionResult,
    Params,
)
from rowguard.classify import returns_rows


class DuckDBAdapter:
    """DuckDB adapter — in-process, no server needed.

    Bind parameters use DuckDB placeholders: ``?`` / ``$1`` for sequences,
    ``$name`` for mappings.
    """

    def __init__(self) -> None:
        self._conn: _duckdb.DuckDBPyConnection | None = None

    async def connect(self, config: ConnectionConfig) -> None:
        path = config.params.get("path", ":memory:")
        try:
            self._conn = _duckdb.connect(path, config={"custom_user_agent": "rowguard/0.1.0"})
        except Exception as e:
            raise AdapterError(f"DuckDB connection failed: {e}") from e

    async def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _ensure_conn(self) -> _duckdb.DuckDBPyConnection:
        if self._conn is None:
            raise AdapterError("Not connected. Call connect() first.")
        return self._conn

    async def execute(self, sql: str, params: Params | None = None) -> ExecutionResult:
        conn = self._ensure_conn()

        t0 = time.monotonic()
        try:
            if params is None:
                result = conn.execute(sql)
            else:
                result = conn.execute(sql, params)
            columns = [desc[0] for desc in result.description] if result.description else []
            rows_raw = result.fetchall() if result.description else []
        except Exception as e:
            raise AdapterError(f"DuckDB execution failed: {e}") from e
        duration_ms = (time.monotonic() - t0) * 1000

        # DuckDB answers plain DML with a single "Count" row; that is a
        # status, not result data.
        rows_affected = None
        if not returns_rows(sql, dialect="duckdb"):
            if columns == ["Count"] and len(rows_raw) == 1:
                rows_affected = int(rows_raw[0][0])
            columns, rows_raw = [], []

        rows = [dict(zip(columns, row, strict=True)) for row in rows_raw]

        return ExecutionResult(
            columns=columns,
            rows=rows,
            row_count=len(rows),
            rows_affected=rows_affected,
            duration_ms=duration_ms,
        )

    def db_type(self) -> DatabaseType:
        return DatabaseType.DUCKDB

    def dialect(self) -> str:
        return "duckdb"
