"""Database adapter protocol — the boundary between rowguard and drivers."""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

# Positional (list/tuple) or named (mapping) bind parameters, passed to the driver as-is.
Params = Sequence[object] | Mapping[str, object]


class DatabaseType(enum.Enum):
    POSTGRES = "postgres"
    DUCKDB = "duckdb"


@dataclass
class ConnectionConfig:
    name: str
    db_type: DatabaseType
    params: dict[str, str] = field(default_factory=dict)


@dataclass
class ExecutionResult:
    """Query execution result."""

    columns: list[str]
    rows: list[dict[str, object]]
    row_count: int
    rows_affected: int | None = None  # DML without RETURNING
    duration_ms: float | None = None


class AdapterError(Exception):
    """Raised by adapters for connection/execution failures."""


@runtime_checkable
class DatabaseAdapter(Protocol):
    async def connect(self, config: ConnectionConfig) -> None: ...
    async def close(self) -> None: ...
    async def execute(
        self, sql: str, params: Params | None = None
    ) -> ExecutionResult: ...
    def db_type(self) -> DatabaseType: ...
    def dialect(self) -> str: ...
