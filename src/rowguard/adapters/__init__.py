"""Database adapters — implementations of the DatabaseAdapter protocol."""

from rowguard.adapters._base import (
    AdapterError,
    ConnectionConfig,
    DatabaseAdapter,
    DatabaseType,
    ExecutionResult,
    Params,
)
from rowguard.adapters._registry import get_adapter

__all__ = [
    "AdapterError",
    "ConnectionConfig",
    "DatabaseAdapter",
    "DatabaseType",
    "ExecutionResult",
    "Params",
    "get_adapter",
]
