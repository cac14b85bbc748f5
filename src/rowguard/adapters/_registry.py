"""Resolve a DatabaseType to its adapter class, importing the driver on first use."""

from __future__ import annotations

import importlib
from dataclasses import dataclass

from rowguard.adapters._base import AdapterError, DatabaseAdapter, DatabaseType


@dataclass(frozen=True)
class _Driver:
    module: str
    class_name: str
    extra: str | None = None  # None: the driver ships with rowguard itself

    def install_hint(self) -> str:
        if self.extra is None:
            return "Reinstall with: pip install --force-reinstall rowguard"
        return f"Install with: pip install 'rowguard[{self.extra}]'"


_DRIVERS: dict[DatabaseType, _Driver] = {
    DatabaseType.DUCKDB: _Driver("rowguard.adapters.duckdb", "DuckDBAdapter"),
    DatabaseType.POSTGRES: _Driver("rowguard.adapters.postgres", "PostgresAdapter", "postgres"),
}


def get_adapter(db_type: DatabaseType) -> type[DatabaseAdapter]:
    """Return the adapter class for ``db_type``.

    Raises AdapterError naming the missing package and how to get it when
    the driver can't be imported.
    """
    driver = _DRIVERS.get(db_type)
    if driver is None:
        raise AdapterError(f"No adapter registered for {db_type.value}")

    try:
        module = importlib.import_module(driver.module)
    except ImportError as e:
        missing = e.name or driver.module
        raise AdapterError(
            f"Missing driver for {db_type.value} ({missing}). {driver.install_hint()}"
        ) from e

    return getattr(module, driver.class_name)
