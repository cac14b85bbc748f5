"""Test lazy adapter registry."""

from unittest.mock import patch

import pytest

from rowguard.adapters._base import AdapterError, DatabaseAdapter, DatabaseType
from rowguard.adapters._registry import _DRIVERS, get_adapter


def test_get_duckdb_adapter():
    cls = get_adapter(DatabaseType.DUCKDB)
    assert cls.__name__ == "DuckDBAdapter"
    assert isinstance(cls(), DatabaseAdapter)


def test_get_postgres_adapter():
    """Postgres adapter class can be loaded (psycopg may or may not be installed)."""
    try:
        cls = get_adapter(DatabaseType.POSTGRES)
        assert cls.__name__ == "PostgresAdapter"
    except AdapterError as e:
        assert "Missing driver" in str(e)
        assert "rowguard[postgres]" in str(e)


def test_every_database_type_has_a_driver():
    for db_type in DatabaseType:
        assert db_type in _DRIVERS


def test_missing_optional_driver_points_at_extra():
    with patch("rowguard.adapters._registry.importlib.import_module",
               side_effect=ModuleNotFoundError("No module named 'psycopg'", name="psycopg")):
        with pytest.raises(AdapterError) as excinfo:
            get_adapter(DatabaseType.POSTGRES)
    msg = str(excinfo.value)
    assert "(psycopg)" in msg
    assert "pip install 'rowguard[postgres]'" in msg


def test_missing_core_driver_suggests_reinstall():
    with patch("rowguard.adapters._registry.importlib.import_module",
               side_effect=ModuleNotFoundError("No module named 'duckdb'", name="duckdb")):
        with pytest.raises(AdapterError) as excinfo:
            get_adapter(DatabaseType.DUCKDB)
    msg = str(excinfo.value)
    assert "rowguard[" not in msg
    assert "pip install --force-reinstall rowguard" in msg
