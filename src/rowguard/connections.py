"""Named connections — ~/.rowguard/connections.toml.

    [local]
    type = "duckdb"
    path = "/data/app.duckdb"

    [prod]
    type = "postgres"
    dsn = "postgresql://app@db:5432/app"
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from rowguard.adapters._base import ConnectionConfig, DatabaseType


def _connections_file() -> Path:
    home = Path(os.environ.get("ROWGUARD_HOME", Path.home() / ".rowguard"))
    return home / "connections.toml"


def _load_file() -> dict:
    path = _connections_file()
    if not path.exists():
        return {}
    return tomllib.loads(path.read_text())


def list_connections() -> dict[str, dict]:
    """Return all named connections as {name: {type, ...params}}."""
    return _load_file()


def get_connection(name: str) -> ConnectionConfig | None:
    """Look up a named connection. Returns None if not found or malformed."""
    data = _load_file()
    entry = data.get(name)
    if not isinstance(entry, dict):
        return None

    db_type_str = entry.get("type")
    if db_type_str is None:
        return None

    try:
        db_type = DatabaseType(db_type_str)
    except ValueError:
        return None

    params = {k: str(v) for k, v in entry.items() if k != "type"}
    return ConnectionConfig(name=name, db_type=db_type, params=params)


def parse_db(value: str) -> ConnectionConfig:
    """Resolve a --db value: named connection first, then 'type:key=val,...'.

    Raises ValueError with a user-facing message when neither form matches.
    """
    config = get_connection(value)
    if config is not None:
        return config

    if ":" not in value:
        known = ", ".join(sorted(list_connections())) or "none"
        raise ValueError(
            f"Connection '{value}' not found in {_connections_file()} "
            f"and not in 'type:key=val' format. Known connections: {known}"
        )
    db_type_str, params_str = value.split(":", 1)

    try:
        db_type = DatabaseType(db_type_str)
    except ValueError as e:
        valid = ", ".join(t.value for t in DatabaseType)
        raise ValueError(f"Unknown database type '{db_type_str}'. Valid: {valid}") from e

    params: dict[str, str] = {}
    if params_str:
        for part in params_str.split(","):
            if "=" not in part:
                raise ValueError(f"Expected key=value pair, got '{part}'")
            k, v = part.split("=", 1)
            params[k.strip()] = v.strip()

    return ConnectionConfig(name=db_type_str, db_type=db_type, params=params)
