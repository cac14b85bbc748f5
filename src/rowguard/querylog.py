"""Query logging — daily JSONL files per project, with automatic retention cleanup."""

from __future__ import annotations

import contextlib
import json
import os
from datetime import UTC, datetime, timedelta
from pathlib import Path

from rowguard.errors.query_result import QueryResultError, to_jsonable
from rowguard.errors.render import render_json

DEFAULT_RETENTION_DAYS = 30


def _log_root() -> Path:
    home = Path(os.environ.get("ROWGUARD_HOME", Path.home() / ".rowguard"))
    return home / "logs"


def _project_slug() -> str:
    """Encode cwd into a directory-safe slug."""
    cwd = os.getcwd()
    return cwd.replace("/", "-").lstrip("-")


def _log_dir() -> Path:
    """Return the log directory for the current project."""
    return _log_root() / _project_slug()


def _today_file() -> Path:
    """Return today's log file path."""
    today = datetime.now(UTC).strftime("%Y-%m-%d")
    return _log_dir() / f"{today}.jsonl"


def _append(entry: dict) -> None:
    log_file = _today_file()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    with open(log_file, "a") as f:
        f.write(json.dumps(entry, default=str) + "\n")


def log_query(
    *,
    sql: str,
    db: str | None = None,
    expect: str | None = None,
    params: object | None = None,
    row_count: int | None = None,
    duration_ms: float | None = None,
) -> None:
    """Append a successful execution entry to today's JSONL file."""
    _append({
        "ts": datetime.now(UTC).isoformat(),
        "event": "query",
        "db": db,
        "sql": sql,
        "expect": expect,
        "params": to_jsonable(params),
        "row_count": row_count,
        "duration_ms": duration_ms,
    })


def log_error(
    err: Exception,
    *,
    sql: str,
    db: str | None = None,
    expect: str | None = None,
) -> None:
    """Append a failed execution entry to today's JSONL file.

    Cardinality violations are recorded with their full field set;
    anything else is recorded by type and message.
    """
    entry: dict = {
        "ts": datetime.now(UTC).isoformat(),
        "event": "error",
        "db": db,
        "sql": sql,
        "expect": expect,
    }
    if isinstance(err, QueryResultError):
        entry.update(render_json(err))
    else:
        entry["error"] = type(err).__name__
        entry["message"] = str(err)
    _append(entry)


def cleanup_old_logs(*, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
    """Delete log files older than retention_days. Returns count of deleted files."""
    cutoff = datetime.now(UTC) - timedelta(days=retention_days)
    deleted = 0

    log_dir = _log_dir()
    if not log_dir.exists():
        return 0

    for log_file in log_dir.glob("*.jsonl"):
        # Parse date from filename (YYYY-MM-DD.jsonl)
        try:
            file_date = datetime.strptime(log_file.stem, "%Y-%m-%d").replace(tzinfo=UTC)
        except ValueError:
            continue
        if file_date < cutoff:
            log_file.unlink()
            deleted += 1

    # Remove empty project directories
    with contextlib.suppress(OSError):
        log_dir.rmdir()

    return deleted
