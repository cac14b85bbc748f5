"""Classify SQL statements and infer the result shape a caller should expect."""

from __future__ import annotations

import enum

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError

from rowguard.results import ResultMask


class StatementType(enum.Enum):
    READ = "read"
    DML = "dml"
    DDL = "ddl"
    ADMIN = "admin"      # GRANT, COPY, SET ROLE, etc.
    UNKNOWN = "unknown"


_READ_TYPES = (exp.Select, exp.Union, exp.Intersect, exp.Except)
_DML_TYPES = (exp.Insert, exp.Update, exp.Delete, exp.Merge)
_DDL_TYPES = (exp.Create, exp.Drop, exp.Alter, exp.TruncateTable)
_ADMIN_TYPES = (exp.Grant, exp.Copy, exp.Command)


def _has_dml_in_cte(statement: exp.Expression) -> bool:
    """Check if any CTE contains a DML operation (writable CTE)."""
    return any(
        isinstance(cte.this, _DML_TYPES)
        for cte in statement.find_all(exp.CTE)
    )


def _has_into(statement: exp.Expression) -> bool:
    """Check for SELECT INTO (creates a table despite being a SELECT)."""
    return isinstance(statement, exp.Select) and statement.find(exp.Into) is not None


def classify(statement: exp.Expression) -> StatementType:
    """Classify a parsed SQL statement.

    - Writable CTEs (``WITH d AS (DELETE ...) SELECT ...``) are DML
    - ``SELECT ... INTO`` is DDL
    - GRANT/COPY and unparsed commands are ADMIN
    """
    if isinstance(statement, _ADMIN_TYPES):
        return StatementType.ADMIN
    if isinstance(statement, _READ_TYPES):
        if _has_dml_in_cte(statement):
            return StatementType.DML
        if _has_into(statement):
            return StatementType.DDL
        return StatementType.READ
    if isinstance(statement, _DML_TYPES):
        return StatementType.DML
    if isinstance(statement, _DDL_TYPES):
        return StatementType.DDL
    return StatementType.UNKNOWN


def returns_rows(sql: str, *, dialect: str | None = None) -> bool:
    """Whether executing ``sql`` yields a row set.

    DDL and plain DML do not. DML with RETURNING and writable CTEs (whose
    outer statement is a SELECT) do, as do reads, admin statements and
    anything that can't be parsed.
    """
    try:
        statement = sqlglot.parse_one(sql, dialect=dialect)
    except SqlglotError:
        return True
    kind = classify(statement)
    if kind is StatementType.DDL:
        return False
    if kind is StatementType.DML and isinstance(statement, _DML_TYPES):
        return statement.args.get("returning") is not None
    return True


def default_mask(sql: str, *, dialect: str | None = None) -> ResultMask:
    """Result mask for ``--expect auto``: ANY for row sets, NONE otherwise."""
    return ResultMask.ANY if returns_rows(sql, dialect=dialect) else ResultMask.NONE
