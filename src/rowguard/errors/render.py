"""Render query result errors for terminal (text) and agent/log (JSON) output."""

from __future__ import annotations

from rowguard.errors.codes import all_codes
from rowguard.errors.query_result import QueryResultError, to_jsonable


def render_text(err: QueryResultError) -> str:
    return err.to_string()


def render_json(err: QueryResultError) -> dict:
    """Render a QueryResultError as a JSON-serializable dict.

    ``values`` is present only when the error carries bound values. Values
    are normalized so the dict always survives ``json.dumps(..., default=str)``.
    """
    d: dict = {
        "error": err.name,
        "code": int(err.code),
        "code_name": err.code_name,
        "message": err.message,
        "received": err.received,
        "query": err.query if isinstance(err.query, str) else to_jsonable(err.query),
    }
    if err.has_values:
        d["values"] = to_jsonable(err.values)
    return d


def render_codes_text() -> str:
    return "\n".join(
        f"{int(code)}  {entry.name:<9} {entry.message}" for code, entry in all_codes()
    )


def render_codes_json() -> list[dict]:
    return [
        {"code": int(code), "name": entry.name, "message": entry.message}
        for code, entry in all_codes()
    ]
