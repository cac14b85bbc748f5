"""Shared output formatting for CLI commands."""

from __future__ import annotations

import json

from rowguard.errors.query_result import QueryResultError
from rowguard.errors.render import render_json, render_text


def format_error(err: QueryResultError, *, output_format: str = "text") -> str:
    if output_format == "json":
        return json.dumps(render_json(err), indent=2, default=str)
    return render_text(err)


def format_data(data: object, *, expect: str, output_format: str = "text") -> str:
    """Format the shaped result of a query: a row, a list of rows, or None."""
    if output_format == "json":
        return json.dumps({"expect": expect, "data": data}, indent=2, default=str)

    if data is None:
        return "(no rows)"
    rows = [data] if isinstance(data, dict) else list(data)
    if not rows:
        return "(0 rows)"

    # Text format: simple tabular output.
    columns = list(rows[0].keys())
    lines = [" | ".join(columns)]
    lines.append("-+-".join("-" * max(len(c), 5) for c in columns))
    for row in rows:
        lines.append(" | ".join(str(row.get(c, "")) for c in columns))
    lines.append(f"\n({len(rows)} rows)")
    return "\n".join(lines)
