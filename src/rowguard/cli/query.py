"""The `query` command: execute SQL and enforce the expected result cardinality."""

from __future__ import annotations

import asyncio
import json

import click

from rowguard.adapters._base import AdapterError, ConnectionConfig
from rowguard.adapters._registry import get_adapter
from rowguard.classify import default_mask
from rowguard.cli._output import format_data, format_error
from rowguard.connections import parse_db
from rowguard.database import Database, mask_from_label, mask_label
from rowguard.errors.query_result import QueryResultError
from rowguard.querylog import cleanup_old_logs
from rowguard.results import ResultMask

EXPECTATIONS = ["auto", "none", "one", "one-or-none", "many", "many-or-none", "any"]


def _parse_param(value: str) -> object:
    """Bind JSON literals (1, 2.5, true, null, "x") as typed values, anything else as text."""
    try:
        return json.loads(value)
    except ValueError:
        return value


async def _run_query(
    sql: str,
    config: ConnectionConfig,
    *,
    mask: ResultMask,
    params: list[object] | None,
) -> object:
    async with Database.connect(config) as db:
        return await db.query(sql, params, mask)


@click.command()
@click.argument("sql")
@click.option("--db", required=True, envvar="ROWGUARD_DB", help="Connection name or type:key=val.")
@click.option(
    "--expect",
    type=click.Choice(EXPECTATIONS),
    default="auto",
    help="Required result cardinality (auto: rows for reads, none for writes).",
)
@click.option(
    "--param",
    "params",
    multiple=True,
    help="Bind parameter, repeatable. JSON literals are typed, anything else is text.",
)
@click.option("--dialect", default=None, help="SQL dialect used to infer --expect auto.")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format.",
)
def query(
    sql: str,
    db: str,
    expect: str,
    params: tuple[str, ...],
    dialect: str | None,
    output_format: str,
) -> None:
    """Execute SQL and fail if the row count breaks the expectation."""
    cleanup_old_logs()

    try:
        config = parse_db(db)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1) from e

    bound = [_parse_param(p) for p in params] if params else None

    try:
        if expect == "auto":
            if dialect is None:
                dialect = get_adapter(config.db_type)().dialect()
            mask = default_mask(sql, dialect=dialect)
        else:
            mask = mask_from_label(expect)

        data = asyncio.run(_run_query(sql, config, mask=mask, params=bound))
    except QueryResultError as e:
        click.echo(format_error(e, output_format=output_format))
        raise SystemExit(1) from e
    except AdapterError as e:
        if output_format == "json":
            click.echo(json.dumps({"error": "AdapterError", "message": str(e)}, indent=2))
        else:
            click.echo(f"error: {e}", err=True)
        raise SystemExit(1) from e

    click.echo(format_data(data, expect=mask_label(mask), output_format=output_format))
