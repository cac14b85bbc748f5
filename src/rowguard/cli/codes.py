"""The `codes` command: list the query result error codes."""

from __future__ import annotations

import json

import click

from rowguard.errors.render import render_codes_json, render_codes_text


@click.command()
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format.",
)
def codes(output_format: str) -> None:
    """List query result error codes and their messages."""
    if output_format == "json":
        click.echo(json.dumps(render_codes_json(), indent=2))
    else:
        click.echo(render_codes_text())
