"""CLI entry point. Both `rowguard` and `rowg` resolve here."""

from __future__ import annotations

import click

from rowguard.cli.codes import codes
from rowguard.cli.query import query


@click.group()
@click.version_option(package_name="rowguard")
def main() -> None:
    """rowguard: queries that fail loudly when the row count is wrong."""


main.add_command(query)
main.add_command(codes)
