"""``modresolve outdated`` - List installed packages with newer versions.

Exit Codes:
    0 - Listing produced (possibly empty).
    2 - Invalid input.
"""

from __future__ import annotations

import json
import sys

import click

from modresolve.cli.inputs import (
    config_option,
    index_option,
    installed_option,
    load_index,
    load_installed,
    load_settings,
)


@click.command("outdated")
@index_option
@installed_option(required=True)
@config_option
@click.option("--compat", default=None, help="Only consider versions for this context.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def outdated_command(
    index_path: str,
    installed_path: str,
    config_path: str | None,
    compat: str | None,
    output_format: str,
) -> None:
    """List installed packages for which the index has a newer version."""
    index = load_index(index_path)
    installed = load_installed(installed_path)
    config = load_settings(config_path, compatibility=compat)

    rows = [
        (entry.uid, entry.version.version or "", latest.version or "")
        for entry, latest in index.updated_packages(installed, config.compatibility)
    ]

    if output_format == "json":
        click.echo(json.dumps([
            {"uid": uid, "installed": current, "available": available}
            for uid, current, available in rows
        ], indent=2))
    else:
        from modresolve.cli.output import print_updates
        print_updates(rows)
    sys.exit(0)
