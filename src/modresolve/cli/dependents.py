"""``modresolve dependents <uid>...`` - List what removing packages affects.

Prints the given packages plus every installed package that transitively
depends on them: the set that has to go if the given packages are removed.

Exit Codes:
    0 - Listing produced.
    2 - Invalid input, or a package that is not installed.
"""

from __future__ import annotations

import json
import sys

import click

from modresolve.cli.inputs import (
    build_resolver,
    config_option,
    index_option,
    installed_option,
    load_index,
    load_installed,
    load_settings,
)
from modresolve.core.versions import PackageId
from modresolve.exceptions import MissingNodeError


@click.command("dependents")
@click.argument("uids", nargs=-1, required=True)
@index_option
@installed_option(required=True)
@config_option
@click.option(
    "--soft-edges/--no-soft-edges",
    default=None,
    help="Follow soft dependencies as well.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def dependents_command(
    uids: tuple[str, ...],
    index_path: str,
    installed_path: str,
    config_path: str | None,
    soft_edges: bool | None,
    output_format: str,
) -> None:
    """List UIDS and every installed package that depends on them."""
    index = load_index(index_path)
    installed = load_installed(installed_path)
    config = load_settings(config_path, include_soft_edges=soft_edges)
    resolver = build_resolver(index, installed, config)

    try:
        affected = resolver.ancestors_of([PackageId(uid) for uid in uids])
    except MissingNodeError as exc:
        click.echo(f"Error: package {exc.uid!r} is not installed")
        sys.exit(2)

    ordered = [uid for uid in installed.uids if uid in affected]
    if output_format == "json":
        click.echo(json.dumps({"affected": ordered}, indent=2))
    else:
        from modresolve.cli.output import print_package_list
        print_package_list("Affected Packages", ordered, "Nothing depends on these packages.")
    sys.exit(0)
