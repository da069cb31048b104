"""``modresolve orphans`` - List packages nothing requested still needs.

An orphan is an installed package that was pulled in only as a dependency
and is no longer reachable from any package the user asked for.

Exit Codes:
    0 - Listing produced (possibly empty).
    2 - Invalid input.
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


@click.command("orphans")
@index_option
@installed_option(required=True)
@config_option
@click.option(
    "--soft-edges/--no-soft-edges",
    default=None,
    help="Count soft dependencies as keeping packages alive.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def orphans_command(
    index_path: str,
    installed_path: str,
    config_path: str | None,
    soft_edges: bool | None,
    output_format: str,
) -> None:
    """List installed packages that no requested package depends on."""
    index = load_index(index_path)
    installed = load_installed(installed_path)
    config = load_settings(config_path, include_soft_edges=soft_edges)
    resolver = build_resolver(index, installed, config)

    consistent = not resolver.has_unresolved_state()
    orphans = resolver.orphan_packages()
    ordered = [uid for uid in installed.uids if uid in orphans]

    if output_format == "json":
        click.echo(json.dumps({"consistent": consistent, "orphans": ordered}, indent=2))
    else:
        from modresolve.cli.output import (
            print_inconsistent_graph_warning,
            print_package_list,
        )
        if not consistent:
            print_inconsistent_graph_warning()
        print_package_list("Orphaned Packages", ordered, "No orphaned packages.")
    sys.exit(0)
