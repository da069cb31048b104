"""``modresolve check`` - Verify the installed packages form a consistent graph.

Builds the dependency graph of the installed snapshot and reports packages
without a resolvable version, dependencies on packages that are not
installed, and dependency cycles.

Exit Codes:
    0 - The graph is consistent.
    1 - The graph has unresolved state.
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
from modresolve.core.dependency import find_cycles


@click.command("check")
@index_option
@installed_option(required=True)
@config_option
@click.option(
    "--soft-edges/--no-soft-edges",
    default=None,
    help="Materialize soft dependencies as graph edges.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def check_command(
    index_path: str,
    installed_path: str,
    config_path: str | None,
    soft_edges: bool | None,
    output_format: str,
) -> None:
    """Check that every installed package and dependency can be resolved.

    Exit code 0 if the graph is consistent, 1 otherwise.
    """
    index = load_index(index_path)
    installed = load_installed(installed_path)
    config = load_settings(config_path, include_soft_edges=soft_edges)
    resolver = build_resolver(index, installed, config)

    graph = resolver.build_graph()
    cycles = find_cycles(graph)

    if output_format == "json":
        click.echo(json.dumps({
            "consistent": graph.ok,
            "packages": len(graph),
            "cycles": cycles,
        }, indent=2))
    else:
        from modresolve.cli.output import print_graph_health
        print_graph_health(graph, cycles)

    sys.exit(0 if graph.ok else 1)
