"""modresolve CLI - Dependency resolution for installed mod packages.

Entry point for the ``modresolve`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    resolve    - Choose versions for requested packages and their dependencies.
    orphans    - List installed packages no requested package needs.
    dependents - List packages affected by removing given packages.
    check      - Verify the installed packages form a consistent graph.
    outdated   - List installed packages with newer versions available.

Usage::

    modresolve resolve my-mod --index index.json
    modresolve resolve my-mod --index index.json --compat 1.7.10 --interactive
    modresolve orphans --index index.json --installed installed.json
    modresolve dependents core-lib --index index.json --installed installed.json
    modresolve check --index index.json --installed installed.json
    modresolve outdated --index index.json --installed installed.json
"""

from __future__ import annotations

import logging

import click

from modresolve import __version__
from modresolve.cli.check import check_command
from modresolve.cli.dependents import dependents_command
from modresolve.cli.orphans import orphans_command
from modresolve.cli.outdated import outdated_command
from modresolve.cli.resolve import resolve_command

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug).")
def cli(verbose: int) -> None:
    """modresolve: Dependency resolution for installed mod packages.

    Resolve versions for requested packages, find orphaned dependencies,
    and work out what removing a package would affect.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format=LOG_FORMAT,
        )


# Register all subcommands
cli.add_command(resolve_command)
cli.add_command(orphans_command)
cli.add_command(dependents_command)
cli.add_command(check_command)
cli.add_command(outdated_command)
