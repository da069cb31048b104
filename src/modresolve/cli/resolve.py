"""``modresolve resolve <uid>...`` - Choose versions for requested packages.

Resolves every requested package and its transitive dependencies against
the index, printing progress events and the final selection.

Exit Codes:
    0 - Every requested package was resolved.
    1 - A requested package has no version that can be chosen.
    2 - Invalid input (missing or malformed index, snapshot or config).
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
from modresolve.core.dependency import ResolutionEvent
from modresolve.core.versions import PackageId, PackageVersion
from modresolve.exceptions import ResolutionError


def _parse_pins(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str] | None:
    """Parse repeated ``--pin UID=VERSION`` options into a mapping."""
    if not values:
        return None
    pins: dict[str, str] = {}
    for value in values:
        uid, sep, version = value.partition("=")
        if not sep or not uid or not version:
            raise click.BadParameter(f"expected UID=VERSION, got {value!r}")
        pins[uid.strip()] = version.strip()
    return pins


def _selection_to_json(selection: dict[PackageId, PackageVersion]) -> dict:
    return {
        uid: {
            "version": version.version,
            "name": version.name,
            "installType": version.install_type.value,
            "downloads": [d.url for d in version.downloads],
        }
        for uid, version in sorted(selection.items())
    }


def _events_to_json(events: list[ResolutionEvent]) -> list[dict]:
    return [{"level": e.level.value, "message": e.message} for e in events]


@click.command("resolve")
@click.argument("uids", nargs=-1, required=True)
@index_option
@installed_option(required=False)
@config_option
@click.option("--compat", default=None, help="Only consider versions for this context.")
@click.option(
    "--interactive/--no-interactive",
    default=None,
    help="Prompt whenever more than one version fits.",
)
@click.option(
    "--pin", "pins",
    multiple=True,
    callback=_parse_pins,
    metavar="UID=VERSION",
    help="Prefer VERSION of UID when it satisfies the requirement.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format (default: text).",
)
def resolve_command(
    uids: tuple[str, ...],
    index_path: str,
    installed_path: str | None,
    config_path: str | None,
    compat: str | None,
    interactive: bool | None,
    pins: dict[str, str] | None,
    output_format: str,
) -> None:
    """Resolve versions for the packages UIDS and their dependencies.

    Exit code 0 on success, 1 if a requested package cannot be resolved.
    """
    index = load_index(index_path)
    installed = load_installed(installed_path)
    config = load_settings(
        config_path, compatibility=compat, interactive=interactive, pins=pins
    )
    resolver = build_resolver(index, installed, config)

    try:
        selection = resolver.resolve([PackageId(uid) for uid in uids])
    except ResolutionError as exc:
        if output_format == "json":
            click.echo(json.dumps({
                "success": False,
                "error": str(exc),
                "events": _events_to_json(resolver.events),
            }, indent=2))
        else:
            from modresolve.cli.output import print_events, print_resolution_summary
            print_events(resolver.events)
            print_resolution_summary(success=False, selection={}, errors=[str(exc)])
        sys.exit(1)

    if output_format == "json":
        click.echo(json.dumps({
            "success": True,
            "selection": _selection_to_json(selection),
            "events": _events_to_json(resolver.events),
        }, indent=2))
    else:
        from modresolve.cli.output import print_events, print_resolution_summary
        print_events(resolver.events)
        print_resolution_summary(success=True, selection=selection, errors=[])
    sys.exit(0)
