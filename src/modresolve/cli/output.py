"""Rich output formatting helpers for the modresolve CLI.

Provides consistent, level-colored terminal output for resolution results,
resolution events, orphan and dependent listings, and graph health reports.

Event Color Mapping:
    ERROR = bold red, WARNING = yellow, INFO = green
"""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from modresolve.core.dependency import DependencyGraph, EventLevel, ResolutionEvent
from modresolve.core.versions import PackageVersion

_EVENT_STYLES: dict[EventLevel, str] = {
    EventLevel.ERROR: "bold red",
    EventLevel.WARNING: "yellow",
    EventLevel.INFO: "green",
}

console = Console()


def event_style(level: EventLevel) -> str:
    """Return the Rich style string for a given event level."""
    return _EVENT_STYLES.get(level, "white")


def print_events(events: Iterable[ResolutionEvent]) -> None:
    """Print resolution events, one per line, colored by level."""
    for event in events:
        label = Text(f"[{event.level.value.upper()}]", style=event_style(event.level))
        console.print(label, escape(event.message))


def print_resolution_summary(
    success: bool,
    selection: dict[str, PackageVersion],
    errors: list[str],
) -> None:
    """Print dependency resolution results.

    Args:
        success: Whether resolution succeeded.
        selection: Package identifier to chosen version (if success).
        errors: Error descriptions (if failure).
    """
    if success:
        console.print(
            Panel("[bold green]Resolution successful[/bold green]",
                  title="Dependency Resolution")
        )
        if selection:
            table = Table(show_header=True)
            table.add_column("Package", style="bold")
            table.add_column("Version")
            table.add_column("Install Type", style="dim")
            for uid in sorted(selection):
                version = selection[uid]
                table.add_row(uid, version.name, version.install_type.value)
            console.print(table)
        else:
            console.print("[dim]No packages to resolve.[/dim]")
    else:
        console.print(
            Panel("[bold red]Resolution failed[/bold red]",
                  title="Dependency Resolution")
        )
        for error in errors:
            console.print(f"  [red]- {escape(error)}[/red]")


def print_package_list(title: str, uids: Iterable[str], empty_message: str) -> None:
    """Print a single-column table of package identifiers, in the given order."""
    uids = list(uids)
    if not uids:
        console.print(f"[dim]{empty_message}[/dim]")
        return
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    for uid in uids:
        table.add_row(uid)
    console.print(table)


def print_inconsistent_graph_warning() -> None:
    console.print(
        "[yellow]Warning: the installed packages could not be fully resolved; "
        "results may include packages that are still needed.[/yellow]"
    )


def print_graph_health(graph: DependencyGraph, cycles: list[list[str]]) -> None:
    """Print a summary of the dependency graph's consistency.

    Args:
        graph: The graph built from the installed snapshot.
        cycles: Dependency cycles found in the graph.
    """
    if graph.ok:
        status = Text("CONSISTENT", style="bold green")
    else:
        status = Text("UNRESOLVED", style="bold red")
    header = Text.assemble(
        ("Packages: ", "bold"), (str(len(graph)), ""),
        ("  Status: ", "bold"), status,
    )
    console.print(Panel(header, title="Dependency Graph"))

    table = Table(show_header=True)
    table.add_column("Package", style="bold")
    table.add_column("Version")
    table.add_column("Requested", justify="center")
    table.add_column("Depends On", style="dim")
    for node in sorted(graph.nodes, key=lambda n: n.uid):
        version = node.version.version if node.version.is_valid else None
        table.add_row(
            node.uid,
            version or Text("unresolved", style="red"),
            "yes" if node.is_hard else "-",
            ", ".join(node.children) or "-",
        )
    console.print(table)

    for cycle in cycles:
        console.print(f"  [yellow]Dependency cycle: {' -> '.join(cycle)}[/yellow]")


def print_updates(rows: list[tuple[str, str, str]]) -> None:
    """Print (package, installed, available) rows."""
    if not rows:
        console.print("[dim]All installed packages are up to date.[/dim]")
        return
    table = Table(title="Available Updates", show_header=True, header_style="bold")
    table.add_column("Package", style="bold")
    table.add_column("Installed")
    table.add_column("Available", style="green")
    for uid, installed, available in rows:
        table.add_row(uid, installed, available)
    console.print(table)

