"""Interactive version selection on the terminal."""

from __future__ import annotations

import click

from modresolve.core.index import VersionIndex
from modresolve.core.selection import candidates
from modresolve.core.versions import PackageId, VersionConstraint, VersionRef


class PromptSelector:
    """Asks the user to pick a version whenever more than one fits.

    A single candidate is chosen without asking. Entering ``0`` skips the
    package, which the resolver treats as "cannot choose".

    Args:
        index: Source of candidate versions.
        compatibility: Only offer versions supporting this context.
    """

    def __init__(self, index: VersionIndex, compatibility: str | None = None) -> None:
        self._index = index
        self._compatibility = compatibility

    def choose(
        self, uid: PackageId, constraint: VersionConstraint | None = None
    ) -> VersionRef | None:
        refs = candidates(self._index, uid, constraint, self._compatibility)
        if not refs:
            return None
        if len(refs) == 1:
            return refs[0]

        wanted = f" ({constraint})" if constraint is not None and not constraint.is_any else ""
        click.echo(f"Select a version of {uid}{wanted}:")
        for number, ref in enumerate(refs, start=1):
            click.echo(f"  {number}) {ref.version}")
        click.echo("  0) skip")
        choice = click.prompt(
            "Version",
            type=click.IntRange(0, len(refs)),
            default=1,
        )
        if choice == 0:
            return None
        return refs[choice - 1]
