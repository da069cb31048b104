"""Dependency resolver for installed mod packages.

``DependencyResolver`` is the entry point used by the CLI and installer
layers. It answers three questions:

- **resolve**: which concrete version of every transitively required package
  to install for a set of requested packages;
- **ancestors_of**: which installed packages transitively depend on given
  packages, so that removing them can cascade to their dependents;
- **orphan_packages**: which installed packages are kept alive only as
  dependencies of other orphans, never by a user-requested package.

Graph queries rebuild the dependency graph from the installed snapshot on
every call; the graph is never cached between calls.
"""

from __future__ import annotations

import logging
from typing import Iterable

from modresolve.core.dependency.graph import DependencyGraph, GraphBuilder
from modresolve.core.dependency.queries import (
    ancestor_closure,
    has_resolve_error,
    orphan_set,
)
from modresolve.core.dependency.session import (
    EventListener,
    ResolutionEvent,
    ResolutionSession,
    drive,
)
from modresolve.core.index.protocols import VersionIndex
from modresolve.core.installed import InstalledPackage, InstalledPackages
from modresolve.core.selection import CancellationToken, VersionSelector
from modresolve.core.versions.models import PackageId, PackageVersion

logger = logging.getLogger(__name__)


class DependencyResolver:
    """Resolves versions and answers graph queries for one installation.

    The resolver assumes a single resolution in flight and an installed
    snapshot that does not change during a call. Concurrent installs or
    removals must be serialized by the caller.

    Args:
        index: Known packages and versions.
        selector: Chooses a version whenever the choice is not forced.
        installed: The installed snapshot; defaults to nothing installed.
        include_soft_edges: Whether soft dependencies become graph edges
            (see ``GraphBuilder``).
        listener: Receives resolution events as they are emitted.
        cancellation: Abandons a resolution in flight when cancelled.
    """

    def __init__(
        self,
        index: VersionIndex,
        selector: VersionSelector,
        installed: Iterable[InstalledPackage] | None = None,
        *,
        include_soft_edges: bool = False,
        listener: EventListener | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self._index = index
        self._selector = selector
        self._installed = InstalledPackages(installed or ())
        self._builder = GraphBuilder(index, include_soft_edges=include_soft_edges)
        self._listener = listener
        self._cancellation = cancellation
        self._events: list[ResolutionEvent] = []

    @property
    def installed(self) -> InstalledPackages:
        return self._installed

    @property
    def events(self) -> list[ResolutionEvent]:
        """Events emitted by the most recent ``resolve`` call."""
        return list(self._events)

    # -- Version resolution -------------------------------------------------

    def session(self, uids: Iterable[PackageId]) -> ResolutionSession:
        """Create a resolution session for callers that drive it themselves."""
        return ResolutionSession(
            self._index,
            uids,
            listener=self._listener,
            cancellation=self._cancellation,
        )

    def resolve(self, uids: Iterable[PackageId]) -> dict[PackageId, PackageVersion]:
        """Resolve *uids* and all their transitive dependencies.

        Args:
            uids: Explicitly requested packages, processed in order.

        Returns:
            Mapping of package identifier to the chosen version.

        Raises:
            UnresolvableRequestError: If a requested package has no version
                the selector can choose.
            SelectionCancelled: If resolution was cancelled.
        """
        session = self.session(uids)
        logger.debug("Resolving %s", ", ".join(session.requested))
        try:
            return drive(
                session.steps(),
                lambda request: self._selector.choose(request.uid, request.constraint),
            )
        finally:
            self._events = session.events

    # -- Graph queries ------------------------------------------------------

    def build_graph(self) -> DependencyGraph:
        """Build a fresh dependency graph from the installed snapshot."""
        return self._builder.build(self._installed)

    def ancestors_of(self, uids: Iterable[PackageId]) -> set[PackageId]:
        """Return *uids* plus every installed package depending on them.

        Raises:
            MissingNodeError: If a uid is not installed.
        """
        return ancestor_closure(self.build_graph(), uids)

    def orphan_packages(self) -> set[PackageId]:
        """Return installed packages without a user-requested ancestor.

        Check ``has_unresolved_state()`` before removing what this returns:
        an inconsistent graph can report packages as orphans that are in
        fact still needed.
        """
        return orphan_set(self.build_graph(), self._installed)

    def has_unresolved_state(self) -> bool:
        """True if the installed snapshot cannot be graphed consistently."""
        return has_resolve_error(self._builder, self._installed)
