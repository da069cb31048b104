"""Suspendable version resolution.

``ResolutionSession.steps()`` is a generator that runs the recursive version
resolution and suspends at exactly one point: whenever a version has to be
chosen. It yields a ``SelectionRequest`` and expects the chosen
``VersionRef`` (or None, meaning "cannot choose") to be sent back::

    session = ResolutionSession(index, ["my-mod"])
    steps = session.steps()
    try:
        request = next(steps)
        while True:
            request = steps.send(selector.choose(request.uid, request.constraint))
    except StopIteration as stop:
        selection = stop.value

Everything between two suspension points is synchronous, so progress events
are emitted in a deterministic order relative to the selection requests.
``DependencyResolver.resolve`` is the standard driver.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generator, Iterable

from modresolve.core.index.protocols import VersionIndex
from modresolve.core.selection import CancellationToken, SelectionRequest
from modresolve.core.versions.models import (
    PackageId,
    PackageVersion,
    Reference,
    VersionRef,
)
from modresolve.core.versions.ordering import Version
from modresolve.exceptions import UnresolvableRequestError

logger = logging.getLogger(__name__)


class EventLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_LOG_LEVELS = {
    EventLevel.INFO: logging.INFO,
    EventLevel.WARNING: logging.WARNING,
    EventLevel.ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class ResolutionEvent:
    """A progress report emitted during resolution.

    Attributes:
        level: INFO for a resolved edge, WARNING for a skipped edge, ERROR
            for an explicit request that cannot be satisfied.
        message: Human-readable description.
        source: The version whose edge the event concerns, if any.
        target: The package the edge points at, or the requested package.
    """

    level: EventLevel
    message: str
    source: VersionRef | None = None
    target: PackageId | None = None


EventListener = Callable[[ResolutionEvent], None]

Steps = Generator[SelectionRequest, VersionRef | None, dict[PackageId, PackageVersion]]


class ResolutionSession:
    """State of one resolution pass.

    A session is single-use: create a new one for every pass.

    Args:
        index: Source of version records and package metadata.
        requested: Explicitly requested packages, resolved in order.
        listener: Called with every event as it is emitted.
        cancellation: Checked before every selection request.
    """

    def __init__(
        self,
        index: VersionIndex,
        requested: Iterable[PackageId],
        *,
        listener: EventListener | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self._index = index
        self._requested = list(dict.fromkeys(requested))
        self._listener = listener
        self._cancellation = cancellation
        self._expanded: set[tuple[PackageId, Version]] = set()
        self.selection: dict[PackageId, PackageVersion] = {}
        self.events: list[ResolutionEvent] = []

    @property
    def requested(self) -> list[PackageId]:
        return list(self._requested)

    def steps(self) -> Steps:
        """Run the resolution, suspending at every selection.

        Returns (as the generator's return value):
            The selection map of package identifier to chosen version.

        Raises:
            UnresolvableRequestError: If a requested package has no version
                that can be chosen. No partial selection is returned.
            SelectionCancelled: If the cancellation token fires.
        """
        for uid in self._requested:
            ref = yield from self._select(SelectionRequest(uid))
            version = self._index.version_record(ref) if ref is not None else None
            if version is None:
                message = f"Didn't select a version for {self._name(uid)}"
                self._emit(EventLevel.ERROR, message, target=uid)
                raise UnresolvableRequestError(uid, message)
            yield from self._resolve_version(version)
        return dict(self.selection)

    # -- Recursive step -----------------------------------------------------

    def _resolve_version(
        self, version: PackageVersion | None
    ) -> Generator[SelectionRequest, VersionRef | None, None]:
        if version is None:
            return
        current = self.selection.get(version.uid)
        if current is not None and current.ordering >= version.ordering:
            return
        self.selection[version.uid] = version

        key = (version.uid, version.ordering)
        if key in self._expanded:
            return
        self._expanded.add(key)

        for ref in version.dependencies:
            dep = yield from self._resolve_edge(version, ref)
            if dep is None:
                continue
            self._emit(
                EventLevel.INFO,
                f"Successfully resolved dependency from {self._name(version.uid)} "
                f"({version.name}) to {self._name(dep.uid)} ({dep.name})",
                source=version.ref,
                target=ref.uid,
            )
            yield from self._resolve_version(dep)

    def _resolve_edge(
        self, version: PackageVersion, ref: Reference
    ) -> Generator[SelectionRequest, VersionRef | None, PackageVersion | None]:
        """Find the version satisfying one DEPENDS edge, or None."""
        if ref.soft:
            provider = self._find_provider(ref)
            if provider is not None:
                return provider

        if self._index.metadata_for(ref.uid):
            chosen = yield from self._select(
                SelectionRequest(ref.uid, ref.constraint, version.ref)
            )
            dep = self._index.version_record(chosen) if chosen is not None else None
            if dep is None:
                self._emit(
                    EventLevel.WARNING,
                    f"Didn't select a version while resolving from "
                    f"{self._name(version.uid)} ({version.name}) to {self._name(ref.uid)}",
                    source=version.ref,
                    target=ref.uid,
                )
            return dep

        provider = self._find_provider(ref)
        if provider is None:
            self._emit(
                EventLevel.WARNING,
                f"The dependency from {self._name(version.uid)} ({version.name}) "
                f"to {ref.uid} cannot be resolved",
                source=version.ref,
                target=ref.uid,
            )
        return provider

    def _find_provider(self, ref: Reference) -> PackageVersion | None:
        """Search the current selection for a version providing *ref*."""
        for selected in self.selection.values():
            if selected.provides_package(ref.uid, ref.constraint):
                return selected
        return None

    # -- Helpers ------------------------------------------------------------

    def _select(
        self, request: SelectionRequest
    ) -> Generator[SelectionRequest, VersionRef | None, VersionRef | None]:
        if self._cancellation is not None:
            self._cancellation.raise_if_cancelled()
        answer = yield request
        return answer

    def _name(self, uid: PackageId) -> str:
        records = self._index.metadata_for(uid)
        for meta in records:
            if meta.name:
                return meta.name
        return str(uid)

    def _emit(
        self,
        level: EventLevel,
        message: str,
        *,
        source: VersionRef | None = None,
        target: PackageId | None = None,
    ) -> None:
        event = ResolutionEvent(level=level, message=message, source=source, target=target)
        self.events.append(event)
        logger.log(_LOG_LEVELS[level], message)
        if self._listener is not None:
            self._listener(event)


def drive(
    steps: Steps, choose: Callable[[SelectionRequest], VersionRef | None]
) -> dict[PackageId, PackageVersion]:
    """Run *steps* to completion, answering each request with *choose*."""
    try:
        request = next(steps)
        while True:
            request = steps.send(choose(request))
    except StopIteration as stop:
        return stop.value
