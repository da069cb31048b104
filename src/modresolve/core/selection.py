"""Version selection: choosing a concrete version when several fit.

Resolution asks a ``VersionSelector`` for a version whenever the choice is
not forced by context: once per explicitly requested package, and once per
dependency edge. A selector may decide automatically, consult pins, or ask a
person. It returns None when it cannot choose, and raises
``SelectionCancelled`` when the pending choice is abandoned.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Mapping, Protocol

from modresolve.core.index.protocols import VersionIndex
from modresolve.core.versions.constraints import VersionConstraint
from modresolve.core.versions.models import PackageId, VersionRef
from modresolve.exceptions import SelectionCancelled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionRequest:
    """A pending version choice.

    Attributes:
        uid: Package to choose a version of.
        constraint: Restricts the candidates; None means unconstrained.
        requested_by: The version whose dependency edge triggered the
            request, or None for an explicit request.
    """

    uid: PackageId
    constraint: VersionConstraint | None = None
    requested_by: VersionRef | None = None


class CancellationToken:
    """Thread-safe flag used to abandon a resolution in flight.

    A front end running resolution off its interaction thread calls
    ``cancel()``; the resolution session checks the token before every
    selection and raises ``SelectionCancelled``.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise ``SelectionCancelled`` if ``cancel()`` was called."""
        if self._event.is_set():
            raise SelectionCancelled("Version selection was cancelled")


class VersionSelector(Protocol):
    """Chooses a concrete version for a package."""

    def choose(
        self, uid: PackageId, constraint: VersionConstraint | None = None
    ) -> VersionRef | None:
        """Return the chosen version of *uid*, or None if none can be chosen."""
        ...


def candidates(
    index: VersionIndex,
    uid: PackageId,
    constraint: VersionConstraint | None,
    compatibility: str | None = None,
) -> list[VersionRef]:
    """Return the versions of *uid* satisfying *constraint*, newest first."""
    refs = index.versions_for(uid, compatibility)
    if constraint is None or constraint.is_any:
        return refs
    return [r for r in refs if constraint.satisfies(r.version or "")]


class LatestVersionSelector:
    """Selects the newest version satisfying the constraint.

    Args:
        index: Source of candidate versions.
        compatibility: Only consider versions supporting this context.
    """

    def __init__(self, index: VersionIndex, compatibility: str | None = None) -> None:
        self._index = index
        self._compatibility = compatibility

    def choose(
        self, uid: PackageId, constraint: VersionConstraint | None = None
    ) -> VersionRef | None:
        refs = candidates(self._index, uid, constraint, self._compatibility)
        if not refs:
            logger.debug("No candidate versions for %s (%s)", uid, constraint)
            return None
        return refs[0]


class PinnedVersionSelector:
    """Selects pinned versions first and delegates everything else.

    A pin is honoured only when the index has that version, it supports the
    compatibility context and it satisfies the requested constraint.
    Otherwise the fallback selector decides.

    Args:
        index: Source of candidate versions.
        pins: Mapping of package identifier to version tag.
        fallback: Selector used for packages without a usable pin.
        compatibility: Only honour pins supporting this context.
    """

    def __init__(
        self,
        index: VersionIndex,
        pins: Mapping[str, str],
        fallback: VersionSelector,
        compatibility: str | None = None,
    ) -> None:
        self._index = index
        self._pins = dict(pins)
        self._fallback = fallback
        self._compatibility = compatibility

    def choose(
        self, uid: PackageId, constraint: VersionConstraint | None = None
    ) -> VersionRef | None:
        pinned = self._pins.get(uid)
        if pinned is not None:
            ref = VersionRef(uid, pinned)
            if ref in candidates(self._index, uid, constraint, self._compatibility):
                return ref
            logger.info("Pin %s unavailable or outside %s; ignoring pin", ref, constraint)
        return self._fallback.choose(uid, constraint)
