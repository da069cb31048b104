"""Version index protocol.

The resolver never talks to a metadata store directly. It depends on the
``VersionIndex`` protocol, so any object with these methods can back a
resolution: the bundled in-memory index, a database-backed store, or a test
double. ``typing.Protocol`` is used instead of an ABC so existing classes
satisfy it without changing their inheritance.
"""

from __future__ import annotations

from typing import Protocol

from modresolve.core.versions.models import (
    PackageId,
    PackageMetadata,
    PackageVersion,
    VersionRef,
)


class VersionIndex(Protocol):
    """Read-only lookup of known packages and their versions."""

    def metadata_for(self, uid: PackageId) -> list[PackageMetadata]:
        """Return every metadata record known for *uid* (possibly empty)."""
        ...

    def version_record(self, ref: VersionRef) -> PackageVersion | None:
        """Return the version record for *ref*, or None if unknown."""
        ...

    def versions_for(
        self, uid: PackageId, compatibility: str | None = None
    ) -> list[VersionRef]:
        """Return refs to the versions of *uid*, newest first.

        When *compatibility* is given, only versions supporting that context
        are returned.
        """
        ...
