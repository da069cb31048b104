"""In-memory version index loaded from an index document.

``InMemoryVersionIndex`` implements the ``VersionIndex`` protocol over plain
dictionaries. It is populated either programmatically (``add_metadata`` and
``add_version``) or from an index document::

    {"packages": [
        {"uid": "core-lib", "name": "Core Lib", "repo": "main",
         "versions": [{"version": "1.0.0", "references": []}]}
    ]}

The index is a read-only snapshot from the resolver's point of view. It does
not fetch or cache anything.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from modresolve.core.installed import InstalledPackage
from modresolve.core.versions.models import (
    PackageId,
    PackageMetadata,
    PackageVersion,
    VersionRef,
)
from modresolve.core.versions.ordering import Version
from modresolve.core.versions.serialization import (
    metadata_from_dict,
    version_from_dict,
    version_to_dict,
)
from modresolve.exceptions import IndexFormatError

logger = logging.getLogger(__name__)


class InMemoryVersionIndex:
    """Dictionary-backed package index.

    Metadata is keyed by (uid, repo) so that the same package published by
    several repositories keeps one record per repository. Versions are keyed
    by (uid, version tag).

    Thread safety: This class is NOT thread-safe. Populate it before sharing
    it with a resolver.
    """

    def __init__(self) -> None:
        self._metadata: dict[PackageId, dict[str, PackageMetadata]] = {}
        self._versions: dict[PackageId, dict[str, PackageVersion]] = {}

    # -- Population ---------------------------------------------------------

    def add_metadata(self, metadata: PackageMetadata) -> None:
        """Add or replace the metadata for (uid, repo)."""
        self._metadata.setdefault(metadata.uid, {})[metadata.repo] = metadata

    def add_version(self, version: PackageVersion) -> None:
        """Add or replace a version record."""
        self._versions.setdefault(version.uid, {})[version.version] = version

    # -- VersionIndex protocol ----------------------------------------------

    def metadata_for(self, uid: PackageId) -> list[PackageMetadata]:
        return list(self._metadata.get(uid, {}).values())

    def version_record(self, ref: VersionRef) -> PackageVersion | None:
        if not ref.is_valid:
            return None
        by_tag = self._versions.get(ref.uid, {})
        record = by_tag.get(ref.version)
        if record is not None:
            return record
        # Tags that differ only in trailing zeros ("1.0" vs "1.0.0") are equal.
        wanted = Version(ref.version)
        for tag, candidate in by_tag.items():
            if Version(tag) == wanted:
                return candidate
        return None

    def versions_for(
        self, uid: PackageId, compatibility: str | None = None
    ) -> list[VersionRef]:
        records = [
            v for v in self._versions.get(uid, {}).values()
            if v.is_compatible_with(compatibility)
        ]
        records.sort(key=lambda v: v.ordering, reverse=True)
        return [v.ref for v in records]

    # -- Convenience queries ------------------------------------------------

    def some_metadata(self, uid: PackageId) -> PackageMetadata | None:
        """Return one metadata record for *uid*, or None."""
        records = self.metadata_for(uid)
        return records[0] if records else None

    def display_name(self, uid: PackageId) -> str:
        """Return the friendliest available name for *uid*."""
        meta = self.some_metadata(uid)
        return meta.display_name if meta else str(uid)

    def latest_version_for(
        self, uid: PackageId, compatibility: str | None = None
    ) -> VersionRef | None:
        """Return the newest version of *uid* supporting *compatibility*."""
        refs = self.versions_for(uid, compatibility)
        return refs[0] if refs else None

    def compatibility_versions(self, uid: PackageId) -> list[str]:
        """Return every compatibility context any version of *uid* supports."""
        seen: dict[str, None] = {}
        for version in self._versions.get(uid, {}).values():
            for context in version.compatibility:
                seen.setdefault(context, None)
        return sorted(seen, key=Version, reverse=True)

    def have_uid(self, uid: PackageId, repo: str | None = None) -> bool:
        """True if *uid* has metadata, optionally from a specific *repo*."""
        by_repo = self._metadata.get(uid)
        if not by_repo:
            return False
        return repo is None or repo in by_repo

    def package_uids(self) -> list[PackageId]:
        """Return all package identifiers with metadata or versions, sorted."""
        return sorted(set(self._metadata) | set(self._versions))

    def providers_of(self, uid: PackageId) -> list[PackageVersion]:
        """Return every version record that declares it provides *uid*."""
        out: list[PackageVersion] = []
        for by_tag in self._versions.values():
            for version in by_tag.values():
                if version.uid != uid and version.provides_package(uid):
                    out.append(version)
        return out

    def updated_packages(
        self,
        installed: Iterable[InstalledPackage],
        compatibility: str | None = None,
    ) -> list[tuple[InstalledPackage, VersionRef]]:
        """Return installed packages that have a newer version available.

        Args:
            installed: Installed snapshot entries.
            compatibility: Only consider versions supporting this context.

        Returns:
            (installed entry, newest ref) pairs, in snapshot order. Entries
            without a valid installed version are skipped.
        """
        out: list[tuple[InstalledPackage, VersionRef]] = []
        for entry in installed:
            if not entry.version.is_valid:
                continue
            latest = self.latest_version_for(entry.uid, compatibility)
            if latest is not None and Version(latest.version) > Version(entry.version.version):
                out.append((entry, latest))
        return out

    # -- Serialization ------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the index back to its document shape, sorted by uid."""
        packages = []
        for uid in self.package_uids():
            meta = self.some_metadata(uid)
            entry: dict[str, Any] = {"uid": uid}
            if meta is not None:
                entry.update({
                    "name": meta.name,
                    "repo": meta.repo,
                    "description": meta.description,
                })
            versions = sorted(
                self._versions.get(uid, {}).values(),
                key=lambda v: v.ordering,
            )
            entry["versions"] = [version_to_dict(v) for v in versions]
            packages.append(entry)
        return {"packages": packages}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InMemoryVersionIndex:
        """Build an index from a parsed index document.

        Raises:
            IndexFormatError: If the document is malformed.
        """
        if not isinstance(data, dict):
            raise IndexFormatError("index document must be an object")
        packages = data.get("packages", [])
        if not isinstance(packages, list):
            raise IndexFormatError("'packages' must be a list")

        index = cls()
        for package in packages:
            meta = metadata_from_dict(package)
            index.add_metadata(meta)
            versions = package.get("versions", [])
            if not isinstance(versions, list):
                raise IndexFormatError(f"{meta.uid}: 'versions' must be a list")
            for version_data in versions:
                index.add_version(version_from_dict(meta.uid, version_data))
        logger.debug("Loaded index with %d packages", len(index.package_uids()))
        return index

    @classmethod
    def from_json(cls, json_str: str) -> InMemoryVersionIndex:
        """Build an index from a JSON string.

        Raises:
            IndexFormatError: If the string is not valid JSON or is malformed.
        """
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as exc:
            raise IndexFormatError(f"Invalid index JSON: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def read(cls, path: Path) -> InMemoryVersionIndex:
        """Read an index document from *path*."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))
