"""Installed-package snapshot.

The dependency graph is always built from a point-in-time snapshot of what is
installed. Each entry records the package, the version that was installed
(which may be unset when the install record is damaged) and whether the
package was pulled in only as someone else's dependency.

Snapshot document format::

    {"packages": [
        {"uid": "my-mod", "version": "1.2.0", "asDependency": false},
        {"uid": "core-lib", "version": "2.0", "asDependency": true}
    ]}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator

from modresolve.core.versions.models import PackageId, VersionRef
from modresolve.exceptions import GraphContractError, IndexFormatError


@dataclass(frozen=True)
class InstalledPackage:
    """One entry of the installed snapshot.

    Attributes:
        uid: Package identifier.
        version: The installed version. Invalid when the record is damaged.
        as_dependency: True if the package was installed only to satisfy
            another package's dependency, False if the user asked for it.
    """

    uid: PackageId
    version: VersionRef
    as_dependency: bool = False


class InstalledPackages:
    """An ordered, restartable sequence of installed-package entries.

    Iterating twice yields the same entries in the same order, so one
    snapshot can back several graph builds within a single pass.
    """

    def __init__(self, entries: Iterable[InstalledPackage] = ()) -> None:
        self._entries: list[InstalledPackage] = list(entries)

    def __iter__(self) -> Iterator[InstalledPackage]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, uid: object) -> bool:
        return any(e.uid == uid for e in self._entries)

    def get(self, uid: PackageId) -> InstalledPackage | None:
        """Return the entry for *uid*, or None."""
        for entry in self._entries:
            if entry.uid == uid:
                return entry
        return None

    @property
    def uids(self) -> list[PackageId]:
        """Package identifiers in snapshot order."""
        return [e.uid for e in self._entries]

    def add(
        self, uid: str, version: str | None = None, *, as_dependency: bool = False
    ) -> InstalledPackage:
        """Append an entry and return it."""
        entry = InstalledPackage(
            uid=PackageId(uid),
            version=VersionRef(PackageId(uid), version),
            as_dependency=as_dependency,
        )
        self._entries.append(entry)
        return entry

    def to_dict(self) -> dict[str, Any]:
        return {
            "packages": [
                {
                    "uid": e.uid,
                    "version": e.version.version,
                    "asDependency": e.as_dependency,
                }
                for e in self._entries
            ]
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InstalledPackages:
        """Build a snapshot from a parsed snapshot document.

        Raises:
            IndexFormatError: If the document is malformed.
            GraphContractError: If a package is listed twice.
        """
        if not isinstance(data, dict) or not isinstance(data.get("packages", []), list):
            raise IndexFormatError("installed document must have a 'packages' list")
        snapshot = cls()
        for item in data.get("packages", []):
            if not isinstance(item, dict) or not isinstance(item.get("uid"), str):
                raise IndexFormatError("installed entry must have a string 'uid'")
            if item["uid"] in snapshot:
                raise GraphContractError(f"Package {item['uid']!r} appears twice in snapshot")
            version = item.get("version")
            snapshot.add(
                item["uid"],
                str(version) if version else None,
                as_dependency=bool(item.get("asDependency", False)),
            )
        return snapshot

    @classmethod
    def from_json(cls, json_str: str) -> InstalledPackages:
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as exc:
            raise IndexFormatError(f"Invalid installed-snapshot JSON: {exc}") from exc
        return cls.from_dict(data)

    @classmethod
    def read(cls, path: Path) -> InstalledPackages:
        """Read a snapshot document from *path*."""
        return cls.from_json(Path(path).read_text(encoding="utf-8"))
