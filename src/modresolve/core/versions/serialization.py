"""Deserialization and serialization of package index documents.

Converts between the JSON shape published by package repositories and the
dataclasses in :mod:`modresolve.core.versions.models`. A version record looks
like::

    {
      "name": "1.2 (Winter update)",
      "version": "1.2.0",
      "type": "Release",
      "installType": "forgeMod",
      "compatibility": ["1.7.10"],
      "references": [
        {"type": "depends", "uid": "core-lib", "version": ">=2.0", "isSoft": false},
        {"type": "provides", "uid": "api-compat", "version": "1.0"}
      ],
      "libraries": [{"name": "org.example:lib:1.0"}],
      "urls": [{"url": "https://example.org/mod.jar", "priority": 0,
                "downloadType": "parallel"}]
    }

Unknown enumerated values raise ``IndexFormatError`` rather than being
silently dropped, so a malformed index never yields a partial record.
"""

from __future__ import annotations

from typing import Any

from modresolve.core.versions.constraints import VersionConstraint
from modresolve.core.versions.models import (
    Download,
    DownloadType,
    InstallType,
    Library,
    PackageId,
    PackageMetadata,
    PackageVersion,
    Reference,
    ReferenceKind,
    VersionRef,
)
from modresolve.exceptions import ConstraintError, IndexFormatError


def _require_str(data: dict[str, Any], key: str, what: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise IndexFormatError(f"{what}: missing or invalid {key!r}")
    return value


def _require_list(data: dict[str, Any], key: str, what: str) -> list[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise IndexFormatError(f"{what}: {key!r} must be a list")
    return value


def _reference_from_dict(data: Any, owner: str) -> tuple[ReferenceKind, Reference]:
    if not isinstance(data, dict):
        raise IndexFormatError(f"{owner}: reference must be an object")
    uid = _require_str(data, "uid", f"{owner} reference")
    raw_kind = _require_str(data, "type", f"{owner} reference")
    try:
        kind = ReferenceKind(raw_kind)
    except ValueError:
        raise IndexFormatError(f"{owner}: unknown reference type {raw_kind!r}") from None
    raw_constraint = data.get("version")
    try:
        constraint = VersionConstraint(
            "*" if raw_constraint is None else str(raw_constraint)
        ).validate()
    except ConstraintError as exc:
        raise IndexFormatError(f"{owner}: reference to {uid!r}: {exc}") from None
    soft = bool(data.get("isSoft", False)) if kind is ReferenceKind.DEPENDS else False
    return kind, Reference(uid=PackageId(uid), constraint=constraint, soft=soft)


def _download_from_dict(data: Any, owner: str) -> Download:
    if not isinstance(data, dict):
        raise IndexFormatError(f"{owner}: download must be an object")
    raw_type = data.get("downloadType", "parallel")
    try:
        download_type = DownloadType(raw_type)
    except ValueError:
        raise IndexFormatError(
            f"{owner}: unknown value for \"downloadType\": {raw_type!r}"
        ) from None
    priority = data.get("priority", 0)
    if not isinstance(priority, int) or isinstance(priority, bool):
        raise IndexFormatError(f"{owner}: 'priority' must be an integer")
    return Download(
        url=_require_str(data, "url", f"{owner} download"),
        priority=priority,
        download_type=download_type,
        hint=str(data.get("hint", "")),
        group=str(data.get("group", "")),
    )


def version_from_dict(uid: str, data: dict[str, Any]) -> PackageVersion:
    """Build a ``PackageVersion`` for package *uid* from a version object.

    The version tag comes from ``version``; when it is missing, ``name``
    doubles as the tag.

    Raises:
        IndexFormatError: On missing fields or unknown enumerated values.
    """
    if not isinstance(data, dict):
        raise IndexFormatError(f"{uid}: version entry must be an object")
    owner = f"{uid}"
    if "version" in data:
        tag = _require_str(data, "version", owner)
        name = str(data.get("name", tag))
    else:
        tag = _require_str(data, "name", owner)
        name = tag
    owner = f"{uid}@{tag}"

    raw_install = data.get("installType", InstallType.FORGE_MOD.value)
    try:
        install_type = InstallType(raw_install)
    except ValueError:
        raise IndexFormatError(
            f"{owner}: unknown value for \"installType\": {raw_install!r}"
        ) from None

    version = PackageVersion(
        ref=VersionRef(PackageId(uid), tag),
        name=name,
        type=str(data.get("type", "Release")),
        sha1=str(data.get("sha1", "")),
        install_type=install_type,
        compatibility=[str(c) for c in _require_list(data, "compatibility", owner)],
    )
    for ref_data in _require_list(data, "references", owner):
        kind, ref = _reference_from_dict(ref_data, owner)
        version.references(kind).append(ref)

    for lib in _require_list(data, "libraries", owner):
        if not isinstance(lib, dict):
            raise IndexFormatError(f"{owner}: library must be an object")
        lib_name = _require_str(lib, "name", f"{owner} library")
        repo = lib.get("url")
        version.libraries.append(
            Library(name=lib_name, repo=repo) if repo else Library(name=lib_name)
        )

    version.downloads = sorted(
        (_download_from_dict(d, owner) for d in _require_list(data, "urls", owner)),
        key=lambda d: d.priority,
    )
    return version


def version_to_dict(version: PackageVersion) -> dict[str, Any]:
    """Serialize a ``PackageVersion`` back to its index JSON shape."""
    references: list[dict[str, Any]] = []
    for ref in version.dependencies:
        references.append({
            "type": ReferenceKind.DEPENDS.value,
            "uid": ref.uid,
            "version": ref.constraint.raw,
            "isSoft": ref.soft,
        })
    for kind in (
        ReferenceKind.RECOMMENDS,
        ReferenceKind.SUGGESTS,
        ReferenceKind.CONFLICTS,
        ReferenceKind.PROVIDES,
    ):
        for ref in version.references(kind):
            references.append({
                "type": kind.value,
                "uid": ref.uid,
                "version": ref.constraint.raw,
            })

    out: dict[str, Any] = {
        "name": version.name,
        "version": version.version,
        "type": version.type,
        "installType": version.install_type.value,
        "references": references,
        "urls": [
            {
                "url": d.url,
                "priority": d.priority,
                "downloadType": d.download_type.value,
                "hint": d.hint,
                "group": d.group,
            }
            for d in version.downloads
        ],
    }
    if version.sha1:
        out["sha1"] = version.sha1
    if version.compatibility:
        out["compatibility"] = list(version.compatibility)
    if version.libraries:
        out["libraries"] = [{"name": lib.name, "url": lib.repo} for lib in version.libraries]
    return out


def metadata_from_dict(data: dict[str, Any]) -> PackageMetadata:
    """Build ``PackageMetadata`` from a package object.

    Raises:
        IndexFormatError: If ``uid`` is missing.
    """
    if not isinstance(data, dict):
        raise IndexFormatError("package entry must be an object")
    uid = _require_str(data, "uid", "package")
    return PackageMetadata(
        uid=PackageId(uid),
        name=str(data.get("name", "")),
        repo=str(data.get("repo", "")),
        description=str(data.get("description", "")),
        authors=[str(a) for a in _require_list(data, "authors", uid)],
    )
