"""Package versions: ordering, constraints, records and their JSON shape.

All public names are re-exported here so that callers can write
``from modresolve.core.versions import PackageVersion``.
"""

from modresolve.core.versions.constraints import ANY_VERSION, VersionConstraint
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
from modresolve.core.versions.ordering import Version, compare_versions
from modresolve.core.versions.serialization import (
    metadata_from_dict,
    version_from_dict,
    version_to_dict,
)

__all__ = [
    "ANY_VERSION",
    "Download",
    "DownloadType",
    "InstallType",
    "Library",
    "PackageId",
    "PackageMetadata",
    "PackageVersion",
    "Reference",
    "ReferenceKind",
    "Version",
    "VersionConstraint",
    "VersionRef",
    "compare_versions",
    "metadata_from_dict",
    "version_from_dict",
    "version_to_dict",
]
