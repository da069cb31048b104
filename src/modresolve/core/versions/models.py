"""Package version data models.

Defines the records a version index hands to the resolver: package
identifiers, version references, typed references between packages,
downloads, and the complete per-version record. These are pure data holders
with no lookup logic, so they are safe to import from anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType

from modresolve.core.versions.constraints import ANY_VERSION, VersionConstraint
from modresolve.core.versions.ordering import Version
from modresolve.exceptions import IndexFormatError

PackageId = NewType("PackageId", str)


# ---------------------------------------------------------------------------
# VersionRef: (package, version) pair
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VersionRef:
    """A reference to one concrete version of a package.

    A ref whose ``version`` is None or empty is *unset*: the package is known
    but no concrete version has been chosen.

    Attributes:
        uid: Package identifier.
        version: Version tag, or None when unset.
    """

    uid: PackageId
    version: str | None = None

    @property
    def is_valid(self) -> bool:
        """True if the ref names a concrete version."""
        return bool(self.uid) and bool(self.version)

    def __str__(self) -> str:
        return f"{self.uid}@{self.version}" if self.version else str(self.uid)


# ---------------------------------------------------------------------------
# References between packages
# ---------------------------------------------------------------------------


class ReferenceKind(Enum):
    """Kind of an outgoing edge from a package version.

    Only DEPENDS takes part in resolution. The other kinds are carried on the
    version record for installers and user interfaces.
    """

    DEPENDS = "depends"
    RECOMMENDS = "recommends"
    SUGGESTS = "suggests"
    CONFLICTS = "conflicts"
    PROVIDES = "provides"


@dataclass(frozen=True)
class Reference:
    """A typed edge from a package version to another package.

    Attributes:
        uid: Target package identifier.
        constraint: Required version(s) of the target.
        soft: For DEPENDS edges only. A soft dependency is satisfied by any
            present package providing the target, not necessarily the target.
    """

    uid: PackageId
    constraint: VersionConstraint = ANY_VERSION
    soft: bool = False


# ---------------------------------------------------------------------------
# Downloads and installation
# ---------------------------------------------------------------------------


class DownloadType(Enum):
    """How a download URL is fetched by the installer."""

    DIRECT = "direct"
    PARALLEL = "parallel"
    SEQUENTIAL = "sequential"
    ENCODED = "encoded"


class InstallType(Enum):
    """How a chosen version is materialized. Opaque to the resolver."""

    FORGE_MOD = "forgeMod"
    FORGE_CORE_MOD = "forgeCoreMod"
    LITELOADER_MOD = "liteloaderMod"
    EXTRACT = "extract"
    CONFIG_PACK = "configPack"
    GROUP = "group"


@dataclass(frozen=True)
class Download:
    """One download location for a package version.

    Attributes:
        url: Location of the artifact.
        priority: Lower values are tried first.
        download_type: Transport/encoding used to fetch the URL.
        hint: Free-form hint for the installer.
        group: Grouping hint; downloads in one group are alternatives.
    """

    url: str
    priority: int = 0
    download_type: DownloadType = DownloadType.PARALLEL
    hint: str = ""
    group: str = ""


@dataclass(frozen=True)
class Library:
    """A runtime library a package version needs on the classpath."""

    name: str
    repo: str = "http://repo1.maven.org/maven2/"


# ---------------------------------------------------------------------------
# PackageVersion and PackageMetadata
# ---------------------------------------------------------------------------


@dataclass
class PackageVersion:
    """A concrete, resolvable version record.

    Attributes:
        ref: The (uid, version) this record describes.
        name: Display name of the version (defaults to the version tag).
        type: Release channel, e.g. "Release", "Beta".
        sha1: Checksum of the primary artifact, if published.
        install_type: How the installer materializes this version.
        dependencies: Ordered DEPENDS references.
        recommendations: Ordered RECOMMENDS references.
        suggestions: Ordered SUGGESTS references.
        conflicts: Ordered CONFLICTS references.
        provides: Ordered PROVIDES references.
        downloads: Downloads, kept stably sorted by ascending priority.
        libraries: Runtime libraries.
        compatibility: Context strings (e.g. game versions) this version
            supports. Empty means compatible with any context.
    """

    ref: VersionRef
    name: str = ""
    type: str = "Release"
    sha1: str = ""
    install_type: InstallType = InstallType.FORGE_MOD
    dependencies: list[Reference] = field(default_factory=list)
    recommendations: list[Reference] = field(default_factory=list)
    suggestions: list[Reference] = field(default_factory=list)
    conflicts: list[Reference] = field(default_factory=list)
    provides: list[Reference] = field(default_factory=list)
    downloads: list[Download] = field(default_factory=list)
    libraries: list[Library] = field(default_factory=list)
    compatibility: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.ref.version or ""
        self.downloads = sorted(self.downloads, key=lambda d: d.priority)

    @property
    def uid(self) -> PackageId:
        return self.ref.uid

    @property
    def version(self) -> str:
        return self.ref.version or ""

    @property
    def ordering(self) -> Version:
        """The comparable form of this record's version tag."""
        return Version(self.version)

    def references(self, kind: ReferenceKind) -> list[Reference]:
        """Return the ordered references of one kind."""
        return {
            ReferenceKind.DEPENDS: self.dependencies,
            ReferenceKind.RECOMMENDS: self.recommendations,
            ReferenceKind.SUGGESTS: self.suggestions,
            ReferenceKind.CONFLICTS: self.conflicts,
            ReferenceKind.PROVIDES: self.provides,
        }[kind]

    def provides_package(
        self, uid: PackageId, constraint: VersionConstraint | None = None
    ) -> bool:
        """True if this version is, or declares that it provides, *uid*.

        When *constraint* is given, the provided version must satisfy it. A
        PROVIDES reference without a pinned version provides any version.
        """
        if constraint is None:
            constraint = ANY_VERSION
        if self.uid == uid:
            return constraint.satisfies(self.version)
        for ref in self.provides:
            if ref.uid != uid:
                continue
            pinned = ref.constraint.pinned_version
            if pinned is None or constraint.satisfies(pinned):
                return True
        return False

    def is_compatible_with(self, compatibility: str | None) -> bool:
        """True if this version supports *compatibility* (None matches all)."""
        if compatibility is None or not self.compatibility:
            return True
        return compatibility in self.compatibility

    def highest_priority_download(self) -> Download:
        """Return the preferred download.

        Raises:
            IndexFormatError: If the version has no downloads.
        """
        if not self.downloads:
            raise IndexFormatError(f"No downloads available for {self.ref}")
        return self.downloads[0]


@dataclass
class PackageMetadata:
    """Descriptive metadata for a package, as published by one repository.

    Attributes:
        uid: Package identifier.
        name: Human-readable package name.
        repo: Repository the metadata came from.
        description: Short description.
        authors: Author names.
    """

    uid: PackageId
    name: str = ""
    repo: str = ""
    description: str = ""
    authors: list[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name or str(self.uid)
