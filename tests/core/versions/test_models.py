"""Tests for the package version data models."""

from __future__ import annotations

import pytest

from modresolve.core.versions import (
    Download,
    PackageId,
    PackageMetadata,
    PackageVersion,
    Reference,
    ReferenceKind,
    VersionConstraint,
    VersionRef,
)
from modresolve.exceptions import IndexFormatError


def _make_version(uid: str = "mod", tag: str = "1.0", **kwargs) -> PackageVersion:
    return PackageVersion(ref=VersionRef(PackageId(uid), tag), **kwargs)


class TestVersionRef:
    """Tests for the (uid, version) reference."""

    def test_valid_ref(self) -> None:
        ref = VersionRef(PackageId("mod"), "1.0")
        assert ref.is_valid is True
        assert str(ref) == "mod@1.0"

    @pytest.mark.parametrize("tag", [None, ""])
    def test_unset_version_is_invalid(self, tag: str | None) -> None:
        ref = VersionRef(PackageId("mod"), tag)
        assert ref.is_valid is False
        assert str(ref) == "mod"

    def test_refs_are_hashable_values(self) -> None:
        assert VersionRef(PackageId("a"), "1") == VersionRef(PackageId("a"), "1")
        assert len({VersionRef(PackageId("a"), "1"), VersionRef(PackageId("a"), "1")}) == 1


class TestPackageVersion:
    """Tests for the per-version record."""

    def test_name_defaults_to_version_tag(self) -> None:
        assert _make_version(tag="2.1").name == "2.1"
        assert _make_version(tag="2.1", name="Winter update").name == "Winter update"

    def test_downloads_sorted_stably_by_priority(self) -> None:
        version = _make_version(downloads=[
            Download("https://a", priority=1),
            Download("https://b", priority=0),
            Download("https://c", priority=1),
        ])
        assert [d.url for d in version.downloads] == ["https://b", "https://a", "https://c"]
        assert version.highest_priority_download().url == "https://b"

    def test_no_downloads_raises(self) -> None:
        with pytest.raises(IndexFormatError, match="No downloads"):
            _make_version().highest_priority_download()

    def test_references_by_kind(self) -> None:
        dep = Reference(PackageId("lib"))
        conflict = Reference(PackageId("other"))
        version = _make_version(dependencies=[dep], conflicts=[conflict])
        assert version.references(ReferenceKind.DEPENDS) == [dep]
        assert version.references(ReferenceKind.CONFLICTS) == [conflict]
        assert version.references(ReferenceKind.SUGGESTS) == []

    def test_ordering_uses_version_order(self) -> None:
        assert _make_version(tag="1.10").ordering > _make_version(tag="1.9").ordering


class TestProvidesPackage:
    """Tests for ``PackageVersion.provides_package``."""

    def test_provides_itself_within_constraint(self) -> None:
        version = _make_version("mod", "1.5")
        assert version.provides_package(PackageId("mod")) is True
        assert version.provides_package(PackageId("mod"), VersionConstraint(">=1.0")) is True
        assert version.provides_package(PackageId("mod"), VersionConstraint("2.0")) is False

    def test_pinned_provides_checks_constraint(self) -> None:
        version = _make_version(
            provides=[Reference(PackageId("api"), VersionConstraint("2.0"))]
        )
        assert version.provides_package(PackageId("api")) is True
        assert version.provides_package(PackageId("api"), VersionConstraint(">=2.0")) is True
        assert version.provides_package(PackageId("api"), VersionConstraint("<2.0")) is False

    def test_unpinned_provides_any_version(self) -> None:
        version = _make_version(provides=[Reference(PackageId("api"))])
        assert version.provides_package(PackageId("api"), VersionConstraint("3.0")) is True

    def test_does_not_provide_unrelated_package(self) -> None:
        version = _make_version(provides=[Reference(PackageId("api"))])
        assert version.provides_package(PackageId("other")) is False


class TestCompatibility:
    """Tests for ``PackageVersion.is_compatible_with``."""

    def test_empty_compatibility_matches_everything(self) -> None:
        assert _make_version().is_compatible_with("1.7.10") is True

    def test_listed_contexts(self) -> None:
        version = _make_version(compatibility=["1.7.10", "1.7.2"])
        assert version.is_compatible_with("1.7.10") is True
        assert version.is_compatible_with("1.6.4") is False
        assert version.is_compatible_with(None) is True


class TestPackageMetadata:
    def test_display_name_falls_back_to_uid(self) -> None:
        assert PackageMetadata(PackageId("mod")).display_name == "mod"
        assert PackageMetadata(PackageId("mod"), name="My Mod").display_name == "My Mod"
