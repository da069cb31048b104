"""Tests for the installed-package snapshot."""

from __future__ import annotations

import pathlib
from typing import Any, Callable

import pytest

from modresolve.core.installed import InstalledPackage, InstalledPackages
from modresolve.core.versions import PackageId, VersionRef
from modresolve.exceptions import GraphContractError, IndexFormatError


class TestInstalledPackages:
    """Tests for the in-memory snapshot sequence."""

    def test_add_and_lookup(self) -> None:
        snapshot = InstalledPackages()
        entry = snapshot.add("mod", "1.0")
        snapshot.add("lib", "2.0", as_dependency=True)

        assert entry == InstalledPackage(
            PackageId("mod"), VersionRef(PackageId("mod"), "1.0"), False
        )
        assert len(snapshot) == 2
        assert "lib" in snapshot
        assert "other" not in snapshot
        assert snapshot.get(PackageId("lib")).as_dependency is True
        assert snapshot.get(PackageId("other")) is None

    def test_iteration_is_restartable(self) -> None:
        snapshot = InstalledPackages()
        snapshot.add("a", "1")
        snapshot.add("b", "1")
        first = [e.uid for e in snapshot]
        second = [e.uid for e in snapshot]
        assert first == second == ["a", "b"]
        assert snapshot.uids == ["a", "b"]

    def test_entry_without_version_is_invalid(self) -> None:
        snapshot = InstalledPackages()
        entry = snapshot.add("broken")
        assert entry.version.is_valid is False


class TestSnapshotDocuments:
    """Tests for reading and writing snapshot documents."""

    def test_from_dict(self) -> None:
        snapshot = InstalledPackages.from_dict({
            "packages": [
                {"uid": "mod", "version": "1.2.0"},
                {"uid": "lib", "version": "2.0", "asDependency": True},
                {"uid": "broken", "version": ""},
            ]
        })
        assert snapshot.uids == ["mod", "lib", "broken"]
        assert snapshot.get(PackageId("mod")).as_dependency is False
        assert snapshot.get(PackageId("lib")).as_dependency is True
        assert snapshot.get(PackageId("broken")).version.is_valid is False

    def test_to_dict_reads_back(self) -> None:
        snapshot = InstalledPackages()
        snapshot.add("mod", "1.0")
        snapshot.add("lib", "2.0", as_dependency=True)
        assert list(InstalledPackages.from_dict(snapshot.to_dict())) == list(snapshot)

    def test_read_from_file(self, write_json: Callable[[str, Any], pathlib.Path]) -> None:
        path = write_json("installed.json", {"packages": [{"uid": "mod", "version": "1"}]})
        assert InstalledPackages.read(path).uids == ["mod"]

    @pytest.mark.parametrize(
        "document",
        [
            [],
            {"packages": "mod"},
            {"packages": [{"version": "1.0"}]},
            {"packages": ["mod"]},
        ],
    )
    def test_malformed_documents(self, document: Any) -> None:
        with pytest.raises(IndexFormatError):
            InstalledPackages.from_dict(document)

    def test_invalid_json(self) -> None:
        with pytest.raises(IndexFormatError):
            InstalledPackages.from_json("[")

    def test_duplicate_entry_rejected(self) -> None:
        document = {"packages": [{"uid": "mod", "version": "1"}, {"uid": "mod", "version": "2"}]}
        with pytest.raises(GraphContractError, match="appears twice"):
            InstalledPackages.from_dict(document)
