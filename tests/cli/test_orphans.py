"""Tests for ``modresolve orphans`` and ``modresolve dependents``."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from modresolve.cli.main import cli


class TestOrphansCommand:
    """Tests for listing orphaned packages."""

    def test_rooted_installation_has_no_orphans(
        self, runner: CliRunner, index_file: Path, installed_file: Path
    ) -> None:
        result = runner.invoke(cli, [
            "orphans", "--index", str(index_file),
            "--installed", str(installed_file), "--format", "json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"consistent": True, "orphans": []}

    def test_unrooted_dependencies_are_orphans(
        self, runner: CliRunner, index_file: Path, orphaned_file: Path
    ) -> None:
        result = runner.invoke(cli, [
            "orphans", "--index", str(index_file),
            "--installed", str(orphaned_file), "--format", "json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output)["orphans"] == ["B", "C"]

    def test_text_listing(
        self, runner: CliRunner, index_file: Path, orphaned_file: Path
    ) -> None:
        result = runner.invoke(cli, [
            "orphans", "--index", str(index_file), "--installed", str(orphaned_file),
        ])
        assert "Orphaned Packages" in result.output

    def test_inconsistent_graph_warns(
        self, runner: CliRunner, index_file: Path, broken_file: Path
    ) -> None:
        result = runner.invoke(cli, [
            "orphans", "--index", str(index_file), "--installed", str(broken_file),
        ])
        assert result.exit_code == 0
        assert "could not be fully resolved" in result.output
        assert "No orphaned packages." in result.output

    def test_installed_is_required(self, runner: CliRunner, index_file: Path) -> None:
        result = runner.invoke(cli, ["orphans", "--index", str(index_file)])
        assert result.exit_code == 2


class TestDependentsCommand:
    """Tests for listing what removing packages affects."""

    def test_transitive_dependents(
        self, runner: CliRunner, index_file: Path, installed_file: Path
    ) -> None:
        result = runner.invoke(cli, [
            "dependents", "C", "--index", str(index_file),
            "--installed", str(installed_file), "--format", "json",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"affected": ["A", "B", "C"]}

    def test_requested_root_only_affects_itself(
        self, runner: CliRunner, index_file: Path, installed_file: Path
    ) -> None:
        result = runner.invoke(cli, [
            "dependents", "A", "--index", str(index_file),
            "--installed", str(installed_file), "--format", "json",
        ])
        assert json.loads(result.output) == {"affected": ["A"]}

    def test_not_installed_package(
        self, runner: CliRunner, index_file: Path, installed_file: Path
    ) -> None:
        result = runner.invoke(cli, [
            "dependents", "Z", "--index", str(index_file), "--installed", str(installed_file),
        ])
        assert result.exit_code == 2
        assert "package 'Z' is not installed" in result.output

    def test_text_listing(
        self, runner: CliRunner, index_file: Path, installed_file: Path
    ) -> None:
        result = runner.invoke(cli, [
            "dependents", "B", "--index", str(index_file), "--installed", str(installed_file),
        ])
        assert result.exit_code == 0
        assert "Affected Packages" in result.output
