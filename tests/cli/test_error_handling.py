"""Tests for CLI error handling edge cases.

Verifies graceful handling of:
    - Non-existent index files.
    - Malformed index, snapshot and configuration files.
    - Index entries with unknown enumerated values.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
from click.testing import CliRunner

from modresolve.cli.main import cli


class TestInputErrors:
    """Every input problem exits with code 2 and an ``Error:`` line."""

    def test_nonexistent_index(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["resolve", "A", "--index", "/nonexistent/index.json"])
        # Click's exists=True on the option catches this before our code.
        assert result.exit_code == 2
        assert "does not exist" in result.output

    def test_index_not_json(self, runner: CliRunner, tmp_path: Path) -> None:
        index = tmp_path / "index.json"
        index.write_text("packages: []")
        result = runner.invoke(cli, ["resolve", "A", "--index", str(index)])
        assert result.exit_code == 2
        assert "Error: Invalid index JSON" in result.output

    def test_unknown_install_type(
        self, runner: CliRunner, write_json: Callable[[str, Any], Path]
    ) -> None:
        index = write_json("index.json", {"packages": [
            {"uid": "A", "versions": [{"version": "1", "installType": "jarMod"}]},
        ]})
        result = runner.invoke(cli, ["resolve", "A", "--index", str(index)])
        assert result.exit_code == 2
        assert "installType" in result.output

    @pytest.mark.parametrize("command", ["resolve", "orphans", "check"])
    def test_malformed_constraint_in_index(
        self,
        runner: CliRunner,
        command: str,
        chain_document: dict[str, Any],
        installed_file: Path,
        write_json: Callable[[str, Any], Path],
    ) -> None:
        chain_document["packages"][0]["versions"][0]["references"][0]["version"] = ">=1.0 <2.0"
        index = write_json("bad-index.json", chain_document)
        args = ["A"] if command == "resolve" else ["--installed", str(installed_file)]
        result = runner.invoke(cli, [command, *args, "--index", str(index)])
        assert result.exit_code == 2
        assert result.output.startswith("Error:")
        assert "Invalid constraint atom" in result.output

    def test_malformed_snapshot(
        self,
        runner: CliRunner,
        index_file: Path,
        write_json: Callable[[str, Any], Path],
    ) -> None:
        installed = write_json("installed.json", {"packages": [{"version": "1.0"}]})
        result = runner.invoke(cli, [
            "orphans", "--index", str(index_file), "--installed", str(installed),
        ])
        assert result.exit_code == 2
        assert result.output.startswith("Error:")

    def test_duplicate_snapshot_entry(
        self,
        runner: CliRunner,
        index_file: Path,
        write_json: Callable[[str, Any], Path],
    ) -> None:
        installed = write_json("installed.json", {"packages": [
            {"uid": "A", "version": "1.0"}, {"uid": "A", "version": "1.0"},
        ]})
        result = runner.invoke(cli, [
            "check", "--index", str(index_file), "--installed", str(installed),
        ])
        assert result.exit_code == 2
        assert "appears twice" in result.output

    def test_invalid_config(
        self, runner: CliRunner, index_file: Path, tmp_path: Path
    ) -> None:
        config = tmp_path / "modresolve.yaml"
        config.write_text("colour: blue\n")
        result = runner.invoke(cli, [
            "resolve", "A", "--index", str(index_file), "--config", str(config),
        ])
        assert result.exit_code == 2
        assert "Unknown configuration keys: colour" in result.output
