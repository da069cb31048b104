"""Shared fixtures for CLI tests.

Provides an index file holding the A -> B -> C chain and installed-snapshot
files in several states: fully consistent, orphaned and broken.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
from click.testing import CliRunner


def _snapshot(*entries: tuple[str, str, bool]) -> dict[str, Any]:
    return {
        "packages": [
            {"uid": uid, "version": tag, "asDependency": as_dependency}
            for uid, tag, as_dependency in entries
        ]
    }


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def index_file(
    chain_document: dict[str, Any], write_json: Callable[[str, Any], Path]
) -> Path:
    """Index document for A -> B -> C."""
    return write_json("index.json", chain_document)


@pytest.fixture
def installed_file(write_json: Callable[[str, Any], Path]) -> Path:
    """A requested, with B and C installed as its dependencies."""
    return write_json(
        "installed.json",
        _snapshot(("A", "1.0", False), ("B", "2.0", True), ("C", "1.1", True)),
    )


@pytest.fixture
def orphaned_file(write_json: Callable[[str, Any], Path]) -> Path:
    """B and C installed as dependencies, nothing requested."""
    return write_json(
        "orphaned.json",
        _snapshot(("B", "1.0", True), ("C", "1.0", True)),
    )


@pytest.fixture
def broken_file(write_json: Callable[[str, Any], Path]) -> Path:
    """A requested, but its dependency B is not installed."""
    return write_json("broken.json", _snapshot(("A", "1.0", False)))
