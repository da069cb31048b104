"""Shared fixtures for modresolve tests."""

from __future__ import annotations

import json
import pathlib
from typing import Any, Callable

import pytest

from modresolve.core.index import InMemoryVersionIndex


def _chain_document() -> dict[str, Any]:
    """A -> B -> C, with two versions of B and C."""
    return {
        "packages": [
            {
                "uid": "A",
                "name": "Mod A",
                "repo": "main",
                "versions": [
                    {
                        "version": "1.0",
                        "references": [{"type": "depends", "uid": "B", "version": "*"}],
                        "urls": [{"url": "https://example.org/a-1.0.jar"}],
                    },
                ],
            },
            {
                "uid": "B",
                "name": "Lib B",
                "repo": "main",
                "versions": [
                    {
                        "version": "1.0",
                        "references": [{"type": "depends", "uid": "C", "version": ">=1.0"}],
                    },
                    {
                        "version": "2.0",
                        "references": [{"type": "depends", "uid": "C", "version": ">=1.0"}],
                    },
                ],
            },
            {
                "uid": "C",
                "name": "Core C",
                "repo": "main",
                "versions": [{"version": "1.0"}, {"version": "1.1"}],
            },
        ]
    }


@pytest.fixture
def chain_document() -> dict[str, Any]:
    """Index document for the A -> B -> C chain."""
    return _chain_document()


@pytest.fixture
def chain_index(chain_document: dict[str, Any]) -> InMemoryVersionIndex:
    """An in-memory index holding the A -> B -> C chain."""
    return InMemoryVersionIndex.from_dict(chain_document)


@pytest.fixture
def write_json(tmp_path: pathlib.Path) -> Callable[[str, Any], pathlib.Path]:
    """Return a helper that writes a JSON document under tmp_path."""

    def _write(name: str, data: Any) -> pathlib.Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
