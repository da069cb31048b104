"""modresolve: Dependency graph resolution for installed mod packages."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
