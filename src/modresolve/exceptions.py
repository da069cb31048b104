"""modresolve exception hierarchy.

All public exceptions inherit from ModResolveError, giving callers a single
base class to catch when they want to handle any modresolve-specific failure
without swallowing unrelated errors.

Not every failure is an exception. A dependency edge that cannot be satisfied
is reported as a warning event during resolution, and an inconsistent
dependency graph is reported through ``DependencyGraph.ok``.
"""

from __future__ import annotations


class ModResolveError(Exception):
    """Base exception for all modresolve errors."""


class ResolutionError(ModResolveError):
    """Raised when version resolution cannot produce a selection."""


class UnresolvableRequestError(ResolutionError):
    """Raised when an explicitly requested package has no choosable version.

    Fatal for the whole ``resolve`` call: no partial selection is returned.

    Attributes:
        uid: The requested package identifier.
    """

    def __init__(self, uid: str, message: str | None = None) -> None:
        self.uid = uid
        super().__init__(message or f"Didn't select a version for {uid}")


class SelectionCancelled(ResolutionError):
    """Raised when a pending version selection is cancelled."""


class MissingNodeError(ModResolveError, LookupError):
    """Raised when a graph query names a package absent from the graph.

    The installed snapshot guarantees every entry has a node, so this is a
    programming-contract violation rather than a recoverable condition.

    Attributes:
        uid: The package identifier that has no node.
    """

    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(f"No dependency node for package {uid!r}")


class GraphContractError(ModResolveError):
    """Raised when an installed snapshot violates the graph contract.

    Covers duplicate package identifiers within a single snapshot.
    """


class IndexFormatError(ModResolveError):
    """Raised when index, version or snapshot documents are malformed.

    Covers unknown install types, download types and reference types,
    missing required fields, and invalid JSON.
    """


class ConstraintError(ModResolveError, ValueError):
    """Raised when a version constraint string cannot be parsed."""


class ConfigError(ModResolveError):
    """Raised when a resolver configuration file is invalid."""
