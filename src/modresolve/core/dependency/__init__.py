"""Dependency graph construction and version resolution.

This package builds the in-memory dependency graph of an installation and
resolves versions for requested packages. All public names are re-exported
here, so imports of the form ``from modresolve.core.dependency import X``
work for every submodule.

Dependency graph
----------------
One node per installed package. A node is *hard* if the user asked for the
package, and *soft-held* if it was installed only as a dependency. Child
edges follow the DEPENDS references of each node's installed version; parent
edges are their exact inverse.

- An **orphan** is an installed package with no hard ancestor.
- The **ancestor closure** of a package is the set of packages that
  transitively depend on it.
"""

from modresolve.core.dependency.graph import (
    DependencyGraph,
    DependencyNode,
    GraphBuilder,
)
from modresolve.core.dependency.queries import (
    ancestor_closure,
    ancestors,
    find_cycles,
    has_hard_ancestor,
    has_resolve_error,
    orphan_set,
)
from modresolve.core.dependency.resolver import DependencyResolver
from modresolve.core.dependency.session import (
    EventLevel,
    EventListener,
    ResolutionEvent,
    ResolutionSession,
    drive,
)

__all__ = [
    "DependencyGraph",
    "DependencyNode",
    "DependencyResolver",
    "EventLevel",
    "EventListener",
    "GraphBuilder",
    "ResolutionEvent",
    "ResolutionSession",
    "ancestor_closure",
    "ancestors",
    "drive",
    "find_cycles",
    "has_hard_ancestor",
    "has_resolve_error",
    "orphan_set",
]
