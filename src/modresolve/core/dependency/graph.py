"""Installed-package dependency graph and its builder.

The graph has one node per installed package. Edges come from the DEPENDS
references of each node's installed version: a child edge points at a
package this one depends on, a parent edge at a package that depends on this
one.

Nodes live in a single mapping owned by ``DependencyGraph``; edges are stored
as package identifiers resolved through that mapping, never as direct node
references. Parents are never set independently: ``GraphBuilder`` derives
them in one step as the exact inverse of the children relation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from modresolve.core.index.protocols import VersionIndex
from modresolve.core.installed import InstalledPackage
from modresolve.core.versions.models import PackageId, PackageVersion, Reference, VersionRef
from modresolve.exceptions import GraphContractError, MissingNodeError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DependencyNode: A vertex in the graph
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DependencyNode:
    """A node representing one installed package.

    Attributes:
        uid: Package identifier.
        version: The installed version; invalid if it could not be resolved.
        is_hard: True if the user asked for this package, False if it was
            installed only as a dependency.
        children: Packages this one depends on, in declaration order.
        parents: Packages that depend on this one.
    """

    uid: PackageId
    version: VersionRef
    is_hard: bool
    children: tuple[PackageId, ...] = ()
    parents: tuple[PackageId, ...] = ()


# ---------------------------------------------------------------------------
# DependencyGraph: Immutable snapshot graph
# ---------------------------------------------------------------------------


class DependencyGraph:
    """An immutable dependency graph built from one installed snapshot.

    ``ok`` is False when the builder could not fully materialize the graph
    (a missing version, a missing dependency target, or an excluded soft
    edge). A graph that is not ok is still usable for display, but callers
    must not base destructive decisions on it.
    """

    def __init__(self, nodes: dict[PackageId, DependencyNode], ok: bool) -> None:
        self._nodes = dict(nodes)
        self._ok = ok

    @property
    def ok(self) -> bool:
        return self._ok

    @property
    def nodes(self) -> list[DependencyNode]:
        """All nodes in snapshot order."""
        return list(self._nodes.values())

    @property
    def uids(self) -> list[PackageId]:
        return list(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, uid: object) -> bool:
        return uid in self._nodes

    def __iter__(self) -> Iterator[DependencyNode]:
        return iter(self.nodes)

    def find_node(self, uid: PackageId) -> DependencyNode | None:
        """Return the node for *uid*, or None."""
        return self._nodes.get(uid)

    def get_node(self, uid: PackageId) -> DependencyNode:
        """Return the node for *uid*.

        Raises:
            MissingNodeError: If *uid* has no node.
        """
        node = self._nodes.get(uid)
        if node is None:
            raise MissingNodeError(uid)
        return node

    def children_of(self, uid: PackageId) -> list[DependencyNode]:
        return [self._nodes[c] for c in self.get_node(uid).children]

    def parents_of(self, uid: PackageId) -> list[DependencyNode]:
        return [self._nodes[p] for p in self.get_node(uid).parents]


# ---------------------------------------------------------------------------
# GraphBuilder
# ---------------------------------------------------------------------------


class GraphBuilder:
    """Builds a ``DependencyGraph`` from an installed snapshot.

    Construction never fails on data problems. It degrades to a best-effort
    graph and records the problem by setting ``ok`` to False.

    Args:
        index: Source of the installed versions' DEPENDS references.
        include_soft_edges: When False (the default), soft dependencies are
            left out of the graph and mark it not ok. When True, a soft
            dependency links to its target if installed, or else to an
            installed package whose version provides the target.
    """

    def __init__(self, index: VersionIndex, *, include_soft_edges: bool = False) -> None:
        self._index = index
        self._include_soft_edges = include_soft_edges

    def build(self, snapshot: Iterable[InstalledPackage]) -> DependencyGraph:
        """Build the graph for *snapshot*.

        Raises:
            GraphContractError: If the snapshot lists a package twice.
        """
        ok = True

        # Stage one: nodes
        entries: dict[PackageId, InstalledPackage] = {}
        for entry in snapshot:
            if entry.uid in entries:
                raise GraphContractError(f"Package {entry.uid!r} appears twice in snapshot")
            entries[entry.uid] = entry
            if not entry.version.is_valid:
                logger.warning("Installed package %s has no resolvable version", entry.uid)
                ok = False

        records: dict[PackageId, PackageVersion] = {}
        for uid, entry in entries.items():
            if not entry.version.is_valid:
                continue
            record = self._index.version_record(entry.version)
            if record is None:
                logger.warning("No version record for installed %s", entry.version)
                ok = False
                continue
            records[uid] = record

        # Stage two: forward edges (children)
        children: dict[PackageId, list[PackageId]] = {uid: [] for uid in entries}
        for uid, record in records.items():
            for ref in record.dependencies:
                target = self._edge_target(uid, ref, entries, records)
                if target is None:
                    logger.debug("Dependency %s -> %s not materialized", uid, ref.uid)
                    ok = False
                    continue
                if target not in children[uid]:
                    children[uid].append(target)

        # Stage three: backward edges (parents), the exact inverse of children
        parents: dict[PackageId, list[PackageId]] = {uid: [] for uid in entries}
        for uid, deps in children.items():
            for dep in deps:
                parents[dep].append(uid)

        nodes = {
            uid: DependencyNode(
                uid=uid,
                version=entry.version,
                is_hard=not entry.as_dependency,
                children=tuple(children[uid]),
                parents=tuple(parents[uid]),
            )
            for uid, entry in entries.items()
        }
        return DependencyGraph(nodes, ok)

    def _edge_target(
        self,
        source: PackageId,
        ref: Reference,
        entries: dict[PackageId, InstalledPackage],
        records: dict[PackageId, PackageVersion],
    ) -> PackageId | None:
        """Return the node a DEPENDS reference from *source* links to, or None.

        A soft reference may be met by another installed package that
        provides it. *source* never provides its own dependency.
        """
        if not ref.soft:
            return ref.uid if ref.uid in entries else None
        if not self._include_soft_edges:
            return None
        if ref.uid in entries:
            return ref.uid
        for uid, record in records.items():
            if uid != source and record.provides_package(ref.uid, ref.constraint):
                return uid
        return None
