"""Graph queries: ancestor closure, orphan detection and health checks.

All traversals keep a visited set keyed by package identifier, so they
terminate on graphs with dependency cycles.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator

from modresolve.core.dependency.graph import DependencyGraph, GraphBuilder
from modresolve.core.installed import InstalledPackage
from modresolve.core.versions.models import PackageId


def ancestors(graph: DependencyGraph, uid: PackageId) -> set[PackageId]:
    """Return every package that transitively depends on *uid*.

    The result does not include *uid* itself unless it sits on a cycle.

    Raises:
        MissingNodeError: If *uid* has no node.
    """
    seen: set[PackageId] = set()
    queue: deque[PackageId] = deque(graph.get_node(uid).parents)
    while queue:
        current = queue.popleft()
        if current in seen:
            continue
        seen.add(current)
        queue.extend(graph.get_node(current).parents)
    return seen


def ancestor_closure(
    graph: DependencyGraph, seeds: Iterable[PackageId]
) -> set[PackageId]:
    """Return the seeds plus every package that transitively depends on them.

    Answers "what is affected if these packages are removed".

    Raises:
        MissingNodeError: If a seed has no node.
    """
    out: set[PackageId] = set()
    for uid in seeds:
        graph.get_node(uid)
        out.add(uid)
        out |= ancestors(graph, uid)
    return out


def has_hard_ancestor(graph: DependencyGraph, uid: PackageId) -> bool:
    """True if *uid* or any package depending on it was user-requested.

    Raises:
        MissingNodeError: If *uid* has no node.
    """
    seen: set[PackageId] = set()
    queue: deque[PackageId] = deque([uid])
    while queue:
        current = queue.popleft()
        if current in seen:
            continue
        seen.add(current)
        node = graph.get_node(current)
        if node.is_hard:
            return True
        queue.extend(node.parents)
    return False


def orphan_set(
    graph: DependencyGraph, snapshot: Iterable[InstalledPackage]
) -> set[PackageId]:
    """Return installed packages that no user-requested package keeps alive.

    Raises:
        MissingNodeError: If a snapshot entry has no node. The graph must
            have been built from the same snapshot.
    """
    return {
        entry.uid
        for entry in snapshot
        if not has_hard_ancestor(graph, entry.uid)
    }


def has_resolve_error(
    builder: GraphBuilder, snapshot: Iterable[InstalledPackage]
) -> bool:
    """True if the graph for *snapshot* could not be built consistently."""
    return not builder.build(snapshot).ok


def find_cycles(graph: DependencyGraph) -> list[list[PackageId]]:
    """Detect dependency cycles using DFS colouring over child edges.

    Returns:
        A list of cycles, where each cycle is a list of package identifiers
        forming the cycle path (e.g., ["A", "B", "A"]). Empty if no cycles.
    """
    WHITE, GRAY, BLACK = 0, 1, 2
    color: dict[PackageId, int] = {uid: WHITE for uid in graph.uids}
    parent: dict[PackageId, PackageId | None] = {uid: None for uid in graph.uids}
    cycles: list[list[PackageId]] = []

    for root in graph.uids:
        if color[root] != WHITE:
            continue
        color[root] = GRAY
        stack: list[tuple[PackageId, Iterator[PackageId]]] = [
            (root, iter(graph.get_node(root).children))
        ]
        while stack:
            u, children = stack[-1]
            v = next(children, None)
            if v is None:
                color[u] = BLACK
                stack.pop()
                continue
            if color[v] == GRAY:
                # Back edge found: extract cycle
                cycle = [v, u]
                cur = parent[u] if u != v else None
                while cur is not None and cur != v:
                    cycle.append(cur)
                    cur = parent[cur]
                if u != v:
                    cycle.append(v)
                cycle.reverse()
                cycles.append(cycle)
            elif color[v] == WHITE:
                parent[v] = u
                color[v] = GRAY
                stack.append((v, iter(graph.get_node(v).children)))

    return cycles
