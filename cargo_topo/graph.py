"""Dependency graph traversal and ordering.

Provides the two graph queries behind every report:

- resolve(): the closure of packages reachable from a set of roots,
  following only the links an EdgePolicy admits.
- topo_order(): a build order over that closure, where a package's
  dependencies come before it (or after it, in reverse).
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from .errors import CycleDetectedError, PackageNotFoundError
from .models import (
    DependencyLink,
    Direction,
    EdgePolicy,
    Package,
    PackageGraph,
    ResolvedSubgraph,
)
from .versions import parse_version


def find_package(
    graph: PackageGraph, spec: str, members: Iterable[str] = ()
) -> Package:
    """Look up a root package by name, or by `name@version`.

    Several packages may share a name when different versions of a crate
    are in the graph. A workspace member wins; otherwise the highest
    version is picked.

    Raises:
        PackageNotFoundError: If no package matches.
    """
    name, _, version = spec.partition("@")
    candidates = graph.packages_named(name)
    if version:
        try:
            wanted = parse_version(version)
        except ValueError:
            raise PackageNotFoundError(spec) from None
        candidates = [pkg for pkg in candidates if pkg.parsed_version == wanted]
    if not candidates:
        raise PackageNotFoundError(spec)

    member_ids = set(members)
    in_workspace = [pkg for pkg in candidates if pkg.id in member_ids]
    return (in_workspace or candidates)[-1]


def resolve(
    graph: PackageGraph,
    roots: Iterable[str] = (),
    direction: Direction = Direction.FORWARD,
    policy: EdgePolicy = EdgePolicy.NORMAL_ONLY,
) -> ResolvedSubgraph:
    """Compute the packages and links reachable from `roots`.

    Walks breadth-first from the roots, towards dependencies (FORWARD) or
    dependents (REVERSE). A link the policy rejects is never followed, so
    a package only reachable through dev-only links is left out unless the
    policy admits them.

    Args:
        graph: The full package graph.
        roots: Package ids to start from. Empty means every package.
        direction: Which way to follow links.
        policy: Which links to follow.

    Raises:
        PackageNotFoundError: If a root id is not in the graph.
    """
    root_ids = frozenset(roots) or frozenset(graph.packages)
    for root in sorted(root_ids):
        if root not in graph.packages:
            raise PackageNotFoundError(root)

    visited: set[str] = set(root_ids)
    retained: list[DependencyLink] = []
    queue = deque(sorted(root_ids))

    while queue:
        node = queue.popleft()
        if direction is Direction.FORWARD:
            edges = [(link, link.to_id) for link in graph.direct_links(node)]
        else:
            edges = [(link, link.from_id) for link in graph.reverse_links(node)]
        for link, neighbor in edges:
            if not policy.admits(link):
                continue
            retained.append(link)
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    return ResolvedSubgraph(
        graph=graph,
        roots=root_ids,
        package_ids=frozenset(visited),
        links=tuple(retained),
        direction=direction,
        policy=policy,
    )


def topo_order(
    subgraph: ResolvedSubgraph, direction: Direction = Direction.FORWARD
) -> list[Package]:
    """Order the subgraph's packages so that links are respected.

    Uses Kahn's algorithm in layers: every package whose predecessors have
    all been emitted is emitted in the same round, sorted by name, version
    and id for deterministic output.

    In FORWARD order a link's target comes before its source (build order).
    In REVERSE order the layering runs on the transposed links, so
    dependents come first.

    Dev-only links constrain the order while they can. If the layering
    stalls, only the dev-only links that close a cycle among the remaining
    packages are dropped; every other link keeps constraining. A cycle of
    normal links is fatal.

    Raises:
        CycleDetectedError: If normal (non-dev) links form a cycle.

    Example:
        If A depends on B and C, and B depends on C:
        FORWARD → [C, B, A], REVERSE → [A, B, C]
    """
    graph = subgraph.graph
    edges: list[tuple[str, str, bool]] = []
    for link in set(subgraph.links):
        if link.from_id == link.to_id:
            if not link.dev_only:
                raise CycleDetectedError([graph.package(link.from_id).name])
            continue
        if direction is Direction.FORWARD:
            edges.append((link.to_id, link.from_id, link.dev_only))
        else:
            edges.append((link.from_id, link.to_id, link.dev_only))

    remaining = set(subgraph.package_ids)
    order: list[Package] = []

    while remaining:
        active = [
            edge for edge in edges if edge[0] in remaining and edge[1] in remaining
        ]
        # Packages still waiting on an unemitted predecessor
        layer = remaining - {after for _, after, _ in active}
        if not layer:
            cyclic = {
                (before, after)
                for before, after, dev_only in active
                if dev_only and _reaches(after, before, active)
            }
            if not cyclic:
                stuck = sorted(graph.package(pid).name for pid in remaining)
                raise CycleDetectedError(stuck)
            edges = [
                edge for edge in edges if not (edge[2] and edge[:2] in cyclic)
            ]
            continue

        order.extend(
            sorted((graph.package(pid) for pid in layer), key=Package.sort_key)
        )
        remaining -= layer

    return order


def _reaches(start: str, goal: str, edges: list[tuple[str, str, bool]]) -> bool:
    """Whether `goal` can be reached from `start` along `edges`."""
    successors: dict[str, list[str]] = {}
    for before, after, _ in edges:
        successors.setdefault(before, []).append(after)

    seen = {start}
    queue = deque([start])
    while queue:
        node = queue.popleft()
        if node == goal:
            return True
        for nxt in successors.get(node, []):
            if nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return False
