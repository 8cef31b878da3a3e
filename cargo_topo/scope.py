"""Workspace scoping of an ordered package list.

Splits the ordered packages into first-party workspace members and
external dependencies, and works out the direct dependencies each
report line shows.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from .models import Package, ResolvedSubgraph, Workspace


class DependencyRef(BaseModel):
    """A direct dependency as shown next to its dependent."""

    model_config = ConfigDict(frozen=True)

    name: str
    in_workspace: bool


class ScopedEntry(BaseModel):
    """One package of the report, classified and annotated.

    Attributes:
        package: The package itself.
        in_workspace: Whether it is a (non-excluded) workspace member.
        deps: Direct non-dev dependencies to display. Always empty for
              external packages.
    """

    model_config = ConfigDict(frozen=True)

    package: Package
    in_workspace: bool
    deps: list[DependencyRef] = Field(default_factory=list)


class DevDependencies(BaseModel):
    """Dev-only dependencies of one workspace member."""

    model_config = ConfigDict(frozen=True)

    package: Package
    names: list[str]


def workspace_membership(
    workspace: Workspace, exclude: Iterable[str] = ()
) -> frozenset[str]:
    """Ids of the workspace members left after dropping excluded names.

    Excluded packages stay in the graph; they are simply treated as
    external from here on.
    """
    excluded = set(exclude)
    graph = workspace.graph
    return frozenset(
        pid for pid in workspace.members if graph.package(pid).name not in excluded
    )


def unknown_exclusions(workspace: Workspace, exclude: Iterable[str]) -> list[str]:
    """Excluded names that match no workspace member."""
    member_names = {workspace.graph.package(pid).name for pid in workspace.members}
    return sorted(set(exclude) - member_names)


def scoped_entries(
    ordering: list[Package],
    subgraph: ResolvedSubgraph,
    membership: frozenset[str],
    include_external: bool = False,
) -> list[ScopedEntry]:
    """Classify each ordered package and attach its displayed dependencies.

    Workspace-only mode (the default) drops external packages and shows
    only workspace dependencies. With `include_external`, every package is
    kept and workspace packages list all their direct dependencies, each
    marked workspace or external.
    """
    graph = subgraph.graph
    retained = set(subgraph.links)
    entries: list[ScopedEntry] = []

    for package in ordering:
        in_workspace = package.id in membership
        if not in_workspace and not include_external:
            continue

        deps: list[DependencyRef] = []
        if in_workspace:
            for link in graph.direct_links(package.id):
                # Dev-dependencies never show up in the main listing
                if link.dev_only or link not in retained:
                    continue
                dep_in_workspace = link.to_id in membership
                if dep_in_workspace or include_external:
                    deps.append(
                        DependencyRef(
                            name=graph.package(link.to_id).name,
                            in_workspace=dep_in_workspace,
                        )
                    )

        entries.append(
            ScopedEntry(package=package, in_workspace=in_workspace, deps=deps)
        )

    return entries


def compact_names(entries: list[ScopedEntry]) -> list[str]:
    return [entry.package.name for entry in entries]


def dev_dependency_summary(
    workspace: Workspace,
    subgraph: ResolvedSubgraph,
    membership: frozenset[str],
    ordering: list[Package],
) -> list[DevDependencies]:
    """Dev-only dependencies of every workspace member in the subgraph.

    Looks at the full graph, so dev-dependencies are listed even when the
    subgraph was resolved without them. Members are reported in
    `ordering` order; members with no dev-dependencies are skipped.
    """
    graph = workspace.graph
    summary: list[DevDependencies] = []

    for package in ordering:
        if package.id not in membership or package.id not in subgraph:
            continue
        names = [
            graph.package(link.to_id).name
            for link in graph.direct_links(package.id)
            if link.dev_only
        ]
        if names:
            summary.append(DevDependencies(package=package, names=names))

    return summary
