"""Topo report pipeline: resolve → traverse → order → scope → render.

This module wires one invocation together:
1. Resolve the workspace graph with `cargo metadata`, then merge the
   defaults from the workspace root Cargo.toml
2. Compute the workspace membership, minus exclusions
3. Resolve the subgraph reachable from the root package (or workspace)
4. Order it topologically in the requested direction
5. Scope it to workspace members (or keep everything with --all)
6. Render the report lines

Nothing is printed here; run_topo() returns the lines and raises on error,
so a failed run produces no partial output.
"""

from __future__ import annotations

from .config import ManifestDefaults, TopoOptions, apply_defaults, load_defaults
from .graph import find_package, resolve, topo_order
from .metadata import load_workspace
from .models import Direction, Workspace
from .render import header, render_all, render_dev_summary, render_workspace
from .scope import (
    compact_names,
    dev_dependency_summary,
    scoped_entries,
    unknown_exclusions,
    workspace_membership,
)
from .shell import step, warn


def build_report(workspace: Workspace, options: TopoOptions) -> list[str]:
    """Produce the report lines for an already-resolved workspace.

    Raises:
        PackageNotFoundError: If options.package names no package.
        CycleDetectedError: If the selected subgraph has a normal-link cycle.
    """
    graph = workspace.graph

    for name in unknown_exclusions(workspace, options.exclude):
        warn(f"excluded package '{name}' is not a workspace member")
    membership = workspace_membership(workspace, options.exclude)

    if options.package:
        root = find_package(graph, options.package, workspace.members)
        roots = frozenset({root.id})
        step(
            f"Resolving dependencies of {root.name} {root.version}", options.verbose
        )
    else:
        roots = workspace.members
        step(
            f"Resolving dependencies of {len(roots)} workspace members",
            options.verbose,
        )

    subgraph = resolve(graph, roots, Direction.FORWARD, options.policy)
    ordering = topo_order(subgraph, options.direction)
    step(
        f"Ordered {len(ordering)} packages ({options.direction.value})",
        options.verbose,
    )

    entries = scoped_entries(ordering, subgraph, membership, options.all)

    if options.compact:
        return compact_names(entries)

    lines = header(options.package, options.reverse, options.exclude)
    if options.all:
        lines.extend(render_all(entries))
    else:
        lines.extend(render_workspace(entries))

    if options.include_dev:
        summary = dev_dependency_summary(workspace, subgraph, membership, ordering)
        lines.extend(render_dev_summary(summary))

    return lines


def run_topo(options: TopoOptions) -> list[str]:
    """Resolve the workspace named by options and build its report.

    Defaults come from `[workspace.metadata.topo]` of the workspace root
    cargo reports, so they apply even when options.manifest_path names a
    member crate.

    Raises:
        ManifestResolutionError: If `cargo metadata` fails.
        ConfigError: If the workspace defaults are malformed.
    """
    workspace = load_workspace(options.manifest_path, options.verbose)
    if workspace.root is not None:
        defaults = load_defaults(workspace.root / "Cargo.toml")
    else:
        defaults = ManifestDefaults()
    return build_report(workspace, apply_defaults(options, defaults))
