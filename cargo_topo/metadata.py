"""Package graph construction from `cargo metadata`.

Runs `cargo metadata --format-version 1` and turns its JSON into a
Workspace: every resolved package, every dependency link tagged dev-only or
not, and the set of workspace members. Manifest parsing, version selection
and feature unification are all left to cargo.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import ManifestResolutionError
from .models import DependencyLink, Package, PackageGraph, Workspace
from .shell import cargo, step


def cargo_metadata(
    manifest_path: Path | None = None, verbose: bool = False
) -> dict[str, Any]:
    """Run `cargo metadata` and return the parsed JSON document.

    Raises:
        ManifestResolutionError: If cargo is missing, exits non-zero, or
            prints something that is not JSON.
    """
    args = ["metadata", "--format-version", "1"]
    if manifest_path is not None:
        args.extend(["--manifest-path", str(manifest_path)])

    step(f"Running cargo {' '.join(args)}", verbose)
    try:
        result = cargo(*args)
    except FileNotFoundError as exc:
        raise ManifestResolutionError(f"cargo executable not found: {exc}") from exc
    except subprocess.CalledProcessError as exc:
        raise ManifestResolutionError(
            (exc.stderr or "").strip() or f"cargo metadata exited with {exc.returncode}"
        ) from exc

    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        raise ManifestResolutionError(f"Invalid cargo metadata output: {exc}") from exc


def _is_dev_only(dep: dict[str, Any]) -> bool:
    """True when every kind cargo reports for a dependency edge is "dev".

    Cargo before 1.41 does not report dep_kinds; such edges count as normal.
    """
    kinds = dep.get("dep_kinds") or []
    return bool(kinds) and all(kind.get("kind") == "dev" for kind in kinds)


def build_workspace(metadata: dict[str, Any], verbose: bool = False) -> Workspace:
    """Convert a `cargo metadata` document into a Workspace.

    Raises:
        ManifestResolutionError: If the document lacks the resolve graph or
            describes a graph with dangling links or invalid versions.
    """
    resolve = metadata.get("resolve")
    if resolve is None:
        raise ManifestResolutionError(
            "cargo metadata output has no dependency resolution"
        )

    try:
        packages = {
            raw["id"]: Package(
                id=raw["id"],
                name=raw["name"],
                version=raw["version"],
                source=raw.get("source"),
                manifest_path=raw.get("manifest_path"),
            )
            for raw in metadata.get("packages", [])
        }

        links: list[DependencyLink] = []
        for node in resolve.get("nodes", []):
            # One link per (from, to) pair, even when a crate is renamed twice
            dev_only: dict[str, bool] = {}
            for dep in node.get("deps", []):
                pkg = dep["pkg"]
                dev_only[pkg] = dev_only.get(pkg, True) and _is_dev_only(dep)
            links.extend(
                DependencyLink(from_id=node["id"], to_id=pkg, dev_only=flag)
                for pkg, flag in dev_only.items()
            )

        graph = PackageGraph(packages=packages, links=tuple(links))
    except (KeyError, ValidationError) as exc:
        raise ManifestResolutionError(f"Unusable cargo metadata: {exc}") from exc

    members = frozenset(metadata.get("workspace_members", []))
    unknown = sorted(members - set(packages))
    if unknown:
        raise ManifestResolutionError(
            f"Workspace members missing from package list: {', '.join(unknown)}"
        )

    root = metadata.get("workspace_root")
    step(
        f"Loaded {len(packages)} packages, {len(members)} workspace members", verbose
    )
    return Workspace(
        graph=graph, members=members, root=Path(root) if root else None
    )


def load_workspace(
    manifest_path: Path | None = None, verbose: bool = False
) -> Workspace:
    """Resolve the workspace at `manifest_path` (default: cargo's discovery)."""
    return build_workspace(cargo_metadata(manifest_path, verbose), verbose)
