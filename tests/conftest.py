"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from cargo_topo.models import DependencyLink, Package, PackageGraph, Workspace

WorkspaceFactory = Callable[..., Workspace]


def _pid(name: str, version: str) -> str:
    return f"{name} {version} (path+file:///ws/{name})"


@pytest.fixture
def make_workspace() -> WorkspaceFactory:
    """Build a Workspace from plain name → dependency-name mappings.

    Usage:
        make_workspace(
            {"a": ["b"], "b": [], "serde": []},
            dev={"a": ["d"]},
            members=["a", "b"],
        )

    Every name used as a dependency must also be a key. Members default to
    all keys. Versions default to 1.0.0.
    """

    def factory(
        deps: dict[str, list[str]],
        dev: dict[str, list[str]] | None = None,
        members: list[str] | None = None,
        versions: dict[str, str] | None = None,
    ) -> Workspace:
        versions = versions or {}
        packages = {
            name: Package(
                id=_pid(name, versions.get(name, "1.0.0")),
                name=name,
                version=versions.get(name, "1.0.0"),
            )
            for name in deps
        }
        links = [
            DependencyLink(from_id=packages[src].id, to_id=packages[dst].id)
            for src, targets in deps.items()
            for dst in targets
        ]
        for src, targets in (dev or {}).items():
            links.extend(
                DependencyLink(
                    from_id=packages[src].id, to_id=packages[dst].id, dev_only=True
                )
                for dst in targets
            )
        graph = PackageGraph(
            packages={pkg.id: pkg for pkg in packages.values()}, links=tuple(links)
        )
        member_names = deps.keys() if members is None else members
        return Workspace(
            graph=graph, members=frozenset(packages[n].id for n in member_names)
        )

    return factory


@pytest.fixture
def abc_workspace(make_workspace: WorkspaceFactory) -> Workspace:
    """A depends on B and C, B depends on C."""
    return make_workspace({"a": ["b", "c"], "b": ["c"], "c": []})


@pytest.fixture
def cargo_metadata_doc() -> dict:
    """A trimmed `cargo metadata --format-version 1` document.

    Workspace members app and core; app depends on core and serde, and on
    tempfile as a dev-dependency. core depends on serde both normally and
    as a dev-dependency.
    """
    app = "path+file:///ws/app#0.2.0"
    core = "path+file:///ws/core#0.1.0"
    serde = "registry+https://github.com/rust-lang/crates.io-index#serde@1.0.200"
    tempfile = "registry+https://github.com/rust-lang/crates.io-index#tempfile@3.10.1"
    registry = "registry+https://github.com/rust-lang/crates.io-index"
    return {
        "packages": [
            {
                "name": "app",
                "version": "0.2.0",
                "id": app,
                "source": None,
                "manifest_path": "/ws/app/Cargo.toml",
            },
            {
                "name": "core",
                "version": "0.1.0",
                "id": core,
                "source": None,
                "manifest_path": "/ws/core/Cargo.toml",
            },
            {"name": "serde", "version": "1.0.200", "id": serde, "source": registry},
            {
                "name": "tempfile",
                "version": "3.10.1",
                "id": tempfile,
                "source": registry,
            },
        ],
        "workspace_members": [app, core],
        "resolve": {
            "root": None,
            "nodes": [
                {
                    "id": app,
                    "deps": [
                        {
                            "name": "core",
                            "pkg": core,
                            "dep_kinds": [{"kind": None, "target": None}],
                        },
                        {
                            "name": "serde",
                            "pkg": serde,
                            "dep_kinds": [{"kind": None, "target": None}],
                        },
                        {
                            "name": "tempfile",
                            "pkg": tempfile,
                            "dep_kinds": [{"kind": "dev", "target": None}],
                        },
                    ],
                },
                {
                    "id": core,
                    "deps": [
                        {
                            "name": "serde",
                            "pkg": serde,
                            "dep_kinds": [
                                {"kind": None, "target": None},
                                {"kind": "dev", "target": None},
                            ],
                        }
                    ],
                },
                {"id": serde, "deps": []},
                {"id": tempfile, "deps": []},
            ],
        },
        "workspace_root": "/ws",
        "version": 1,
    }
