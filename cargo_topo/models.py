"""Data models for cargo-topo.

These Pydantic models represent the resolved package graph handed over by
`cargo metadata` and the values derived from it during one invocation.
All of them are frozen: the graph is built once and only read afterwards.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import semver
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

from .versions import parse_version


class Direction(str, Enum):
    """Which way edges are followed.

    For traversal, FORWARD walks from a package to its dependencies and
    REVERSE walks to its dependents. For ordering, FORWARD puts
    dependencies first and REVERSE puts dependents first.
    """

    FORWARD = "forward"
    REVERSE = "reverse"

    def opposite(self) -> Direction:
        """The other direction; applying it twice gives self back."""
        return Direction.REVERSE if self is Direction.FORWARD else Direction.FORWARD


class Package(BaseModel):
    """A single package in the resolved graph.

    Attributes:
        id: Cargo package id, unique within the graph.
        name: Crate name. Not unique: two versions of a crate may coexist.
        version: Semantic version string.
        source: Registry or git source, None for path packages.
        manifest_path: Path to the package's Cargo.toml, when known.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    version: str
    source: str | None = None
    manifest_path: Path | None = None

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        parse_version(value)
        return value

    @property
    def parsed_version(self) -> semver.Version:
        return parse_version(self.version)

    def sort_key(self) -> tuple[str, semver.Version, str]:
        """Total order used to break ties: name, then version, then id."""
        return (self.name, self.parsed_version, self.id)


class DependencyLink(BaseModel):
    """A directed edge: `from_id` depends on `to_id`.

    Attributes:
        from_id: Id of the dependent package.
        to_id: Id of the dependency.
        dev_only: True when the edge exists only as a dev-dependency.
    """

    model_config = ConfigDict(frozen=True)

    from_id: str
    to_id: str
    dev_only: bool = False


class EdgePolicy(str, Enum):
    """Closed set of rules deciding which links a query follows."""

    NORMAL_ONLY = "normal"
    NORMAL_AND_DEV = "normal+dev"

    @classmethod
    def for_dev(cls, include_dev: bool) -> EdgePolicy:
        """Policy matching an --include-dev flag."""
        return cls.NORMAL_AND_DEV if include_dev else cls.NORMAL_ONLY

    def admits(self, link: DependencyLink) -> bool:
        """Whether a query under this policy follows `link`."""
        return not link.dev_only or self is EdgePolicy.NORMAL_AND_DEV


class PackageGraph(BaseModel):
    """All packages and dependency links of a resolved workspace.

    Every link endpoint must be a known package id. Outgoing and incoming
    link lists are indexed once at construction and kept sorted by the
    other endpoint's sort key so every query is deterministic.
    """

    model_config = ConfigDict(frozen=True)

    packages: dict[str, Package] = Field(default_factory=dict)
    links: tuple[DependencyLink, ...] = ()

    _outgoing: dict[str, list[DependencyLink]] = PrivateAttr(default_factory=dict)
    _incoming: dict[str, list[DependencyLink]] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_links(self) -> PackageGraph:
        for link in self.links:
            for endpoint in (link.from_id, link.to_id):
                if endpoint not in self.packages:
                    raise ValueError(
                        f"link endpoint {endpoint!r} is not a known package"
                    )
        return self

    def model_post_init(self, __context: Any) -> None:
        outgoing: dict[str, list[DependencyLink]] = {pid: [] for pid in self.packages}
        incoming: dict[str, list[DependencyLink]] = {pid: [] for pid in self.packages}
        for link in self.links:
            outgoing[link.from_id].append(link)
            incoming[link.to_id].append(link)
        for links in outgoing.values():
            links.sort(key=lambda link: self.packages[link.to_id].sort_key())
        for links in incoming.values():
            links.sort(key=lambda link: self.packages[link.from_id].sort_key())
        self._outgoing = outgoing
        self._incoming = incoming

    def package(self, package_id: str) -> Package:
        return self.packages[package_id]

    def packages_named(self, name: str) -> list[Package]:
        """All packages called `name`, lowest version first."""
        return sorted(
            (pkg for pkg in self.packages.values() if pkg.name == name),
            key=Package.sort_key,
        )

    def direct_links(self, package_id: str) -> list[DependencyLink]:
        """Links from `package_id` to the packages it depends on."""
        return self._outgoing.get(package_id, [])

    def reverse_links(self, package_id: str) -> list[DependencyLink]:
        """Links from packages that depend on `package_id`."""
        return self._incoming.get(package_id, [])


class Workspace(BaseModel):
    """The Manifest Resolver's output: a graph plus its first-party members."""

    model_config = ConfigDict(frozen=True)

    graph: PackageGraph
    members: frozenset[str] = frozenset()
    root: Path | None = None


class ResolvedSubgraph(BaseModel):
    """Packages and links reachable from a root set under an edge policy."""

    model_config = ConfigDict(frozen=True)

    graph: PackageGraph
    roots: frozenset[str]
    package_ids: frozenset[str]
    links: tuple[DependencyLink, ...]
    direction: Direction = Direction.FORWARD
    policy: EdgePolicy = EdgePolicy.NORMAL_ONLY

    def packages(self) -> list[Package]:
        return sorted(
            (self.graph.package(pid) for pid in self.package_ids),
            key=Package.sort_key,
        )

    def __contains__(self, package_id: object) -> bool:
        return package_id in self.package_ids

    def __len__(self) -> int:
        return len(self.package_ids)
