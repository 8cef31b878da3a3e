"""Tests for cargo_topo.models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cargo_topo.models import (
    DependencyLink,
    Direction,
    EdgePolicy,
    Package,
    PackageGraph,
)


def _pkg(name: str, version: str = "1.0.0") -> Package:
    return Package(id=f"{name}@{version}", name=name, version=version)


class TestPackage:
    def test_create_with_required_fields(self) -> None:
        pkg = _pkg("serde", "1.0.200")
        assert pkg.name == "serde"
        assert pkg.source is None
        assert pkg.manifest_path is None

    def test_rejects_invalid_version(self) -> None:
        with pytest.raises(ValidationError):
            Package(id="x", name="x", version="one")

    def test_is_frozen(self) -> None:
        pkg = _pkg("serde")
        with pytest.raises(ValidationError):
            pkg.name = "other"

    def test_sort_key_uses_semver(self) -> None:
        assert _pkg("x", "0.9.0").sort_key() < _pkg("x", "0.10.0").sort_key()


class TestDirection:
    def test_opposite(self) -> None:
        assert Direction.FORWARD.opposite() is Direction.REVERSE
        assert Direction.REVERSE.opposite() is Direction.FORWARD

    def test_opposite_is_involution(self) -> None:
        for direction in Direction:
            assert direction.opposite().opposite() is direction


class TestEdgePolicy:
    def test_normal_only_rejects_dev(self) -> None:
        dev = DependencyLink(from_id="a", to_id="b", dev_only=True)
        normal = DependencyLink(from_id="a", to_id="b")
        assert not EdgePolicy.NORMAL_ONLY.admits(dev)
        assert EdgePolicy.NORMAL_ONLY.admits(normal)

    def test_normal_and_dev_admits_everything(self) -> None:
        dev = DependencyLink(from_id="a", to_id="b", dev_only=True)
        assert EdgePolicy.NORMAL_AND_DEV.admits(dev)

    def test_for_dev(self) -> None:
        assert EdgePolicy.for_dev(True) is EdgePolicy.NORMAL_AND_DEV
        assert EdgePolicy.for_dev(False) is EdgePolicy.NORMAL_ONLY


class TestPackageGraph:
    def test_rejects_dangling_link(self) -> None:
        a = _pkg("a")
        with pytest.raises(ValidationError, match="not a known package"):
            PackageGraph(
                packages={a.id: a},
                links=(DependencyLink(from_id=a.id, to_id="ghost"),),
            )

    def test_links_indexed_and_sorted(self) -> None:
        a, b, c = _pkg("a"), _pkg("b"), _pkg("c")
        graph = PackageGraph(
            packages={p.id: p for p in (a, b, c)},
            links=(
                DependencyLink(from_id=a.id, to_id=c.id),
                DependencyLink(from_id=a.id, to_id=b.id),
                DependencyLink(from_id=b.id, to_id=c.id),
            ),
        )
        assert [link.to_id for link in graph.direct_links(a.id)] == [b.id, c.id]
        assert [link.from_id for link in graph.reverse_links(c.id)] == [a.id, b.id]
        assert graph.direct_links(c.id) == []

    def test_packages_named_lowest_version_first(self) -> None:
        old, new, other = _pkg("x", "1.2.0"), _pkg("x", "1.10.0"), _pkg("y")
        graph = PackageGraph(packages={p.id: p for p in (new, other, old)})
        assert graph.packages_named("x") == [old, new]
        assert graph.packages_named("z") == []
