"""Exceptions raised by cargo-topo.

Everything derives from TopoError so the CLI can turn any failure into a
single error message and a non-zero exit.
"""

from __future__ import annotations


class TopoError(Exception):
    """Base class for all cargo-topo failures."""


class ManifestResolutionError(TopoError):
    """`cargo metadata` failed or produced a graph we cannot use."""


class ConfigError(TopoError):
    """The [workspace.metadata.topo] table is malformed."""


class PackageNotFoundError(TopoError):
    """A requested root package does not exist in the graph."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Package '{name}' not found in workspace")
        self.name = name


class CycleDetectedError(TopoError):
    """The non-dev dependency graph contains a cycle."""

    def __init__(self, remaining: list[str]) -> None:
        super().__init__(
            f"Dependency cycle detected involving: {', '.join(remaining)}"
        )
        self.remaining = remaining
