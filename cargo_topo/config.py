"""Options for one cargo-topo invocation.

TopoOptions carries everything a run depends on, the manifest location
included, so the pipeline never consults the current directory itself.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .models import Direction, EdgePolicy
from .toml import get_topo_table, load_manifest


class TopoOptions(BaseModel):
    """Settings for a topo report.

    Attributes:
        manifest_path: Cargo.toml to resolve. None lets cargo search from
            the working directory.
        reverse: List dependents before their dependencies.
        include_dev: Follow dev-only links and print the dev summary.
        all: Include external (non-workspace) packages.
        compact: Print bare names, one per line.
        package: Root package name (optionally `name@version`).
        exclude: Workspace member names to treat as external.
        verbose: Print progress messages to stderr.
    """

    model_config = ConfigDict(frozen=True)

    manifest_path: Path | None = None
    reverse: bool = False
    include_dev: bool = False
    all: bool = False
    compact: bool = False
    package: str | None = None
    exclude: list[str] = Field(default_factory=list)
    verbose: bool = False

    @property
    def direction(self) -> Direction:
        return Direction.REVERSE if self.reverse else Direction.FORWARD

    @property
    def policy(self) -> EdgePolicy:
        return EdgePolicy.for_dev(self.include_dev)


class ManifestDefaults(BaseModel):
    """Defaults a workspace stores in [workspace.metadata.topo]."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    exclude: list[str] = Field(default_factory=list)
    include_dev: bool = Field(default=False, alias="include-dev")


def load_defaults(path: Path) -> ManifestDefaults:
    """Read defaults from the workspace root Cargo.toml at `path`.

    Returns empty defaults if the file does not exist.

    Raises:
        ConfigError: If the table has unknown keys or wrong types.
    """
    if not path.is_file():
        return ManifestDefaults()

    table = get_topo_table(load_manifest(path))
    try:
        return ManifestDefaults.model_validate(table)
    except ValidationError as exc:
        raise ConfigError(f"Invalid [metadata.topo] in {path}: {exc}") from exc


def apply_defaults(options: TopoOptions, defaults: ManifestDefaults) -> TopoOptions:
    """Merge manifest defaults under command-line options.

    Exclusions add up (manifest first, duplicates dropped); include-dev is
    on if either side turns it on.
    """
    exclude = list(dict.fromkeys([*defaults.exclude, *options.exclude]))
    return options.model_copy(
        update={
            "exclude": exclude,
            "include_dev": options.include_dev or defaults.include_dev,
        }
    )
