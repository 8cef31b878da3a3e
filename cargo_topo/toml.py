"""Cargo.toml reading utilities.

Uses tomlkit to read the `[workspace.metadata.topo]` table (or
`[package.metadata.topo]` in a single-crate project), where a workspace can
store default options for cargo-topo:

    [workspace.metadata.topo]
    exclude = ["xtask", "benches"]
    include-dev = false
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .errors import ConfigError


def load_manifest(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a Cargo.toml file.

    Raises:
        ConfigError: If the file is not valid TOML.
    """
    try:
        return tomlkit.parse(path.read_text())
    except TOMLKitError as exc:
        raise ConfigError(f"Cannot parse {path}: {exc}") from exc


def get_topo_table(doc: tomlkit.TOMLDocument) -> dict[str, Any]:
    """Extract the topo settings table, preferring the workspace one.

    Returns an empty dict when neither table is present.
    """
    for section in ("workspace", "package"):
        table = doc.get(section, {}).get("metadata", {}).get("topo")
        if table is not None:
            if not isinstance(table, dict):
                raise ConfigError(f"[{section}.metadata.topo] must be a table")
            return table.unwrap()
    return {}
