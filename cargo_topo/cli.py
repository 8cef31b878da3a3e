"""CLI entry point for cargo-topo.

Cargo runs external subcommands as `cargo-topo topo ...`, so the report
lives under a `topo` command of the group.
"""

from __future__ import annotations

from pathlib import Path

import click

from cargo_topo.config import TopoOptions
from cargo_topo.errors import TopoError
from cargo_topo.pipeline import run_topo


@click.group()
@click.version_option(package_name="cargo-topo")
def cli() -> None:
    """Cargo workspace build-order reporting."""


@cli.command()
@click.option(
    "-m",
    "--manifest-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the workspace Cargo.toml (defaults to cargo's own discovery).",
)
@click.option(
    "-r", "--reverse", is_flag=True, help="Show dependents before dependencies."
)
@click.option(
    "-i", "--include-dev", is_flag=True, help="Include dev-dependencies in analysis."
)
@click.option(
    "-a",
    "--all",
    "show_all",
    is_flag=True,
    help="Show external dependencies too, not only workspace members.",
)
@click.option(
    "-c", "--compact", is_flag=True, help="Print crate names only, one per line."
)
@click.option(
    "-p",
    "--package",
    default=None,
    metavar="NAME[@VERSION]",
    help="Use this package as the root of the dependency tree.",
)
@click.option(
    "--exclude",
    multiple=True,
    metavar="NAME",
    help="Exclude a workspace member from the output (repeatable).",
)
@click.option(
    "-v", "--verbose", is_flag=True, help="Print progress messages to stderr."
)
def topo(
    manifest_path: Path | None,
    reverse: bool,
    include_dev: bool,
    show_all: bool,
    compact: bool,
    package: str | None,
    exclude: tuple[str, ...],
    verbose: bool,
) -> None:
    """List workspace crates in topological dependency order."""
    options = TopoOptions(
        manifest_path=manifest_path,
        reverse=reverse,
        include_dev=include_dev,
        all=show_all,
        compact=compact,
        package=package,
        exclude=list(exclude),
        verbose=verbose,
    )

    try:
        lines = run_topo(options)
    except TopoError as exc:
        raise click.ClickException(str(exc)) from exc

    if lines:
        click.echo("\n".join(lines))
