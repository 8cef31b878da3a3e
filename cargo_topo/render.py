"""Text output for the topo report.

Each function returns a list of lines; the CLI decides where they go.
"""

from __future__ import annotations

from .scope import DevDependencies, ScopedEntry

WORKSPACE_MARKER = "📦"
EXTERNAL_MARKER = "📄"
DEV_MARKER = "🧪"


def _marker(in_workspace: bool) -> str:
    return WORKSPACE_MARKER if in_workspace else EXTERNAL_MARKER


def header(
    root: str | None = None, reverse: bool = False, exclude: list[str] | None = None
) -> list[str]:
    """Title line, optional exclusion line, then a blank separator."""
    order = "reverse topological order" if reverse else "topological order"
    if root:
        lines = [f"Dependencies from '{root}' in {order}:"]
    else:
        lines = [f"Workspace crates in {order}:"]
    if exclude:
        lines.append(f"Excluding: {', '.join(exclude)}")
    lines.append("")
    return lines


def render_workspace(entries: list[ScopedEntry]) -> list[str]:
    """One block per workspace package with its workspace dependencies."""
    lines: list[str] = []
    for entry in entries:
        pkg = entry.package
        lines.append(f"{WORKSPACE_MARKER} {pkg.name} ({pkg.version})")
        if entry.deps:
            names = ", ".join(dep.name for dep in entry.deps)
            lines.append(f"   └─ depends on: {names}")
        lines.append("")
    return lines


def render_all(entries: list[ScopedEntry]) -> list[str]:
    """One block per package, marking workspace vs external origin."""
    lines: list[str] = []
    for entry in entries:
        pkg = entry.package
        lines.append(f"{_marker(entry.in_workspace)} {pkg.name} ({pkg.version})")
        if entry.deps:
            names = ", ".join(
                f"{_marker(dep.in_workspace)} {dep.name}" for dep in entry.deps
            )
            lines.append(f"   └─ depends on: {names}")
        lines.append("")
    return lines


def render_dev_summary(summary: list[DevDependencies]) -> list[str]:
    lines = ["", "Dev-dependencies analysis:"]
    for item in summary:
        lines.append(
            f"{DEV_MARKER} {item.package.name} dev-dependencies: "
            f"{', '.join(item.names)}"
        )
    return lines
