"""Shell utilities.

Provides a wrapper around subprocess calls to cargo, plus the progress and
warning helpers. Progress goes to stderr so stdout carries only the report.
"""

from __future__ import annotations

import os
import subprocess
import sys


def cargo(*args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
    """Run a cargo command and capture its output.

    Uses the $CARGO executable when set (cargo exports it to the
    subcommands it runs), else `cargo` from PATH.

    Args:
        *args: Arguments to pass to cargo (e.g., "metadata", "--offline").
        check: If True (default), raise CalledProcessError on non-zero exit.

    Returns:
        CompletedProcess with text stdout and stderr.
    """
    executable = os.environ.get("CARGO", "cargo")
    return subprocess.run(
        [executable, *args], capture_output=True, text=True, check=check
    )


def step(msg: str, verbose: bool) -> None:
    """Print a progress message when running with --verbose."""
    if verbose:
        print(f"── {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    """Print a warning that does not stop the run."""
    print(f"warning: {msg}", file=sys.stderr)
