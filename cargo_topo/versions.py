"""Version parsing for package ordering.

Cargo versions are full semver (prerelease and build metadata included),
so ordering compares them as semver.Version objects rather than strings:
"0.10.0" sorts after "0.9.3".
"""

from __future__ import annotations

import semver


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Incomplete versions are padded with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "1.2.3-alpha.1+build" → unchanged

    Raises:
        ValueError: If the string is not a valid version.
    """
    return semver.Version.parse(version_str, optional_minor_and_patch=True)
