"""Version string predicates for repository layouts.

A version directory is named after the version it holds. Snapshot directories
are named ``<base>-SNAPSHOT`` while the files inside them may carry
timestamped versions (``<base>-20230101.120000-1``).
"""

import re

SNAPSHOT_MARKER = "SNAPSHOT"

SNAPSHOT_PATTERN = re.compile(r"^(.+)-(?i:snapshot).*$")
# Lazy prefix: the base ends at the first marker
SNAPSHOT_BASE_PATTERN = re.compile(r"^(.+?)-(?i:snapshot)")
TIMESTAMPED_SNAPSHOT_PATTERN = re.compile(r"^(.*)-(\d{8}\.\d{6})-(\d+)$")


def is_version_directory(name: str) -> bool:
    """Check whether a directory name can hold an artifact version."""
    return bool(name) and not name.startswith(".")


def is_timestamped_snapshot(version: str | None) -> bool:
    """Check whether version is a concrete timestamped snapshot build."""
    return version is not None and TIMESTAMPED_SNAPSHOT_PATTERN.match(version) is not None


def is_snapshot(version: str | None) -> bool:
    """Check whether version is a snapshot (base or timestamped).

    Examples:
        >>> is_snapshot("1.0-SNAPSHOT")
        True
        >>> is_snapshot("1.0-snapshot-r2")
        True
        >>> is_snapshot("1.0-20230101.120000-1")
        True
        >>> is_snapshot("1.0")
        False
    """
    if version is None:
        return False
    return SNAPSHOT_PATTERN.match(version) is not None or is_timestamped_snapshot(version)


def is_release_version(version: str | None) -> bool:
    """Check whether version is a release (non-snapshot) version."""
    return version is not None and not is_snapshot(version)


def get_snapshot_base_version(version: str) -> str:
    """
    Normalize a snapshot version to its ``-SNAPSHOT`` base form.

    Timestamped builds map back to the snapshot they were deployed from, and
    any casing or trailing text after the marker is dropped.

    Args:
        version: Snapshot version string

    Returns:
        Base version ending in ``-SNAPSHOT``, or version unchanged if it is not a snapshot

    Examples:
        >>> get_snapshot_base_version("2.0-20230101.120000-3")
        '2.0-SNAPSHOT'
        >>> get_snapshot_base_version("2.0-snapshot")
        '2.0-SNAPSHOT'
        >>> get_snapshot_base_version("2.0")
        '2.0'
    """
    timestamped = TIMESTAMPED_SNAPSHOT_PATTERN.match(version)
    if timestamped:
        return f"{timestamped.group(1)}-{SNAPSHOT_MARKER}"

    snapshot = SNAPSHOT_BASE_PATTERN.match(version)
    if snapshot:
        return f"{snapshot.group(1)}-{SNAPSHOT_MARKER}"

    return version
