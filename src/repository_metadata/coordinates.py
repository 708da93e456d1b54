"""Artifact file naming - map files in a version directory back to coordinates.

Files are named ``<artifactId>-<version>[-<classifier>].<extension>``. In a
snapshot directory ``<version>`` is either the directory name itself or a
timestamped build of it (``1.0-SNAPSHOT`` -> ``1.0-20230101.120000-1``).
"""

import re
from dataclasses import dataclass

from .versions import SNAPSHOT_MARKER
from .versions import is_snapshot

NON_ARTIFACT_SUFFIXES = (".md5", ".sha1", ".sha256", ".sha512", ".asc")
METADATA_PREFIX = "maven-metadata"


@dataclass(frozen=True)
class ArtifactCoordinates:
    """Coordinates recovered from an artifact filename."""

    artifact_id: str
    version: str
    classifier: str | None
    extension: str


def _version_pattern(version_directory_name: str) -> re.Pattern:
    literal = re.escape(version_directory_name)
    if not is_snapshot(version_directory_name):
        return re.compile(literal)

    upper = version_directory_name.upper()
    marker = f"-{SNAPSHOT_MARKER}"
    if upper.endswith(marker):
        base = re.escape(version_directory_name[: -len(marker)])
        return re.compile(rf"{base}-\d{{8}}\.\d{{6}}-\d+|{literal}")
    return re.compile(literal)


def parse_coordinates(filename: str, artifact_id: str, version_directory_name: str) -> ArtifactCoordinates | None:
    """
    Parse an artifact filename into its coordinates.

    Args:
        filename: Bare filename (no directories)
        artifact_id: Artifact the version directory belongs to
        version_directory_name: Name of the version directory holding the file

    Returns:
        ArtifactCoordinates, or None if the filename doesn't follow the naming convention

    Example:
        >>> parse_coordinates("x-1.0-20230101.120000-1-sources.jar", "x", "1.0-SNAPSHOT")
        ArtifactCoordinates(artifact_id='x', version='1.0-20230101.120000-1', classifier='sources', extension='jar')
    """
    prefix = f"{artifact_id}-"
    if not filename.startswith(prefix) or "." not in filename:
        return None

    match = _version_pattern(version_directory_name).match(filename, len(prefix))
    if not match:
        return None

    remainder = filename[match.end() :]
    extension = filename.rsplit(".", 1)[1]
    if not extension:
        return None

    if remainder.startswith("."):
        classifier = None
    elif remainder.startswith("-"):
        classifier = remainder[1:].split(".", 1)[0]
        if not classifier:
            return None
    else:
        return None

    return ArtifactCoordinates(
        artifact_id=artifact_id,
        version=match.group(0),
        classifier=classifier,
        extension=extension,
    )


def is_artifact_file(filename: str, artifact_id: str, version_directory_name: str) -> bool:
    """Check whether filename is an artifact file (not a checksum, signature or metadata)."""
    if filename.startswith(METADATA_PREFIX) or filename.endswith(NON_ARTIFACT_SUFFIXES):
        return False
    return parse_coordinates(filename, artifact_id, version_directory_name) is not None
