"""Version collection - Resolve an artifact's versions from its directory layout.

Layout convention::

    <artifactId>/                   artifact base path
        1.0/                        release version directory
            <artifactId>-1.0.pom
            <artifactId>-1.0.jar
        1.1-SNAPSHOT/               snapshot version directory
            <artifactId>-1.1-20230101.120000-1.pom
            <artifactId>-1.1-20230101.120000-1.jar
            <artifactId>-1.1-20230102.090000-2.pom
            ...

Each version directory is processed on its own: a directory without a usable
POM is reported and skipped, it never aborts collection of its siblings.
Walking a single version directory for snapshot builds is all-or-nothing.
"""

import logging
import os
from collections.abc import Callable
from datetime import UTC
from datetime import datetime
from pathlib import Path

from .comparators import metadata_version_key
from .comparators import snapshot_version_key
from .coordinates import is_artifact_file
from .coordinates import parse_coordinates
from .exceptions import ArtifactWalkError
from .exceptions import DescriptorParseError
from .models import MetadataVersion
from .models import OutcomeStatus
from .models import Plugin
from .models import SnapshotVersion
from .models import VersionCollectionRequest
from .models import VersionDirectoryOutcome
from .models import Versioning
from .plugins import PLUGIN_PACKAGING
from .plugins import is_plugin
from .plugins import plugin_from_descriptor
from .protocols import DiagnosticsSink
from .schema import ArtifactDescriptor
from .versions import get_snapshot_base_version
from .versions import is_release_version
from .versions import is_snapshot
from .versions import is_version_directory

logger = logging.getLogger(__name__)

DESCRIPTOR_EXTENSION = ".pom"

SKIP_LOG_LEVELS = {
    OutcomeStatus.MISSING_DESCRIPTOR: logging.DEBUG,
    OutcomeStatus.MISSING_VERSION: logging.WARNING,
    OutcomeStatus.CORRUPT_DESCRIPTOR: logging.ERROR,
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


class VersionCollector:
    """
    Collect versions, plugins and snapshot builds for artifacts on disk.

    Policy is injected, nothing is read from global configuration.

    Example:
        >>> collector = VersionCollector()
        >>> request = collector.collect_versions(Path("/repo/org/example/widget"))
        >>> request.versioning.versions
        ['1.0', '1.1-SNAPSHOT', '1.1']
    """

    def __init__(
        self,
        descriptor_extension: str = DESCRIPTOR_EXTENSION,
        plugin_packaging: str = PLUGIN_PACKAGING,
        diagnostics: DiagnosticsSink | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize collector with app-provided policy.

        Args:
            descriptor_extension: Suffix of descriptor files (".pom")
            plugin_packaging: Packaging value that marks an artifact as a build plugin
            diagnostics: Optional sink receiving an outcome for every skipped version directory
            clock: Optional callable returning the current time, stamped on snapshot builds
        """
        self.descriptor_extension = descriptor_extension
        self.plugin_packaging = plugin_packaging
        self.diagnostics = diagnostics
        self.clock = clock or _utc_now

    def collect_versions(
        self,
        artifact_base_path: Path,
        diagnostics: DiagnosticsSink | None = None,
    ) -> VersionCollectionRequest:
        """
        Collect every version of the artifact stored under artifact_base_path.

        Args:
            artifact_base_path: Artifact directory (its name is the artifactId)
            diagnostics: Optional sink for this call, overriding the collector's sink

        Returns:
            VersionCollectionRequest with sorted versions, versioning, plugins and
            one outcome per version directory
        """
        sink = diagnostics if diagnostics is not None else self.diagnostics
        versions: list[MetadataVersion] = []
        plugins: list[Plugin] = []
        outcomes: list[VersionDirectoryOutcome] = []

        for version_directory in self.list_version_directories(artifact_base_path):
            outcome, metadata_version, plugin = self._collect_version_directory(artifact_base_path, version_directory)
            outcomes.append(outcome)

            # Plugins don't depend on a resolvable version
            if plugin is not None:
                plugins.append(plugin)

            if outcome.skipped:
                logger.log(
                    SKIP_LOG_LEVELS[outcome.status],
                    f"Skipped version directory '{version_directory}' ({outcome.status.value}): {outcome.reason}",
                )
                if sink is not None:
                    sink.report(outcome)
                continue

            versions.append(metadata_version)

        # 1.1 < 1.2 < 1.3 ....
        versions.sort(key=metadata_version_key)
        logger.debug(f"Collected {len(versions)} versions and {len(plugins)} plugins from {artifact_base_path}")

        return VersionCollectionRequest(
            artifact_base_path=artifact_base_path,
            metadata_versions=versions,
            versioning=self.generate_versioning(versions),
            plugins=plugins,
            outcomes=outcomes,
        )

    def list_version_directories(self, artifact_base_path: Path) -> list[Path]:
        """List version subdirectories of an artifact (sorted by name, empty if none)."""
        if not artifact_base_path.is_dir():
            return []
        return sorted(
            (
                path.absolute()
                for path in artifact_base_path.iterdir()
                if path.is_dir() and is_version_directory(path.name)
            ),
            key=lambda p: p.name,
        )

    def get_descriptor_path(self, artifact_base_path: Path, version_directory: Path) -> Path | None:
        """
        Locate the descriptor governing a version directory.

        Release directories hold exactly ``<artifactId>-<version>.pom`` (not
        checked for existence here). Snapshot directories may hold one POM per
        timestamped build; the lexicographically last filename wins.

        Returns:
            Path to the descriptor, or None if a snapshot directory has no descriptor
        """
        if is_release_version(version_directory.name):
            artifact_id = artifact_base_path.absolute().name
            return version_directory / f"{artifact_id}-{version_directory.name}{self.descriptor_extension}"

        # Attempt to get the latest available POM
        names = sorted(
            path.name
            for path in version_directory.iterdir()
            if path.is_file() and path.name.endswith(self.descriptor_extension)
        )
        if not names:
            return None
        return version_directory / names[-1]

    def resolve_version(
        self, descriptor: ArtifactDescriptor, created_at: datetime
    ) -> tuple[MetadataVersion | None, Plugin | None]:
        """
        Compute the metadata version (and plugin entry) a descriptor contributes.

        Versions inherited from a parent POM are not resolved: a descriptor
        without its own ``<version>`` yields no version entry, though a plugin
        descriptor still yields its plugin.

        Args:
            descriptor: Parsed descriptor
            created_at: Publish time proxy (the version directory's mtime)

        Returns:
            Tuple of (metadata version or None, plugin or None)
        """
        # TODO: walk parent POMs when <version> is only declared on the parent
        plugin = plugin_from_descriptor(descriptor) if is_plugin(descriptor, self.plugin_packaging) else None

        version = descriptor.version
        if version is None:
            return None, plugin

        if is_snapshot(version):
            version = get_snapshot_base_version(version)

        return MetadataVersion(version=version, created_at=created_at), plugin

    def _collect_version_directory(
        self, artifact_base_path: Path, version_directory: Path
    ) -> tuple[VersionDirectoryOutcome, MetadataVersion | None, Plugin | None]:
        try:
            descriptor_path = self.get_descriptor_path(artifact_base_path, version_directory)
            if descriptor_path is None:
                return _skip(version_directory, OutcomeStatus.MISSING_DESCRIPTOR, "no descriptor file found")

            descriptor = ArtifactDescriptor.from_pom(descriptor_path)
            created_at = datetime.fromtimestamp(version_directory.stat().st_mtime, UTC)
        except FileNotFoundError as e:
            return _skip(version_directory, OutcomeStatus.MISSING_DESCRIPTOR, str(e))
        except (DescriptorParseError, OSError) as e:
            return _skip(version_directory, OutcomeStatus.CORRUPT_DESCRIPTOR, f"POM file appears to be corrupt: {e}")

        metadata_version, plugin = self.resolve_version(descriptor, created_at)
        if metadata_version is None:
            return (
                _skip(
                    version_directory,
                    OutcomeStatus.MISSING_VERSION,
                    f"{descriptor_path.name} declares no version of its own",
                ),
                None,
                plugin,
            )

        outcome = VersionDirectoryOutcome(
            path=version_directory,
            status=OutcomeStatus.COLLECTED,
            version=metadata_version.version,
        )
        return outcome, metadata_version, plugin

    def collect_timestamped_snapshot_versions(self, artifact_version_path: Path) -> list[SnapshotVersion]:
        """
        Get snapshot versioning information for every build file in a version directory.

        Every record is stamped with the same ``updated`` time: the moment of
        this call, not the file's modification time.

        Args:
            artifact_version_path: Version directory (its parent's name is the artifactId)

        Returns:
            Snapshot versions sorted by version, classifier and extension

        Raises:
            ArtifactWalkError: If the directory tree can't be walked
        """
        artifact_version_path = artifact_version_path.absolute()
        artifact_id = artifact_version_path.parent.name
        version_name = artifact_version_path.name
        updated = self.clock()

        snapshot_versions = []
        for file_path in _walk_files(artifact_version_path):
            if not is_artifact_file(file_path.name, artifact_id, version_name):
                continue

            coordinates = parse_coordinates(file_path.name, artifact_id, version_name)
            snapshot_versions.append(
                SnapshotVersion(
                    version=coordinates.version,
                    classifier=coordinates.classifier,
                    extension=coordinates.extension,
                    updated=updated,
                )
            )

        snapshot_versions.sort(key=snapshot_version_key)
        logger.debug(f"Found {len(snapshot_versions)} snapshot builds in {artifact_version_path}")
        return snapshot_versions

    def generate_versioning(self, versions: list[MetadataVersion]) -> Versioning:
        """Build versioning with naturally sorted version strings (duplicates kept, input untouched)."""
        return Versioning(versions=[v.version for v in sorted(versions, key=metadata_version_key)])

    def generate_snapshot_versions(self, snapshot_versions: list[SnapshotVersion]) -> Versioning:
        """Build versioning carrying snapshot builds; left unset when there are none."""
        if not snapshot_versions:
            return Versioning()
        return Versioning(snapshot_versions=sorted(snapshot_versions, key=snapshot_version_key))


def _skip(
    version_directory: Path, status: OutcomeStatus, reason: str
) -> tuple[VersionDirectoryOutcome, None, None]:
    return VersionDirectoryOutcome(path=version_directory, status=status, reason=reason), None, None


def _walk_files(root: Path) -> list[Path]:
    if not root.is_dir():
        raise ArtifactWalkError(f"Version directory not found: {root}", context={"path": str(root)})

    def _on_error(error: OSError) -> None:
        raise ArtifactWalkError(f"Failed to walk {root}: {error}", context={"path": str(root)}) from error

    files = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_on_error):
        files.extend(Path(dirpath) / filename for filename in filenames)
    return files


def collect_versions(artifact_base_path: Path, diagnostics: DiagnosticsSink | None = None) -> VersionCollectionRequest:
    """Collect versions with default policy (see VersionCollector.collect_versions)."""
    return VersionCollector(diagnostics=diagnostics).collect_versions(artifact_base_path)


def collect_timestamped_snapshot_versions(artifact_version_path: Path) -> list[SnapshotVersion]:
    """Collect snapshot builds with default policy (see VersionCollector.collect_timestamped_snapshot_versions)."""
    return VersionCollector().collect_timestamped_snapshot_versions(artifact_version_path)


def generate_versioning(versions: list[MetadataVersion]) -> Versioning:
    return VersionCollector().generate_versioning(versions)


def generate_snapshot_versions(snapshot_versions: list[SnapshotVersion]) -> Versioning:
    return VersionCollector().generate_snapshot_versions(snapshot_versions)
