"""repository-metadata - Versioning metadata from on-disk artifact repositories.

Public API: collect versions and timestamped snapshot builds for an artifact
directory, and assemble the versioning section of its metadata document.
"""

from .collector import VersionCollector
from .collector import collect_timestamped_snapshot_versions
from .collector import collect_versions
from .collector import generate_snapshot_versions
from .collector import generate_versioning
from .comparators import ComparableVersion
from .comparators import compare_snapshot_versions
from .comparators import compare_versions
from .coordinates import ArtifactCoordinates
from .coordinates import is_artifact_file
from .coordinates import parse_coordinates
from .exceptions import ArtifactWalkError
from .exceptions import DescriptorParseError
from .exceptions import MetadataError
from .models import MetadataVersion
from .models import OutcomeStatus
from .models import Plugin
from .models import SnapshotVersion
from .models import VersionCollectionRequest
from .models import VersionDirectoryOutcome
from .models import Versioning
from .plugins import goal_prefix_from_artifact_id
from .protocols import DiagnosticsSink
from .protocols import RecordingDiagnostics
from .schema import ArtifactDescriptor
from .schema import ParentReference
from .versions import get_snapshot_base_version
from .versions import is_release_version
from .versions import is_snapshot
from .versions import is_version_directory

__all__ = [
    # Collection
    "VersionCollector",
    "collect_versions",
    "collect_timestamped_snapshot_versions",
    "generate_versioning",
    "generate_snapshot_versions",
    # Metadata
    "MetadataVersion",
    "Plugin",
    "SnapshotVersion",
    "Versioning",
    "VersionCollectionRequest",
    "VersionDirectoryOutcome",
    "OutcomeStatus",
    # Descriptors
    "ArtifactDescriptor",
    "ParentReference",
    # Ordering
    "ComparableVersion",
    "compare_versions",
    "compare_snapshot_versions",
    # Naming
    "ArtifactCoordinates",
    "parse_coordinates",
    "is_artifact_file",
    "is_version_directory",
    "is_snapshot",
    "is_release_version",
    "get_snapshot_base_version",
    "goal_prefix_from_artifact_id",
    # Diagnostics
    "DiagnosticsSink",
    "RecordingDiagnostics",
    # Exceptions
    "MetadataError",
    "DescriptorParseError",
    "ArtifactWalkError",
]

__version__ = "0.1.0"
