"""Versioning metadata models (immutable data structures).

These mirror the elements of a repository's versioning metadata document:
the known versions of an artifact, its timestamped snapshot builds and the
plugins it provides.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class MetadataVersion(BaseModel):
    """One resolved artifact version.

    ``version`` is a release version or a ``-SNAPSHOT`` base version, never a
    timestamped snapshot build.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    created_at: datetime


class Plugin(BaseModel):
    """Build plugin provided by an artifact."""

    model_config = ConfigDict(frozen=True)

    name: str
    artifact_id: str
    prefix: str


class SnapshotVersion(BaseModel):
    """One timestamped snapshot build file (e.g. the sources jar of build 3)."""

    model_config = ConfigDict(frozen=True)

    version: str
    classifier: str | None = None
    extension: str
    updated: datetime


class Versioning(BaseModel):
    """
    Versioning section of a metadata document.

    ``snapshot_versions`` is None when no snapshot builds were attached, which
    serializers render as an absent element rather than an empty one.
    """

    model_config = ConfigDict(frozen=True)

    versions: list[str] = Field(default_factory=list)
    snapshot_versions: list[SnapshotVersion] | None = None


class OutcomeStatus(str, Enum):
    """What happened to a version directory during collection."""

    COLLECTED = "collected"
    MISSING_DESCRIPTOR = "missing_descriptor"
    CORRUPT_DESCRIPTOR = "corrupt_descriptor"
    MISSING_VERSION = "missing_version"


class VersionDirectoryOutcome(BaseModel):
    """Per-directory result of a collection pass."""

    model_config = ConfigDict(frozen=True)

    path: Path
    status: OutcomeStatus
    version: str | None = None
    reason: str = ""

    @property
    def skipped(self) -> bool:
        return self.status != OutcomeStatus.COLLECTED


class VersionCollectionRequest(BaseModel):
    """Everything collected for one artifact base path."""

    model_config = ConfigDict(frozen=True)

    artifact_base_path: Path
    metadata_versions: list[MetadataVersion] = Field(default_factory=list)
    versioning: Versioning = Field(default_factory=Versioning)
    plugins: list[Plugin] = Field(default_factory=list)
    outcomes: list[VersionDirectoryOutcome] = Field(default_factory=list)

    def skipped(self) -> list[VersionDirectoryOutcome]:
        """Outcomes for version directories that contributed nothing."""
        return [outcome for outcome in self.outcomes if outcome.skipped]
