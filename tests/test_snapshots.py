"""Tests for timestamped snapshot collection."""

import os
import tempfile
from datetime import UTC
from datetime import datetime
from pathlib import Path

import pytest
from repository_metadata import ArtifactWalkError
from repository_metadata import SnapshotVersion
from repository_metadata import VersionCollector
from repository_metadata import collect_timestamped_snapshot_versions
from repository_metadata import generate_snapshot_versions

FIXED_TIME = datetime(2024, 5, 1, 8, 30, tzinfo=UTC)


def _snapshot_dir(tmpdir: str, artifact_id: str = "x", version: str = "1.0-SNAPSHOT") -> Path:
    version_dir = Path(tmpdir) / artifact_id / version
    version_dir.mkdir(parents=True)
    return version_dir


def test_collect_builds_distinguished_by_classifier():
    with tempfile.TemporaryDirectory() as tmpdir:
        version_dir = _snapshot_dir(tmpdir)
        (version_dir / "x-1.0-20230101.120000-1.jar").write_bytes(b"PK")
        (version_dir / "x-1.0-20230101.120000-1-sources.jar").write_bytes(b"PK")

        snapshots = VersionCollector(clock=lambda: FIXED_TIME).collect_timestamped_snapshot_versions(version_dir)

        assert len(snapshots) == 2
        assert [s.classifier for s in snapshots] == [None, "sources"]
        assert {s.version for s in snapshots} == {"1.0-20230101.120000-1"}
        assert {s.extension for s in snapshots} == {"jar"}
        assert all(s.updated == FIXED_TIME for s in snapshots)


def test_collect_skips_checksums_and_metadata():
    with tempfile.TemporaryDirectory() as tmpdir:
        version_dir = _snapshot_dir(tmpdir)
        (version_dir / "x-1.0-20230101.120000-1.pom").write_text("<project/>")
        (version_dir / "x-1.0-20230101.120000-1.pom.sha1").write_text("abc")
        (version_dir / "maven-metadata.xml").write_text("<metadata/>")
        (version_dir / "unrelated.txt").write_text("notes")

        snapshots = collect_timestamped_snapshot_versions(version_dir)

        assert [(s.version, s.extension) for s in snapshots] == [("1.0-20230101.120000-1", "pom")]


def test_collect_sorted_across_builds():
    """Output order is by version, then classifier, then extension, regardless of walk order."""
    with tempfile.TemporaryDirectory() as tmpdir:
        version_dir = _snapshot_dir(tmpdir)
        for name in [
            "x-1.0-20230102.090000-2.pom",
            "x-1.0-20230101.120000-1.pom",
            "x-1.0-20230102.090000-2.jar",
            "x-1.0-20230101.120000-1.jar",
        ]:
            (version_dir / name).write_bytes(b"")

        snapshots = collect_timestamped_snapshot_versions(version_dir)

        assert [(s.version, s.extension) for s in snapshots] == [
            ("1.0-20230101.120000-1", "jar"),
            ("1.0-20230101.120000-1", "pom"),
            ("1.0-20230102.090000-2", "jar"),
            ("1.0-20230102.090000-2", "pom"),
        ]


def test_collect_walks_subdirectories():
    with tempfile.TemporaryDirectory() as tmpdir:
        version_dir = _snapshot_dir(tmpdir)
        nested = version_dir / "extra"
        nested.mkdir()
        (nested / "x-1.0-20230101.120000-1-tests.jar").write_bytes(b"PK")

        snapshots = collect_timestamped_snapshot_versions(version_dir)

        assert [s.classifier for s in snapshots] == ["tests"]


def test_collect_uses_call_time_not_file_time():
    with tempfile.TemporaryDirectory() as tmpdir:
        version_dir = _snapshot_dir(tmpdir)
        (version_dir / "x-1.0-20230101.120000-1.jar").write_bytes(b"PK")

        before = datetime.now(UTC)
        snapshots = collect_timestamped_snapshot_versions(version_dir)
        after = datetime.now(UTC)

        assert before <= snapshots[0].updated <= after


def test_collect_empty_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        version_dir = _snapshot_dir(tmpdir)

        assert collect_timestamped_snapshot_versions(version_dir) == []


def test_collect_missing_directory_raises():
    """A failed walk is reported, never turned into an empty result."""
    with pytest.raises(ArtifactWalkError) as excinfo:
        collect_timestamped_snapshot_versions(Path("/nonexistent/x/1.0-SNAPSHOT"))

    assert isinstance(excinfo.value, OSError)
    assert excinfo.value.context["path"].endswith("1.0-SNAPSHOT")


def test_collect_unreadable_subdirectory_raises(monkeypatch):
    """An error part-way through the walk fails the call; no partial list comes back."""
    with tempfile.TemporaryDirectory() as tmpdir:
        version_dir = _snapshot_dir(tmpdir)
        (version_dir / "x-1.0-20230101.120000-1.jar").write_bytes(b"PK")
        locked = version_dir / "locked"

        def failing_walk(top, onerror=None, **kwargs):
            yield str(top), ["locked"], ["x-1.0-20230101.120000-1.jar"]
            onerror(PermissionError(13, "Permission denied", str(locked)))
            yield str(locked), [], ["x-1.0-20230101.120000-1-tests.jar"]

        monkeypatch.setattr(os, "walk", failing_walk)

        with pytest.raises(ArtifactWalkError, match="Permission denied") as excinfo:
            collect_timestamped_snapshot_versions(version_dir)

        assert isinstance(excinfo.value.__cause__, PermissionError)


def test_generate_snapshot_versions_sorts():
    newer = SnapshotVersion(version="1.0-20230102.090000-2", extension="jar", updated=FIXED_TIME)
    older = SnapshotVersion(version="1.0-20230101.120000-1", extension="jar", updated=FIXED_TIME)

    versioning = generate_snapshot_versions([newer, older])

    assert versioning.snapshot_versions == [older, newer]
    assert versioning.versions == []


def test_generate_snapshot_versions_empty_leaves_field_unset():
    versioning = generate_snapshot_versions([])

    assert versioning.snapshot_versions is None
