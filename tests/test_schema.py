"""Tests for ArtifactDescriptor schema."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError
from repository_metadata import ArtifactDescriptor
from repository_metadata import DescriptorParseError


def test_from_pom_basic():
    """Test loading descriptor from a namespaced POM."""
    with tempfile.TemporaryDirectory() as tmpdir:
        pom_path = Path(tmpdir) / "widget-1.0.pom"
        pom_path.write_text("""<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>org.example</groupId>
  <artifactId>widget</artifactId>
  <version>1.0</version>
  <name>Widget</name>
</project>
""")

        descriptor = ArtifactDescriptor.from_pom(pom_path)

        assert descriptor.group_id == "org.example"
        assert descriptor.artifact_id == "widget"
        assert descriptor.version == "1.0"
        assert descriptor.name == "Widget"
        assert descriptor.packaging == "jar"
        assert descriptor.parent is None


def test_from_pom_plugin_packaging():
    with tempfile.TemporaryDirectory() as tmpdir:
        pom_path = Path(tmpdir) / "widget-maven-plugin-2.0.pom"
        pom_path.write_text("""<project>
  <groupId>org.example</groupId>
  <artifactId>widget-maven-plugin</artifactId>
  <version>2.0</version>
  <packaging>maven-plugin</packaging>
</project>
""")

        descriptor = ArtifactDescriptor.from_pom(pom_path)

        assert descriptor.packaging == "maven-plugin"
        assert descriptor.name is None


def test_from_pom_parent_does_not_provide_version():
    """groupId is inherited from <parent>, version is not."""
    with tempfile.TemporaryDirectory() as tmpdir:
        pom_path = Path(tmpdir) / "child.pom"
        pom_path.write_text("""<project xmlns="http://maven.apache.org/POM/4.0.0">
  <parent>
    <groupId>org.example</groupId>
    <artifactId>parent</artifactId>
    <version>3.0</version>
  </parent>
  <artifactId>child</artifactId>
</project>
""")

        descriptor = ArtifactDescriptor.from_pom(pom_path)

        assert descriptor.group_id == "org.example"
        assert descriptor.version is None
        assert descriptor.parent is not None
        assert descriptor.parent.artifact_id == "parent"
        assert descriptor.parent.version == "3.0"


def test_from_pom_ignores_nested_version_elements():
    """Only direct children of <project> are read."""
    with tempfile.TemporaryDirectory() as tmpdir:
        pom_path = Path(tmpdir) / "widget.pom"
        pom_path.write_text("""<project>
  <artifactId>widget</artifactId>
  <dependencies>
    <dependency>
      <artifactId>other</artifactId>
      <version>9.9</version>
    </dependency>
  </dependencies>
</project>
""")

        descriptor = ArtifactDescriptor.from_pom(pom_path)

        assert descriptor.artifact_id == "widget"
        assert descriptor.version is None


def test_from_pom_missing_file():
    """Test error when POM doesn't exist."""
    with pytest.raises(FileNotFoundError):
        ArtifactDescriptor.from_pom(Path("/nonexistent/widget-1.0.pom"))


def test_from_pom_malformed_xml():
    with tempfile.TemporaryDirectory() as tmpdir:
        pom_path = Path(tmpdir) / "widget-1.0.pom"
        pom_path.write_text("<project><artifactId>widget</artifactId>")

        with pytest.raises(DescriptorParseError, match="not well-formed"):
            ArtifactDescriptor.from_pom(pom_path)


def test_from_pom_unknown_encoding():
    """An unknown declared encoding is a malformed descriptor, not a LookupError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        pom_path = Path(tmpdir) / "widget-1.1.pom"
        pom_path.write_text('<?xml version="1.0" encoding="bogus-enc"?><project/>')

        with pytest.raises(DescriptorParseError, match="not well-formed") as excinfo:
            ArtifactDescriptor.from_pom(pom_path)

        assert isinstance(excinfo.value.__cause__, LookupError)


def test_from_pom_missing_artifact_id():
    with tempfile.TemporaryDirectory() as tmpdir:
        pom_path = Path(tmpdir) / "widget-1.0.pom"
        pom_path.write_text("<project><version>1.0</version></project>")

        with pytest.raises(DescriptorParseError, match="no artifactId") as excinfo:
            ArtifactDescriptor.from_pom(pom_path)

        assert excinfo.value.context["path"] == str(pom_path)


def test_from_pom_wrong_root_element():
    with tempfile.TemporaryDirectory() as tmpdir:
        pom_path = Path(tmpdir) / "widget-1.0.pom"
        pom_path.write_text("<metadata><artifactId>widget</artifactId></metadata>")

        with pytest.raises(DescriptorParseError, match="expected <project>"):
            ArtifactDescriptor.from_pom(pom_path)


def test_descriptor_immutable():
    """Test that descriptor is frozen (immutable)."""
    descriptor = ArtifactDescriptor(artifact_id="widget", version="1.0")

    with pytest.raises(ValidationError):
        descriptor.version = "2.0"
