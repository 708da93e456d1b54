"""Artifact descriptor schema - Parse POM files.

Only the identity fields the metadata pipeline reads are extracted; the rest of
the POM (dependencies, build, profiles) is ignored.
"""

import xml.etree.ElementTree as ET
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict

from .exceptions import DescriptorParseError


class ParentReference(BaseModel):
    """Parent POM coordinates declared by a descriptor."""

    model_config = ConfigDict(frozen=True)

    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None


class ArtifactDescriptor(BaseModel):
    """
    Artifact descriptor from a POM file.

    ``version`` is exactly what the POM declares; a version inherited through
    ``<parent>`` is not filled in.
    """

    model_config = ConfigDict(frozen=True)

    group_id: str | None = None
    artifact_id: str
    version: str | None = None
    packaging: str = "jar"
    name: str | None = None
    parent: ParentReference | None = None

    @classmethod
    def from_pom(cls, pom_path: Path) -> "ArtifactDescriptor":
        """
        Load descriptor from a POM file.

        Args:
            pom_path: Path to the .pom file

        Returns:
            ArtifactDescriptor instance

        Raises:
            FileNotFoundError: If the POM doesn't exist
            DescriptorParseError: If the POM is not well-formed XML or has no artifactId
        """
        if not pom_path.exists():
            raise FileNotFoundError(f"POM not found: {pom_path}")

        try:
            root = ET.parse(pom_path).getroot()
        except (ET.ParseError, LookupError, ValueError) as e:
            # LookupError: unknown encoding declared in the XML prolog
            raise DescriptorParseError(
                f"POM file '{pom_path}' is not well-formed: {e}",
                context={"path": str(pom_path)},
            ) from e

        if _local_name(root.tag) != "project":
            raise DescriptorParseError(
                f"POM file '{pom_path}' has root element <{_local_name(root.tag)}>, expected <project>",
                context={"path": str(pom_path)},
            )

        artifact_id = _child_text(root, "artifactId")
        if not artifact_id:
            raise DescriptorParseError(
                f"POM file '{pom_path}' declares no artifactId",
                context={"path": str(pom_path)},
            )

        parent = None
        parent_element = _child(root, "parent")
        if parent_element is not None:
            parent = ParentReference(
                group_id=_child_text(parent_element, "groupId"),
                artifact_id=_child_text(parent_element, "artifactId"),
                version=_child_text(parent_element, "version"),
            )

        group_id = _child_text(root, "groupId")
        if group_id is None and parent is not None:
            group_id = parent.group_id

        return cls(
            group_id=group_id,
            artifact_id=artifact_id,
            version=_child_text(root, "version"),
            packaging=_child_text(root, "packaging") or "jar",
            name=_child_text(root, "name"),
            parent=parent,
        )


def _local_name(tag: str) -> str:
    # "{http://maven.apache.org/POM/4.0.0}project" -> "project"
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if isinstance(child.tag, str) and _local_name(child.tag) == name:
            return child
    return None


def _child_text(element: ET.Element, name: str) -> str | None:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    text = child.text.strip()
    return text or None
