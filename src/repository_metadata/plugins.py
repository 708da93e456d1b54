"""Build plugin detection for artifact descriptors."""

import re

from .models import Plugin
from .schema import ArtifactDescriptor

PLUGIN_PACKAGING = "maven-plugin"

_MAVEN_TOKEN = re.compile(r"-?maven-?")
_PLUGIN_TOKEN = re.compile(r"-?plugin-?")


def goal_prefix_from_artifact_id(artifact_id: str) -> str:
    """
    Derive a plugin's goal prefix from its artifactId.

    This is the naming-convention guess; the authoritative prefix lives in the
    plugin jar's META-INF/maven/plugin.xml.

    Examples:
        >>> goal_prefix_from_artifact_id("maven-compiler-plugin")
        'compiler'
        >>> goal_prefix_from_artifact_id("jetty-maven-plugin")
        'jetty'
        >>> goal_prefix_from_artifact_id("maven-plugin-plugin")
        'plugin'
    """
    if artifact_id == "maven-plugin-plugin":
        return "plugin"
    return _PLUGIN_TOKEN.sub("", _MAVEN_TOKEN.sub("", artifact_id))


def is_plugin(descriptor: ArtifactDescriptor, plugin_packaging: str = PLUGIN_PACKAGING) -> bool:
    return descriptor.packaging == plugin_packaging


def plugin_from_descriptor(descriptor: ArtifactDescriptor) -> Plugin:
    """Build the plugin entry for a plugin descriptor (name falls back to artifactId)."""
    return Plugin(
        name=descriptor.name if descriptor.name is not None else descriptor.artifact_id,
        artifact_id=descriptor.artifact_id,
        prefix=goal_prefix_from_artifact_id(descriptor.artifact_id),
    )
