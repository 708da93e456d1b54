"""Metadata exceptions.

Two failure scopes:
- DescriptorParseError: one version directory is unusable; the collector
  records it and moves on to the next directory.
- ArtifactWalkError: a snapshot walk failed; the whole call fails.
"""


class MetadataError(Exception):
    """Base exception for metadata operations.

    ``context`` carries structured details (usually the offending path) so
    callers can report them without parsing the message.
    """

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class DescriptorParseError(MetadataError):
    """Descriptor (POM) file is malformed or lacks required fields."""


class ArtifactWalkError(MetadataError, OSError):
    """Version directory tree could not be walked (catchable as OSError)."""
