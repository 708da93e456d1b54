"""Protocols for collection diagnostics.

Apps inject a DiagnosticsSink to observe skipped version directories (tests
assert on it, services forward it to their own reporting). The library only
requires this interface.
"""

from typing import Protocol
from typing import runtime_checkable

from .models import VersionDirectoryOutcome


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receives one outcome per version directory that was skipped."""

    def report(self, outcome: VersionDirectoryOutcome) -> None:
        """Record a skipped version directory.

        Args:
            outcome: Outcome describing the directory and why it was skipped
        """
        ...


class RecordingDiagnostics:
    """Sink that keeps every reported outcome in memory."""

    def __init__(self) -> None:
        self.outcomes: list[VersionDirectoryOutcome] = []

    def report(self, outcome: VersionDirectoryOutcome) -> None:
        self.outcomes.append(outcome)
