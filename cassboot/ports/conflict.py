"""Port interface for bind-conflict detection."""

from typing import Protocol


class ConflictDetector(Protocol):
    """Decides from a probe invocation's output whether an instance is running."""

    def is_conflict(self, output: str) -> bool:
        """Return True if the captured output indicates a bind conflict."""
        ...
