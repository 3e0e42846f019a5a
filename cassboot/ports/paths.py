"""Port interface for platform path translation."""

from typing import Protocol


class PathTranslator(Protocol):
    """Rewrites path-valued inputs into the form the runtime expects."""

    def translate(self, value: str) -> str:
        """Translate a path or path list.

        Raises:
            MissingConfigurationError: If translation fails
        """
        ...
