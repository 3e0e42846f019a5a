"""Configuration provider port.

Defines the interface for loading launcher configuration.
"""

from pathlib import Path
from typing import Protocol

from cassboot.domain.config import LauncherConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, conf_dir: Path | None) -> LauncherConfig:
        """Load configuration, optionally from the daemon's conf dir.

        Args:
            conf_dir: Directory that may contain cassboot.toml

        Returns:
            LauncherConfig instance with loaded or default values

        Note:
            Implementations should gracefully fall back to defaults
            if config files are missing or invalid.
        """
        ...
