"""TOML-based configuration provider.

Config loading priority (highest to lowest):
1. Local: $CASSANDRA_CONF/cassboot.toml
2. Global: ~/.config/cassboot/config.toml
3. Built-in defaults
"""

import logging
from pathlib import Path

from cassboot.domain.config import LauncherConfig
from cassboot.shared.config_io import (
    get_global_config_path,
    get_local_config_path,
    load_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Local values override global values field-by-field within a section.
    Invalid files are ignored with a warning.
    """

    def _apply(self, config: LauncherConfig, path: Path, label: str) -> LauncherConfig:
        if not path.exists():
            return config
        try:
            data = load_config_data(path)
            config = LauncherConfig.from_partial(config, data)
            logger.debug("Loaded %s config from %s", label, path)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(
                "Failed to parse %s config at %s: %s. Ignoring it.", label, path, e
            )
        return config

    def load(self, conf_dir: Path | None) -> LauncherConfig:
        """Load configuration with global fallback.

        Args:
            conf_dir: Daemon configuration directory, if known

        Returns:
            LauncherConfig with merged global/local values or defaults
        """
        config = LauncherConfig.default()
        config = self._apply(config, get_global_config_path(), "global")
        if conf_dir is not None:
            config = self._apply(config, get_local_config_path(conf_dir), "local")
        return config
