"""Configuration I/O utilities for reading TOML config files."""

import os
import platform
import tomllib
from pathlib import Path
from typing import Any

LOCAL_CONFIG_NAME = "cassboot.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/cassboot/config.toml or ~/.config/cassboot/config.toml
    - Windows: %APPDATA%/cassboot/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "cassboot" / "config.toml"
        return Path.home() / ".config" / "cassboot" / "config.toml"

    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        return Path(xdg_config) / "cassboot" / "config.toml"
    return Path.home() / ".config" / "cassboot" / "config.toml"


def get_local_config_path(conf_dir: Path) -> Path:
    """Get the path of the launcher config inside the daemon's conf dir."""
    return conf_dir / LOCAL_CONFIG_NAME


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to the TOML file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e
