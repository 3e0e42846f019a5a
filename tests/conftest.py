"""Pytest configuration and shared fixtures."""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from cassboot.domain.config import EnvironmentConfig


def make_executable(path: Path, body: str = "#!/bin/sh\nexit 0\n") -> Path:
    """Write an executable shell script at ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture(autouse=True)
def no_global_config(tmp_path: Path):
    """Keep the user's ~/.config/cassboot/config.toml out of every test."""
    nonexistent_global = tmp_path / "nonexistent_global" / "config.toml"
    with patch(
        "cassboot.adapters.config.toml_config_provider.get_global_config_path",
        return_value=nonexistent_global,
    ):
        yield nonexistent_global


@pytest.fixture
def java_home(tmp_path: Path) -> Path:
    """Create a fake JAVA_HOME with an executable bin/java."""
    home = tmp_path / "jdk"
    make_executable(home / "bin" / "java")
    return home


@pytest.fixture
def conf_dir(tmp_path: Path) -> Path:
    """Create an empty daemon configuration directory."""
    conf = tmp_path / "conf"
    conf.mkdir()
    return conf


@pytest.fixture
def env_config(java_home: Path, conf_dir: Path) -> EnvironmentConfig:
    """Environment with every required input set."""
    environ = {
        "JAVA_HOME": str(java_home),
        "CLASSPATH": "/opt/cassandra/lib/a.jar:/opt/cassandra/lib/b.jar",
        "CASSANDRA_CONF": str(conf_dir),
        "JVM_OPTS": "-Xms1G -Xmx1G",
        "CASSANDRA_HOME": "/opt/cassandra",
        "PATH": os.defpath,
    }
    return EnvironmentConfig.from_environ(environ)
