"""Config domain models for the launcher.

Two kinds of configuration exist:

- LauncherConfig: optional launcher settings loaded from cassboot.toml
  (conf dir) and the global config file, with built-in defaults.
- EnvironmentConfig: the process environment inputs (JAVA_HOME, CLASSPATH,
  CASSANDRA_CONF, ...) captured once into an explicit value so that the
  resolver never reads ambient process state.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# Emitted by the JVM's JMX agent when its port is already bound.
DEFAULT_CONFLICT_SIGNATURE = (
    "Error: Exception thrown by the agent : java.lang.NullPointerException"
)


@dataclass(frozen=True)
class RuntimeConfig:
    """Configuration for the managed runtime and daemon entry point.

    Attributes:
        executable: Bare executable name searched under JAVA_HOME and PATH
        entry_point: Main class of the daemon
        version_entry_point: Main class printing the daemon version
        property_prefix: Prefix for managed system properties
        logging_config: Value of the logback configuration file property
        env_script: Env-override script name inside the conf dir

    Raises:
        ValueError: If a required name is empty.
    """

    executable: str = "java"
    entry_point: str = "org.apache.cassandra.service.CassandraDaemon"
    version_entry_point: str = "org.apache.cassandra.tools.GetVersion"
    property_prefix: str = "cassandra"
    logging_config: str = "logback.xml"
    env_script: str = "cassandra-env.sh"

    def __post_init__(self) -> None:
        """Validate runtime config after initialization."""
        for name in ("executable", "entry_point", "version_entry_point"):
            if not getattr(self, name):
                raise ValueError(f"{name} must not be empty")


@dataclass(frozen=True)
class ProbeConfig:
    """Configuration for the pre-launch probes.

    Attributes:
        conflict_signature: Output substring that marks a JMX bind conflict
        conflict_timeout: Seconds allowed for the conflict probe invocation
        affinity_enabled: Whether to probe for NUMA interleaving at all
        affinity_utility: Name of the affinity-control utility
        affinity_timeout: Seconds allowed for the affinity trial invocation
        env_script_timeout: Seconds allowed for sourcing the env script

    Raises:
        ValueError: If a timeout is not positive or the signature is empty.
    """

    conflict_signature: str = DEFAULT_CONFLICT_SIGNATURE
    conflict_timeout: float = 10.0
    affinity_enabled: bool = True
    affinity_utility: str = "numactl"
    affinity_timeout: float = 5.0
    env_script_timeout: float = 10.0

    def __post_init__(self) -> None:
        """Validate probe config after initialization."""
        if not self.conflict_signature:
            raise ValueError("conflict_signature must not be empty")
        for name in ("conflict_timeout", "affinity_timeout", "env_script_timeout"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class LoggingConfig:
    """Launcher logging settings.

    Attributes:
        level: Log level for the launcher's own diagnostics
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    def __post_init__(self) -> None:
        """Validate logging config after initialization."""
        if self.level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ValueError(f"Invalid log level: {self.level}")


@dataclass(frozen=True)
class LauncherConfig:
    """Complete launcher configuration.

    Attributes:
        runtime: Runtime and entry point settings
        probe: Pre-launch probe settings
        logging: Launcher logging settings
    """

    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    probe: ProbeConfig = field(default_factory=ProbeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def default() -> "LauncherConfig":
        """Create a config with all default values."""
        return LauncherConfig(
            runtime=RuntimeConfig(),
            probe=ProbeConfig(),
            logging=LoggingConfig(),
        )

    @staticmethod
    def from_partial(base: "LauncherConfig", partial: dict) -> "LauncherConfig":
        """Overlay a partial config dict onto an existing config.

        Each section present in ``partial`` is merged field-by-field over the
        matching section of ``base``; absent sections are kept as-is.

        Args:
            base: Config providing the fallback values
            partial: Raw config data (e.g. parsed TOML)

        Returns:
            New LauncherConfig with overrides applied

        Raises:
            ValueError: If a section is not a table or a value is invalid.
            TypeError: If a section contains unknown keys.
        """
        sections = {
            "runtime": (RuntimeConfig, base.runtime),
            "probe": (ProbeConfig, base.probe),
            "logging": (LoggingConfig, base.logging),
        }
        merged = {}
        for name, (cls, current) in sections.items():
            overrides = partial.get(name, {})
            if not isinstance(overrides, dict):
                raise ValueError(f"[{name}] must be a table")
            merged[name] = cls(**{**current.__dict__, **overrides})
        return LauncherConfig(**merged)


@dataclass(frozen=True)
class EnvironmentConfig:
    """Process environment inputs consumed by the resolver.

    Attributes:
        java_home: Runtime home directory override (JAVA_HOME)
        classpath: Payload descriptor (CLASSPATH), required
        conf_dir: Configuration directory (CASSANDRA_CONF), required
        jvm_opts: Additional runtime options as a single string (JVM_OPTS)
        cassandra_home: Install directory (CASSANDRA_HOME)
        log_dir: Log directory override (CASSANDRA_LOG_DIR)
        storage_dir: Storage directory (cassandra_storagedir)
        search_path: Command search path (PATH)
        environ: Full environment the values were read from
    """

    java_home: str = ""
    classpath: str = ""
    conf_dir: str = ""
    jvm_opts: str = ""
    cassandra_home: str = ""
    log_dir: str = ""
    storage_dir: str = ""
    search_path: str = ""
    environ: Mapping[str, str] = field(default_factory=dict, compare=False)

    @staticmethod
    def from_environ(environ: Mapping[str, str]) -> "EnvironmentConfig":
        """Capture the launcher's inputs from an environment mapping."""
        return EnvironmentConfig(
            java_home=environ.get("JAVA_HOME", ""),
            classpath=environ.get("CLASSPATH", ""),
            conf_dir=environ.get("CASSANDRA_CONF", ""),
            jvm_opts=environ.get("JVM_OPTS", ""),
            cassandra_home=environ.get("CASSANDRA_HOME", ""),
            log_dir=environ.get("CASSANDRA_LOG_DIR", ""),
            storage_dir=environ.get("cassandra_storagedir", ""),
            search_path=environ.get("PATH", ""),
            environ=dict(environ),
        )

    @property
    def default_log_dir(self) -> Path | None:
        """Log directory used when ``-l`` is not given."""
        if self.log_dir:
            return Path(self.log_dir)
        if self.cassandra_home:
            return Path(self.cassandra_home) / "logs"
        return None
