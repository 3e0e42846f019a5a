"""Runtime environment resolution.

Validates the required environment inputs, applies platform path
translation, sources the optional env-override script from the conf dir
and locates the runtime executable.
"""

import logging
import os
import shlex
import shutil
from dataclasses import replace
from pathlib import Path

from cassboot.domain.config import EnvironmentConfig, RuntimeConfig
from cassboot.domain.entities import RuntimeEnvironment
from cassboot.domain.exceptions import MissingConfigurationError, MissingExecutableError
from cassboot.ports.env_script import EnvScriptLoader
from cassboot.ports.paths import PathTranslator

logger = logging.getLogger(__name__)


def executable_candidates(java_home: str, name: str) -> list[Path]:
    """List the executables to try under a runtime home, in preference order.

    Some platforms install the 64-bit runtime in a nested directory of the
    same tree, so that location is tried first.
    """
    home = Path(java_home)
    return [home / "bin" / "amd64" / name, home / "bin" / name]


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


class EnvironmentResolver:
    """Resolves a RuntimeEnvironment from explicit environment inputs."""

    def __init__(
        self,
        runtime_config: RuntimeConfig,
        path_translator: PathTranslator,
        env_script_loader: EnvScriptLoader | None = None,
    ):
        """Initialize the resolver.

        Args:
            runtime_config: Executable name and env script settings
            path_translator: Translator for path-valued inputs
            env_script_loader: Loader for the env-override script, or None
                to skip sourcing
        """
        self.runtime_config = runtime_config
        self.path_translator = path_translator
        self.env_script_loader = env_script_loader

    def validate(self, env: EnvironmentConfig) -> None:
        """Check that the required inputs are present.

        Raises:
            MissingConfigurationError: If CLASSPATH or CASSANDRA_CONF is empty.
        """
        if not env.classpath:
            raise MissingConfigurationError(
                "CLASSPATH is not set",
                hint="Export the daemon's classpath before launching",
            )
        if not env.conf_dir:
            raise MissingConfigurationError(
                "CASSANDRA_CONF is not set",
                hint="Point CASSANDRA_CONF at the daemon's configuration directory",
            )

    def find_executable(self, env: EnvironmentConfig) -> str:
        """Locate the runtime executable.

        When JAVA_HOME is set only paths inside it are considered; otherwise
        the command search path is searched for the bare name.

        Raises:
            MissingExecutableError: If no candidate is an executable file.
        """
        name = self.runtime_config.executable
        if env.java_home:
            for candidate in executable_candidates(env.java_home, name):
                if _is_executable(candidate):
                    logger.debug("Using runtime executable %s", candidate)
                    return str(candidate)
        else:
            found = shutil.which(name, path=env.search_path or os.defpath)
            if found:
                logger.debug("Found runtime executable on PATH: %s", found)
                return found

        raise MissingExecutableError(
            f"Unable to find {name} executable",
            hint="Check JAVA_HOME and PATH environment variables",
        )

    def source_env_script(self, env: EnvironmentConfig) -> EnvironmentConfig:
        """Apply the conf dir's env-override script, if present."""
        if self.env_script_loader is None or not self.runtime_config.env_script:
            return env

        script = Path(env.conf_dir) / self.runtime_config.env_script
        if not script.is_file():
            logger.debug("No env script at %s", script)
            return env

        logger.info("Sourcing %s", script)
        sourced = self.env_script_loader.load(script, env.environ)
        updated = EnvironmentConfig.from_environ(sourced)
        # The required inputs are validated before sourcing and kept as given.
        return replace(updated, classpath=env.classpath, conf_dir=env.conf_dir)

    def resolve(self, env: EnvironmentConfig) -> RuntimeEnvironment:
        """Resolve the runtime environment.

        Args:
            env: Captured environment inputs

        Returns:
            RuntimeEnvironment without an affinity wrapper

        Raises:
            MissingConfigurationError: If a required input is missing.
            MissingExecutableError: If the runtime executable cannot be found.
        """
        self.validate(env)
        env = self.source_env_script(env)
        env = replace(
            env,
            classpath=self.path_translator.translate(env.classpath),
            conf_dir=self.path_translator.translate(env.conf_dir),
        )
        executable = self.find_executable(env)

        try:
            runtime_options = tuple(shlex.split(env.jvm_opts))
        except ValueError as e:
            logger.warning("Unable to parse JVM_OPTS (%s), splitting on whitespace", e)
            runtime_options = tuple(env.jvm_opts.split())

        environ = dict(env.environ)
        environ["CLASSPATH"] = env.classpath
        environ["CASSANDRA_CONF"] = env.conf_dir

        return RuntimeEnvironment(
            executable=executable,
            classpath=env.classpath,
            runtime_options=runtime_options,
            log_dir=env.default_log_dir,
            storage_dir=Path(env.storage_dir) if env.storage_dir else None,
            environ=environ,
        )
