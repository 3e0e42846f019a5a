"""Factory for wiring the launch use case to its adapters.

Keeps the CLI layer free from direct adapter imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from cassboot.core.bootstrap import BootstrapUseCase
    from cassboot.core.environment import EnvironmentResolver
    from cassboot.domain.config import EnvironmentConfig, LauncherConfig
    from cassboot.ports.config import ConfigProvider


class ConfigFactory:
    """Factory for creating configuration providers."""

    def create_config_provider(self) -> ConfigProvider:
        """Create the TOML-backed config provider."""
        from cassboot.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()

    def load(self, conf_dir: Path | None) -> LauncherConfig:
        """Load launcher configuration for the given conf dir."""
        return self.create_config_provider().load(conf_dir)


class LauncherFactory:
    """Creates resolvers and the launch use case from configuration.

    Args:
        config: Launcher configuration.
        env: Captured environment inputs.
    """

    def __init__(self, config: LauncherConfig, env: EnvironmentConfig) -> None:
        self._config = config
        self._env = env

    def create_resolver(self) -> EnvironmentResolver:
        """Create an environment resolver for the current platform."""
        from cassboot.adapters.env.shell_env_script import ShellEnvScriptLoader
        from cassboot.adapters.paths.translators import select_path_translator
        from cassboot.core.environment import EnvironmentResolver

        return EnvironmentResolver(
            runtime_config=self._config.runtime,
            path_translator=select_path_translator(),
            env_script_loader=ShellEnvScriptLoader(
                timeout=self._config.probe.env_script_timeout
            ),
        )

    def create_bootstrap_usecase(self) -> BootstrapUseCase:
        """Create the launch use case with OS-backed launchers and probes."""
        from cassboot.adapters.process.launchers import DetachedLauncher, ExecLauncher
        from cassboot.core.affinity import AffinityPlanner
        from cassboot.core.bootstrap import BootstrapUseCase
        from cassboot.core.conflict import ConflictProbe, SignatureConflictDetector

        probe = self._config.probe
        return BootstrapUseCase(
            runtime_config=self._config.runtime,
            resolver=self.create_resolver(),
            conflict_probe=ConflictProbe(
                detector=SignatureConflictDetector(probe.conflict_signature),
                timeout=probe.conflict_timeout,
            ),
            affinity_planner=AffinityPlanner(
                probe, search_path=self._env.search_path or None
            ),
            foreground_launcher=ExecLauncher(),
            background_launcher=DetachedLauncher(),
        )
