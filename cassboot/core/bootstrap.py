"""Launch orchestration.

Runs the launch sequence for one invocation:

    resolve environment -> conflict probe -> affinity plan -> launch

and tracks the launch state machine::

    IDLE -> READY_TO_LAUNCH -> FOREGROUND | BACKGROUNDED -> TERMINAL

Every failure is terminal; nothing is retried.
"""

import logging
from dataclasses import replace

from cassboot.core.affinity import AffinityPlanner
from cassboot.core.command import compose_launch_command
from cassboot.core.conflict import ConflictProbe
from cassboot.core.environment import EnvironmentResolver
from cassboot.domain.config import EnvironmentConfig, RuntimeConfig
from cassboot.domain.entities import LaunchRequest, LaunchState, ProcessHandle
from cassboot.ports.launch import ReplaceCurrentProcess, SpawnDetached

logger = logging.getLogger(__name__)


class BootstrapUseCase:
    """Starts the daemon in foreground or background mode."""

    def __init__(
        self,
        runtime_config: RuntimeConfig,
        resolver: EnvironmentResolver,
        conflict_probe: ConflictProbe,
        affinity_planner: AffinityPlanner,
        foreground_launcher: ReplaceCurrentProcess,
        background_launcher: SpawnDetached,
    ):
        self.runtime_config = runtime_config
        self.resolver = resolver
        self.conflict_probe = conflict_probe
        self.affinity_planner = affinity_planner
        self.foreground_launcher = foreground_launcher
        self.background_launcher = background_launcher
        self.state = LaunchState.IDLE

    def _transition(self, state: LaunchState) -> None:
        logger.debug("Launch state %s -> %s", self.state.value, state.value)
        self.state = state

    def execute(
        self, request: LaunchRequest, env: EnvironmentConfig
    ) -> ProcessHandle | None:
        """Launch the daemon.

        A successful foreground launch does not return: the process image
        has been replaced by the daemon.

        Args:
            request: Parsed command line
            env: Captured environment inputs

        Returns:
            Handle of the detached daemon (background mode), or None if a
            foreground launcher returns

        Raises:
            MissingConfigurationError: If a required input is missing.
            MissingExecutableError: If no runtime executable is found.
            AlreadyRunningError: If the conflict probe detects a running instance.
            LaunchFailure: If the exec/spawn or pidfile write fails.
        """
        runtime = self.resolver.resolve(env)
        self.conflict_probe.check(runtime)
        runtime = replace(runtime, affinity_wrapper=self.affinity_planner.plan())

        command = compose_launch_command(request, runtime, self.runtime_config)
        self._transition(LaunchState.READY_TO_LAUNCH)
        logger.info("Launch command: %s", " ".join(command))

        try:
            if request.foreground:
                if request.pid_file is not None:
                    logger.debug("Ignoring pidfile %s in foreground mode", request.pid_file)
                self._transition(LaunchState.FOREGROUND)
                self.foreground_launcher.launch(command, runtime.environ)
                return None

            self._transition(LaunchState.BACKGROUNDED)
            return self.background_launcher.launch(
                command, runtime.environ, pid_file=request.pid_file
            )
        finally:
            self._transition(LaunchState.TERMINAL)
