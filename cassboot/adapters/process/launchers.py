"""Process launchers for foreground and background mode.

Foreground replaces the launcher's own process image with the daemon, so
the daemon's exit status becomes the launcher's. Background spawns the
daemon detached with stdin closed, records its pid and returns at once
without waiting for the daemon to initialize.
"""

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NoReturn

from cassboot.domain.entities import ProcessHandle
from cassboot.domain.exceptions import LaunchFailure

logger = logging.getLogger(__name__)


def write_pid_file(pid_file: Path, pid: int) -> None:
    """Write the decimal pid, truncating any previous content.

    No trailing newline is written.

    Raises:
        OSError: If the file cannot be written
    """
    pid_file.write_text(str(pid))


class ExecLauncher:
    """Replaces the current process with the daemon."""

    def launch(self, command: Sequence[str], environ: Mapping[str, str]) -> NoReturn:
        """Exec the daemon in place of this process.

        Args:
            command: Full launch command
            environ: Environment for the daemon

        Raises:
            LaunchFailure: If exec fails (only returns by raising)
        """
        logger.info("Starting daemon in foreground...")
        try:
            os.execvpe(command[0], list(command), dict(environ))
        except OSError as e:
            raise LaunchFailure(
                f"Failed to exec {command[0]}: {e}",
                hint="Check that the runtime executable is still executable",
            ) from e


class DetachedLauncher:
    """Spawns the daemon as an independent child process."""

    def _spawn(
        self, command: Sequence[str], environ: Mapping[str, str]
    ) -> subprocess.Popen:
        """Spawn the daemon with stdin closed, in its own session."""
        return subprocess.Popen(
            list(command),
            stdin=subprocess.DEVNULL,
            start_new_session=True,  # Detach from the launcher's terminal
            env=dict(environ),
        )

    def launch(
        self,
        command: Sequence[str],
        environ: Mapping[str, str],
        pid_file: Path | None = None,
    ) -> ProcessHandle:
        """Spawn the daemon and record its pid.

        Args:
            command: Full launch command
            environ: Environment for the daemon
            pid_file: Where to write the pid, if anywhere

        Returns:
            Handle of the spawned daemon

        Raises:
            LaunchFailure: If the spawn fails, or the pidfile cannot be
                written (the child is terminated first)
        """
        logger.info("Starting daemon in background...")
        try:
            process = self._spawn(command, environ)
        except OSError as e:
            raise LaunchFailure(
                f"Failed to start daemon: {e}",
                hint="Check that the runtime executable is still executable",
            ) from e

        if pid_file is not None:
            try:
                write_pid_file(pid_file, process.pid)
            except OSError as e:
                # Terminate to avoid an untracked daemon
                process.terminate()
                raise LaunchFailure(
                    f"Failed to write PID file {pid_file}: {e}",
                    hint="Check that the pidfile directory exists and is writable",
                ) from e

        logger.info("Daemon started with PID %d", process.pid)
        return ProcessHandle(pid=process.pid, pid_file=pid_file)
