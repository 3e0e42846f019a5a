"""Port interface for starting the daemon.

Two capabilities exist: one replaces the current process image and never
returns, the other spawns a detached child and returns its handle.
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NoReturn, Protocol

from cassboot.domain.entities import ProcessHandle


class ReplaceCurrentProcess(Protocol):
    """Protocol for foreground launch (process replacement)."""

    def launch(self, command: Sequence[str], environ: Mapping[str, str]) -> NoReturn:
        """Exec the command in place of the current process.

        Raises:
            LaunchFailure: If the exec call itself fails
        """
        ...


class SpawnDetached(Protocol):
    """Protocol for background launch (detached child)."""

    def launch(
        self,
        command: Sequence[str],
        environ: Mapping[str, str],
        pid_file: Path | None = None,
    ) -> ProcessHandle:
        """Spawn the command detached and record its pid.

        Args:
            command: Full launch command
            environ: Environment for the child
            pid_file: Where to write the decimal pid, if anywhere

        Returns:
            Handle of the spawned process

        Raises:
            LaunchFailure: If the spawn or the pidfile write fails
        """
        ...
