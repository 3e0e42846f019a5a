"""Pre-flight check for an already-running instance.

The runtime is started with the daemon's options and classpath but no
entry point. If another instance already holds the JMX port, the runtime's
management agent fails with a recognizable message before the runtime
prints its usage text and exits.

This is a heuristic. Unrelated failures that happen to contain the
signature are reported as conflicts, and bind failures worded differently
go undetected. Swap the ConflictDetector to change how conflicts are
detected.
"""

import logging
import subprocess
from collections.abc import Mapping, Sequence

from cassboot.domain.entities import RuntimeEnvironment
from cassboot.domain.exceptions import AlreadyRunningError
from cassboot.ports.conflict import ConflictDetector

logger = logging.getLogger(__name__)


class SignatureConflictDetector:
    """Flags a conflict when a fixed substring appears in the probe output."""

    def __init__(self, signature: str):
        self.signature = signature

    def is_conflict(self, output: str) -> bool:
        return self.signature in output


def probe_command(runtime: RuntimeEnvironment) -> list[str]:
    """Build the probe invocation: options and classpath, no entry point."""
    return [
        runtime.executable,
        "-classpath",
        runtime.classpath,
        *runtime.runtime_options,
    ]


class ConflictProbe:
    """Runs the probe invocation and interprets its output."""

    def __init__(self, detector: ConflictDetector, timeout: float):
        """Initialize the probe.

        Args:
            detector: Decides whether the captured output means a conflict
            timeout: Seconds to allow the probe invocation
        """
        self.detector = detector
        self.timeout = timeout

    def capture_output(
        self, command: Sequence[str], environ: Mapping[str, str]
    ) -> str:
        """Run the probe and return its combined stdout/stderr.

        Returns:
            Decoded output, or an empty string if the probe could not run
        """
        try:
            result = subprocess.run(
                list(command),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                env=dict(environ) or None,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning("Conflict probe timed out after %.1fs", self.timeout)
            output = e.output or b""
        except OSError as e:
            logger.warning("Conflict probe could not run: %s", e)
            return ""
        else:
            output = result.stdout or b""
        return output.decode("utf-8", errors="replace")

    def check(self, runtime: RuntimeEnvironment) -> None:
        """Abort if another instance appears to hold the management port.

        Raises:
            AlreadyRunningError: If the detector reports a conflict.
        """
        output = self.capture_output(probe_command(runtime), runtime.environ)
        if self.detector.is_conflict(output):
            raise AlreadyRunningError(
                "Unable to bind JMX, is Cassandra already running?",
                hint="Stop the running instance or change its JMX port",
            )
        logger.debug("Conflict probe passed")
