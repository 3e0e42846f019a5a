"""Shell env-override script loader.

Sources the script in bash with auto-export on, then reads back the
resulting environment.
"""

import logging
import shlex
import subprocess
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_env_dump(output: str) -> dict[str, str]:
    """Parse NUL-separated ``KEY=VALUE`` records from ``env -0``."""
    env = {}
    for record in output.split("\0"):
        if "=" in record:
            key, _, value = record.partition("=")
            env[key] = value
    return env


class ShellEnvScriptLoader:
    """Sources an env script with bash."""

    def __init__(self, shell: str = "bash", timeout: float = 10.0):
        self.shell = shell
        self.timeout = timeout

    def load(self, script: Path, environ: Mapping[str, str]) -> dict[str, str]:
        """Source ``script`` on top of ``environ``.

        Returns:
            The environment after sourcing, or a copy of ``environ`` if the
            script could not be sourced
        """
        cmd = f"set -a; source {shlex.quote(str(script))} >/dev/null 2>&1; env -0"
        try:
            result = subprocess.run(
                [self.shell, "-c", cmd],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                cwd=str(script.parent),
                env=dict(environ),
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning("Unable to source %s: %s", script, e)
            return dict(environ)

        if result.returncode != 0:
            logger.warning(
                "Sourcing %s failed (exit %d), ignoring it", script, result.returncode
            )
            return dict(environ)
        return parse_env_dump(result.stdout)
