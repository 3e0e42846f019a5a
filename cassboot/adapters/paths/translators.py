"""Path translators.

On Cygwin the runtime is a native Windows program, so path-valued inputs
have to be rewritten into Windows form with ``cygpath`` before use.
Everywhere else values pass through unchanged.
"""

import logging
import platform
import subprocess

from cassboot.domain.exceptions import MissingConfigurationError
from cassboot.ports.paths import PathTranslator

logger = logging.getLogger(__name__)


class NoOpPathTranslator:
    """Returns values unchanged."""

    def translate(self, value: str) -> str:
        return value


class CygpathTranslator:
    """Translates POSIX path lists to Windows form using cygpath."""

    def __init__(self, command: str = "cygpath", timeout: float = 5.0):
        self.command = command
        self.timeout = timeout

    def translate(self, value: str) -> str:
        """Translate a path or colon-separated path list.

        Raises:
            MissingConfigurationError: If cygpath fails.
        """
        try:
            result = subprocess.run(
                [self.command, "-p", "-w", value],
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise MissingConfigurationError(
                f"Unable to translate path '{value}': {e}",
                hint="Check that cygpath is installed",
            ) from e
        translated = result.stdout.strip()
        logger.debug("Translated %s -> %s", value, translated)
        return translated


def select_path_translator(system: str | None = None) -> PathTranslator:
    """Pick the translator for the current platform.

    Args:
        system: Platform name (default: platform.system())
    """
    system = system if system is not None else platform.system()
    if system.upper().startswith("CYGWIN"):
        return CygpathTranslator()
    return NoOpPathTranslator()
