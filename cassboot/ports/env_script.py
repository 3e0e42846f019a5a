"""Port interface for the env-override script."""

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol


class EnvScriptLoader(Protocol):
    """Sources an environment script and reports the resulting environment."""

    def load(self, script: Path, environ: Mapping[str, str]) -> dict[str, str]:
        """Return the environment after sourcing ``script`` on top of ``environ``.

        Implementations return ``environ`` unchanged when the script cannot
        be sourced.
        """
        ...
