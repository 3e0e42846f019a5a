"""NUMA affinity planning.

Decides whether the launch command gets wrapped with the affinity-control
utility so memory is interleaved across all NUMA nodes. Best effort: any
probe failure means no wrapper.
"""

import logging
import shutil
import subprocess

from cassboot.domain.config import ProbeConfig

logger = logging.getLogger(__name__)

INTERLEAVE_ALL = "--interleave=all"

# Harmless command the trial invocation wraps.
TRIAL_TARGET = ["ls", "/"]


class AffinityPlanner:
    """Probes for NUMA interleaving support."""

    def __init__(self, probe_config: ProbeConfig, search_path: str | None = None):
        """Initialize the planner.

        Args:
            probe_config: Utility name, enable flag and trial timeout
            search_path: Command search path (default: process PATH)
        """
        self.probe_config = probe_config
        self.search_path = search_path

    def _trial_succeeds(self, utility: str) -> bool:
        """Run the utility against the trial target.

        Returns:
            True if it exited 0 without writing to stderr
        """
        try:
            result = subprocess.run(
                [utility, INTERLEAVE_ALL, *TRIAL_TARGET],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                timeout=self.probe_config.affinity_timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("Affinity trial failed: %s", e)
            return False

        if result.returncode != 0 or result.stderr:
            logger.debug(
                "Affinity trial rejected (exit %d): %s",
                result.returncode,
                result.stderr.decode("utf-8", errors="replace").strip(),
            )
            return False
        return True

    def plan(self) -> tuple[str, ...]:
        """Return the affinity wrapper, or an empty tuple for none."""
        if not self.probe_config.affinity_enabled:
            return ()

        utility = self.probe_config.affinity_utility
        if shutil.which(utility, path=self.search_path) is None:
            logger.debug("%s not found, launching without affinity wrapper", utility)
            return ()

        if not self._trial_succeeds(utility):
            return ()

        logger.info("Wrapping launch with '%s %s'", utility, INTERLEAVE_ALL)
        return (utility, INTERLEAVE_ALL)
