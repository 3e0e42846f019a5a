"""Domain entities for the launcher.

These are immutable value types built once per invocation and passed
between the parsing, resolution and launch stages.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class LaunchRequest:
    """Structured form of the launcher's command line.

    Attributes:
        pid_file: Where to record the daemon pid (background mode only).
        log_dir: Log directory handed to the daemon as a property.
        foreground: Replace this process with the daemon instead of detaching.
        extra_properties: Raw ``-D`` values in the order given (``key=value``).
        heap_dump_path: Heap dump output path (``-H``).
        error_file_path: Crash log output path (``-E``).
        help_requested: ``-h`` was given.
        version_requested: ``-v`` was given.

    The CLI never sets ``help_requested`` or ``version_requested``: ``-h``
    and ``-v`` exit before a request is built.
    """

    pid_file: Path | None = None
    log_dir: Path | None = None
    foreground: bool = False
    extra_properties: tuple[str, ...] = ()
    heap_dump_path: Path | None = None
    error_file_path: Path | None = None
    help_requested: bool = False
    version_requested: bool = False


@dataclass(frozen=True)
class RuntimeEnvironment:
    """Everything needed to compose the runtime invocation.

    Attributes:
        executable: Resolved path (or bare name) of the runtime interpreter.
        classpath: Opaque payload descriptor, already path-translated.
        runtime_options: Options from ``JVM_OPTS``, split into words.
        affinity_wrapper: Command prefix for NUMA interleaving, empty if none.
        log_dir: Default log directory when ``-l`` is not given.
        storage_dir: Optional storage directory property value.
        environ: Environment for the daemon (after the env-override script).
    """

    executable: str
    classpath: str
    runtime_options: tuple[str, ...] = ()
    affinity_wrapper: tuple[str, ...] = ()
    log_dir: Path | None = None
    storage_dir: Path | None = None
    environ: Mapping[str, str] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ProcessHandle:
    """A detached daemon process.

    Written to disk at most once and never updated afterwards.

    Attributes:
        pid: Process id of the spawned daemon.
        pid_file: File the pid was written to, if one was requested.
    """

    pid: int
    pid_file: Path | None = None


class LaunchState(Enum):
    """States of the launch sequence."""

    IDLE = "idle"
    READY_TO_LAUNCH = "ready_to_launch"
    FOREGROUND = "foreground"
    BACKGROUNDED = "backgrounded"
    TERMINAL = "terminal"
