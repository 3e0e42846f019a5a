"""Launch command composition.

The composed command is::

    [affinity wrapper] <java> [JVM_OPTS...] [managed properties...]
        -classpath <classpath> [extra properties...] <entry point>
"""

from cassboot.domain.config import RuntimeConfig
from cassboot.domain.entities import LaunchRequest, RuntimeEnvironment


def managed_properties(
    request: LaunchRequest, runtime: RuntimeEnvironment, config: RuntimeConfig
) -> list[str]:
    """Launcher-controlled properties and the pidfile, placed before the classpath."""
    prefix = config.property_prefix
    props = [f"-Dlogback.configurationFile={config.logging_config}"]

    log_dir = request.log_dir or runtime.log_dir
    if log_dir is not None:
        props.append(f"-D{prefix}.logdir={log_dir}")
    if runtime.storage_dir is not None:
        props.append(f"-D{prefix}.storagedir={runtime.storage_dir}")
    if request.pid_file is not None:
        props.append(f"-D{prefix}-pidfile={request.pid_file}")
    if request.foreground:
        # Tells the daemon to keep stdout/stderr open.
        props.append(f"-D{prefix}-foreground=yes")
    return props


def extra_properties(request: LaunchRequest) -> list[str]:
    """User-supplied properties and dump paths, placed after the classpath."""
    props = [f"-D{prop}" for prop in request.extra_properties]
    if request.heap_dump_path is not None:
        props.append(f"-XX:HeapDumpPath={request.heap_dump_path}")
    if request.error_file_path is not None:
        props.append(f"-XX:ErrorFile={request.error_file_path}")
    return props


def compose_launch_command(
    request: LaunchRequest, runtime: RuntimeEnvironment, config: RuntimeConfig
) -> list[str]:
    """Build the full argument vector for the daemon."""
    return [
        *runtime.affinity_wrapper,
        runtime.executable,
        *runtime.runtime_options,
        *managed_properties(request, runtime, config),
        "-classpath",
        runtime.classpath,
        *extra_properties(request),
        config.entry_point,
    ]


def compose_version_command(
    runtime: RuntimeEnvironment, config: RuntimeConfig
) -> list[str]:
    """Build the side invocation that prints the daemon's version."""
    return [
        runtime.executable,
        "-classpath",
        runtime.classpath,
        config.version_entry_point,
    ]
