"""Command-line values to LaunchRequest translation."""

from collections.abc import Iterable
from pathlib import Path

from cassboot.domain.entities import LaunchRequest
from cassboot.domain.exceptions import UsageError


def validate_property(prop: str) -> str:
    """Check a ``-D`` value has a non-empty key.

    ``key=value`` and bare ``key`` are both accepted, as the runtime does.

    Raises:
        UsageError: If the key is empty.
    """
    key, _, _ = prop.partition("=")
    if not key.strip():
        raise UsageError(
            f"Invalid property '-D{prop}'",
            hint="Use -D key=value",
        )
    return prop


def build_launch_request(
    *,
    foreground: bool = False,
    pid_file: Path | None = None,
    log_dir: Path | None = None,
    properties: Iterable[str] = (),
    heap_dump_path: Path | None = None,
    error_file_path: Path | None = None,
) -> LaunchRequest:
    """Build the LaunchRequest for parsed command-line values.

    ``-D`` values keep their order and are never merged: repeated keys
    become repeated runtime flags.

    Raises:
        UsageError: If a ``-D`` value is malformed.
    """
    return LaunchRequest(
        pid_file=pid_file,
        log_dir=log_dir,
        foreground=foreground,
        extra_properties=tuple(validate_property(p) for p in properties),
        heap_dump_path=heap_dump_path,
        error_file_path=error_file_path,
    )
