"""Cassboot CLI entrypoint.

Usage: cassboot [-f] [-h] [-v] [-p pidfile] [-l logdir] [-D key=value]...
                [-H dumpfile] [-E errorfile]
"""

from __future__ import annotations

import functools
import logging
import os
import subprocess
import sys
from pathlib import Path

import click

from cassboot.core.arguments import build_launch_request
from cassboot.domain.config import EnvironmentConfig, LauncherConfig
from cassboot.domain.exceptions import LauncherError, UsageError

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
LOG_LEVEL_ENV = "CASSBOOT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class LauncherCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present."""
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def handle_cli_errors(func):
    """Convert launcher errors into CLI errors.

    UsageError becomes a click usage error so the usage line is shown;
    every other LauncherError becomes a LauncherCliError.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            ctx = click.get_current_context(silent=True)
            raise click.UsageError(e.message, ctx=ctx) from e
        except LauncherError as e:
            raise LauncherCliError(e.message, hint=e.hint) from e

    return wrapper


def _capture_environment() -> EnvironmentConfig:
    return EnvironmentConfig.from_environ(os.environ)


def _load_config(env: EnvironmentConfig) -> LauncherConfig:
    """Load launcher config, including the conf dir's cassboot.toml if any."""
    from cassboot.adapters.factory import ConfigFactory

    conf_dir = Path(env.conf_dir) if env.conf_dir else None
    config = ConfigFactory().load(conf_dir)
    if LOG_LEVEL_ENV not in os.environ:
        logging.getLogger().setLevel(config.logging.level)
    return config


@handle_cli_errors
def _run_version_tool() -> int:
    """Print the daemon version through the runtime and return its status."""
    from cassboot.adapters.factory import LauncherFactory
    from cassboot.core.command import compose_version_command

    env = _capture_environment()
    config = _load_config(env)
    runtime = LauncherFactory(config, env).create_resolver().resolve(env)
    command = compose_version_command(runtime, config.runtime)
    logger.debug("Version command: %s", " ".join(command))
    try:
        return subprocess.run(command, env=dict(runtime.environ)).returncode
    except OSError as e:
        raise LauncherCliError(f"Failed to run {command[0]}: {e}") from e


def _show_version(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    ctx.exit(_run_version_tool())


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-f",
    "--foreground",
    is_flag=True,
    help="Run in the foreground instead of detaching.",
)
@click.option(
    "-v",
    "--version",
    is_flag=True,
    is_eager=True,
    expose_value=False,
    callback=_show_version,
    help="Print the daemon version and exit.",
)
@click.option(
    "-p",
    "--pidfile",
    "pid_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the daemon's pid to this file (background mode).",
)
@click.option(
    "-l",
    "--log-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the daemon's logs.",
)
@click.option(
    "-D",
    "properties",
    multiple=True,
    metavar="KEY=VALUE",
    help="Set a runtime system property (repeatable).",
)
@click.option(
    "-H",
    "heap_dump_path",
    type=click.Path(dir_okay=False, path_type=Path),
    metavar="DUMPFILE",
    help="Write heap dumps to this file.",
)
@click.option(
    "-E",
    "error_file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    metavar="ERRORFILE",
    help="Write runtime crash logs to this file.",
)
@handle_cli_errors
def cli(
    foreground: bool,
    pid_file: Path | None,
    log_dir: Path | None,
    properties: tuple[str, ...],
    heap_dump_path: Path | None,
    error_file_path: Path | None,
) -> int:
    """Start the Cassandra daemon.

    By default the daemon is detached and the launcher exits once its pid
    is known. With -f the launcher becomes the daemon.
    """
    from cassboot.adapters.factory import LauncherFactory

    request = build_launch_request(
        foreground=foreground,
        pid_file=pid_file,
        log_dir=log_dir,
        properties=properties,
        heap_dump_path=heap_dump_path,
        error_file_path=error_file_path,
    )

    env = _capture_environment()
    config = _load_config(env)
    usecase = LauncherFactory(config, env).create_bootstrap_usecase()
    usecase.execute(request, env)
    return 0


def _configure_logging() -> None:
    level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entrypoint for the CLI.

    Every failure, usage errors included, exits with status 1.
    """
    _configure_logging()
    try:
        rv = cli.main(args=argv, prog_name="cassboot", standalone_mode=False)
    except click.ClickException as e:
        e.exit_code = EXIT_FAILURE
        e.show()
        return EXIT_FAILURE
    except click.Abort:
        click.echo("Aborted!", err=True)
        return EXIT_FAILURE
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return EXIT_FAILURE
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    sys.exit(main())
