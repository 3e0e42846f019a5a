"""Unit tests for the shell env-override script loader."""

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cassboot.adapters.env.shell_env_script import ShellEnvScriptLoader, parse_env_dump

requires_bash = pytest.mark.skipif(shutil.which("bash") is None, reason="bash not installed")


class TestParseEnvDump:
    """Tests for parsing `env -0` output."""

    def test_parses_nul_separated_records(self) -> None:
        assert parse_env_dump("A=1\0B=x=y\0") == {"A": "1", "B": "x=y"}

    def test_keeps_multiline_values(self) -> None:
        assert parse_env_dump("A=line1\nline2\0") == {"A": "line1\nline2"}

    def test_ignores_records_without_equals(self) -> None:
        assert parse_env_dump("garbage\0A=1\0") == {"A": "1"}


class TestShellEnvScriptLoader:
    """Tests for ShellEnvScriptLoader.load."""

    @requires_bash
    def test_sourced_assignments_are_exported(self, tmp_path: Path) -> None:
        script = tmp_path / "cassandra-env.sh"
        script.write_text('JVM_OPTS="$JVM_OPTS -Xmx4G"\nMAX_HEAP_SIZE=4G\n')

        env = ShellEnvScriptLoader().load(
            script, {"JVM_OPTS": "-ea", "PATH": "/usr/bin:/bin"}
        )

        assert env["JVM_OPTS"] == "-ea -Xmx4G"
        assert env["MAX_HEAP_SIZE"] == "4G"

    @requires_bash
    def test_failing_script_leaves_environment_unchanged(self, tmp_path: Path) -> None:
        script = tmp_path / "cassandra-env.sh"
        script.write_text("JVM_OPTS=changed\nexit 3\n")
        environ = {"JVM_OPTS": "-ea", "PATH": "/usr/bin:/bin"}

        assert ShellEnvScriptLoader().load(script, environ) == environ

    def test_missing_shell_leaves_environment_unchanged(self, tmp_path: Path) -> None:
        environ = {"JVM_OPTS": "-ea"}
        with patch("subprocess.run", side_effect=FileNotFoundError("bash")):
            assert ShellEnvScriptLoader().load(tmp_path / "env.sh", environ) == environ

    def test_timeout_leaves_environment_unchanged(self, tmp_path: Path) -> None:
        environ = {"JVM_OPTS": "-ea"}
        error = subprocess.TimeoutExpired(cmd="bash", timeout=1.0)
        with patch("subprocess.run", side_effect=error):
            assert ShellEnvScriptLoader(timeout=1.0).load(tmp_path / "env.sh", environ) == environ

    def test_runs_in_script_directory(self, tmp_path: Path) -> None:
        result = MagicMock(returncode=0, stdout="A=1\0")
        with patch("subprocess.run", return_value=result) as mock_run:
            ShellEnvScriptLoader().load(tmp_path / "env.sh", {})

        assert mock_run.call_args[1]["cwd"] == str(tmp_path)
