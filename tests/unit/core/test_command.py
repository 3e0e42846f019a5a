"""Tests for launch command composition."""

from pathlib import Path

import pytest

from cassboot.core.command import (
    compose_launch_command,
    compose_version_command,
    extra_properties,
    managed_properties,
)
from cassboot.domain.config import RuntimeConfig
from cassboot.domain.entities import LaunchRequest, RuntimeEnvironment


@pytest.fixture
def runtime() -> RuntimeEnvironment:
    return RuntimeEnvironment(
        executable="/jdk/bin/java",
        classpath="a.jar",
        runtime_options=("-Xmx1G",),
        log_dir=Path("/opt/cassandra/logs"),
    )


@pytest.fixture
def config() -> RuntimeConfig:
    return RuntimeConfig()


class TestComposeLaunchCommand:
    """Tests for the full launch command layout."""

    def test_minimal_background_command(
        self, runtime: RuntimeEnvironment, config: RuntimeConfig
    ) -> None:
        assert compose_launch_command(LaunchRequest(), runtime, config) == [
            "/jdk/bin/java",
            "-Xmx1G",
            "-Dlogback.configurationFile=logback.xml",
            "-Dcassandra.logdir=/opt/cassandra/logs",
            "-classpath",
            "a.jar",
            "org.apache.cassandra.service.CassandraDaemon",
        ]

    def test_no_affinity_wrapper_means_no_prefix(
        self, runtime: RuntimeEnvironment, config: RuntimeConfig
    ) -> None:
        command = compose_launch_command(LaunchRequest(), runtime, config)
        assert command[0] == "/jdk/bin/java"
        assert "numactl" not in command

    def test_affinity_wrapper_prefixes_command(self, config: RuntimeConfig) -> None:
        runtime = RuntimeEnvironment(
            executable="java",
            classpath="a.jar",
            affinity_wrapper=("numactl", "--interleave=all"),
        )
        command = compose_launch_command(LaunchRequest(), runtime, config)
        assert command[:3] == ["numactl", "--interleave=all", "java"]

    def test_properties_precede_entry_point(
        self, runtime: RuntimeEnvironment, config: RuntimeConfig
    ) -> None:
        request = LaunchRequest(
            pid_file=Path("/tmp/x.pid"),
            extra_properties=("a=1", "b=2"),
            heap_dump_path=Path("/tmp/heap.hprof"),
            error_file_path=Path("/tmp/err.log"),
        )
        command = compose_launch_command(request, runtime, config)

        cp_index = command.index("-classpath")
        assert command.index("-Dcassandra-pidfile=/tmp/x.pid") < cp_index
        assert command[cp_index + 1] == "a.jar"
        assert command[cp_index + 2 :] == [
            "-Da=1",
            "-Db=2",
            "-XX:HeapDumpPath=/tmp/heap.hprof",
            "-XX:ErrorFile=/tmp/err.log",
            "org.apache.cassandra.service.CassandraDaemon",
        ]

    def test_duplicate_properties_are_not_merged(
        self, runtime: RuntimeEnvironment, config: RuntimeConfig
    ) -> None:
        request = LaunchRequest(extra_properties=("a=1", "a=2"))
        command = compose_launch_command(request, runtime, config)
        assert command.count("-Da=1") == 1
        assert command.count("-Da=2") == 1
        assert command.index("-Da=1") < command.index("-Da=2")


class TestManagedProperties:
    """Tests for the properties placed before the classpath."""

    def test_foreground_flag_only_in_foreground(
        self, runtime: RuntimeEnvironment, config: RuntimeConfig
    ) -> None:
        fg = managed_properties(LaunchRequest(foreground=True), runtime, config)
        bg = managed_properties(LaunchRequest(), runtime, config)
        assert "-Dcassandra-foreground=yes" in fg
        assert "-Dcassandra-foreground=yes" not in bg

    def test_request_log_dir_overrides_default(
        self, runtime: RuntimeEnvironment, config: RuntimeConfig
    ) -> None:
        props = managed_properties(
            LaunchRequest(log_dir=Path("/var/log/c")), runtime, config
        )
        assert "-Dcassandra.logdir=/var/log/c" in props
        assert "-Dcassandra.logdir=/opt/cassandra/logs" not in props

    def test_log_dir_omitted_when_unknown(self, config: RuntimeConfig) -> None:
        runtime = RuntimeEnvironment(executable="java", classpath="a.jar")
        props = managed_properties(LaunchRequest(), runtime, config)
        assert props == ["-Dlogback.configurationFile=logback.xml"]

    def test_storage_dir_and_custom_prefix(self) -> None:
        runtime = RuntimeEnvironment(
            executable="java", classpath="a.jar", storage_dir=Path("/data")
        )
        config = RuntimeConfig(property_prefix="acme", logging_config="log.xml")
        props = managed_properties(LaunchRequest(), runtime, config)
        assert props == [
            "-Dlogback.configurationFile=log.xml",
            "-Dacme.storagedir=/data",
        ]

    def test_pidfile_property_precedes_foreground_flag(
        self, runtime: RuntimeEnvironment, config: RuntimeConfig
    ) -> None:
        request = LaunchRequest(foreground=True, pid_file=Path("/tmp/x.pid"))
        props = managed_properties(request, runtime, config)
        assert props[-2:] == [
            "-Dcassandra-pidfile=/tmp/x.pid",
            "-Dcassandra-foreground=yes",
        ]


class TestExtraProperties:
    """Tests for the properties placed after the classpath."""

    def test_empty_request_has_none(self) -> None:
        assert extra_properties(LaunchRequest()) == []

    def test_pidfile_is_not_an_extra_property(self) -> None:
        request = LaunchRequest(pid_file=Path("/tmp/x.pid"), extra_properties=("a=1",))
        assert extra_properties(request) == ["-Da=1"]


class TestComposeVersionCommand:
    """Tests for the version side invocation."""

    def test_runs_version_entry_point(
        self, runtime: RuntimeEnvironment, config: RuntimeConfig
    ) -> None:
        assert compose_version_command(runtime, config) == [
            "/jdk/bin/java",
            "-classpath",
            "a.jar",
            "org.apache.cassandra.tools.GetVersion",
        ]
