"""Tests for CommandProbe and the built-in host probes."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from src.probes.base import CommandProbe
from src.probes.exceptions import (
    ProbeCommandError,
    ProbeError,
    ProbeParseError,
    ProbeTimeoutError,
)
from src.probes.system import CpuProbe, DiskProbe, NetworkProbe, RamProbe, default_probes


class EchoProbe(CommandProbe):
    """Probe over an arbitrary shell command for testing."""

    name = "echo"

    def __init__(self, command: str, timeout: float = 5.0) -> None:
        super().__init__(timeout)
        self.command = command

    def parse(self, output: str) -> str:
        return output.strip()


# ── CommandProbe ────────────────────────────────────────────────


class TestCommandProbe:
    async def test_returns_parsed_stdout(self) -> None:
        probe = EchoProbe("echo hello")
        assert await probe.sample() == "hello"

    async def test_shell_pipeline(self) -> None:
        probe = EchoProbe("printf 'a\\nb\\n' | grep b")
        assert await probe.sample() == "b"

    async def test_runs_under_c_locale(self) -> None:
        probe = EchoProbe("echo $LC_ALL")
        assert await probe.sample() == "C"

    async def test_non_zero_exit_raises(self) -> None:
        probe = EchoProbe("echo boom >&2; exit 3")
        with pytest.raises(ProbeCommandError, match="exited with 3"):
            await probe.sample()

    async def test_timeout_raises(self) -> None:
        probe = EchoProbe("sleep 5", timeout=0.2)
        with pytest.raises(ProbeTimeoutError, match="timed out"):
            await probe.sample()

    async def test_errors_share_base_class(self) -> None:
        probe = EchoProbe("exit 1")
        with pytest.raises(ProbeError):
            await probe.sample()


# ── Host probes ─────────────────────────────────────────────────


class TestHostProbes:
    async def test_cpu_probe_parses_top(self) -> None:
        probe = CpuProbe()
        line = "%Cpu(s): 10.0 us,  5.0 sy,  0.0 ni, 85.0 id\n"
        with patch.object(probe, "run_command", AsyncMock(return_value=line)):
            assert await probe.sample() == 15.0

    async def test_disk_probe_parses_df(self) -> None:
        probe = DiskProbe()
        out = "Filesystem Size Used Avail Use% Mounted on\n/dev/vda1 40G 12G 28G 30% /\n"
        with patch.object(probe, "run_command", AsyncMock(return_value=out)):
            assert await probe.sample() == "12G"

    async def test_ram_probe_parses_free(self) -> None:
        probe = RamProbe()
        out = "   total used free\nMem: 1000 250 750\n"
        with patch.object(probe, "run_command", AsyncMock(return_value=out)):
            assert await probe.sample() == 25

    async def test_network_probe_parses_net_dev(self) -> None:
        probe = NetworkProbe()
        out = "h1\nh2\n eth0: 1048576 0 0 0 0 0 0 0 0 0 0 0 0 0 0 0\n"
        with patch.object(probe, "run_command", AsyncMock(return_value=out)):
            assert await probe.sample() == "1.0MB"

    async def test_garbage_output_is_parse_error(self) -> None:
        probe = RamProbe()
        with patch.object(probe, "run_command", AsyncMock(return_value="nope")):
            with pytest.raises(ProbeParseError):
                await probe.sample()


class TestDefaultProbes:
    def test_registry_keys(self) -> None:
        probes = default_probes()
        assert list(probes) == ["cpu", "disk", "ram", "network"]

    def test_timeout_propagated(self) -> None:
        probes = default_probes(timeout=2.5)
        for probe in probes.values():
            assert isinstance(probe, CommandProbe)
            assert probe.timeout == 2.5
